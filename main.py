#!/usr/bin/env python3
"""
ScoutBot - Main Entry Point

A Discord bot that writes scouting reports for EA FC Pro Clubs teams
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from scout_bot import main

if __name__ == "__main__":
    # Run the bot
    main()
