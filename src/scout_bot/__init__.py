"""
ScoutBot - A Discord bot that writes scouting reports for EA FC Pro Clubs teams

Architecture: Cog-based modular design
"""

__version__ = "1.0.0"

# Import the main bot function
from .bot_main import run as main

__all__ = ["main", "__version__"]
