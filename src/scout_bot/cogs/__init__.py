"""
Cogs module for ScoutBot

Discord.py Cogs are modular extensions that group related commands together.
Each cog can be loaded/unloaded independently.

Available cogs:
- ScoutCog: /scoutclub and the club select menu
- CoreCog: Always-available core commands (/help, /tokens)
"""

from .scout import ScoutCog
from .core import CoreCog

__all__ = [
    'ScoutCog',
    'CoreCog',
]
