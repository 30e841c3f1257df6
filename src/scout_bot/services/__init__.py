"""
Services module for ScoutBot

Contains shared utilities used across cogs:
- embeds.py: Embed builders
- views.py: Club select menu
"""

from .embeds import (
    EmbedBuilder,
    split_text,
)

from .views import (
    ClubSelect,
    ClubSelectView,
)

__all__ = [
    'EmbedBuilder',
    'split_text',
    'ClubSelect',
    'ClubSelectView',
]
