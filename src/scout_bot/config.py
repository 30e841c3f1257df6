#!/usr/bin/env python3
"""
Configuration constants for ScoutBot

Contains colors, footers, platform labels and the scouting settings
shared by the resolver, report builder and cogs.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# Bot Configuration
# =============================================================================

# Discord token
DISCORD_TOKEN = os.getenv('DISCORD_BOT_TOKEN')

# OpenAI settings for the report writer
OPENAI_API_KEY = os.getenv('OPENAI_API_KEY')
OPENAI_MODEL = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')


# =============================================================================
# Discord Embed Colors
# =============================================================================

class Colors:
    """Discord embed colors for consistent theming"""
    PRIMARY = 0x1e90ff    # Dodger blue - main bot color
    ERROR = 0xff0000      # Red - error messages
    WARNING = 0xffa500    # Orange - warnings
    SCOUT = 0x2ecc71      # Emerald - scouting reports


# =============================================================================
# Standard Footer Texts
# =============================================================================

class Footers:
    """Standard footer texts for embeds"""
    SCOUT = "ScoutBot ⚽ | Data from EA FC Pro Clubs"
    SELECT = "ScoutBot ⚽ | Pick the club you meant"
    DEFAULT = "ScoutBot ⚽"


# =============================================================================
# EA FC platforms
# =============================================================================

DEFAULT_PLATFORMS = (
    'common-gen5',
    'common-gen4',
    'ps5',
    'ps4',
    'xbox-series-xs',
    'xboxone',
)

PLATFORM_LABELS = {
    'common-gen5': 'Cross-gen (Gen5)',
    'common-gen4': 'Cross-gen (Gen4)',
    'ps5': 'PlayStation 5',
    'ps4': 'PlayStation 4',
    'xbox-series-xs': 'Xbox Series X|S',
    'xboxone': 'Xbox One',
    'pc': 'PC',
    'mirror': 'Stats mirror',
}

# Match types pulled for every report, in prompt order
MATCH_TYPES = ('leagueMatch', 'playoffMatch', 'friendlyMatch')


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    return int(value)


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    return float(value)


def _env_list(name: str, default: Tuple[str, ...]) -> List[str]:
    value = os.getenv(name)
    if not value:
        return list(default)
    return [part.strip() for part in value.split(',') if part.strip()]


@dataclass
class ScoutSettings:
    """Tunables for search, selection and report assembly"""

    platforms: List[str] = field(default_factory=lambda: list(DEFAULT_PLATFORMS))
    mirror_url: str = ''
    rank_candidates: bool = False
    selection_limit: int = 5
    selection_ttl: int = 900
    http_timeout: float = 8.0

    # Character budgets per prompt section
    info_budget: int = 4000
    stats_budget: int = 20000
    matches_budget: int = 30000

    # Record caps
    match_cap: int = 20
    member_cap: int = 40
    match_types: Tuple[str, ...] = MATCH_TYPES
    match_caps: Dict[str, int] = field(default_factory=dict)

    def cap_for(self, match_type: str) -> int:
        return self.match_caps.get(match_type, self.match_cap)

    @classmethod
    def from_env(cls) -> 'ScoutSettings':
        return cls(
            platforms=_env_list('SCOUT_PLATFORMS', DEFAULT_PLATFORMS),
            mirror_url=os.getenv('SCOUT_MIRROR_URL', '').strip(),
            rank_candidates=_env_bool('SCOUT_RANK_CANDIDATES', False),
            selection_ttl=_env_int('SCOUT_SELECTION_TTL', 900),
            http_timeout=_env_float('SCOUT_HTTP_TIMEOUT', 8.0),
        )


def platform_label(platform: str) -> str:
    """Human readable name for an EA platform tag"""
    return PLATFORM_LABELS.get(platform, platform)
