#!/usr/bin/env python3
"""
Data records passed between the resolver, selection gate and report builder
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from .config import platform_label


@dataclass(frozen=True)
class ClubCandidate:
    """A club returned by a search, not yet confirmed by the user.

    Identity is (source_id, club_id); club ids are only unique within a
    source. `platform` is the EA platform used for detail fetches, which is
    the same as source_id for EA partitions. `seed` keeps the raw
    leaderboard row and does not take part in equality.
    """

    source_id: str
    club_id: str
    name: str
    platform: str
    region: Optional[str] = None
    division: Optional[str] = None
    seed: Optional[Dict[str, Any]] = field(default=None, compare=False, hash=False, repr=False)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.source_id, self.club_id)

    @property
    def option_value(self) -> str:
        """Select-menu value encoding the identity key"""
        return f"{self.source_id}|{self.club_id}"

    @property
    def platform_label(self) -> str:
        return platform_label(self.platform)


@dataclass
class PendingSelection:
    """Candidates a user still has to choose from"""

    user_id: int
    query: str
    candidates: List[ClubCandidate]
    created_at: datetime = field(default_factory=datetime.now)


@dataclass
class ClubDossier:
    """Everything fetched for one club before it becomes a prompt"""

    identity: ClubCandidate
    info: Optional[Any] = None
    aggregate_stats: Optional[Any] = None
    playoff_achievements: Optional[Any] = None
    member_career: Optional[Any] = None
    member_season: Optional[Any] = None
    match_history: Dict[str, List[Any]] = field(default_factory=dict)

    def has_stats(self) -> bool:
        return any(
            _present(blob)
            for blob in (self.aggregate_stats, self.member_career, self.member_season)
        )

    def has_match_history(self) -> bool:
        return any(len(matches) > 0 for matches in self.match_history.values())


@dataclass
class ReportPrompt:
    """System + user messages for the report writer"""

    system_instructions: str
    user_content: str
    truncated_sections: List[str] = field(default_factory=list)

    @property
    def truncated(self) -> bool:
        return bool(self.truncated_sections)


def _present(blob: Optional[Any]) -> bool:
    """True when a provider blob holds anything at all.

    EA wraps empty member lists as {"members": [], "positionCount": {}},
    so containers only count when some value inside them does.
    """
    if blob is None:
        return False
    if isinstance(blob, dict):
        return any(_present(value) for value in blob.values())
    if isinstance(blob, list):
        return any(_present(value) for value in blob)
    if isinstance(blob, str):
        return len(blob) > 0
    return True
