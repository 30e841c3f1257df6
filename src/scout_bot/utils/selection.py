#!/usr/bin/env python3
"""
Pending club selections

When a search finds more than one club we park the candidates per user
until they pick one from the select menu. All reads and deletes here are
synchronous, so a lookup and its delete can never be split by another
interaction on the event loop.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Sequence

from ..errors import InvalidSelectionError
from ..models import ClubCandidate, PendingSelection

logger = logging.getLogger('ScoutBot.Selection')


class SelectionStore(Protocol):
    def get(self, user_id: int) -> Optional[PendingSelection]:
        ...

    def set(self, user_id: int, selection: PendingSelection) -> None:
        ...

    def delete(self, user_id: int) -> None:
        ...

    def pop(self, user_id: int) -> Optional[PendingSelection]:
        ...

    def cleanup_expired(self) -> int:
        ...


class InMemorySelectionStore:
    """Per-user pending selections with TTL support"""

    def __init__(self, ttl_seconds: int = 900):
        self.ttl_seconds = ttl_seconds
        self._entries: Dict[int, Dict[str, Any]] = {}
        self._stats = {
            'saves': 0,
            'consumed': 0,
            'evictions': 0,
        }

    def get(self, user_id: int) -> Optional[PendingSelection]:
        """Get the pending selection if not expired"""
        entry = self._entries.get(user_id)
        if entry is None:
            return None

        if datetime.now() >= entry['expires_at']:
            del self._entries[user_id]
            self._stats['evictions'] += 1
            logger.debug(f"Selection EXPIRED for user {user_id}")
            return None

        return entry['value']

    def set(self, user_id: int, selection: PendingSelection) -> None:
        """Store a selection, replacing any earlier one for the user"""
        if user_id in self._entries:
            logger.debug(f"Selection REPLACED for user {user_id}")

        self._entries[user_id] = {
            'value': selection,
            'expires_at': datetime.now() + timedelta(seconds=self.ttl_seconds),
        }
        self._stats['saves'] += 1

    def delete(self, user_id: int) -> None:
        if self._entries.pop(user_id, None) is not None:
            logger.debug(f"Selection DELETE for user {user_id}")

    def pop(self, user_id: int) -> Optional[PendingSelection]:
        """Get and delete in one step"""
        selection = self.get(user_id)
        if selection is not None:
            del self._entries[user_id]
            self._stats['consumed'] += 1
        return selection

    def cleanup_expired(self) -> int:
        """Remove all expired entries"""
        now = datetime.now()
        expired = [user_id for user_id, entry in self._entries.items() if now >= entry['expires_at']]
        for user_id in expired:
            del self._entries[user_id]
            self._stats['evictions'] += 1

        if expired:
            logger.info(f"Selection cleanup: removed {len(expired)} expired entries")
        return len(expired)

    def get_stats(self) -> Dict[str, int]:
        return {**self._stats, 'pending': len(self._entries)}

    def __len__(self) -> int:
        return len(self._entries)


class GateState(Enum):
    """
    Where a search ended up.

    SingleMatch never shows up here: one candidate goes straight to
    RESOLVED. Expired or invalid selections are not a state either;
    choose() and choose_by_key() raise InvalidSelectionError for them.
    """
    NO_MATCH = "no_match"
    AWAITING_SELECTION = "awaiting_selection"
    RESOLVED = "resolved"


@dataclass
class GateOutcome:
    state: GateState
    candidate: Optional[ClubCandidate] = None
    candidates: List[ClubCandidate] = field(default_factory=list)


class DisambiguationGate:
    """Decides whether a search needs the user to pick a club"""

    def __init__(self, store: SelectionStore, limit: int = 5):
        self.store = store
        self.limit = limit

    def begin(self, user_id: int, query: str, candidates: Sequence[ClubCandidate]) -> GateOutcome:
        """
        Start a selection cycle for a finished search.

        0 candidates -> NO_MATCH, 1 -> RESOLVED right away (nothing stored),
        2+ -> the top `limit` are stored for the user, overwriting any
        earlier pending selection, and AWAITING_SELECTION is returned.

        Expired selections of every user are swept first.
        """
        self.store.cleanup_expired()

        if not candidates:
            return GateOutcome(GateState.NO_MATCH)

        if len(candidates) == 1:
            return GateOutcome(GateState.RESOLVED, candidate=candidates[0])

        shortlist = list(candidates[:self.limit])
        self.store.set(user_id, PendingSelection(user_id=user_id, query=query, candidates=shortlist))
        logger.info(f"📋 User {user_id} has {len(shortlist)} clubs to choose from for '{query}'")
        return GateOutcome(GateState.AWAITING_SELECTION, candidates=shortlist)

    def choose(self, user_id: int, index: int) -> ClubCandidate:
        """
        Resolve a pending selection by 1-based position.

        The pending entry is consumed even when the index is out of range.

        Raises:
            InvalidSelectionError: no pending selection, or bad index
        """
        pending = self.store.pop(user_id)
        if pending is None:
            raise InvalidSelectionError(f"no pending selection for user {user_id}")

        if not 1 <= index <= len(pending.candidates):
            raise InvalidSelectionError(
                f"index {index} out of range 1..{len(pending.candidates)} for user {user_id}"
            )

        return pending.candidates[index - 1]

    def choose_by_key(self, user_id: int, source_id: str, club_id: str) -> ClubCandidate:
        """
        Resolve a pending selection by identity key (select-menu value).

        Raises:
            InvalidSelectionError: no pending selection, or key not offered
        """
        pending = self.store.pop(user_id)
        if pending is None:
            raise InvalidSelectionError(f"no pending selection for user {user_id}")

        for candidate in pending.candidates:
            if candidate.key == (source_id, club_id):
                return candidate

        raise InvalidSelectionError(f"{source_id}/{club_id} was not offered to user {user_id}")
