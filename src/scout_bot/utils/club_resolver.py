"""
Club Resolver

Turns a free-text club name into candidate clubs by searching every
configured partition at once and merging the results.
"""

import asyncio
import logging
from typing import List, Protocol, Sequence, Tuple

from rapidfuzz import fuzz

from ..models import ClubCandidate

logger = logging.getLogger('ScoutBot.Resolver')


class SearchSource(Protocol):
    async def search(self, query: str, partition: str) -> List[ClubCandidate]:
        ...


def dedupe_candidates(candidates: Sequence[ClubCandidate]) -> List[ClubCandidate]:
    """Drop repeated (source_id, club_id) pairs, keeping the first"""
    seen = set()
    unique = []
    for candidate in candidates:
        if candidate.key in seen:
            continue
        seen.add(candidate.key)
        unique.append(candidate)
    return unique


def rank_candidates(query: str, candidates: Sequence[ClubCandidate], limit: int) -> List[ClubCandidate]:
    """Best name matches first; sorted() is stable so ties keep encounter order"""
    q = query.strip().lower()
    scored = sorted(
        candidates,
        key=lambda c: fuzz.WRatio(q, c.name.lower()),
        reverse=True,
    )
    return scored[:limit]


class ClubResolver:
    """Fan a club search out to every partition and merge the answers"""

    def __init__(self, sources: Sequence[Tuple[str, SearchSource]], rank: bool = False, limit: int = 5):
        """
        Args:
            sources: Ordered (partition, adapter) pairs; the order is the tie-break
            rank: Sort by name similarity and keep the top `limit`
            limit: How many ranked candidates to keep
        """
        self.sources = list(sources)
        self.rank = rank
        self.limit = limit

    async def _search_one(self, partition: str, source: SearchSource, query: str) -> List[ClubCandidate]:
        return await source.search(query, partition)

    async def resolve(self, query: str) -> List[ClubCandidate]:
        """
        Search all partitions for a club name.

        Returns:
            Unique candidates in partition order (or ranked, if enabled).
            An empty list means nothing matched anywhere.
        """
        q = (query or "").strip()
        if not q:
            return []

        results = await asyncio.gather(
            *(self._search_one(partition, source, q) for partition, source in self.sources),
            return_exceptions=True,
        )

        merged: List[ClubCandidate] = []
        for (partition, _), result in zip(self.sources, results):
            if isinstance(result, BaseException):
                logger.warning(f"⚠️ Search on {partition} raised {type(result).__name__}: {result}")
                continue
            merged.extend(result)

        candidates = dedupe_candidates(merged)
        if self.rank:
            candidates = rank_candidates(q, candidates, self.limit)

        logger.info(f"🔍 Resolved '{q}' to {len(candidates)} candidate(s) across {len(self.sources)} partition(s)")
        return candidates
