"""
EA FC Pro Clubs API Client

Talks to the undocumented JSON endpoints behind proclubs.ea.com.
Each platform (common-gen5, ps5, ...) is a separate partition with its
own club ids.

Every call is best-effort: network errors, timeouts, bad status codes
and unexpected payloads are logged and turned into [] / None so one
flaky partition never takes down a whole search or report.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from ..models import ClubCandidate

logger = logging.getLogger('ScoutBot.EA')


class DetailKind(Enum):
    """Detail endpoints available for a single club"""
    PROFILE = "profile"
    AGGREGATE_STATS = "aggregate_stats"
    PLAYOFF_ACHIEVEMENTS = "playoff_achievements"
    MEMBER_CAREER_STATS = "member_career_stats"
    MEMBER_SEASON_STATS = "member_season_stats"
    MATCH_HISTORY = "match_history"


# kind -> (path, club id parameter name)
DETAIL_ENDPOINTS = {
    DetailKind.PROFILE: ("/clubs/info", "clubIds"),
    DetailKind.AGGREGATE_STATS: ("/clubs/overallStats", "clubIds"),
    DetailKind.PLAYOFF_ACHIEVEMENTS: ("/club/playoffAchievements", "clubId"),
    DetailKind.MEMBER_CAREER_STATS: ("/members/career/stats", "clubId"),
    DetailKind.MEMBER_SEASON_STATS: ("/members/stats", "clubId"),
    DetailKind.MATCH_HISTORY: ("/clubs/matches", "clubIds"),
}

# Detail kinds whose payload is one record per club id
KEYED_KINDS = (DetailKind.PROFILE, DetailKind.AGGREGATE_STATS)


# ==================== RESPONSE NORMALIZATION ====================

def _by_club_key(payload: Any, club_id: str) -> Optional[Any]:
    """{"104358": {...}} -> the record under the club id"""
    if isinstance(payload, dict) and club_id in payload:
        return payload[club_id]
    return None


def _first_element(payload: Any, club_id: str) -> Optional[Any]:
    """[{...}, ...] -> first record"""
    if isinstance(payload, list):
        return payload[0] if payload else None
    return None


def _whole_object(payload: Any, club_id: str) -> Optional[Any]:
    """{...} -> the object itself"""
    if isinstance(payload, dict) and payload:
        return payload
    return None


NORMALIZERS = (_by_club_key, _first_element, _whole_object)


def normalize_record(payload: Any, club_id: str) -> Optional[Any]:
    """
    Reduce an EA response to the one record for club_id.

    EA returns the same data as an object keyed by club id, a bare
    array, or a single object depending on endpoint and mood. The
    strategies are tried in order and the first hit wins.
    """
    if payload is None:
        return None
    club_id = str(club_id)
    for strategy in NORMALIZERS:
        record = strategy(payload, club_id)
        if record is not None:
            return record
    return None


def _search_items(data: Any) -> Optional[List[Any]]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get('entries'), list):
        return data['entries']
    return None


class EAClient:
    """Client for proclubs.ea.com/api/fc"""

    BASE_URL = "https://proclubs.ea.com/api/fc"

    # Browser-like headers; EA rejects obvious bots
    HEADERS = {
        "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/142.0.0.0 Safari/537.36",
        "accept": "application/json",
        "DNT": "1",
        "origin": "https://www.ea.com",
        "referer": "https://www.ea.com/",
        "sec-ch-ua-platform": '"Windows"',
    }

    # EA caps match history server side; we trim further in the report builder
    MAX_RESULT_COUNT = 50

    def __init__(self, timeout: float = 8.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                headers=self.HEADERS,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def _get_json(self, path: str, params: Dict[str, Any], timeout: Optional[float] = None) -> Any:
        client = await self._get_client()
        response = await client.get(path, params=params, timeout=timeout or self.timeout)
        response.raise_for_status()
        return response.json()

    async def search(self, query: str, platform: str) -> List[ClubCandidate]:
        """
        Search the all-time leaderboard of one platform by club name.

        Args:
            query: Club name as typed by the user
            platform: EA platform tag (e.g. "common-gen5")

        Returns:
            Candidates in the order EA returned them; [] on any failure
        """
        q = query.strip()
        if not q:
            return []

        try:
            data = await self._get_json(
                "/allTimeLeaderboard/search",
                {"platform": platform, "clubName": q},
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"⚠️ EA leaderboard search failed for platform={platform}, query='{q}': {e}")
            return []

        items = _search_items(data)
        if items is None:
            logger.warning(f"⚠️ Unexpected leaderboard search shape on {platform}: {type(data).__name__}")
            return []

        candidates = []
        for item in items:
            if not isinstance(item, dict):
                continue
            club_info = item.get('clubInfo') or {}
            club_id = str(item.get('clubId') or club_info.get('clubId') or '').strip()
            if not club_id:
                continue

            item_platform = item.get('platform') or platform
            region = club_info.get('regionId')
            division = item.get('currentDivision') or item.get('bestDivision')
            candidates.append(ClubCandidate(
                source_id=platform,
                club_id=club_id,
                name=item.get('clubName') or club_info.get('name') or q,
                platform=item_platform,
                region=str(region) if region is not None else None,
                division=str(division) if division is not None else None,
                seed=item,
            ))

        logger.info(f"🔍 {platform}: {len(candidates)} club(s) for '{q}'")
        return candidates

    async def fetch_detail(
        self,
        club_id: str,
        platform: str,
        kind: DetailKind,
        match_type: Optional[str] = None,
    ) -> Optional[Any]:
        """
        Fetch one detail payload for a club.

        Profile and aggregate stats are normalized to the single record
        for club_id; the rest are returned as EA sent them.

        Returns:
            The payload, or None on any failure
        """
        path, id_param = DETAIL_ENDPOINTS[kind]
        club_id = str(club_id)
        params: Dict[str, Any] = {"platform": platform, id_param: club_id}
        timeout = None
        if kind == DetailKind.MATCH_HISTORY:
            params["matchType"] = match_type or "leagueMatch"
            params["maxResultCount"] = self.MAX_RESULT_COUNT
            timeout = self.timeout + 2

        label = kind.value if not match_type else f"{kind.value}({match_type})"
        try:
            data = await self._get_json(path, params, timeout=timeout)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"⚠️ EA fetch failed platform={platform} club={club_id} detail={label}: {e}")
            return None

        if kind in KEYED_KINDS:
            record = normalize_record(data, club_id)
            if record is None:
                logger.warning(f"⚠️ EA returned no record platform={platform} club={club_id} detail={label}")
            return record
        return data
