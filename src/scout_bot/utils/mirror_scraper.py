"""
Pro Clubs Stats Mirror Scraper

Scrapes a third-party Pro Clubs stats site for club identities when the
EA leaderboard search comes up short. The mirror links every club as
/club/<platform>/<clubId>/<slug>; we only need those links, the detail
data still comes from EA.

⚠️ The markup is not under our control. Matching is best-effort and the
whole source can be switched off by leaving SCOUT_MIRROR_URL empty.
"""

import logging
import re
from typing import Callable, Dict, List, Optional

import httpx
from bs4 import BeautifulSoup

from ..models import ClubCandidate

logger = logging.getLogger('ScoutBot.Mirror')

CLUB_HREF_RE = re.compile(r'/club/(?P<platform>[a-z0-9-]+)/(?P<club_id>\d+)(?:/(?P<slug>[a-z0-9-]*))?/?$', re.I)


def slugify(name: str) -> str:
    """'RS Academy FC' -> 'rs-academy-fc'"""
    return re.sub(r'[^a-z0-9]+', '-', name.lower()).strip('-')


def extract_club_records(markup: str) -> List[Dict[str, str]]:
    """
    Pull every club link out of a mirror page, in document order.

    Duplicate links to the same club (logo + name) collapse to the first.
    """
    soup = BeautifulSoup(markup, 'html.parser')
    records = []
    seen = set()

    for link in soup.select('a[href*="/club/"]'):
        href = link.get('href', '')
        match = CLUB_HREF_RE.search(href.split('?')[0])
        if not match:
            continue

        club_id = match.group('club_id')
        platform = match.group('platform').lower()
        if (platform, club_id) in seen:
            continue
        seen.add((platform, club_id))

        name = link.get_text(" ", strip=True) or link.get('title', '')
        slug = (match.group('slug') or '').lower() or slugify(name)
        records.append({
            'club_id': club_id,
            'platform': platform,
            'slug': slug,
            'name': name or slug.replace('-', ' '),
        })

    return records


# ==================== MATCHER LADDER ====================
# Each matcher is (records, target_slug) -> record | None

def match_exact_slug(records: List[Dict[str, str]], target: str) -> Optional[Dict[str, str]]:
    for record in records:
        if record['slug'] == target:
            return record
    return None


def match_partial_slug(records: List[Dict[str, str]], target: str) -> Optional[Dict[str, str]]:
    if not target:
        return None
    for record in records:
        if target in record['slug']:
            return record
    return None


def match_first_record(records: List[Dict[str, str]], target: str) -> Optional[Dict[str, str]]:
    return records[0] if records else None


MATCHERS: List[Callable[[List[Dict[str, str]], str], Optional[Dict[str, str]]]] = [
    match_exact_slug,
    match_partial_slug,
    match_first_record,
]


def pick_club(markup: str, query: str) -> Optional[Dict[str, str]]:
    """Run the matcher ladder over a page and return the chosen record"""
    records = extract_club_records(markup)
    target = slugify(query)
    for matcher in MATCHERS:
        record = matcher(records, target)
        if record is not None:
            logger.debug(f"Mirror matcher {matcher.__name__} picked {record['slug']}")
            return record
    return None


class MirrorScraper:
    """Search adapter for the HTML stats mirror"""

    PARTITION = "mirror"
    SEARCH_PATH = "/search"

    HEADERS = {
        "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }

    def __init__(self, base_url: str, timeout: float = 8.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self.HEADERS,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def search(self, query: str, partition: str = PARTITION) -> List[ClubCandidate]:
        """
        Search the mirror and return at most one candidate.

        Returns:
            [candidate] when the page lists a usable club, else []
        """
        q = query.strip()
        if not q:
            return []

        try:
            client = await self._get_client()
            response = await client.get(self.base_url + self.SEARCH_PATH, params={"q": q})
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"⚠️ Mirror search failed for query='{q}': {e}")
            return []

        record = pick_club(response.text, q)
        if record is None:
            logger.info(f"🔍 Mirror: no club links for '{q}'")
            return []

        logger.info(f"🔍 Mirror: '{q}' -> {record['name']} ({record['platform']}/{record['club_id']})")
        return [ClubCandidate(
            source_id=partition,
            club_id=record['club_id'],
            name=record['name'],
            platform=record['platform'],
        )]
