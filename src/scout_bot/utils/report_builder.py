"""
Scouting Report Builder

Collects everything EA knows about one club, trims it to fit a prompt
and hands back a ReportPrompt for the report writer.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from ..ai.prompts import SYSTEM_PROMPT, build_user_prompt
from ..config import ScoutSettings
from ..errors import InsufficientDataError
from ..models import ClubCandidate, ClubDossier, ReportPrompt
from .ea_client import DetailKind, EAClient

logger = logging.getLogger('ScoutBot.Report')

TRUNCATION_MARKER = "\n...[TRUNCATED: partial data]"

MATCH_TYPE_LABELS = {
    'leagueMatch': 'league',
    'playoffMatch': 'playoff',
    'friendlyMatch': 'friendly',
}


def truncate_section(text: str, budget: int) -> Tuple[str, bool]:
    """
    Cut text to `budget` characters and append the truncation marker.

    Returns:
        (text, was_truncated)
    """
    if len(text) <= budget:
        return text, False
    return text[:budget] + TRUNCATION_MARKER, True


def _match_list(payload: Any) -> List[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get('matches'), list):
        return payload['matches']
    return []


def bound_matches(payload: Any, cap: int) -> List[Any]:
    """First `cap` matches of a history payload; EA sends newest first"""
    return _match_list(payload)[:cap]


def bound_members(payload: Any, cap: int) -> Any:
    """Trim a member stats payload to `cap` players, keeping its shape"""
    if isinstance(payload, list):
        return payload[:cap]
    if isinstance(payload, dict) and isinstance(payload.get('members'), list):
        trimmed = dict(payload)
        trimmed['members'] = payload['members'][:cap]
        return trimmed
    return payload


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


class ReportBuilder:
    """Builds the prompt for one resolved club"""

    def __init__(self, client: EAClient, settings: Optional[ScoutSettings] = None):
        self.client = client
        self.settings = settings or ScoutSettings()

    async def gather_dossier(self, candidate: ClubCandidate) -> ClubDossier:
        """Fetch every detail for a club at once; missing pieces stay None"""
        club_id = candidate.club_id
        platform = candidate.platform

        fetches = [
            self.client.fetch_detail(club_id, platform, DetailKind.PROFILE),
            self.client.fetch_detail(club_id, platform, DetailKind.AGGREGATE_STATS),
            self.client.fetch_detail(club_id, platform, DetailKind.PLAYOFF_ACHIEVEMENTS),
            self.client.fetch_detail(club_id, platform, DetailKind.MEMBER_CAREER_STATS),
            self.client.fetch_detail(club_id, platform, DetailKind.MEMBER_SEASON_STATS),
        ]
        fetches.extend(
            self.client.fetch_detail(club_id, platform, DetailKind.MATCH_HISTORY, match_type=match_type)
            for match_type in self.settings.match_types
        )

        results = await asyncio.gather(*fetches, return_exceptions=True)
        results = [self._settle(candidate, result) for result in results]

        info, aggregate, playoffs, career, season = results[:5]
        history = {
            match_type: bound_matches(payload, self.settings.cap_for(match_type))
            for match_type, payload in zip(self.settings.match_types, results[5:])
        }

        return ClubDossier(
            identity=candidate,
            info=info,
            aggregate_stats=aggregate,
            playoff_achievements=playoffs,
            member_career=bound_members(career, self.settings.member_cap),
            member_season=bound_members(season, self.settings.member_cap),
            match_history=history,
        )

    def _settle(self, candidate: ClubCandidate, result: Any) -> Optional[Any]:
        if isinstance(result, BaseException):
            logger.warning(
                f"⚠️ Detail fetch raised for {candidate.platform}/{candidate.club_id}: "
                f"{type(result).__name__}: {result}"
            )
            return None
        return result

    def build_prompt(self, dossier: ClubDossier) -> ReportPrompt:
        """Serialize and bound each section, then fill the prompt template"""
        identity = dossier.identity
        settings = self.settings

        info_payload = {
            'clubInfo': dossier.info,
            'leaderboardSeed': identity.seed,
        }
        stats_payload = {
            'overallStats': dossier.aggregate_stats,
            'playoffAchievements': dossier.playoff_achievements,
            'membersCareer': dossier.member_career,
            'membersSeason': dossier.member_season,
        }
        matches_payload: Dict[str, List[Any]] = {
            f"{MATCH_TYPE_LABELS.get(match_type, match_type)}Matches": matches
            for match_type, matches in dossier.match_history.items()
        }

        truncated = []
        sections = {}
        for name, payload, budget in (
            ('CLUB_INFO_JSON', info_payload, settings.info_budget),
            ('STATS_JSON', stats_payload, settings.stats_budget),
            ('MATCH_HISTORY_JSON', matches_payload, settings.matches_budget),
        ):
            text, was_cut = truncate_section(_to_json(payload), budget)
            sections[name] = text
            if was_cut:
                truncated.append(name)

        if truncated:
            logger.info(f"✂️ Truncated {', '.join(truncated)} for {identity.name}")

        display_name = identity.name
        if isinstance(dossier.info, dict) and dossier.info.get('name'):
            display_name = dossier.info['name']

        user_content = build_user_prompt(
            display_name=display_name,
            club_id=identity.club_id,
            platform=identity.platform,
            info=sections['CLUB_INFO_JSON'],
            stats=sections['STATS_JSON'],
            matches=sections['MATCH_HISTORY_JSON'],
            match_types=", ".join(MATCH_TYPE_LABELS.get(t, t) for t in settings.match_types),
            truncated_sections=truncated,
        )
        return ReportPrompt(
            system_instructions=SYSTEM_PROMPT,
            user_content=user_content,
            truncated_sections=truncated,
        )

    async def assemble(self, candidate: ClubCandidate) -> ReportPrompt:
        """
        Build the report prompt for a club.

        Raises:
            InsufficientDataError: EA returned no stats and no match history
        """
        logger.info(f"📊 Gathering data for {candidate.name} ({candidate.platform}/{candidate.club_id})")
        dossier = await self.gather_dossier(candidate)

        if not dossier.has_stats() and not dossier.has_match_history():
            logger.info(f"📭 No stats or matches for {candidate.platform}/{candidate.club_id}")
            raise InsufficientDataError(f"no data for {candidate.platform}/{candidate.club_id}")

        prompt = self.build_prompt(dossier)
        logger.info(f"📝 Prompt for {candidate.name}: {len(prompt.user_content)} characters")
        return prompt
