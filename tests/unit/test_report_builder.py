#!/usr/bin/env python3
"""
Unit tests for ReportBuilder

Tests:
- Match history capped per type, newest first
- Member lists capped
- Sections truncated with a visible marker
- InsufficientDataError when EA has nothing
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.conftest import (
    CLUB_INFO,
    LEADERBOARD_SEARCH,
    MEMBER_STATS,
    OVERALL_STATS,
    RS_ACADEMY_ID,
    ea_transport,
    make_candidate,
    make_matches,
)


def rs_candidate():
    return make_candidate("common-gen5", RS_ACADEMY_ID, "RS Academy", seed=LEADERBOARD_SEARCH[0])


def stub_client(details):
    """EA client stub answering fetch_detail from {kind or (kind, match_type): payload}"""
    from scout_bot.utils.ea_client import DetailKind

    client = MagicMock()

    async def fetch_detail(club_id, platform, kind, match_type=None):
        if kind == DetailKind.MATCH_HISTORY:
            result = details.get((kind, match_type))
        else:
            result = details.get(kind)
        if isinstance(result, BaseException):
            raise result
        return result

    client.fetch_detail = AsyncMock(side_effect=fetch_detail)
    return client


class TestHelpers:
    """Tests for truncate_section / bound_matches / bound_members"""

    def test_truncate_under_budget(self):
        from scout_bot.utils.report_builder import truncate_section
        assert truncate_section("abc", 3) == ("abc", False)

    def test_truncate_one_over_budget(self):
        from scout_bot.utils.report_builder import TRUNCATION_MARKER, truncate_section
        assert truncate_section("abcd", 3) == ("abc" + TRUNCATION_MARKER, True)

    def test_truncate_over_budget(self):
        from scout_bot.utils.report_builder import TRUNCATION_MARKER, truncate_section

        text, cut = truncate_section("x" * 50, 20)
        assert cut is True
        assert text == "x" * 20 + TRUNCATION_MARKER

    def test_bound_matches_keeps_newest(self):
        from scout_bot.utils.report_builder import bound_matches

        matches = make_matches(30)
        bounded = bound_matches(matches, 10)
        assert bounded == matches[:10]

    def test_bound_matches_wrapped_and_junk(self):
        from scout_bot.utils.report_builder import bound_matches

        assert len(bound_matches({"matches": make_matches(4)}, 10)) == 4
        assert bound_matches(None, 10) == []
        assert bound_matches({"error": "x"}, 10) == []

    def test_bound_members_keeps_shape(self):
        from scout_bot.utils.report_builder import bound_members

        bounded = bound_members(MEMBER_STATS, 5)
        assert len(bounded['members']) == 5
        assert bounded['positionCount'] == MEMBER_STATS['positionCount']
        assert len(MEMBER_STATS['members']) == 12


class TestAssemble:
    """Tests for ReportBuilder.assemble"""

    @pytest.mark.asyncio
    async def test_match_history_capped_per_type(self):
        from scout_bot.config import ScoutSettings
        from scout_bot.utils.ea_client import DetailKind
        from scout_bot.utils.report_builder import ReportBuilder

        league = make_matches(40)
        friendly = make_matches(3, start_ts=1_600_000_000)
        client = stub_client({
            (DetailKind.MATCH_HISTORY, "leagueMatch"): league,
            (DetailKind.MATCH_HISTORY, "friendlyMatch"): friendly,
        })
        settings = ScoutSettings(match_cap=10, matches_budget=10**6)
        builder = ReportBuilder(client, settings)

        dossier = await builder.gather_dossier(rs_candidate())
        assert dossier.match_history["leagueMatch"] == league[:10]
        assert dossier.match_history["playoffMatch"] == []
        assert dossier.match_history["friendlyMatch"] == friendly

        prompt = await builder.assemble(rs_candidate())
        assert '"leagueMatches"' in prompt.user_content
        assert '"9009"' in prompt.user_content
        # 11th newest league match never reaches the prompt
        assert '"9010"' not in prompt.user_content

    @pytest.mark.asyncio
    async def test_per_type_cap_override(self):
        from scout_bot.config import ScoutSettings
        from scout_bot.utils.ea_client import DetailKind
        from scout_bot.utils.report_builder import ReportBuilder

        client = stub_client({(DetailKind.MATCH_HISTORY, "friendlyMatch"): make_matches(40)})
        settings = ScoutSettings(match_cap=10, match_caps={"friendlyMatch": 25})

        dossier = await ReportBuilder(client, settings).gather_dossier(rs_candidate())
        assert len(dossier.match_history["friendlyMatch"]) == 25

    @pytest.mark.asyncio
    async def test_insufficient_data(self):
        from scout_bot.errors import InsufficientDataError
        from scout_bot.utils.ea_client import DetailKind
        from scout_bot.utils.report_builder import ReportBuilder

        client = stub_client({
            DetailKind.PROFILE: CLUB_INFO[RS_ACADEMY_ID],
            DetailKind.MEMBER_SEASON_STATS: {"members": [], "positionCount": {}},
            (DetailKind.MATCH_HISTORY, "leagueMatch"): [],
        })

        with pytest.raises(InsufficientDataError):
            await ReportBuilder(client).assemble(rs_candidate())

    @pytest.mark.asyncio
    async def test_fetch_exception_treated_as_missing(self):
        from scout_bot.utils.ea_client import DetailKind
        from scout_bot.utils.report_builder import ReportBuilder

        client = stub_client({
            DetailKind.PROFILE: RuntimeError("boom"),
            DetailKind.AGGREGATE_STATS: OVERALL_STATS[0],
        })
        dossier = await ReportBuilder(client).gather_dossier(rs_candidate())

        assert dossier.info is None
        assert dossier.aggregate_stats == OVERALL_STATS[0]

    @pytest.mark.asyncio
    async def test_stats_alone_are_enough(self):
        from scout_bot.utils.ea_client import DetailKind
        from scout_bot.utils.report_builder import ReportBuilder

        client = stub_client({DetailKind.AGGREGATE_STATS: OVERALL_STATS[0]})
        prompt = await ReportBuilder(client).assemble(rs_candidate())

        assert "RS Academy" in prompt.user_content
        assert RS_ACADEMY_ID in prompt.user_content
        assert prompt.truncated is False

    @pytest.mark.asyncio
    async def test_oversized_section_is_marked(self):
        from scout_bot.config import ScoutSettings
        from scout_bot.utils.ea_client import DetailKind
        from scout_bot.utils.report_builder import TRUNCATION_MARKER, ReportBuilder

        client = stub_client({(DetailKind.MATCH_HISTORY, "leagueMatch"): make_matches(20)})
        settings = ScoutSettings(matches_budget=200)
        prompt = await ReportBuilder(client, settings).assemble(rs_candidate())

        assert prompt.truncated_sections == ["MATCH_HISTORY_JSON"]
        assert TRUNCATION_MARKER in prompt.user_content
        assert "partial: MATCH_HISTORY_JSON" in prompt.user_content

    @pytest.mark.asyncio
    async def test_member_lists_capped(self):
        from scout_bot.config import ScoutSettings
        from scout_bot.utils.ea_client import DetailKind
        from scout_bot.utils.report_builder import ReportBuilder

        client = stub_client({DetailKind.MEMBER_CAREER_STATS: MEMBER_STATS})
        dossier = await ReportBuilder(client, ScoutSettings(member_cap=3)).gather_dossier(rs_candidate())
        assert len(dossier.member_career['members']) == 3

    @pytest.mark.asyncio
    async def test_assemble_against_mock_transport(self, full_ea_routes):
        """End to end through the real EAClient"""
        from scout_bot.utils.ea_client import EAClient
        from scout_bot.utils.report_builder import ReportBuilder

        client = EAClient(transport=ea_transport(full_ea_routes))
        prompt = await ReportBuilder(client).assemble(rs_candidate())
        await client.close()

        assert prompt.system_instructions.startswith("You are an experienced EA FC Pro Clubs opposition scout")
        assert '"promotions": "7"' in prompt.user_content
        assert "Player0" in prompt.user_content
