#!/usr/bin/env python3
"""
Integration tests for the EA FC Pro Clubs API

These tests make ACTUAL HTTP requests to proclubs.ea.com to verify:
1. Leaderboard search still returns clubs in the shape we parse
2. Detail endpoints still answer for a club found by search
3. The resolver fans out over every platform without blowing up

Run with: SCOUT_RUN_INTEGRATION=1 pytest tests/integration/ -v -m integration

NOTE: EA blocks some datacenter IPs and changes response shapes without
notice. A failure here means the client needs maintenance.
"""

import os

import pytest
import pytest_asyncio

# Mark all tests in this module as integration tests
pytestmark = [
    pytest.mark.integration,
    pytest.mark.asyncio,
    pytest.mark.skipif(os.getenv("SCOUT_RUN_INTEGRATION") != "1", reason="set SCOUT_RUN_INTEGRATION=1 to hit EA"),
]

KNOWN_CLUB = "Real Madrid"


@pytest_asyncio.fixture
async def client():
    from scout_bot.utils.ea_client import EAClient

    ea = EAClient(timeout=15.0)
    yield ea
    await ea.close()


class TestEALive:
    """Real EA requests"""

    async def test_search_returns_candidates(self, client):
        results = await client.search(KNOWN_CLUB, "common-gen5")

        # EA may legitimately find nothing, but anything returned must be well formed
        for club in results:
            assert club.club_id
            assert club.name
            assert club.source_id == "common-gen5"

    async def test_profile_for_search_hit(self, client):
        from scout_bot.utils.ea_client import DetailKind

        results = await client.search(KNOWN_CLUB, "common-gen5")
        if not results:
            pytest.skip("EA returned no clubs (blocked or empty leaderboard)")

        club = results[0]
        info = await client.fetch_detail(club.club_id, club.platform, DetailKind.PROFILE)
        if info is not None:
            assert isinstance(info, dict)

    async def test_resolver_across_platforms(self, client):
        from scout_bot.config import DEFAULT_PLATFORMS
        from scout_bot.utils.club_resolver import ClubResolver

        resolver = ClubResolver([(platform, client) for platform in DEFAULT_PLATFORMS])
        results = await resolver.resolve(KNOWN_CLUB)

        keys = [club.key for club in results]
        assert len(keys) == len(set(keys))
