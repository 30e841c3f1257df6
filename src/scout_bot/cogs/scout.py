#!/usr/bin/env python3
"""
Scouting Cog for ScoutBot

Looks up EA FC Pro Clubs teams and posts AI scouting reports.
Commands:
- /scoutclub - Search a club by name and generate a scouting report
"""

import logging
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from ..ai import report_writer
from ..ai.ai_integration import ScoutReportWriter
from ..config import ScoutSettings
from ..errors import (
    ContextTooLargeError,
    EmptyResponseError,
    InsufficientDataError,
    InvalidSelectionError,
    NoMatchError,
    QuotaExceededError,
    ScoutError,
    UpstreamUnavailableError,
)
from ..models import ClubCandidate
from ..services.embeds import EmbedBuilder
from ..services.views import ClubSelectView
from ..utils.club_resolver import ClubResolver
from ..utils.ea_client import EAClient
from ..utils.mirror_scraper import MirrorScraper
from ..utils.report_builder import ReportBuilder
from ..utils.selection import DisambiguationGate, GateState, InMemorySelectionStore

logger = logging.getLogger('ScoutBot.Scout')

ERROR_TITLES = {
    NoMatchError: "No Clubs Found",
    InvalidSelectionError: "Selection Expired",
    InsufficientDataError: "Not Enough Data",
    UpstreamUnavailableError: "Report Writer Unavailable",
    QuotaExceededError: "Report Writer Busy",
    ContextTooLargeError: "Too Much Data",
    EmptyResponseError: "Empty Report",
}

GENERIC_APOLOGY = "Sorry, something went wrong while scouting that club. Please try again in a moment."


def error_embed(error: ScoutError) -> discord.Embed:
    title = ERROR_TITLES.get(type(error), "Scouting Failed")
    return EmbedBuilder.error(title, error.user_message)


class ScoutCog(commands.Cog):
    """EA FC Pro Clubs scouting reports"""

    def __init__(
        self,
        bot: commands.Bot,
        settings: Optional[ScoutSettings] = None,
        resolver: Optional[ClubResolver] = None,
        builder: Optional[ReportBuilder] = None,
        writer: Optional[ScoutReportWriter] = None,
        gate: Optional[DisambiguationGate] = None,
    ):
        self.bot = bot
        self.settings = settings or ScoutSettings.from_env()
        self._clients = []

        if resolver is None or builder is None:
            ea_client = EAClient(timeout=self.settings.http_timeout)
            self._clients.append(ea_client)
            if resolver is None:
                resolver = self._default_resolver(ea_client)
            if builder is None:
                builder = ReportBuilder(ea_client, self.settings)

        self.resolver = resolver
        self.builder = builder
        self.writer = writer or report_writer
        self.gate = gate or DisambiguationGate(
            InMemorySelectionStore(ttl_seconds=self.settings.selection_ttl),
            limit=self.settings.selection_limit,
        )
        logger.info("⚽ ScoutCog initialized")

    def _default_resolver(self, ea_client: EAClient) -> ClubResolver:
        sources = [(platform, ea_client) for platform in self.settings.platforms]
        if self.settings.mirror_url:
            mirror = MirrorScraper(self.settings.mirror_url, timeout=self.settings.http_timeout)
            self._clients.append(mirror)
            sources.append((MirrorScraper.PARTITION, mirror))
        return ClubResolver(sources, rank=self.settings.rank_candidates, limit=self.settings.selection_limit)

    async def cog_unload(self):
        for client in self._clients:
            await client.close()

    @app_commands.command(name="scoutclub", description="Look up an EA FC Pro Clubs team by name & generate a scouting report")
    @app_commands.describe(name="Approximate club name as it appears in-game")
    async def scoutclub(self, interaction: discord.Interaction, name: str):
        await self.handle_scout(interaction, name)

    async def handle_scout(self, interaction: discord.Interaction, name: str):
        """Search, then either report straight away or ask the user to pick"""
        # Defer FIRST to avoid interaction timeout (3 sec limit)
        await interaction.response.defer()
        logger.info(f"🔍 /scoutclub '{name}' by {interaction.user}")

        try:
            candidates = await self.resolver.resolve(name)
        except Exception as e:
            logger.error(f"❌ Error resolving '{name}': {e}", exc_info=True)
            await interaction.followup.send(embed=EmbedBuilder.error("Scouting Failed", GENERIC_APOLOGY), ephemeral=True)
            return

        outcome = self.gate.begin(interaction.user.id, name, candidates)

        if outcome.state == GateState.NO_MATCH:
            await interaction.followup.send(
                embed=EmbedBuilder.warning(ERROR_TITLES[NoMatchError], NoMatchError.user_message),
                ephemeral=True
            )
            return

        if outcome.state == GateState.RESOLVED:
            chosen = outcome.candidate
            await interaction.followup.send(
                f"Found one match: **{chosen.name}** on **{chosen.platform_label}** "
                f"(club ID: {chosen.club_id}). Generating scouting report…"
            )
            await self.send_report(interaction, chosen)
            return

        view = ClubSelectView(
            interaction.user.id,
            outcome.candidates,
            self.handle_selection,
            timeout=self.settings.selection_ttl,
        )
        await interaction.followup.send(
            embed=EmbedBuilder.candidate_list(name, outcome.candidates),
            view=view
        )

    async def handle_selection(self, interaction: discord.Interaction, source_id: str, club_id: str):
        """Select-menu callback: turn the pick into a report"""
        try:
            chosen = self.gate.choose_by_key(interaction.user.id, source_id, club_id)
        except InvalidSelectionError as e:
            logger.info(f"⚠️ Invalid selection from {interaction.user}: {e.detail}")
            await interaction.response.send_message(embed=error_embed(e), ephemeral=True)
            return

        await interaction.response.edit_message(
            content=f"Selected **{chosen.name}** on **{chosen.platform_label}**. Generating scouting report…",
            embed=None,
            view=None
        )
        await self.send_report(interaction, chosen)

    async def generate_report(self, candidate: ClubCandidate) -> str:
        prompt = await self.builder.assemble(candidate)
        return await self.writer.summarize(prompt)

    async def send_report(self, interaction: discord.Interaction, candidate: ClubCandidate):
        try:
            report = await self.generate_report(candidate)
        except ScoutError as e:
            logger.warning(f"⚠️ Report for {candidate.platform}/{candidate.club_id} failed: {type(e).__name__}: {e.detail}")
            await interaction.followup.send(embed=error_embed(e), ephemeral=True)
            return
        except Exception as e:
            logger.error(f"❌ Error generating report for {candidate.platform}/{candidate.club_id}: {e}", exc_info=True)
            await interaction.followup.send(embed=EmbedBuilder.error("Scouting Failed", GENERIC_APOLOGY), ephemeral=True)
            return

        # One embed per message keeps us under Discord's 6000 character total
        for embed in EmbedBuilder.scout_report(candidate, report):
            await interaction.followup.send(embed=embed)
        logger.info(f"✅ Posted scouting report for {candidate.name}")


async def setup(bot: commands.Bot):
    """Required setup function for loading cog"""
    await bot.add_cog(ScoutCog(bot))
    logger.info("✅ ScoutCog loaded")
