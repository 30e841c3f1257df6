#!/usr/bin/env python3
"""
Embed builder utilities for ScoutBot

Provides consistent embed formatting across all cogs.
"""

import discord
from typing import List, Optional, Sequence

from ..config import Colors, Footers
from ..models import ClubCandidate

# Discord caps embed descriptions at 4096 characters
DESCRIPTION_LIMIT = 4096


def split_text(text: str, limit: int = DESCRIPTION_LIMIT) -> List[str]:
    """Split text into chunks no longer than `limit`, preferring line breaks"""
    chunks = []
    remaining = text
    while len(remaining) > limit:
        cut = remaining.rfind("\n", 0, limit)
        if cut <= 0:
            cut = limit
        chunks.append(remaining[:cut].rstrip())
        remaining = remaining[cut:].lstrip("\n")
    if remaining:
        chunks.append(remaining)
    return chunks


class EmbedBuilder:
    """Factory class for creating consistent Discord embeds"""

    @staticmethod
    def error(
        title: str,
        description: str = "",
        footer: Optional[str] = None
    ) -> discord.Embed:
        """Create an error (red) embed"""
        embed = discord.Embed(
            title=f"❌ {title}",
            description=description,
            color=Colors.ERROR
        )
        if footer:
            embed.set_footer(text=footer)
        return embed

    @staticmethod
    def warning(
        title: str,
        description: str = "",
        footer: Optional[str] = None
    ) -> discord.Embed:
        """Create a warning (orange) embed"""
        embed = discord.Embed(
            title=f"⚠️ {title}",
            description=description,
            color=Colors.WARNING
        )
        if footer:
            embed.set_footer(text=footer)
        return embed

    @staticmethod
    def scout_report(candidate: ClubCandidate, report: str) -> List[discord.Embed]:
        """Create one or more embeds holding a scouting report"""
        chunks = split_text(report) or ["No report generated."]
        embeds = []
        for i, chunk in enumerate(chunks):
            title = f"📋 Scouting Report: {candidate.name}"
            if len(chunks) > 1:
                title += f" ({i + 1}/{len(chunks)})"
            embed = discord.Embed(title=title, description=chunk, color=Colors.SCOUT)
            if i == 0:
                embed.add_field(name="Platform", value=candidate.platform_label, inline=True)
                embed.add_field(name="Club ID", value=candidate.club_id, inline=True)
                if candidate.division:
                    embed.add_field(name="Division", value=candidate.division, inline=True)
            embed.set_footer(text=Footers.SCOUT)
            embeds.append(embed)
        return embeds

    @staticmethod
    def candidate_list(query: str, candidates: Sequence[ClubCandidate]) -> discord.Embed:
        """Numbered list of clubs for the user to choose from"""
        lines = []
        for i, candidate in enumerate(candidates, start=1):
            line = f"**{i}. {candidate.name}** · {candidate.platform_label} · ID {candidate.club_id}"
            if candidate.division:
                line += f" · Div {candidate.division}"
            lines.append(line)

        embed = discord.Embed(
            title=f"🔍 Multiple clubs match '{query}'",
            description="\n".join(lines),
            color=Colors.PRIMARY
        )
        embed.set_footer(text=Footers.SELECT)
        return embed
