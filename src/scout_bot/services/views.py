#!/usr/bin/env python3
"""
Select menu for picking one club out of an ambiguous search
"""

import logging
from typing import Awaitable, Callable, Sequence

import discord

from ..models import ClubCandidate

logger = logging.getLogger('ScoutBot.Views')

# (interaction, source_id, club_id) -> None
SelectionHandler = Callable[[discord.Interaction, str, str], Awaitable[None]]


def candidate_options(candidates: Sequence[ClubCandidate]) -> list:
    """One select option per candidate; the value encodes the identity key"""
    options = []
    for i, candidate in enumerate(candidates, start=1):
        description = f"{candidate.platform_label} · ID {candidate.club_id}"
        if candidate.division:
            description += f" · Div {candidate.division}"
        options.append(discord.SelectOption(
            label=f"{i}. {candidate.name}"[:100],
            value=candidate.option_value,
            description=description[:100],
        ))
    return options


class ClubSelect(discord.ui.Select):
    def __init__(self, candidates: Sequence[ClubCandidate], on_select: SelectionHandler):
        self.on_select = on_select
        super().__init__(
            placeholder="Select the correct club...",
            options=candidate_options(candidates),
            min_values=1,
            max_values=1,
        )

    async def callback(self, interaction: discord.Interaction):
        source_id, _, club_id = self.values[0].partition("|")
        if self.view is not None:
            self.view.stop()
        await self.on_select(interaction, source_id, club_id)


class ClubSelectView(discord.ui.View):
    """Only the user who ran the search may answer it"""

    def __init__(self, owner_id: int, candidates: Sequence[ClubCandidate],
                 on_select: SelectionHandler, timeout: float = 900):
        super().__init__(timeout=timeout)
        self.owner_id = owner_id
        self.add_item(ClubSelect(candidates, on_select))

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id != self.owner_id:
            await interaction.response.send_message(
                "❌ Only the person who ran this search can pick a club. Run `/scoutclub` yourself!",
                ephemeral=True
            )
            return False
        return True
