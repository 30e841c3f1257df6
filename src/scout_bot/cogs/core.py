#!/usr/bin/env python3
"""
Core Cog for ScoutBot

Provides always-available commands.
Commands:
- /help - Show all available commands
- /tokens - Show AI token usage
"""

import logging

import discord
from discord import app_commands
from discord.ext import commands

from .. import __version__
from ..ai import report_writer
from ..config import Colors, Footers

logger = logging.getLogger('ScoutBot.Core')


class CoreCog(commands.Cog):
    """Always-available core commands"""

    def __init__(self, bot: commands.Bot, writer=None):
        self.bot = bot
        self.writer = writer or report_writer
        logger.info("⚽ CoreCog initialized")

    @app_commands.command(name="help", description="Show all available commands")
    async def help_cmd(self, interaction: discord.Interaction):
        await interaction.response.send_message(embed=self.build_help_embed(), ephemeral=True)

    def build_help_embed(self) -> discord.Embed:
        embed = discord.Embed(
            title="⚽ ScoutBot - Command Reference",
            description=f"Scouting reports for EA FC Pro Clubs teams.\n**Version {__version__}**",
            color=Colors.PRIMARY
        )
        embed.add_field(
            name="🔍 `/scoutclub name:<club>`",
            value=(
                "Searches every EA platform for the club.\n"
                "One match → report straight away.\n"
                "Several matches → pick yours from the menu."
            ),
            inline=False
        )
        embed.add_field(
            name="📊 `/tokens`",
            value="AI token usage since the bot started",
            inline=False
        )
        embed.set_footer(text=Footers.DEFAULT)
        return embed

    @app_commands.command(name="tokens", description="Show AI token usage since startup")
    async def tokens(self, interaction: discord.Interaction):
        await interaction.response.send_message(embed=self.build_tokens_embed(), ephemeral=True)

    def build_tokens_embed(self) -> discord.Embed:
        stats = self.writer.get_token_usage()
        embed = discord.Embed(
            title="📊 AI Token Usage",
            color=Colors.PRIMARY
        )
        embed.add_field(name="Model", value=stats['model'], inline=True)
        embed.add_field(name="Reports", value=f"{stats['total_requests']:,}", inline=True)
        embed.add_field(name="Tokens", value=f"{stats['total_tokens']:,}", inline=True)
        embed.add_field(name="Estimated Cost", value=f"${stats['estimated_cost']:.4f}", inline=True)
        embed.set_footer(text=Footers.DEFAULT)
        return embed


async def setup(bot: commands.Bot):
    """Required setup function for loading cog"""
    await bot.add_cog(CoreCog(bot))
    logger.info("✅ CoreCog loaded")
