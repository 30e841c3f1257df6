#!/usr/bin/env python3
"""
ScoutBot - Cog-Based Architecture

Entry point that loads the Discord.py Cogs.

Cogs loaded:
- CoreCog: /help, /tokens
- ScoutCog: /scoutclub
"""

import asyncio
import logging
import sys

import discord
from discord.ext import commands

from .config import DISCORD_TOKEN, OPENAI_API_KEY

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger('ScoutBot')

# Slash commands and select menus only need the guilds intent
intents = discord.Intents.default()
intents.guilds = True

bot = commands.Bot(
    command_prefix="!",
    intents=intents,
    help_command=None  # We use /help from CoreCog
)

# ==================== COG LOADING ====================

COG_EXTENSIONS = [
    'scout_bot.cogs.core',
    'scout_bot.cogs.scout',
]


async def load_cogs():
    """Load all cog extensions"""
    for extension in COG_EXTENSIONS:
        try:
            await bot.load_extension(extension)
            logger.info(f"✅ Loaded cog: {extension}")
        except Exception as e:
            logger.error(f"❌ Failed to load cog {extension}: {e}", exc_info=True)


# ==================== BOT EVENTS ====================

@bot.event
async def on_ready():
    """Called when the bot is ready"""
    logger.info(f"⚽ {bot.user} is online!")
    logger.info(f"📊 Connected to {len(bot.guilds)} server(s)")

    # Global sync so /scoutclub works on every server the bot is in
    try:
        synced = await bot.tree.sync()
        logger.info(f"✅ Synced {len(synced)} command(s) globally")
    except Exception as e:
        logger.error(f"❌ Failed to sync commands: {e}")


# ==================== MAIN ====================

async def main():
    """Main entry point"""
    if not DISCORD_TOKEN:
        logger.error("❌ DISCORD_BOT_TOKEN environment variable not set!")
        sys.exit(1)

    if not OPENAI_API_KEY:
        logger.warning("⚠️ OPENAI_API_KEY not set - scouting reports will fail")

    async with bot:
        await load_cogs()
        await bot.start(DISCORD_TOKEN)


def run():
    """Run the bot"""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("👋 Bot shutting down...")
    except Exception as e:
        logger.error(f"❌ Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
