"""
Integration tests for ScoutBot

test_bot_startup.py loads every cog into a real (unconnected) bot.

test_ea_live.py makes REAL HTTP requests to proclubs.ea.com. It is useful for:
1. Verifying the EA client still parses current responses
2. Detecting when EA changes endpoints or payload shapes

Run with: SCOUT_RUN_INTEGRATION=1 pytest tests/integration/ -v

Mark: @pytest.mark.integration
"""
