"""
Unit tests for ScoutBot

These tests use mocked dependencies and run quickly.
They test individual components in isolation.

Test files:
- test_ea_client.py: EA search parsing and response normalization
- test_mirror_scraper.py: stats mirror HTML parsing and matcher ladder
- test_club_resolver.py: multi-source search merge and dedup
- test_selection.py: disambiguation gate and pending selections
- test_report_builder.py: prompt assembly, caps and truncation
- test_ai.py: OpenAI response handling and error mapping
- test_scout_cog.py: /scoutclub flow and select menu
- test_core_cog.py: /help and /tokens
"""
