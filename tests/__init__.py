"""
ScoutBot Test Suite

Test Categories:
- unit/: Fast tests that mock Discord, EA and OpenAI
- integration/: Bot wiring checks plus opt-in tests against the real EA API

Run all tests:
    pytest tests/ -v

Run only unit tests (fast):
    pytest tests/unit/ -v

Run the live EA tests (requires network):
    SCOUT_RUN_INTEGRATION=1 pytest tests/integration/ -v -m integration

Run with coverage:
    pytest tests/ --cov=src/scout_bot --cov-report=html
"""
