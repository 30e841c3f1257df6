"""AI Integration Module"""

import logging

from .ai_integration import ScoutReportWriter

logger = logging.getLogger('ScoutBot.AI')

report_writer = ScoutReportWriter()

if report_writer.is_configured:
    logger.info("✅ Report writer initialized")
else:
    logger.info("ℹ️ OPENAI_API_KEY not configured - scouting reports will fail")

__all__ = ['report_writer', 'ScoutReportWriter']
