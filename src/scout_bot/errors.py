#!/usr/bin/env python3
"""
Typed failures for the scouting pipeline

Every error carries a short user_message that the cogs can show as-is.
Upstream data-provider failures never show up here: the source adapters
swallow them and return empty data instead.
"""


class ScoutError(Exception):
    """Base class for failures the presentation layer renders specifically"""

    user_message = "Something went wrong while scouting that club. Please try again."

    def __init__(self, detail: str = None):
        super().__init__(detail or self.user_message)
        self.detail = detail


class NoMatchError(ScoutError):
    user_message = (
        "I could not find any clubs matching that name on EA FC servers. "
        "Try a different spelling or the exact in-game name."
    )


class InvalidSelectionError(ScoutError):
    user_message = "That selection has expired or is no longer valid. Please run `/scoutclub` again."


class InsufficientDataError(ScoutError):
    user_message = (
        "EA has no stats or match history for this club yet, "
        "so there is nothing to build a scouting report from."
    )


class SummarizationError(ScoutError):
    """The text-completion call failed for a reason we could not classify"""

    user_message = "The report writer hit an unexpected error. Please try again in a moment."


class UpstreamUnavailableError(SummarizationError):
    user_message = "The report writer is not configured (missing or invalid API key). Ask the bot owner to check it."


class QuotaExceededError(SummarizationError):
    user_message = "The report writer is out of quota or rate limited right now. Try again later."


class ContextTooLargeError(SummarizationError):
    user_message = "This club has too much data to summarize in one report. Try again later."


class EmptyResponseError(SummarizationError):
    user_message = "The report writer returned an empty report. Please try again."
