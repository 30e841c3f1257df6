#!/usr/bin/env python3
"""
AI Integration for ScoutBot
This module turns an assembled ReportPrompt into a written scouting report
"""

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

import aiohttp

from ..config import OPENAI_API_KEY, OPENAI_MODEL
from ..errors import (
    ContextTooLargeError,
    EmptyResponseError,
    QuotaExceededError,
    SummarizationError,
    UpstreamUnavailableError,
)
from ..models import ReportPrompt

# Set up logging
logger = logging.getLogger('ScoutBot.AI')

CONTEXT_ERROR_MARKERS = ('context_length_exceeded', 'maximum context length', 'too many tokens')


class ScoutReportWriter:
    """Sends report prompts to the OpenAI chat completions API"""

    API_URL = 'https://api.openai.com/v1/chat/completions'

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 max_tokens: int = 1200, timeout: float = 60.0):
        self.api_key = api_key if api_key is not None else OPENAI_API_KEY
        self.model = model or OPENAI_MODEL
        self.max_tokens = max_tokens
        self.timeout = timeout

        # Token usage tracking (in memory only)
        self.total_tokens = 0
        self.total_requests = 0

        # Cost tracking (per 1k tokens - averaged input/output)
        self.cost_per_1k = 0.0004  # gpt-4o-mini average

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _post_completion(self, payload: Dict[str, Any]) -> Tuple[int, Any, Dict[str, str]]:
        """POST to OpenAI and return (status, body, headers); body is JSON when possible"""
        headers = {
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json'
        }
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout)) as session:
            async with session.post(self.API_URL, headers=headers, json=payload) as response:
                try:
                    body = await response.json(content_type=None)
                except ValueError:
                    body = await response.text()
                return response.status, body, dict(response.headers)

    async def summarize(self, prompt: ReportPrompt) -> str:
        """
        Write a scouting report from an assembled prompt.

        Raises:
            UpstreamUnavailableError: API key missing or rejected
            QuotaExceededError: out of quota or rate limited
            ContextTooLargeError: prompt did not fit the model context
            EmptyResponseError: the model returned no text
            SummarizationError: anything else (network errors, 5xx)
        """
        if not self.api_key:
            logger.warning("⚠️ OpenAI API key not found")
            raise UpstreamUnavailableError("OPENAI_API_KEY is not set")

        payload = {
            'model': self.model,
            'messages': [
                {'role': 'system', 'content': prompt.system_instructions},
                {'role': 'user', 'content': prompt.user_content}
            ],
            'max_tokens': self.max_tokens,
            'temperature': 0.4
        }

        logger.info(f"🤖 Asking OpenAI ({self.model}) for a scouting report")
        logger.info(f"📝 Full prompt length: {len(prompt.user_content)} characters")
        # Rough approximation: 1 token ≈ 4 characters
        logger.info(f"🔢 Estimated input tokens: ~{(len(prompt.system_instructions) + len(prompt.user_content)) // 4}")

        try:
            status, body, headers = await self._post_completion(payload)
        except asyncio.TimeoutError as e:
            logger.error("❌ OpenAI request timed out")
            raise SummarizationError("OpenAI request timed out") from e
        except aiohttp.ClientError as e:
            logger.error(f"❌ Error calling OpenAI: {e}")
            raise SummarizationError(f"OpenAI transport error: {e}") from e

        if status != 200:
            raise self._classify_error(status, body)

        if 'x-ratelimit-remaining-tokens' in headers:
            logger.info(f"⏱️ Rate limit - Remaining tokens: {headers.get('x-ratelimit-remaining-tokens')}")

        usage = body.get('usage', {}) if isinstance(body, dict) else {}
        total_tokens = usage.get('total_tokens', 0)
        self.total_tokens += total_tokens
        self.total_requests += 1
        logger.info(f"🔢 Token usage - Prompt: {usage.get('prompt_tokens', 0)}, "
                    f"Completion: {usage.get('completion_tokens', 0)}, Total: {total_tokens}")

        text = self._extract_text(body)
        if not text:
            logger.warning("⚠️ OpenAI returned an empty report")
            raise EmptyResponseError("completion contained no text")

        logger.info(f"✅ Report received ({len(text)} characters)")
        return text

    @staticmethod
    def _extract_text(body: Any) -> str:
        try:
            content = body['choices'][0]['message']['content']
        except (KeyError, IndexError, TypeError):
            return ""
        return (content or "").strip()

    @staticmethod
    def _classify_error(status: int, body: Any) -> SummarizationError:
        """Map an OpenAI error response to the matching failure type"""
        error = body.get('error', {}) if isinstance(body, dict) else {}
        if not isinstance(error, dict):
            error = {}
        code = str(error.get('code') or error.get('type') or '')
        message = str(error.get('message') or body)[:300]
        logger.error(f"OpenAI API error: {status} - {code} {message}")

        if status in (401, 403):
            return UpstreamUnavailableError(f"OpenAI rejected credentials ({status})")
        if status == 429 or code == 'insufficient_quota':
            return QuotaExceededError(f"OpenAI quota/rate limit ({code or status})")
        if status in (400, 413):
            lowered = f"{code} {message}".lower()
            if any(marker in lowered for marker in CONTEXT_ERROR_MARKERS):
                return ContextTooLargeError(f"prompt exceeded model context ({code})")
        return SummarizationError(f"OpenAI returned {status}")

    def get_token_usage(self) -> dict:
        """Get current token usage statistics with cost estimates"""
        return {
            'total_requests': self.total_requests,
            'total_tokens': self.total_tokens,
            'model': self.model,
            'estimated_cost': (self.total_tokens / 1000) * self.cost_per_1k,
        }
