"""Text-completion oracle used for meal classification."""

import asyncio
import json
import logging
import re
from dataclasses import dataclass
from typing import Protocol

from fitness_tracker.domain.errors import OracleUnavailable

_CODE_FENCE = re.compile(r"```(?:json)?\s*|\s*```")

_logger = logging.getLogger(__name__)


class TextCompletionClient(Protocol):
    """Interface for a generative text-completion API."""

    async def complete(self, prompt: str) -> str:
        """Send a prompt and return the model's text."""


@dataclass
class OracleService:
    """Best-effort wrapper around a completion client.

    Every failure, including a timeout, surfaces as OracleUnavailable.
    """

    client: TextCompletionClient
    timeout_seconds: float = 20.0

    async def complete(self, prompt: str) -> str:
        """Return the completion text or raise OracleUnavailable."""
        try:
            text = await asyncio.wait_for(
                self.client.complete(prompt), timeout=self.timeout_seconds
            )
        except OracleUnavailable:
            raise
        except TimeoutError as exc:
            raise OracleUnavailable("Oracle call timed out") from exc
        except Exception as exc:
            _logger.warning("Oracle call failed: %s", exc)
            raise OracleUnavailable(str(exc)) from exc
        if not isinstance(text, str) or not text.strip():
            raise OracleUnavailable("Oracle returned an empty response")
        return text.strip()

    async def complete_json(self, prompt: str) -> dict[str, object]:
        """Return the completion parsed as a JSON object."""
        text = await self.complete(prompt)
        try:
            payload = json.loads(_CODE_FENCE.sub("", text).strip())
        except json.JSONDecodeError as exc:
            raise OracleUnavailable("Oracle returned malformed JSON") from exc
        if not isinstance(payload, dict):
            raise OracleUnavailable("Oracle returned a non-object JSON payload")
        return payload


@dataclass
class DisabledCompletionClient(TextCompletionClient):
    """Client used when no oracle API key is configured."""

    async def complete(self, prompt: str) -> str:
        raise OracleUnavailable("No text-completion provider configured")
