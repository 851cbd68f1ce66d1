"""Gemini generateContent API client."""

from dataclasses import dataclass

import httpx

from fitness_tracker.domain.errors import OracleUnavailable
from fitness_tracker.services.oracle import TextCompletionClient


@dataclass
class HttpxGeminiClient(TextCompletionClient):
    """HTTPX-backed client for the Generative Language API."""

    api_key: str
    model: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 20.0

    @classmethod
    def create(
        cls, api_key: str, model: str, base_url: str, timeout: float = 20.0
    ) -> "HttpxGeminiClient":
        """Create a Gemini client with a managed httpx session."""
        return cls(
            api_key=api_key,
            model=model,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def complete(self, prompt: str) -> str:
        """Send a single-turn prompt and return the first candidate's text."""
        url = f"{self.base_url}/models/{self.model}:generateContent"
        try:
            response = await self.http_client.post(
                url,
                params={"key": self.api_key},
                json={"contents": [{"parts": [{"text": prompt}]}]},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise OracleUnavailable(f"Gemini request failed: {exc}") from exc
        return _extract_text(payload)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _extract_text(payload: object) -> str:
    try:
        parts = payload["candidates"][0]["content"]["parts"]  # type: ignore[index]
        text = "".join(str(part.get("text", "")) for part in parts)
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        raise OracleUnavailable("Gemini response had no candidates") from exc
    if not text.strip():
        raise OracleUnavailable("Gemini returned an empty candidate")
    return text
