"""OpenAI Responses API client for text completions."""

from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from fitness_tracker.domain.errors import OracleUnavailable
from fitness_tracker.services.oracle import TextCompletionClient


@dataclass
class OpenAITextClient(TextCompletionClient):
    """Completion client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str

    @classmethod
    def create(cls, api_key: str, model: str) -> "OpenAITextClient":
        """Create an OpenAI completion client."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model)

    async def complete(self, prompt: str) -> str:
        """Call OpenAI Responses API with a plain text prompt."""
        try:
            response = await self.client.responses.create(
                model=self.model, input=prompt, store=False
            )
        except OpenAIError as exc:
            raise OracleUnavailable(f"OpenAI request failed: {exc}") from exc
        output_text = response.output_text
        if not output_text:
            raise OracleUnavailable("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
