"""OpenAI Responses API client for fitness advice."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from fitness_tracker.services.advisor import AdviceClient


@dataclass
class OpenAIAdviceClient(AdviceClient):
    """Advice client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIAdviceClient":
        """Create an OpenAI advice client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(self, *, model: str, prompt: str) -> str:
        """Send a text prompt and return the response text."""
        response = await self.client.responses.create(model=model, input=prompt)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
