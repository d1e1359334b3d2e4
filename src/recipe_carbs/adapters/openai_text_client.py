"""OpenAI chat completions client for ingredient extraction."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from recipe_carbs.services.extraction import TextGenerationClient


@dataclass
class OpenAITextClient(TextGenerationClient):
    """Text generation client backed by OpenAI chat completions."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str, timeout_seconds: float = 60) -> "OpenAITextClient":
        """Create an OpenAI client without automatic retries."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key, timeout=timeout_seconds, max_retries=0
            )
        )

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        temperature: float,
        top_p: float,
        max_tokens: int,
        system_prompt: str,
        user_text: str,
    ) -> str | None:
        """Return the first choice's content, or None when there is none."""
        response = await self.client.chat.completions.create(
            model=model,
            temperature=temperature,
            top_p=top_p,
            max_tokens=max_tokens,
            frequency_penalty=0,
            presence_penalty=0,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_text},
            ],
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
