"""
OpenAI completion provider.

Thin wrapper over ``AsyncOpenAI`` chat completions. Errors are translated to
``ProviderError`` so callers only handle one exception family.
"""
import logging

import openai
from openai import AsyncOpenAI

from .base import CompletionProvider, PromptStyle, ProviderError

logger = logging.getLogger(__name__)

SYSTEM_PROMPTS = {
    PromptStyle.JSON: (
        "You are an expert eco-friendly travel planner specializing in sustainable "
        "destinations and low-carbon travel routes. Always respond with valid JSON "
        "objects. Focus on US destinations unless international travel is explicitly "
        "requested."
    ),
    PromptStyle.LINES: (
        "You are a helpful travel assistant. Answer with one suggestion per line "
        "and no other text."
    ),
}


class OpenAIProvider(CompletionProvider):
    """Chat-completions provider with a hard request timeout and no retries."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        timeout: float = 8.0,
        temperature: float = 0.7,
        max_tokens: int = 1500,
        client: AsyncOpenAI = None
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client or AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    @property
    def name(self) -> str:
        return "OpenAI"

    async def complete(self, prompt: str, style: PromptStyle = PromptStyle.JSON) -> str:
        kwargs = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPTS[style]},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        if style == PromptStyle.JSON:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            completion = await self._client.chat.completions.create(**kwargs)
        except openai.AuthenticationError as e:
            raise ProviderError("OpenAI authentication failed", status_code=401) from e
        except openai.RateLimitError as e:
            raise ProviderError("OpenAI rate limit exceeded", status_code=429) from e
        except openai.APITimeoutError as e:
            raise ProviderError("OpenAI request timed out", status_code=504) from e
        except openai.APIStatusError as e:
            raise ProviderError(f"OpenAI API error: {e.message}", status_code=e.status_code) from e
        except openai.APIError as e:
            raise ProviderError(f"OpenAI API error: {e}") from e

        if not completion.choices:
            raise ProviderError("OpenAI returned no choices")
        return completion.choices[0].message.content or ""
