# app/content/provider.py
from __future__ import annotations

import logging
from typing import Optional, Protocol

from openai import OpenAI, OpenAIError

from app.config import LLM_TIMEOUT_SECONDS, OPENAI_API_KEY, OPENAI_MODEL
from app.errors import GenerationFailed, ProviderUnavailable

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a professional content writer. Create high-quality, engaging content "
    "based on the user's requirements."
)
TEMPERATURE = 0.7
MAX_TOKENS = 2000


class ContentProvider(Protocol):
    def generate(self, prompt: str) -> str:
        ...


class OpenAIProvider:
    """
    Single best-effort chat completion per call.
    Retries are disabled; the caller decides whether to try again.
    """

    def __init__(
        self,
        api_key: str = OPENAI_API_KEY,
        model: str = OPENAI_MODEL,
        timeout: float = LLM_TIMEOUT_SECONDS,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client: Optional[OpenAI] = None

    def _get_client(self) -> OpenAI:
        if not self.api_key:
            raise ProviderUnavailable("OpenAI API key not configured")
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    def generate(self, prompt: str) -> str:
        client = self._get_client()
        try:
            completion = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
            )
        except OpenAIError as e:
            logger.warning("OpenAI request failed: %s", type(e).__name__)
            raise GenerationFailed(f"Failed to generate content: {e}") from e

        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""


_default_provider: Optional[OpenAIProvider] = None


def get_provider() -> ContentProvider:
    """FastAPI dependency; override in tests."""
    global _default_provider
    if _default_provider is None:
        _default_provider = OpenAIProvider()
    return _default_provider
