import logging
import re
from typing import Optional
from openai import AsyncOpenAI
from futuresafe.core.config import Settings

logger = logging.getLogger(__name__)

PROMPT_LIMIT = 50000


def sanitize_prompt(text: str) -> str:
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()[:PROMPT_LIMIT]


class CompletionClient:
    """``generate(prompt) -> str`` over any OpenAI-compatible chat endpoint (Groq by default)."""

    def __init__(self, api_key: Optional[str], base_url: str, model: str,
                 temperature: float = 0.7, timeout: float = 10.0):
        self.model = model
        self.temperature = temperature
        self._client = None
        if api_key:
            self._client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)
        else:
            logger.warning("No LLM API key configured; AI audits and chat will be unavailable.")

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionClient":
        return cls(
            api_key=settings.llm_api_key,
            base_url=settings.llm_base_url,
            model=settings.llm_model,
            temperature=settings.llm_temperature,
            timeout=settings.http_timeout,
        )

    async def __call__(self, prompt: str) -> str:
        if self._client is None:
            raise RuntimeError("LLM API key not set. Put LLM_API_KEY (or GROQ_API_KEY) in .env or your shell.")
        resp = await self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": sanitize_prompt(prompt)}],
            temperature=self.temperature,
        )
        content = resp.choices[0].message.content if resp.choices else None
        if not content:
            raise RuntimeError("Empty completion from LLM")
        return content
