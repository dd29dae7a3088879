"""Async LLM access for pricing suggestions. OpenAI is tried first, then Anthropic."""

import logging
import time

import anthropic
from openai import AsyncOpenAI

from staywise.config import settings

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
    """No provider produced a completion."""


class LLMClient:
    """Ordered list of configured providers; the first successful answer wins."""

    def __init__(self, timeout: float | None = None):
        timeout = timeout or settings.pricing_ai_timeout_seconds
        self._providers: list[tuple[str, object]] = []

        if settings.openai_api_key:
            self._providers.append(
                ("openai", AsyncOpenAI(api_key=settings.openai_api_key, timeout=timeout, max_retries=0))
            )
        if settings.anthropic_api_key:
            self._providers.append(
                ("anthropic", anthropic.AsyncAnthropic(api_key=settings.anthropic_api_key, timeout=timeout, max_retries=0))
            )

    @property
    def available(self) -> bool:
        return bool(self._providers)

    @property
    def provider_names(self) -> list[str]:
        return [name for name, _ in self._providers]

    async def complete(
        self,
        system: str,
        user: str,
        *,
        max_tokens: int = 1500,
        temperature: float = 0.3,
        json_mode: bool = False,
    ) -> str:
        """Raw text of the first provider that answers.

        json_mode asks OpenAI for a JSON object response; Anthropic relies on the prompt.

        Raises:
            LLMError if no provider is configured or every provider fails.
        """
        if not self._providers:
            raise LLMError("No LLM provider configured")

        errors = []
        for name, provider in self._providers:
            started = time.monotonic()
            try:
                if name == "openai":
                    text = await self._openai_complete(provider, system, user, max_tokens, temperature, json_mode)
                else:
                    text = await self._anthropic_complete(provider, system, user, max_tokens, temperature)
            except Exception as e:
                errors.append(f"{name}: {e}")
                logger.warning(f"LLM provider {name} failed: {e}")
                continue
            logger.debug(f"LLM provider {name} answered in {(time.monotonic() - started) * 1000:.0f}ms")
            return text

        raise LLMError(f"All LLM providers failed: {'; '.join(errors)}")

    async def _openai_complete(self, client, system, user, max_tokens, temperature, json_mode) -> str:
        kwargs: dict = {
            "model": settings.openai_model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        response = await client.chat.completions.create(**kwargs)
        return (response.choices[0].message.content or "").strip()

    async def _anthropic_complete(self, client, system, user, max_tokens, temperature) -> str:
        response = await client.messages.create(
            model=settings.anthropic_model,
            max_tokens=max_tokens,
            temperature=temperature,
            system=system,
            messages=[{"role": "user", "content": user}],
        )
        return response.content[0].text.strip()


llm_client = LLMClient()
