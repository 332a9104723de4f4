"""Claude API wrapper implementing the text-generation capability."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import anthropic
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from portfolio_ai.config import AppConfig, LLMConfig, resolve_api_key
from portfolio_ai.errors import GenerationProviderError

logger = logging.getLogger(__name__)

# Only failures a later attempt can plausibly get past; auth and request errors are final.
RETRYABLE_ERRORS = (
    anthropic.APIConnectionError,
    anthropic.RateLimitError,
    anthropic.InternalServerError,
)


@runtime_checkable
class TextGenerator(Protocol):
    """Anything that turns a prompt into reply text."""

    async def complete(self, prompt: str) -> str: ...


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int


class LLMClient:
    """Async Claude API client.

    The credential is resolved once here; a missing key raises
    ConfigurationError before any request is made. Calls are attempted
    ``max_attempts`` times (1 by default, i.e. no retries).
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str = LLMConfig.model,
        max_tokens: int = LLMConfig.max_tokens,
        temperature: float = LLMConfig.temperature,
        timeout: float | None = None,
        max_attempts: int = LLMConfig.max_attempts,
    ):
        kwargs: dict = {"api_key": resolve_api_key(api_key)}
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.max_attempts = max_attempts
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    @classmethod
    def from_config(cls, config: AppConfig, api_key: str | None = None) -> LLMClient:
        llm = config.llm
        return cls(
            api_key,
            model=llm.model,
            max_tokens=llm.max_tokens,
            temperature=llm.temperature,
            timeout=llm.timeout,
            max_attempts=llm.max_attempts,
        )

    async def _call_api(
        self,
        prompt: str,
        system: str,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> anthropic.types.Message:
        """Make the actual API call, retrying transient errors up to max_attempts."""
        messages = [{"role": "user", "content": prompt}]
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": messages,
        }
        if system:
            kwargs["system"] = system

        @retry(
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(min=1, max=10),
            reraise=True,
        )
        async def _create() -> anthropic.types.Message:
            return await self.client.messages.create(**kwargs)

        return await _create()

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Send a prompt to Claude and return the text response with usage."""
        model = model or self.model
        logger.debug("LLM call: model=%s prompt=%d chars", model, len(prompt))
        try:
            message = await self._call_api(
                prompt=prompt,
                system=system,
                model=model,
                temperature=self.temperature if temperature is None else temperature,
                max_tokens=max_tokens or self.max_tokens,
            )
        except Exception as exc:
            logger.error("LLM call failed", exc_info=True)
            raise GenerationProviderError("Model provider call failed", exc) from exc

        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((model, input_tokens, output_tokens))
        text = "".join(getattr(block, "text", "") for block in message.content)
        return LLMResponse(
            text=text,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )

    async def complete(self, prompt: str) -> str:
        response = await self.generate(prompt)
        return response.text

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary
