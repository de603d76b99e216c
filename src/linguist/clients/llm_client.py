"""Claude API wrapper with async support and retry logic."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import anthropic
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from linguist.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-haiku-4-5-20251001"

# Transient failures worth another attempt; auth and bad-request errors are not.
_RETRYABLE = (
    anthropic.APIConnectionError,
    anthropic.RateLimitError,
    anthropic.InternalServerError,
)


@dataclass
class LLMResponse:
    """Response text plus token usage."""

    text: str
    input_tokens: int
    output_tokens: int


class LLMClient:
    """Async Claude client with exponential-backoff retries and a token ledger."""

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        model: str = DEFAULT_MODEL,
    ):
        kwargs: dict = {}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)
        self.model = model
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    @retry(
        retry=retry_if_exception_type(_RETRYABLE),
        stop=stop_after_attempt(3),
        wait=wait_exponential(min=1, max=10),
        reraise=True,
    )
    async def _call_api(
        self,
        prompt: str,
        system: str,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> anthropic.types.Message:
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system
        return await self.client.messages.create(**kwargs)

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str | None = None,
        temperature: float = 0.0,
        max_tokens: int = 8192,
    ) -> LLMResponse:
        """Send a prompt to Claude and return the text response with usage."""
        model = model or self.model
        logger.debug("LLM call: model=%s", model)
        try:
            message = await self._call_api(
                prompt=prompt,
                system=system,
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except Exception:
            logger.error("LLM call failed", exc_info=True)
            raise
        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((model, input_tokens, output_tokens))
        text = message.content[0].text if message.content else ""
        return LLMResponse(text=text, input_tokens=input_tokens, output_tokens=output_tokens)

    async def generate_json(
        self,
        prompt: str,
        system: str = "",
        model: str | None = None,
        temperature: float = 0.0,
        max_tokens: int = 8192,
    ) -> dict | list:
        """Send a prompt and parse JSON from the response."""
        response = await self.generate(
            prompt=prompt,
            system=system,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return extract_json(response.text)

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary
