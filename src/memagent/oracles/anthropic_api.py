"""Anthropic API oracle — plain text completion, no tool use."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from memagent.oracles.base import GenerationConfig, OracleError, OracleResponse

logger = logging.getLogger(__name__)


@dataclass
class AnthropicOracle:
    """Direct Anthropic API via the `anthropic` SDK."""

    model: str = "claude-sonnet-4-5-20250929"
    max_tokens: int = 800
    timeout: int = 30

    def __post_init__(self) -> None:
        try:
            import anthropic

            self._client = anthropic.Anthropic(timeout=self.timeout)
        except ImportError:
            raise ImportError(
                "anthropic package required. Install with: pip install 'memagent[api]'"
            )

    @property
    def name(self) -> str:
        return "anthropic_api"

    def _build_kwargs(self, prompt: str, config: GenerationConfig | None) -> dict:
        kwargs: dict = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        if config is not None:
            # Safety settings have no Anthropic counterpart and are dropped.
            kwargs["max_tokens"] = config.max_output_tokens
            kwargs["temperature"] = min(config.temperature, 1.0)
            kwargs["top_p"] = config.top_p
            kwargs["top_k"] = config.top_k
            if config.stop_sequences:
                kwargs["stop_sequences"] = list(config.stop_sequences)
        return kwargs

    async def generate(
        self,
        prompt: str,
        *,
        config: GenerationConfig | None = None,
    ) -> OracleResponse:
        kwargs = self._build_kwargs(prompt, config)
        try:
            response = await asyncio.to_thread(self._client.messages.create, **kwargs)
        except Exception as e:
            logger.error("Anthropic API error: %s", e)
            raise OracleError(f"Anthropic API error: {e}") from e

        blocks = response.content or []
        text = next((b.text for b in blocks if getattr(b, "type", None) == "text"), None)
        if text is None:
            raise OracleError("Anthropic API returned no text content")

        metadata: dict = {}
        if response.usage:
            metadata["input_tokens"] = response.usage.input_tokens
            metadata["output_tokens"] = response.usage.output_tokens

        return OracleResponse(
            text=text,
            model=response.model,
            metadata=metadata,
        )

    async def health_check(self) -> bool:
        try:
            response = await asyncio.to_thread(
                self._client.messages.create,
                model=self.model,
                max_tokens=10,
                messages=[{"role": "user", "content": "ping"}],
            )
            return bool(response.content)
        except Exception:
            return False
