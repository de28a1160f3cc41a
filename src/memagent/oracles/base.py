"""Oracle protocol and shared types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


class OracleError(Exception):
    """Text generation failed: unreachable service, bad status, timeout or malformed payload."""


@dataclass
class GenerationConfig:
    """Sampling parameters for a single generation request."""

    temperature: float = 1.0
    max_output_tokens: int = 800
    top_p: float = 0.8
    top_k: int = 10
    stop_sequences: list[str] = field(default_factory=list)
    # category -> threshold, e.g. {"HARM_CATEGORY_HATE_SPEECH": "BLOCK_MEDIUM_AND_ABOVE"}
    safety_settings: dict[str, str] = field(default_factory=dict)


@dataclass
class OracleResponse:
    """Response from a text oracle."""

    text: str
    model: str | None = None
    error: str | None = None
    metadata: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None


@runtime_checkable
class Oracle(Protocol):
    """Protocol that all oracle backends must implement."""

    @property
    def name(self) -> str: ...

    async def generate(
        self,
        prompt: str,
        *,
        config: GenerationConfig | None = None,
    ) -> OracleResponse:
        """Generate text for ``prompt``. Raises OracleError on failure."""
        ...

    async def health_check(self) -> bool:
        """Check if the oracle is available. Returns True if healthy."""
        ...
