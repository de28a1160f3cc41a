"""Text oracles — generative-language backends the agent delegates to.

Every backend implements the ``Oracle`` protocol from ``memagent.oracles.base``.
Prompt-level tasks built on top of ``generate`` live in ``memagent.oracles.tasks``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from memagent.config import OracleConfig
    from memagent.oracles.base import Oracle


def build_oracle(config: OracleConfig, name: str | None = None) -> Oracle:
    """Instantiate the backend called ``name`` (defaults to ``config.name``)."""
    name = name or config.name

    if name == "gemini":
        from memagent.oracles.gemini import GeminiOracle

        return GeminiOracle(
            api_key=config.api_key,
            model=config.model,
            base_url=config.base_url,
            timeout=config.timeout,
        )
    if name == "anthropic_api":
        from memagent.oracles.anthropic_api import AnthropicOracle

        kwargs: dict = {"timeout": config.timeout}
        if config.anthropic_model:
            kwargs["model"] = config.anthropic_model
        return AnthropicOracle(**kwargs)

    raise ValueError(f"Unknown oracle '{name}'. Available: ['gemini', 'anthropic_api']")
