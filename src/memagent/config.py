"""Configuration loading from environment variables and memagent.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

from memagent.oracles.gemini import DEFAULT_BASE_URL

_CONFIG_FILENAME = "memagent.toml"


@dataclass
class OracleConfig:
    """Configuration for the text oracle."""

    name: str = "gemini"
    fallback: str | None = None
    model: str = "gemini-1.5-flash"
    anthropic_model: str | None = None
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: int = 30


@dataclass
class MemoryConfig:
    """Memory store configuration."""

    capacity: int = 100
    recall_limit: int = 5


@dataclass
class AgentConfig:
    """Top-level agent configuration."""

    name: str = "agent"
    oracle: OracleConfig = field(default_factory=OracleConfig)
    memory: MemoryConfig = field(default_factory=MemoryConfig)
    log_level: str = "INFO"


def load_config(config_path: Path | None = None) -> AgentConfig:
    """Load configuration from environment variables and optional memagent.toml.

    Priority: environment variables > memagent.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.memagent/
        for candidate in [
            Path.cwd() / _CONFIG_FILENAME,
            Path.home() / ".memagent" / _CONFIG_FILENAME,
        ]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    oracle_data = file_data.get("oracle", {})
    memory_data = file_data.get("memory", {})

    config = AgentConfig(
        name=os.getenv("MEMAGENT_NAME", file_data.get("name", "agent")),
        oracle=OracleConfig(
            name=os.getenv("MEMAGENT_ORACLE", oracle_data.get("name", "gemini")),
            fallback=os.getenv("MEMAGENT_FALLBACK", oracle_data.get("fallback")),
            model=os.getenv("MEMAGENT_MODEL", oracle_data.get("model", "gemini-1.5-flash")),
            anthropic_model=oracle_data.get("anthropic_model"),
            api_key=os.getenv("GEMINI_API_KEY", oracle_data.get("api_key", "")),
            base_url=oracle_data.get("base_url", DEFAULT_BASE_URL),
            timeout=int(os.getenv("MEMAGENT_TIMEOUT", oracle_data.get("timeout", 30))),
        ),
        memory=MemoryConfig(
            capacity=int(
                os.getenv("MEMAGENT_MEMORY_CAPACITY", memory_data.get("capacity", 100))
            ),
            recall_limit=int(memory_data.get("recall_limit", 5)),
        ),
        log_level=os.getenv("MEMAGENT_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
    return config
