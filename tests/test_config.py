"""Tests for configuration loading."""

import pytest
from pathlib import Path

from memagent.config import load_config

_ENV_KEYS = [
    "MEMAGENT_NAME",
    "MEMAGENT_ORACLE",
    "MEMAGENT_FALLBACK",
    "MEMAGENT_MODEL",
    "MEMAGENT_TIMEOUT",
    "MEMAGENT_MEMORY_CAPACITY",
    "MEMAGENT_LOG_LEVEL",
    "GEMINI_API_KEY",
]


@pytest.fixture(autouse=True)
def clean_env(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestConfig:
    def test_defaults(self):
        config = load_config()
        assert config.name == "agent"
        assert config.oracle.name == "gemini"
        assert config.oracle.fallback is None
        assert config.oracle.timeout == 30
        assert config.oracle.api_key == ""
        assert config.memory.capacity == 100
        assert config.memory.recall_limit == 5
        assert config.log_level == "INFO"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MEMAGENT_ORACLE", "anthropic_api")
        monkeypatch.setenv("MEMAGENT_TIMEOUT", "60")
        monkeypatch.setenv("MEMAGENT_MEMORY_CAPACITY", "10")
        monkeypatch.setenv("GEMINI_API_KEY", "secret")

        config = load_config()
        assert config.oracle.name == "anthropic_api"
        assert config.oracle.timeout == 60
        assert config.oracle.api_key == "secret"
        assert config.memory.capacity == 10

    def test_toml_file(self, tmp_path: Path):
        toml_path = tmp_path / "memagent.toml"
        toml_path.write_text("""
name = "GeminiExplorer"

[oracle]
model = "gemini-pro"
fallback = "anthropic_api"
timeout = 12

[memory]
capacity = 10
recall_limit = 3
""")
        config = load_config(toml_path)
        assert config.name == "GeminiExplorer"
        assert config.oracle.model == "gemini-pro"
        assert config.oracle.fallback == "anthropic_api"
        assert config.oracle.timeout == 12
        assert config.memory.capacity == 10
        assert config.memory.recall_limit == 3

    def test_discovers_file_in_cwd(self, tmp_path: Path):
        (tmp_path / "memagent.toml").write_text('name = "found"\n')
        assert load_config().name == "found"

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("MEMAGENT_MODEL", "gemini-ultra")

        toml_path = tmp_path / "memagent.toml"
        toml_path.write_text("""
[oracle]
model = "gemini-pro"
""")
        config = load_config(toml_path)
        assert config.oracle.model == "gemini-ultra"  # env wins
