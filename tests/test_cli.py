"""Tests for the REPL command handler and the entry point."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from memagent.__main__ import _demo, main
from memagent.cli import HELP, AgentREPL
from memagent.config import AgentConfig, MemoryConfig
from memagent.core import Agent
from memagent.oracles.base import OracleResponse


class MockOracle:
    def __init__(self, reply: str = "0.5"):
        self._reply = reply

    @property
    def name(self) -> str:
        return "mock"

    async def generate(self, prompt, *, config=None) -> OracleResponse:
        return OracleResponse(text=self._reply)

    async def health_check(self) -> bool:
        return True


@pytest.fixture
def repl() -> AgentREPL:
    agent = Agent(AgentConfig(name="cli", memory=MemoryConfig(capacity=3)), MockOracle())
    return AgentREPL(agent)


class TestAgentREPL:
    @pytest.mark.asyncio
    async def test_help(self, repl: AgentREPL):
        assert await repl.handle("help") == HELP

    @pytest.mark.asyncio
    async def test_remember_and_list(self, repl: AgentREPL):
        assert await repl.handle("remember 0.8 saw a fox") == "Remembered (1/3)."
        assert "- saw a fox (Importance: 0.8)" in await repl.handle("memories")

    @pytest.mark.asyncio
    async def test_remember_bad_importance(self, repl: AgentREPL):
        assert (await repl.handle("remember lots fox")).startswith("Usage")
        assert repl.agent.get_memory_count() == 0

    @pytest.mark.asyncio
    async def test_recall(self, repl: AgentREPL):
        await repl.handle("remember 0.2 low")
        await repl.handle("remember 1.0 high")
        assert await repl.handle("recall anything") == "- [0.500] high\n- [0.100] low"

    @pytest.mark.asyncio
    async def test_recall_empty(self, repl: AgentREPL):
        assert await repl.handle("recall x") == "(no memories)"

    @pytest.mark.asyncio
    async def test_forget(self, repl: AgentREPL):
        await repl.handle("remember 1 a")
        await repl.handle("remember 1 b")
        assert await repl.handle("forget 5") == "Forgot 2 memories."

    @pytest.mark.asyncio
    async def test_run_and_priority(self, repl: AgentREPL):
        calls: list[int] = []
        repl.agent.register_action("wave", lambda: calls.append(1))
        assert await repl.handle("run wave") == "Done: wave"
        assert await repl.handle("run jump") == "Action jump not found!"
        assert await repl.handle("priority wave 2.5") == "Priority of wave set to 2.5."
        assert await repl.handle("actions") == "- wave (priority: 2.5)"
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_suggest(self):
        agent = Agent(AgentConfig(), MockOracle("rest, wave"))
        agent.register_action("wave", lambda: None)
        assert await AgentREPL(agent).handle("suggest tired") == "- wave\n- rest"

    @pytest.mark.asyncio
    async def test_ask(self, repl: AgentREPL):
        assert await repl.handle("ask anything") == "0.5"

    @pytest.mark.asyncio
    async def test_ask_without_oracle(self):
        response = await AgentREPL(Agent(AgentConfig())).handle("ask hi")
        assert response == "[Oracle error: No oracle configured]"

    @pytest.mark.asyncio
    async def test_unknown(self, repl: AgentREPL):
        assert "Unknown command" in await repl.handle("dance")


class TestMain:
    def test_unknown_command(self, capsys):
        with patch("sys.argv", ["memagent", "bogus"]):
            with pytest.raises(SystemExit) as exc:
                main()
        assert exc.value.code == 1
        assert "Usage" in capsys.readouterr().out


class ScriptedOracle:
    """Answers by prompt kind so the demo has something to print."""

    def __init__(self):
        self.configs = []

    @property
    def name(self) -> str:
        return "scripted"

    async def generate(self, prompt, *, config=None) -> OracleResponse:
        self.configs.append(config)
        if "comma-separated" in prompt:
            return OracleResponse(text="scan network, map topology")
        if "relevance score" in prompt:
            return OracleResponse(text="0.9" if "security" in prompt.split("Query")[0] else "0.1")
        if "magic backpack" in prompt:
            return OracleResponse(text="Once upon a time...")
        return OracleResponse(text="Go slowly.")

    async def health_check(self) -> bool:
        return True


class TestDemo:
    @pytest.mark.asyncio
    async def test_demo_walkthrough(self, capsys):
        config = AgentConfig(name="GeminiExplorer", memory=MemoryConfig(capacity=10))
        oracle = ScriptedOracle()
        agent = Agent(config, oracle)

        with patch("memagent.__main__._build_agent", return_value=agent):
            await _demo(config)

        out = capsys.readouterr().out
        assert "Suggested actions:\n- scan network\n- map topology" in out
        assert "Agent GeminiExplorer Memories:" in out
        assert "- Discovered a network vulnerability (Importance: 0.9)" in out
        relevant = out.split("Relevant memories for query")[1].split("Strategy:")[0]
        assert relevant.index("Identified potential security risks") < relevant.index(
            "Discovered a network vulnerability"
        )
        assert "Strategy:\nGo slowly." in out
        assert "--- Magic Backpack Story ---\nOnce upon a time..." in out
        assert out.rstrip().endswith(
            "Exploring the environment...\n"
            "Collecting data...\n"
            "Analyzing collected information..."
        )
        story_config = oracle.configs[-1]
        assert story_config.stop_sequences == ["The End"]
        assert story_config.safety_settings["HARM_CATEGORY_HATE_SPEECH"] == "BLOCK_MEDIUM_AND_ABOVE"
        assert agent.get_memory_count() == 4

    @pytest.mark.asyncio
    async def test_demo_reports_oracle_errors(self, capsys):
        config = AgentConfig(name="Offline")

        with patch("memagent.__main__._build_agent", return_value=Agent(config)):
            await _demo(config)

        out = capsys.readouterr().out
        assert "Suggested actions:\n\nCurrent memories:" in out
        assert "[Oracle error: No oracle configured]" in out
