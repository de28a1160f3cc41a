"""Agent — owns an action registry and a memory store, delegates to an oracle.

Responsibilities:
1. Action registry — register, reprioritize and execute named actions
2. Memory store — add, recall by relevance, prune by age
3. Oracle routing — primary oracle with optional fallback
4. Oracle-backed tasks — relevance scoring and action suggestion
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from memagent.actions import Action, ActionRegistry, ActionResult
from memagent.config import AgentConfig
from memagent.memory.store import MemoryEntry, MemoryStore
from memagent.oracles.base import GenerationConfig, OracleError, OracleResponse
from memagent.oracles.tasks import score_relevance, suggest_actions

if TYPE_CHECKING:
    from memagent.oracles.base import Oracle

logger = logging.getLogger(__name__)


class Agent:
    """A single agent with prioritized actions and bounded memory."""

    def __init__(
        self,
        config: AgentConfig | None = None,
        oracle: Oracle | None = None,
        *,
        fallback: Oracle | None = None,
    ) -> None:
        self.config = config or AgentConfig()
        self.oracle = oracle
        self.fallback = fallback
        self.actions = ActionRegistry()
        self.memory = MemoryStore(self.config.memory.capacity)

    @property
    def name(self) -> str:
        return self.config.name

    # ── Actions ───────────────────────────────────────────────

    def register_action(self, name: str, action: Action) -> None:
        self.actions.register(name, action)

    def update_action_priority(self, name: str, priority: float) -> None:
        self.actions.update_priority(name, priority)

    def execute_action(self, name: str) -> ActionResult:
        if name in self.actions:
            logger.info("Agent %s executing action: %s", self.name, name)
        return self.actions.execute(name)

    def rank_actions(self, names: Iterable[str]) -> list[str]:
        """Order candidate action names by locally stored priority."""
        return self.actions.rank(names)

    # ── Memory ────────────────────────────────────────────────

    def add_memory(self, content: str, importance: float = 1.0) -> MemoryEntry | None:
        return self.memory.add(content, importance)

    async def recall_memories(self, query: str, max_results: int | None = None) -> list[str]:
        if max_results is None:
            max_results = self.config.memory.recall_limit
        return await self.memory.recall(query, max_results, scorer=self._score)

    async def recall_scored(
        self, query: str, max_results: int | None = None
    ) -> list[tuple[float, MemoryEntry]]:
        if max_results is None:
            max_results = self.config.memory.recall_limit
        return await self.memory.recall_scored(query, max_results, scorer=self._score)

    async def _score(self, content: str, query: str) -> float:
        return await score_relevance(self.oracle, content, query)

    def clear_oldest_memories(self, count: int) -> int:
        return self.memory.clear_oldest(count)

    def get_memory_count(self) -> int:
        return len(self.memory)

    def format_memories(self) -> str:
        lines = [f"Agent {self.name} Memories:"]
        body = self.memory.format()
        if body:
            lines.append(body)
        return "\n".join(lines)

    def print_memories(self) -> None:
        print(self.format_memories())

    # ── Oracle ────────────────────────────────────────────────

    async def generate_possible_actions(self, context: str) -> list[str]:
        return await suggest_actions(self.oracle, context)

    async def query_oracle(self, prompt: str) -> OracleResponse:
        """Free-text query. Failures come back as a response with ``error`` set."""
        return await self.generate_content(prompt)

    async def generate_content(
        self, prompt: str, config: GenerationConfig | None = None
    ) -> OracleResponse:
        oracles = [o for o in (self.oracle, self.fallback) if o is not None]
        if not oracles:
            return OracleResponse(text="", error="No oracle configured")

        error = ""
        for oracle in oracles:
            try:
                return await oracle.generate(prompt, config=config)
            except OracleError as e:
                error = str(e)
                logger.warning("Oracle %s failed: %s", oracle.name, e)
        return OracleResponse(text="", error=error)
