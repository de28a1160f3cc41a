"""Interactive REPL for poking at an agent by hand."""

from __future__ import annotations

import asyncio
import logging
import shlex
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from memagent.core import Agent

logger = logging.getLogger(__name__)

HELP = """\
Commands:
  remember <importance> <text>   store a memory
  recall <query>                 list memories ranked by relevance
  forget <n>                     drop the n oldest memories
  memories                       list all memories
  actions                        list actions by priority
  suggest <context>              ask the oracle for possible actions
  run <action>                   execute a registered action
  priority <action> <value>      set an action priority
  ask <prompt>                   free-text oracle query
  help                           show this message
  exit                           quit"""


class AgentREPL:
    """Reads commands from stdin and dispatches them to an Agent."""

    def __init__(self, agent: Agent) -> None:
        self.agent = agent
        self._running = False

    async def start(self) -> None:
        self._running = True
        loop = asyncio.get_event_loop()

        print(f"Agent {self.agent.name} (type 'help' for commands, 'exit' to quit)")
        print("-" * 48)

        while self._running:
            try:
                line = await loop.run_in_executor(None, self._read_input)
            except (EOFError, KeyboardInterrupt):
                print("\nBye!")
                break

            if line is None or line.strip().lower() in ("exit", "quit"):
                print("Bye!")
                break

            text = line.strip()
            if not text:
                continue

            print(await self.handle(text))

    def stop(self) -> None:
        self._running = False

    def _read_input(self) -> str | None:
        try:
            sys.stdout.write("\n> ")
            sys.stdout.flush()
            raw = sys.stdin.buffer.readline()
            if not raw:
                return None
            return raw.decode("utf-8", errors="replace").rstrip("\n")
        except EOFError:
            return None

    async def handle(self, line: str) -> str:
        """Run one command line and return the text to show."""
        cmd, _, rest = line.partition(" ")
        cmd = cmd.lower()
        rest = rest.strip()
        agent = self.agent

        if cmd == "help":
            return HELP

        if cmd == "remember":
            importance_str, _, content = rest.partition(" ")
            try:
                importance = float(importance_str)
            except ValueError:
                return "Usage: remember <importance> <text>"
            if not content.strip():
                return "Usage: remember <importance> <text>"
            entry = agent.add_memory(content.strip(), importance)
            if entry is None:
                return "Memory is disabled (capacity 0)."
            return f"Remembered ({agent.get_memory_count()}/{agent.memory.capacity})."

        if cmd == "recall":
            if not rest:
                return "Usage: recall <query>"
            ranked = await agent.recall_scored(rest)
            if not ranked:
                return "(no memories)"
            return "\n".join(f"- [{score:.3f}] {entry.content}" for score, entry in ranked)

        if cmd == "forget":
            try:
                count = int(rest)
            except ValueError:
                return "Usage: forget <n>"
            removed = agent.clear_oldest_memories(count)
            return f"Forgot {removed} memories."

        if cmd == "memories":
            return agent.format_memories()

        if cmd == "actions":
            names = agent.actions.by_priority()
            if not names:
                return "(no actions registered)"
            return "\n".join(f"- {n} (priority: {agent.actions.priority(n):g})" for n in names)

        if cmd == "suggest":
            if not rest:
                return "Usage: suggest <context>"
            suggestions = agent.rank_actions(await agent.generate_possible_actions(rest))
            if not suggestions:
                return "(no suggestions)"
            return "\n".join(f"- {s}" for s in suggestions)

        if cmd == "run":
            if not rest:
                return "Usage: run <action>"
            result = agent.execute_action(rest)
            return f"Done: {rest}" if result.ok else f"Action {rest} not found!"

        if cmd == "priority":
            parts = shlex.split(rest)
            if len(parts) != 2:
                return "Usage: priority <action> <value>"
            try:
                value = float(parts[1])
            except ValueError:
                return "Usage: priority <action> <value>"
            agent.update_action_priority(parts[0], value)
            return f"Priority of {parts[0]} set to {value:g}."

        if cmd == "ask":
            if not rest:
                return "Usage: ask <prompt>"
            response = await agent.query_oracle(rest)
            if not response.ok:
                return f"[Oracle error: {response.error}]"
            return response.text

        return f"Unknown command: {cmd} (type 'help')"
