"""Entry point: python -m memagent [demo|chat]

- No args / "demo": Scripted walkthrough of actions, memory and the oracle
- "chat":           Interactive REPL against a configured agent
"""

from __future__ import annotations

import asyncio
import logging
import sys

from memagent.config import AgentConfig, load_config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _build_agent(config: AgentConfig):
    from memagent.core import Agent
    from memagent.oracles import build_oracle

    oracle = build_oracle(config.oracle)
    fallback = None
    if config.oracle.fallback:
        fallback = build_oracle(config.oracle, config.oracle.fallback)
    return Agent(config, oracle, fallback=fallback)


async def _demo(config: AgentConfig) -> None:
    from memagent.oracles.base import GenerationConfig

    agent = _build_agent(config)

    agent.register_action("explore", lambda: print("Exploring the environment..."))
    agent.register_action("collect_data", lambda: print("Collecting data..."))
    agent.register_action("analyze", lambda: print("Analyzing collected information..."))

    context = (
        "We are exploring a new digital environment with the goal of "
        "understanding its structure and potential resources."
    )
    print("Suggested actions:")
    for action in await agent.generate_possible_actions(context):
        print(f"- {action}")

    agent.add_memory("Discovered a network vulnerability", 0.9)
    agent.add_memory("Mapped initial network topology", 0.7)
    agent.add_memory("Identified potential security risks", 0.8)
    agent.add_memory("Observed unusual network traffic pattern", 0.6)

    print("\nCurrent memories:")
    agent.print_memories()

    query = "What security-related information have we discovered?"
    print(f"\nRelevant memories for query '{query}':")
    for memory in await agent.recall_memories(query):
        print(f"- {memory}")

    strategy = await agent.query_oracle(
        "Provide a strategic approach for exploring an unknown digital environment, "
        "focusing on safety and efficiency."
    )
    print("\nStrategy:")
    print(strategy.text if strategy.ok else f"[Oracle error: {strategy.error}]")

    story = await agent.generate_content(
        "Write a story about a magic backpack that helps students learn.",
        GenerationConfig(
            temperature=0.7,
            max_output_tokens=500,
            top_p=0.9,
            top_k=15,
            stop_sequences=["The End"],
            safety_settings={
                "HARM_CATEGORY_DANGEROUS_CONTENT": "BLOCK_ONLY_HIGH",
                "HARM_CATEGORY_HATE_SPEECH": "BLOCK_MEDIUM_AND_ABOVE",
            },
        ),
    )
    print("\n--- Magic Backpack Story ---")
    print(story.text if story.ok else f"[Oracle error: {story.error}]")

    for name in ("explore", "collect_data", "analyze"):
        agent.execute_action(name)


def _run_demo() -> None:
    config = load_config()
    _setup_logging(config.log_level)
    asyncio.run(_demo(config))


def _run_chat() -> None:
    """Interactive REPL mode."""
    config = load_config()
    _setup_logging(config.log_level)

    from memagent.cli import AgentREPL

    repl = AgentREPL(_build_agent(config))
    try:
        asyncio.run(repl.start())
    except KeyboardInterrupt:
        pass


def main() -> None:
    cmd = sys.argv[1] if len(sys.argv) > 1 else "demo"

    if cmd == "demo":
        _run_demo()
    elif cmd in ("chat", "repl"):
        _run_chat()
    else:
        print("Usage: python -m memagent [demo|chat]")
        print("  demo   — Scripted walkthrough (default)")
        print("  chat   — Interactive REPL")
        sys.exit(1)


if __name__ == "__main__":
    main()
