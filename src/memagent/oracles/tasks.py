"""Prompt-level tasks built on top of ``Oracle.generate``.

Relevance scoring never fails: any oracle error or unparseable reply
degrades to ``FALLBACK_RELEVANCE``. Action suggestion degrades to an
empty list.
"""

from __future__ import annotations

import logging
import math
import re
from typing import TYPE_CHECKING

from memagent.oracles.base import OracleError

if TYPE_CHECKING:
    from memagent.oracles.base import Oracle

logger = logging.getLogger(__name__)

FALLBACK_RELEVANCE = 0.5

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


# ── Relevance ─────────────────────────────────────────────────


def build_relevance_prompt(content: str, query: str) -> str:
    return (
        "How relevant is the following memory to this query? "
        f"Memory: '{content}' "
        f"Query: '{query}' "
        "Respond with a relevance score from 0 to 1."
    )


def parse_relevance(text: str) -> float | None:
    """Parse the leading numeric token of ``text``, clamped to [0, 1].

    Returns None when the reply does not start with a number.
    """
    match = _LEADING_NUMBER.match(text)
    if not match:
        return None
    value = float(match.group(1))
    if math.isnan(value):
        return None
    return min(max(value, 0.0), 1.0)


async def score_relevance(oracle: Oracle | None, content: str, query: str) -> float:
    """Ask the oracle how relevant ``content`` is to ``query``."""
    if oracle is None:
        return FALLBACK_RELEVANCE

    try:
        response = await oracle.generate(build_relevance_prompt(content, query))
    except OracleError as e:
        logger.warning("Relevance scoring failed, using fallback: %s", e)
        return FALLBACK_RELEVANCE

    relevance = parse_relevance(response.text)
    if relevance is None:
        logger.debug("Unparseable relevance reply %r, using fallback", response.text[:80])
        return FALLBACK_RELEVANCE
    return relevance


# ── Action suggestions ────────────────────────────────────────


def build_actions_prompt(context: str) -> str:
    return (
        f"Given the context: '{context}', suggest 3-5 possible actions an AI agent could take. "
        "Respond with a comma-separated list of actions."
    )


def parse_actions(text: str) -> list[str]:
    """Split a comma-separated reply, dropping empty fragments."""
    return [part.strip() for part in text.split(",") if part.strip()]


async def suggest_actions(oracle: Oracle | None, context: str) -> list[str]:
    """Ask the oracle for candidate actions given ``context``."""
    if oracle is None:
        return []

    try:
        response = await oracle.generate(build_actions_prompt(context))
    except OracleError as e:
        logger.warning("Action suggestion failed: %s", e)
        return []
    return parse_actions(response.text)
