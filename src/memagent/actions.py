"""Action registry — named zero-argument callables with mutable priorities."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

Action = Callable[[], object]

DEFAULT_PRIORITY = 1.0


class ActionNotFoundError(LookupError):
    """Raised by ActionResult.raise_for_status() for an unregistered action."""


class ActionStatus(enum.Enum):
    COMPLETED = "completed"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ActionResult:
    """Outcome of ActionRegistry.execute()."""

    name: str
    status: ActionStatus

    @property
    def ok(self) -> bool:
        return self.status is ActionStatus.COMPLETED

    def raise_for_status(self) -> None:
        if self.status is ActionStatus.NOT_FOUND:
            raise ActionNotFoundError(f"Action '{self.name}' not found")


@dataclass
class RegisteredAction:
    action: Action
    priority: float = DEFAULT_PRIORITY


class ActionRegistry:
    """Maps action names to their callable and priority.

    Priorities may be set before an action is registered; they are held as
    pending and adopted when the action arrives.
    """

    def __init__(self) -> None:
        self._actions: dict[str, RegisteredAction] = {}
        self._pending_priorities: dict[str, float] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    def __len__(self) -> int:
        return len(self._actions)

    def register(self, name: str, action: Action) -> None:
        """Register or replace ``name``. An existing priority is never reset."""
        record = self._actions.get(name)
        if record is not None:
            record.action = action
            return
        priority = self._pending_priorities.pop(name, DEFAULT_PRIORITY)
        self._actions[name] = RegisteredAction(action, priority)
        logger.debug("Registered action: %s (priority=%s)", name, priority)

    def update_priority(self, name: str, priority: float) -> None:
        record = self._actions.get(name)
        if record is None:
            self._pending_priorities[name] = priority
        else:
            record.priority = priority

    def priority(self, name: str) -> float | None:
        record = self._actions.get(name)
        if record is not None:
            return record.priority
        return self._pending_priorities.get(name)

    def names(self) -> list[str]:
        return list(self._actions)

    def by_priority(self) -> list[str]:
        """Registered names, highest priority first (ties in registration order)."""
        return sorted(self._actions, key=lambda n: self._actions[n].priority, reverse=True)

    def rank(self, candidates: Iterable[str]) -> list[str]:
        """Order ``candidates`` by known priority; unknown names go last, order kept."""
        candidates = list(candidates)
        known = [c for c in candidates if self.priority(c) is not None]
        unknown = [c for c in candidates if self.priority(c) is None]
        known.sort(key=lambda c: self.priority(c), reverse=True)
        return known + unknown

    def execute(self, name: str) -> ActionResult:
        """Invoke the action once. Errors raised by the action itself propagate."""
        record = self._actions.get(name)
        if record is None:
            logger.warning("Action %s not found!", name)
            return ActionResult(name, ActionStatus.NOT_FOUND)
        record.action()
        return ActionResult(name, ActionStatus.COMPLETED)
