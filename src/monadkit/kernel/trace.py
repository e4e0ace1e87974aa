"""Injectable trace observer for pipelines and law checks.

A Trace is passed explicitly to whatever should be observed (compose_m,
pipe_m, tap, LawVerifier). Nothing in monadkit records into a global trace.
Tree relationships are reconstructed only on demand via as_tree().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """A single observed event.

    Attributes:
        action: What happened (e.g. "compose.step", "law.left_identity")
        id: Sequential event id within its Trace
        parent_id: Id of the enclosing event, if any
        timestamp: When the event was recorded
        info: Additional context
    """

    action: str
    id: int = 0
    parent_id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)


class Trace:
    """Runtime trace context for capturing events.

    Uses stack-based nesting via push/pop for parent-child relationships.
    Safe for single-threaded (async) execution only.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._events: list[Evidence] = []
        self._next_id: int = 0
        self._stack: list[int] = []

    def push(self, event_id: int) -> None:
        """Make event_id the implicit parent of subsequent records."""
        self._stack.append(event_id)

    def pop(self) -> int | None:
        """Pop the current parent, or return None if the stack is empty."""
        if self._stack:
            return self._stack.pop()
        return None

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
    ) -> int | None:
        """Record an event.

        Args:
            action: What happened
            info: Additional context
            parent_id: Explicit parent event id; defaults to the stack top

        Returns:
            Event id for linking child events, or None if tracing is disabled
        """
        if not self.enabled:
            return None

        if parent_id is None and self._stack:
            parent_id = self._stack[-1]

        event_id = self._next_id
        self._next_id += 1
        self._events.append(
            Evidence(
                action=action,
                id=event_id,
                parent_id=parent_id,
                info=info or {},
            )
        )
        return event_id

    def get_events(self) -> list[Evidence]:
        """Get a copy of all recorded events."""
        return list(self._events)

    def find(self, action: str) -> list[Evidence]:
        """Get all events recorded for an action, in recording order."""
        return [ev for ev in self._events if ev.action == action]

    def as_tree(self) -> dict[int | None, list[int]]:
        """Map each parent id to the ids of its children."""
        tree: dict[int | None, list[int]] = {}
        for ev in self._events:
            tree.setdefault(ev.parent_id, []).append(ev.id)
        return tree

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        """Clear all events (for reuse)."""
        self._events.clear()
        self._next_id = 0
        self._stack.clear()
