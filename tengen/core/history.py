from __future__ import annotations

from typing import List, Optional

from .state import Snapshot


class EmptyHistoryError(LookupError):
    pass


class History:
    """Stack of snapshots taken before every accepted move or pass."""

    def __init__(self) -> None:
        self._stack: List[Snapshot] = []

    def __len__(self) -> int:
        return len(self._stack)

    def push(self, snapshot: Snapshot) -> None:
        self._stack.append(snapshot)

    def pop(self) -> Snapshot:
        if not self._stack:
            raise EmptyHistoryError("No snapshot to pop.")
        return self._stack.pop()

    def peek(self) -> Optional[Snapshot]:
        return self._stack[-1] if self._stack else None

    def undo(self, steps: int = 1) -> Optional[Snapshot]:
        """Pop up to ``steps`` snapshots and return the last one popped.

        Returns ``None`` when the history was already empty.
        """
        if steps < 1:
            raise ValueError("steps must be at least 1.")
        restored: Optional[Snapshot] = None
        for _ in range(steps):
            if not self._stack:
                break
            restored = self._stack.pop()
        return restored

    def clear(self) -> None:
        self._stack.clear()
