from __future__ import annotations

from typing import Optional

from tengen.core import BoardArray, Point, Stone


class Player:
    """Automated player choosing a point to play, or ``None`` to pass."""

    def select_move(self, board: BoardArray, color: Stone) -> Optional[Point]:
        raise NotImplementedError

    def spawn(self, seed: Optional[int] = None) -> "Player":
        """Return a copy of this player drawing from a generator seeded with ``seed``.

        Players without random state may return themselves.
        """
        return self
