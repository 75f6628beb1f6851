"""Bounded generation history used for trail rendering."""

from typing import Deque, Iterator
from collections import deque
from itertools import islice

from .board import Board

HISTORY_CAPACITY = 10


class History:
    """Newest-first sequence of boards with a fixed capacity.

    Index 0 always holds the most recent generation. Pushing past the
    capacity evicts the oldest board. A history is never empty: it is
    seeded with an initial board on construction.
    """

    def __init__(self, initial: Board, capacity: int = HISTORY_CAPACITY) -> None:
        """Initialize the history.

        Args:
            initial: First board; defines the dimensions of every later board
            capacity: Maximum number of generations retained

        Raises:
            ValueError: If capacity is not positive
        """
        if capacity <= 0:
            raise ValueError(f"History capacity must be positive, got {capacity}")

        self._capacity = capacity
        self._boards: Deque[Board] = deque(maxlen=capacity)
        self.width = initial.width
        self.height = initial.height
        self._boards.append(initial)

    @property
    def capacity(self) -> int:
        """Maximum number of generations retained."""
        return self._capacity

    def push(self, board: Board) -> None:
        """Insert a board as the newest generation.

        Raises:
            ValueError: If the board dimensions don't match the history
        """
        if board.shape != (self.width, self.height):
            raise ValueError(
                f"Board dimensions don't match history: {board.shape} vs {(self.width, self.height)}"
            )

        # appendleft on a bounded deque drops the rightmost (oldest) entry
        self._boards.appendleft(board)

    def head(self) -> Board:
        """Most recent board."""
        return self._boards[0]

    def iter_trail(self) -> Iterator[Board]:
        """Boards from second-newest to oldest, excluding the head."""
        return islice(self._boards, 1, None)

    def clear(self, initial: Board) -> None:
        """Drop all generations and reseed with a new initial board."""
        self._boards.clear()
        self.width = initial.width
        self.height = initial.height
        self._boards.append(initial)

    def __len__(self) -> int:
        return len(self._boards)

    def __getitem__(self, index: int) -> Board:
        return self._boards[index]

    def __iter__(self) -> Iterator[Board]:
        return iter(self._boards)
