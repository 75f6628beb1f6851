"""Board data structure for the toroidal Game of Life."""

from typing import Iterable, List, Optional, Tuple
import numpy as np
import torch
import torch.nn.functional as F

_NEIGHBOR_KERNEL = (
    torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
)


class Board:
    """One generation of a wrap-around cellular automaton grid.

    Cells are stored as a read-only boolean array of shape (height, width),
    so ``cells.ravel()`` is the row-major sequence indexed by ``y * width + x``.
    A Board is never modified after construction; every simulation step
    produces a new one.
    """

    def __init__(self, width: int, height: int, cells: Optional[np.ndarray] = None) -> None:
        """Create a board.

        Args:
            width: Number of columns
            height: Number of rows
            cells: Optional array of shape (height, width); all dead if omitted

        Raises:
            ValueError: If a dimension is not positive or cells has the wrong shape
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")

        if cells is None:
            data = np.zeros((height, width), dtype=bool)
        else:
            data = np.array(cells, dtype=bool)
            if data.shape != (height, width):
                raise ValueError(f"Cell array shape {data.shape} doesn't match board {(height, width)}")

        data.flags.writeable = False
        self.width = width
        self.height = height
        self._cells = data

    @classmethod
    def from_cells(cls, width: int, height: int, coords: Iterable[Tuple[int, int]]) -> "Board":
        """Create a board with the given (x, y) cells alive.

        Coordinates wrap around the board edges.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")

        data = np.zeros((height, width), dtype=bool)
        for x, y in coords:
            data[y % height, x % width] = True
        return cls(width, height, data)

    @classmethod
    def random(
        cls, width: int, height: int, probability: float = 0.3, seed: Optional[int] = None
    ) -> "Board":
        """Create a randomly populated board.

        Args:
            width: Number of columns
            height: Number of rows
            probability: Chance each cell will be alive (0.0 to 1.0)
            seed: Optional random seed for reproducible boards

        Raises:
            ValueError: If probability is outside [0, 1]
        """
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Fill probability must be between 0.0 and 1.0, got {probability}")
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")

        rng = np.random.default_rng(seed)
        return cls(width, height, rng.random((height, width)) < probability)

    @property
    def cells(self) -> np.ndarray:
        """Read-only cell array of shape (height, width)."""
        return self._cells

    @property
    def shape(self) -> Tuple[int, int]:
        """Get board dimensions as (width, height)."""
        return (self.width, self.height)

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._cells))

    def index(self, x: int, y: int) -> int:
        """Flat row-major index of an in-range cell."""
        return y * self.width + x

    def at(self, x: int, y: int) -> bool:
        """Get the state of a cell.

        Args:
            x: Column coordinate, 0 <= x < width
            y: Row coordinate, 0 <= y < height

        Returns:
            True if cell is alive, False if dead

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds")

        return bool(self._cells[y, x])

    def count_neighbors(self, x: int, y: int) -> int:
        """Count living neighbors of a single cell with toroidal wrap.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            Number of living neighbors (0-8)
        """
        count = 0
        for dx in [-1, 0, 1]:
            for dy in [-1, 0, 1]:
                if dx == 0 and dy == 0:
                    continue

                nx = (x + dx + self.width) % self.width
                ny = (y + dy + self.height) % self.height
                count += int(self._cells[ny, nx])

        return count

    def count_all_neighbors(self) -> np.ndarray:
        """Count neighbors for all cells using a wrap-padded convolution.

        Returns:
            Integer array of shape (height, width) with neighbor counts
        """
        board = torch.from_numpy(self._cells.astype(np.float32)).unsqueeze(0).unsqueeze(0)

        # Circular padding makes every edge adjacent to the opposite edge
        padded = F.pad(board, (1, 1, 1, 1), mode="circular")
        neighbors = F.conv2d(padded, _NEIGHBOR_KERNEL)

        return neighbors[0, 0].numpy().round().astype(np.int8)

    def live_indices(self) -> List[int]:
        """Flat indices of all living cells in ascending order."""
        return [int(i) for i in np.flatnonzero(self._cells)]

    def to_list(self) -> list:
        """Convert board to a nested list of rows."""
        return self._cells.tolist()

    def __eq__(self, other: object) -> bool:
        """Check if two boards are equal."""
        if not isinstance(other, Board):
            return False
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height}, population={self.population})"

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        return "\n".join(
            "".join("*" if alive else "." for alive in row) for row in self._cells
        )
