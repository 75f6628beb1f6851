"""Motif shapes and the rotation-invariant pattern code library."""

from typing import Dict, FrozenSet, List, Optional, Tuple, Union
import numpy as np

from .board import Board

WINDOW_SIZE = 5
CODE_BITS = WINDOW_SIZE * WINDOW_SIZE


def encode_window(window: np.ndarray) -> int:
    """Pack a square boolean window into an integer code.

    Cells are scanned row-major and shifted in one bit at a time, so the
    first scanned cell ends up in the most significant bit.

    Args:
        window: 2D boolean array

    Returns:
        Integer code with one bit per cell
    """
    code = 0
    for alive in np.asarray(window, dtype=bool).ravel():
        code = (code << 1) | int(alive)
    return code


def decode_window(code: int, size: int = WINDOW_SIZE) -> np.ndarray:
    """Unpack an integer code into a size x size boolean window.

    Inverse of :func:`encode_window`.
    """
    bits = size * size
    flat = [bool((code >> (bits - 1 - k)) & 1) for k in range(bits)]
    return np.array(flat, dtype=bool).reshape(size, size)


def rotate_window(window: np.ndarray) -> np.ndarray:
    """Rotate a square window by 90 degrees.

    Uses ``rotated[x][y] = original[size - 1 - y][x]``.
    """
    original = np.asarray(window, dtype=bool)
    size = original.shape[0]
    rotated = np.zeros_like(original)
    for x in range(size):
        for y in range(size):
            rotated[x, y] = original[size - 1 - y, x]
    return rotated


class Pattern:
    """A named motif shape that fits inside the detection window."""

    def __init__(
        self,
        name: str,
        cells: List[Tuple[int, int]],
        description: str = "",
        window: Optional[np.ndarray] = None,
    ) -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (x, y) coordinates for living cells
            description: Optional description
            window: Optional exact detection window; when given, the cells keep
                their placement inside it instead of being centered

        Raises:
            ValueError: If the shape plus a one-cell border doesn't fit the window,
                or an explicit window isn't WINDOW_SIZE x WINDOW_SIZE
        """
        self.name = name
        self.cells = cells
        self.description = description
        self._window = None

        if window is not None:
            window = np.array(window, dtype=bool)
            if window.shape != (WINDOW_SIZE, WINDOW_SIZE):
                raise ValueError(
                    f"Pattern '{name}' window is {window.shape}, expected {WINDOW_SIZE}x{WINDOW_SIZE}"
                )
            self._window = window
            return

        width, height = self.get_size()
        if width > WINDOW_SIZE - 2 or height > WINDOW_SIZE - 2:
            raise ValueError(
                f"Pattern '{name}' is {width}x{height}, too large for a {WINDOW_SIZE}x{WINDOW_SIZE} window"
            )

    @classmethod
    def from_window(cls, name: str, window: Union[str, np.ndarray], description: str = "") -> "Pattern":
        """Create a pattern from an exact detection window.

        Args:
            name: Pattern name
            window: 2D boolean array, or rows of 0/1 characters separated by
                '/' (e.g. "00000/00010/00101/00110/00000")
            description: Optional description
        """
        if isinstance(window, str):
            window = [[char == "1" for char in row] for row in window.split("/")]

        data = np.array(window, dtype=bool)
        cells = [(int(x), int(y)) for y, x in np.argwhere(data)]
        return cls(name, cells, description, window=data)

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern as (min_x, min_y, max_x, max_y)."""
        if not self.cells:
            return (0, 0, 0, 0)

        xs, ys = zip(*self.cells)
        return (min(xs), min(ys), max(xs), max(ys))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (width, height)."""
        min_x, min_y, max_x, max_y = self.get_bounding_box()
        return (max_x - min_x + 1, max_y - min_y + 1)

    def to_window(self) -> np.ndarray:
        """Place the shape in a dead-bordered window, offset by one cell.

        Patterns built from an explicit window return that window unchanged.

        Returns:
            Boolean array of shape (WINDOW_SIZE, WINDOW_SIZE) indexed [row, column]
        """
        if self._window is not None:
            return self._window.copy()

        min_x, min_y, _, _ = self.get_bounding_box()
        window = np.zeros((WINDOW_SIZE, WINDOW_SIZE), dtype=bool)
        for x, y in self.cells:
            window[y - min_y + 1, x - min_x + 1] = True
        return window

    def rotations(self) -> List[np.ndarray]:
        """The window and its three successive 90 degree rotations."""
        variants = [self.to_window()]
        for _ in range(3):
            variants.append(rotate_window(variants[-1]))
        return variants

    def codes(self) -> List[int]:
        """Codes of all four rotations, in rotation order (may repeat)."""
        return [encode_window(variant) for variant in self.rotations()]

    def apply_to_board(self, board: Board, offset_x: int = 0, offset_y: int = 0) -> Board:
        """Return a copy of ``board`` with this pattern stamped on it.

        Coordinates wrap around the board edges.
        """
        min_x, min_y, _, _ = self.get_bounding_box()
        data = board.cells.copy()
        for x, y in self.cells:
            data[(y - min_y + offset_y) % board.height, (x - min_x + offset_x) % board.width] = True
        return Board(board.width, board.height, data)


BUILTIN_PATTERNS = [
    Pattern(
        "Glider",
        [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)],
        "Smallest spaceship, period-4",
    ),
    Pattern(
        "Glider (phase 2)",
        [(0, 0), (2, 0), (1, 1), (2, 1), (1, 2)],
        "Glider one generation after the base phase",
    ),
]


class PatternLibrary:
    """Set of window codes for every rotation of the known motifs."""

    def __init__(self, patterns: Optional[List[Pattern]] = None) -> None:
        """Initialize the library.

        Args:
            patterns: Base shapes to index (defaults to the built-in gliders)
        """
        self._patterns: Dict[str, Pattern] = {}
        self._codes: Dict[int, str] = {}

        for pattern in BUILTIN_PATTERNS if patterns is None else patterns:
            self.add_pattern(pattern)

    def add_pattern(self, pattern: Pattern) -> None:
        """Index a pattern and all of its rotations."""
        self._patterns[pattern.name] = pattern
        for code in pattern.codes():
            self._codes.setdefault(code, pattern.name)

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name, or None if not found."""
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        """Get list of all pattern names."""
        return list(self._patterns.keys())

    @property
    def codes(self) -> FrozenSet[int]:
        """All distinct window codes."""
        return frozenset(self._codes)

    def name_for(self, code: int) -> Optional[str]:
        """Name of the pattern a code was generated from."""
        return self._codes.get(code)

    def __contains__(self, code: object) -> bool:
        return code in self._codes

    def __len__(self) -> int:
        return len(self._codes)
