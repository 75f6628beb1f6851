"""Sliding-window motif detection on a toroidal board."""

from typing import Optional, Set
import numpy as np
import torch
import torch.nn.functional as F

from .board import Board
from .patterns import CODE_BITS, WINDOW_SIZE, PatternLibrary

# Bit weight of each window cell, first scanned cell most significant.
# float64 keeps all 25-bit sums exact.
_CODE_KERNEL = (
    torch.tensor(
        [[2.0 ** (CODE_BITS - 1 - (row * WINDOW_SIZE + col)) for col in range(WINDOW_SIZE)]
         for row in range(WINDOW_SIZE)],
        dtype=torch.float64,
    )
    .unsqueeze(0)
    .unsqueeze(0)
)


class MotifDetector:
    """Finds cells that belong to known motifs on the current board.

    Every board position anchors a 5x5 window (top-left corner) that wraps
    around both edges. A window whose code is in the pattern library marks
    all of its living cells.
    """

    def __init__(self, library: Optional[PatternLibrary] = None) -> None:
        self.library = library if library is not None else PatternLibrary()
        self._library_codes = np.array(sorted(self.library.codes), dtype=np.int64)

    def window_codes(self, board: Board) -> np.ndarray:
        """Encode the window anchored at every position.

        Returns:
            Integer array of shape (height, width); entry [y, x] is the code of
            the window whose top-left cell is (x, y)
        """
        span = WINDOW_SIZE - 1
        # np.pad wraps any number of times, so boards smaller than the window work too
        padded = np.pad(board.cells, ((0, span), (0, span)), mode="wrap").astype(np.float64)

        codes = F.conv2d(torch.from_numpy(padded).unsqueeze(0).unsqueeze(0), _CODE_KERNEL)

        return codes[0, 0].numpy().round().astype(np.int64)

    def match_mask(self, board: Board) -> np.ndarray:
        """Boolean (height, width) mask of anchors whose window matched."""
        return np.isin(self.window_codes(board), self._library_codes)

    def highlight_mask(self, board: Board) -> np.ndarray:
        """Boolean (height, width) mask of living cells inside matched windows."""
        matches = self.match_mask(board)
        covered = np.zeros_like(matches)

        if matches.any():
            for row in range(WINDOW_SIZE):
                for col in range(WINDOW_SIZE):
                    # Anchor (x - col, y - row) covers cell (x, y)
                    covered |= np.roll(matches, shift=(row, col), axis=(0, 1))

        return covered & board.cells

    def detect(self, board: Board) -> Set[int]:
        """Flat indices of every living cell that belongs to a detected motif."""
        return {int(i) for i in np.flatnonzero(self.highlight_mask(board))}


def detect(board: Board, library: PatternLibrary) -> Set[int]:
    """Convenience wrapper around :meth:`MotifDetector.detect`."""
    return MotifDetector(library).detect(board)
