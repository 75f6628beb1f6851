"""Conway's Game of Life engine with generation history and glider detection."""

from typing import Deque, Dict, Optional, Set
from collections import deque

import torch

from .board import Board
from .compositor import TRAIL_STEP, compose
from .config import EngineConfig
from .detector import MotifDetector
from .history import HISTORY_CAPACITY, History
from .patterns import PatternLibrary


def step(board: Board) -> Board:
    """Apply Conway's rules once and return the next generation.

    - Live cell with 2-3 neighbors survives
    - Dead cell with exactly 3 neighbors becomes alive
    - All other cells die or stay dead

    Neighbors wrap around both edges. The input board is not modified.
    """
    neighbor_counts = board.count_all_neighbors()
    cells = board.cells

    birth_mask = ~cells & (neighbor_counts == 3)
    survive_mask = cells & ((neighbor_counts == 2) | (neighbor_counts == 3))

    return Board(board.width, board.height, birth_mask | survive_mask)


def initialize(
    width: int, height: int, seed_fill_probability: float = 0.3, seed: Optional[int] = None
) -> Board:
    """Create a random initial board where each cell is alive with the given probability."""
    return Board.random(width, height, seed_fill_probability, seed)


def advance(history: History) -> History:
    """Step the newest generation and push the result onto the history."""
    history.push(step(history.head()))
    return history


def render_buffer(history: History, pattern_library: PatternLibrary, trail_step: int = TRAIL_STEP) -> bytes:
    """Detect motifs on the newest generation and compose the RGB8 frame."""
    detected = MotifDetector(pattern_library).detect(history.head())
    return compose(history, detected, trail_step)


class GameOfLife:
    """Frame-driven simulation engine.

    Owns the generation history and pattern library. The frontend decides
    each frame whether the simulation advances and passes that decision to
    :meth:`tick`, which returns the RGB8 buffer to display.
    """

    def __init__(
        self,
        board: Board,
        pattern_library: Optional[PatternLibrary] = None,
        history_capacity: int = HISTORY_CAPACITY,
        trail_step: int = TRAIL_STEP,
    ) -> None:
        """Initialize the engine.

        Args:
            board: Initial generation
            pattern_library: Motifs to highlight (defaults to the built-in gliders)
            history_capacity: Number of generations kept for trails
            trail_step: Gray increment per generation of age
        """
        # Single-threaded to keep the frame loop predictable
        torch.set_num_threads(1)

        self.pattern_library = pattern_library if pattern_library is not None else PatternLibrary()
        self.detector = MotifDetector(self.pattern_library)
        self.history = History(board, history_capacity)
        self.trail_step = trail_step
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=100)
        self._detected: Set[int] = set()
        self._detected_for: Optional[Board] = None

        self._update_population_history()

    @classmethod
    def from_config(cls, config: EngineConfig) -> "GameOfLife":
        """Create an engine with a random board described by ``config``.

        Raises:
            ValueError: If the configuration is invalid
        """
        config.validate()
        board = initialize(config.width, config.height, config.fill_probability, config.seed)
        return cls(board, history_capacity=config.history_capacity, trail_step=config.trail_step)

    @property
    def board(self) -> Board:
        """Current generation."""
        return self.history.head()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.board.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    def step(self) -> Board:
        """Advance the simulation by one generation."""
        advance(self.history)
        self._generation += 1
        self._update_population_history()
        return self.board

    def detect(self) -> Set[int]:
        """Indices of cells in detected motifs on the current generation."""
        # Cached per head board so paused frames don't rescan it
        board = self.board
        if self._detected_for is not board:
            self._detected = self.detector.detect(board)
            self._detected_for = board
        return set(self._detected)

    def render(self) -> bytes:
        """RGB8 frame for the current history and detections."""
        return compose(self.history, self.detect(), self.trail_step)

    def tick(self, step_requested: bool) -> bytes:
        """Run one frame: optionally advance, then render.

        Args:
            step_requested: Whether the simulation advances this frame

        Returns:
            Flat RGB8 buffer of length width * height * 3
        """
        if step_requested:
            self.step()
        return self.render()

    def reset(self, board: Board) -> None:
        """Restart from a new initial board."""
        self.history.clear(board)
        self._generation = 0
        self._population_history.clear()
        self._update_population_history()

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)

    def get_statistics(self) -> Dict:
        """Get simulation statistics.

        Returns:
            Dictionary with generation, population and detection figures
        """
        board = self.board
        glider_cells = len(self.detect())

        return {
            "generation": self._generation,
            "population": board.population,
            "population_history": list(self._population_history),
            "glider_cells": glider_cells,
            "history_depth": len(self.history),
            "grid_size": board.shape,
            "population_density": board.population / (board.width * board.height),
        }
