"""Toroidal Game of Life with glider detection and fading generation trails."""

__version__ = "0.1.0"

from .core.board import Board
from .core.game import GameOfLife, step
from .core.history import History
from .core.patterns import Pattern, PatternLibrary
from .core.detector import MotifDetector

__all__ = ["Board", "GameOfLife", "step", "History", "Pattern", "PatternLibrary", "MotifDetector"]
