"""Core simulation, history and detection logic."""

from .board import Board
from .config import EngineConfig
from .history import History
from .patterns import Pattern, PatternLibrary
from .detector import MotifDetector
from .compositor import compose
from .game import GameOfLife, advance, initialize, render_buffer, step

__all__ = [
    "Board",
    "EngineConfig",
    "History",
    "Pattern",
    "PatternLibrary",
    "MotifDetector",
    "compose",
    "GameOfLife",
    "advance",
    "initialize",
    "render_buffer",
    "step",
]
