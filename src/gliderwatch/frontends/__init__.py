"""Frontend interfaces for the glider watch engine."""

from .tkinter_gui import TkinterGliderWatchGUI
from .cli import CLIGliderWatch

__all__ = ["TkinterGliderWatchGUI", "CLIGliderWatch"]
