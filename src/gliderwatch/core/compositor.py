"""Frame composition: history trails and motif highlights to RGB8."""

from typing import Iterable
import numpy as np

from .history import History

TRAIL_STEP = 12

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (255, 0, 0)


def compose_array(history: History, detected: Iterable[int], trail_step: int = TRAIL_STEP) -> np.ndarray:
    """Render the history into an RGB image array.

    Older generations are painted first so newer ones overwrite them. A
    trail generation at history index ``rank`` is shaded gray with value
    ``min(255, rank * trail_step)``; the head generation is black. Detected
    cells turn red unless they are still white background.

    Args:
        history: Generations to draw, newest first
        detected: Flat indices of highlighted cells
        trail_step: Gray increment per generation of age

    Returns:
        uint8 array of shape (height, width, 3)
    """
    frame = np.full((history.height, history.width, 3), 255, dtype=np.uint8)

    for rank in range(len(history) - 1, 0, -1):
        shade = min(255, max(0, rank * trail_step))
        frame[history[rank].cells] = shade

    frame[history.head().cells] = BLACK

    highlight = np.zeros(history.width * history.height, dtype=bool)
    highlight[list(detected)] = True
    highlight = highlight.reshape(history.height, history.width)

    # Highlights never paint over the white background
    shaded = (frame != 255).any(axis=2)
    frame[highlight & shaded] = RED

    return frame


def compose(history: History, detected: Iterable[int], trail_step: int = TRAIL_STEP) -> bytes:
    """Render the history into a flat row-major RGB8 byte buffer."""
    return compose_array(history, detected, trail_step).tobytes()


def to_ppm(width: int, height: int, buffer: bytes) -> bytes:
    """Wrap a raw RGB8 buffer in a binary PPM (P6) header.

    Raises:
        ValueError: If the buffer length doesn't match the dimensions
    """
    if len(buffer) != width * height * 3:
        raise ValueError(f"Buffer length {len(buffer)} doesn't match {width}x{height} RGB image")

    return f"P6 {width} {height} 255\n".encode("ascii") + bytes(buffer)


def write_ppm(path: str, width: int, height: int, buffer: bytes) -> None:
    """Save a raw RGB8 buffer as a PPM image file."""
    with open(path, "wb") as f:
        f.write(to_ppm(width, height, buffer))
