"""Engine configuration."""

from dataclasses import dataclass
from typing import List, Optional

from .compositor import TRAIL_STEP
from .history import HISTORY_CAPACITY


@dataclass
class EngineConfig:
    """Configuration for a simulation engine."""
    width: int = 100
    height: int = 100
    fill_probability: float = 0.3
    history_capacity: int = HISTORY_CAPACITY
    trail_step: int = TRAIL_STEP
    seed: Optional[int] = None

    def errors(self) -> List[str]:
        """List every invalid setting (empty when valid)."""
        errors = []

        if self.width <= 0:
            errors.append("Width must be positive")

        if self.height <= 0:
            errors.append("Height must be positive")

        if not 0.0 <= self.fill_probability <= 1.0:
            errors.append("Population rate must be between 0.0 and 1.0")

        if self.history_capacity <= 0:
            errors.append("History capacity must be positive")

        if self.trail_step < 0:
            errors.append("Trail step must be non-negative")

        return errors

    def validate(self) -> None:
        """Raise ValueError if any setting is invalid."""
        errors = self.errors()
        if errors:
            raise ValueError("; ".join(errors))
