"""
Integer bounds used to clamp values coming from files or editors.
"""

from dataclasses import dataclass


@dataclass
class Bounds:
    """Inclusive integer range [min, max]."""
    min: int
    max: int

    def clamp(self, value: int) -> int:
        """Clamp a value into the range."""
        return min(max(self.min, value), self.max)

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def set_bounds(self, minimum: int, maximum: int) -> "Bounds":
        self.min = minimum
        self.max = maximum
        return self


BYTE = Bounds(0, 0xFF)
