"""
Square grid map for the frontline wargame.

Uses (x, y) cell coordinates with the origin in the top-left corner,
x growing east and y growing south. Distances are Manhattan distances.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from .errors import OutOfBounds


class Weather(Enum):
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"

    def next(self) -> "Weather":
        """Next season in the fixed cycle Summer -> Fall -> Winter -> Summer."""
        cycle = list(Weather)
        return cycle[(cycle.index(self) + 1) % len(cycle)]

    @property
    def label(self) -> str:
        return self.value.title()


def manhattan_distance(x1: int, y1: int, x2: int, y2: int) -> int:
    """Calculate |dx| + |dy| between two cells."""
    return abs(x1 - x2) + abs(y1 - y2)


@dataclass(frozen=True)
class GridMap:
    """
    Fixed-size rectangular grid.

    The map holds no unit state; it only knows its dimensions and how
    pointer pixels map onto cells.
    """
    cols: int = 12
    rows: int = 9
    cell_size: int = 64  # pixels per cell

    def __post_init__(self):
        if self.cols <= 0 or self.rows <= 0 or self.cell_size <= 0:
            raise ValueError(
                f"Grid dimensions must be positive, got "
                f"{self.cols}x{self.rows} with cell size {self.cell_size}"
            )

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def require_in_bounds(self, x: int, y: int):
        """Raise OutOfBounds if the cell is not on the grid."""
        if not self.in_bounds(x, y):
            raise OutOfBounds(x, y)

    def cell_at_pixel(self, px: float, py: float) -> tuple[int, int]:
        """Convert pointer coordinates to a cell. Not bounds-checked."""
        return (int(px // self.cell_size), int(py // self.cell_size))

    def cells(self) -> Iterator[tuple[int, int]]:
        """Iterate all cells, column by column."""
        for x in range(self.cols):
            for y in range(self.rows):
                yield (x, y)

    @property
    def pixel_size(self) -> tuple[int, int]:
        """Width and height of the drawn grid in pixels."""
        return (self.cols * self.cell_size, self.rows * self.cell_size)

    @property
    def cell_count(self) -> int:
        return self.cols * self.rows

    def get_cells_in_radius(self, x: int, y: int, radius: int) -> list[tuple[int, int]]:
        """Get all on-grid cells within Manhattan radius of (x, y)."""
        cells = []
        for dx in range(-radius, radius + 1):
            span = radius - abs(dx)
            for dy in range(-span, span + 1):
                if self.in_bounds(x + dx, y + dy):
                    cells.append((x + dx, y + dy))
        return cells

