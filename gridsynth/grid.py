"""Symbol grids and random sources for rewrite-based synthesis.

Grids are stored as flat row-major lists of integer symbol ids. They are
mutable, but every copy is deep, so two live grids never share storage.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .errors import ConfigError


class SeededRNG:
    """Wrapper around ``random.Random`` with a minimal convenience API.

    ``SeededRNG(None)`` draws its seed from OS entropy, so consecutive
    unseeded generators produce unrelated streams.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def choice(self, seq: Sequence[int]) -> int:
        return self._rng.choice(seq)

    def random(self) -> float:
        return self._rng.random()

    def spawn(self, offset: int) -> "SeededRNG":
        """Derive a new RNG deterministically from this one."""

        return SeededRNG(self.randint(-(1 << 31), 1 << 31) + offset)


def _check_dimensions(width: int, height: int) -> None:
    for label, value in (("width", width), ("height", height)):
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigError(f"grid {label} must be an integer, got {value!r}")
        if value <= 0:
            raise ConfigError(f"grid {label} must be positive, got {value}")


def _validate_rectangular(rows: Sequence[Sequence[int]]) -> Tuple[int, int]:
    if not rows:
        raise ConfigError("grid must contain at least one row")

    width = len(rows[0])
    if width == 0:
        raise ConfigError("grid must contain at least one column")

    for row in rows:
        if len(row) != width:
            raise ConfigError("grid rows must all be the same length")
        for value in row:
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError("grid values must be integers")

    return width, len(rows)


@dataclass(eq=True)
class Grid:
    """Fixed-size 2D array of symbol ids, row-major.

    ``get``/``set`` are unchecked: callers test ``in_bounds`` first when the
    coordinates are not already known to be valid.
    """

    width: int
    height: int
    cells: List[int] = field(repr=False)

    def __init__(self, width: int, height: int, default: int = 0) -> None:
        _check_dimensions(width, height)
        self.width = width
        self.height = height
        self.cells = [default] * (width * height)

    # ------------------------------------------------------------------ basic
    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    def get(self, x: int, y: int) -> int:
        return self.cells[y * self.width + x]

    def set(self, x: int, y: int, value: int) -> None:
        self.cells[y * self.width + x] = value

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def clear(self, value: int = 0) -> None:
        self.cells = [value] * (self.width * self.height)

    def resize(self, new_width: int, new_height: int, default: int = 0) -> None:
        """Reallocate the grid; previous content is discarded."""

        _check_dimensions(new_width, new_height)
        self.width = new_width
        self.height = new_height
        self.cells = [default] * (new_width * new_height)

    def flatten(self) -> List[int]:
        return list(self.cells)

    def palette(self) -> List[int]:
        return sorted(set(self.cells))

    def copy(self) -> "Grid":
        clone = Grid.__new__(Grid)
        clone.width = self.width
        clone.height = self.height
        clone.cells = list(self.cells)
        return clone

    def to_rows(self) -> List[List[int]]:
        w = self.width
        return [self.cells[y * w : (y + 1) * w] for y in range(self.height)]

    # ----------------------------------------------------------- constructions
    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        width, height = _validate_rectangular(rows)
        grid = cls(width, height)
        grid.cells = [value for row in rows for value in row]
        return grid

    @classmethod
    def from_flat(cls, values: Sequence[int], width: int) -> "Grid":
        if not isinstance(width, int) or width <= 0:
            raise ConfigError("width must be positive")

        if not values or len(values) % width != 0:
            raise ConfigError("values length must be a non-zero multiple of width")

        rows = [list(values[i : i + width]) for i in range(0, len(values), width)]
        return cls.from_rows(rows)
