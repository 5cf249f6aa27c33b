"""Grid rewrite transformations.

Two kinds exist: ``random`` fills every cell with a uniformly drawn symbol,
``rule_based`` searches for a pattern and writes weighted replacements. Each
kind registers itself under the string stored in the ``type`` field of
persisted documents.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, ClassVar, Dict, Iterable, List, Type, TypeVar

from .alphabet import WILDCARD, Alphabet
from .errors import ConfigError
from .grid import Grid, SeededRNG


T = TypeVar("T", bound=Type["Transformation"])

TRANSFORMATION_TYPES: Dict[str, Type["Transformation"]] = {}


def register_transformation(kind: str) -> Callable[[T], T]:
    """Class decorator binding a transformation class to its ``kind`` string."""

    if kind in TRANSFORMATION_TYPES:
        raise ValueError(f"transformation kind '{kind}' is already registered")

    def decorator(cls: T) -> T:
        cls.kind = kind
        TRANSFORMATION_TYPES[kind] = cls
        return cls

    return decorator


class Transformation(ABC):
    """One pipeline stage: reads a grid and returns a new one."""

    kind: ClassVar[str] = ""

    def __init__(self, name: str, *, enabled: bool = True) -> None:
        self.name = name
        self.enabled = enabled

    @abstractmethod
    def apply(self, grid: Grid, alphabet: Alphabet, rng: SeededRNG | None = None) -> Grid:
        """Return a new grid of the same dimensions; ``grid`` is not modified.

        Without ``rng`` a fresh entropy-seeded generator is used for the call.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, enabled={self.enabled})"


@register_transformation("random")
class RandomTransformation(Transformation):
    """Fill every cell with a symbol drawn uniformly from the alphabet."""

    def apply(self, grid: Grid, alphabet: Alphabet, rng: SeededRNG | None = None) -> Grid:
        ids = alphabet.ids()
        if not ids:
            raise ConfigError(f"transformation '{self.name}' needs a non-empty alphabet")

        rng = rng or SeededRNG()
        output = grid.copy()
        output.cells = [rng.choice(ids) for _ in range(len(grid.cells))]
        return output

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RandomTransformation):
            return NotImplemented
        return (self.name, self.enabled) == (other.name, other.enabled)


def _check_probability(probability: float) -> float:
    if isinstance(probability, bool) or not isinstance(probability, (int, float)):
        raise ConfigError(f"replacement probability must be a number, got {probability!r}")
    value = float(probability)
    if not math.isfinite(value) or value < 0.0:
        raise ConfigError(f"replacement probability must be finite and >= 0, got {probability!r}")
    return value


@dataclass(frozen=True)
class Replacement:
    """Weighted replacement pattern written at a search match."""

    probability: float
    grid: Grid


@register_transformation("rule_based")
class RuleBasedTransformation(Transformation):
    """Search-and-replace over every anchor where the search pattern fits.

    Matching always reads the untouched input and replacements are written
    to a separate output grid, so overlapping anchors never observe each
    other's writes. ``WILDCARD`` matches anything in the search pattern and
    leaves the existing value in place when it appears in a replacement.
    """

    def __init__(
        self,
        name: str,
        search: Grid,
        replacements: Iterable[tuple[float, Grid]] = (),
        *,
        enabled: bool = True,
    ) -> None:
        super().__init__(name, enabled=enabled)
        self._search = search.copy()
        self._replacements: List[Replacement] = []
        for probability, pattern in replacements:
            self.add_replacement(probability, pattern)

    # --------------------------------------------------------------- patterns
    @property
    def search(self) -> Grid:
        """Copy of the search pattern; edit through ``set_search``."""

        return self._search.copy()

    def set_search(self, search: Grid) -> None:
        self._search = search.copy()

    @property
    def replacements(self) -> tuple[Replacement, ...]:
        return tuple(Replacement(entry.probability, entry.grid.copy()) for entry in self._replacements)

    def add_replacement(self, probability: float, grid: Grid) -> None:
        self._replacements.append(Replacement(_check_probability(probability), grid.copy()))

    def set_replacement(self, index: int, probability: float, grid: Grid) -> None:
        self._replacements[index] = Replacement(_check_probability(probability), grid.copy())

    def remove_replacement(self, index: int) -> Replacement:
        return self._replacements.pop(index)

    # -------------------------------------------------------------- execution
    def apply(self, grid: Grid, alphabet: Alphabet, rng: SeededRNG | None = None) -> Grid:
        rng = rng or SeededRNG()
        output = grid.copy()
        search = self._search
        sw, sh = search.width, search.height

        for i in range(grid.width):
            for j in range(grid.height):
                if not grid.in_bounds(i + sw - 1, j + sh - 1):
                    continue
                if not self._matches(grid, i, j):
                    continue
                chosen = self._select(rng.random())
                if chosen is not None:
                    self._write(output, chosen.grid, i, j)
        return output

    def _matches(self, grid: Grid, i: int, j: int) -> bool:
        search = self._search
        wildcard = WILDCARD.id
        for x in range(search.width):
            for y in range(search.height):
                expected = search.get(x, y)
                if expected == wildcard:
                    continue
                if grid.get(i + x, j + y) != expected:
                    return False
        return True

    def _select(self, sample: float) -> Replacement | None:
        # First entry whose cumulative mass reaches the sample wins.
        acc = 0.0
        for replacement in self._replacements:
            acc += replacement.probability
            if acc >= sample:
                return replacement
        return None

    @staticmethod
    def _write(output: Grid, pattern: Grid, i: int, j: int) -> None:
        wildcard = WILDCARD.id
        for x in range(pattern.width):
            for y in range(pattern.height):
                value = pattern.get(x, y)
                if value == wildcard or not output.in_bounds(i + x, j + y):
                    continue
                output.set(i + x, j + y, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleBasedTransformation):
            return NotImplemented
        return (
            self.name == other.name
            and self.enabled == other.enabled
            and self._search == other._search
            and self._replacements == other._replacements
        )


__all__ = [
    "Transformation",
    "RandomTransformation",
    "RuleBasedTransformation",
    "Replacement",
    "TRANSFORMATION_TYPES",
    "register_transformation",
]
