"""Ordered, double-buffered transformation pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from .alphabet import EMPTY, Alphabet
from .grid import Grid, SeededRNG
from .metrics import count_changed_cells
from .transformations import Transformation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StageRecord:
    """Summary of one executed pipeline stage."""

    index: int
    name: str
    kind: str
    changed_cells: int


class Synthesizer:
    """Owns a grid, an alphabet and the transformations applied to the grid.

    ``synthesize`` threads the grid through every enabled transformation in
    list order. Each stage reads the previous stage's output and returns a
    fresh grid; the stored grid is replaced only once the whole pipeline has
    finished.
    """

    def __init__(self, width: int = 32, height: int = 32, default: int = EMPTY.id) -> None:
        self._grid = Grid(width, height, default)
        self._alphabet = Alphabet()
        self._transformations: List[Transformation] = []

    # ------------------------------------------------------------------ state
    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    def resize_grid(self, width: int, height: int, default: int = EMPTY.id) -> None:
        self._grid.resize(width, height, default)

    def replace_grid(self, grid: Grid) -> None:
        self._grid = grid.copy()

    # -------------------------------------------------------- transformations
    @property
    def transformations(self) -> Sequence[Transformation]:
        return tuple(self._transformations)

    def add_transformation(self, transformation: Transformation, index: int | None = None) -> None:
        if index is None:
            self._transformations.append(transformation)
        else:
            self._transformations.insert(index, transformation)

    def get_transformation(self, index: int) -> Transformation:
        return self._transformations[index]

    def remove_transformation(self, index: int) -> Transformation:
        return self._transformations.pop(index)

    def move_transformation(self, source: int, destination: int) -> None:
        if not -len(self._transformations) <= destination < len(self._transformations):
            raise IndexError(f"destination index {destination} out of range")
        if destination < 0:
            destination += len(self._transformations)
        transformation = self._transformations.pop(source)
        self._transformations.insert(destination, transformation)

    def set_enabled(self, index: int, enabled: bool) -> None:
        self._transformations[index].enabled = enabled

    def clear_transformations(self) -> None:
        self._transformations.clear()

    # -------------------------------------------------------------- execution
    def synthesize(self, seed: int | None = None) -> List[StageRecord]:
        """Run the pipeline and store the final grid.

        With ``seed`` every stage receives a generator spawned from one root,
        making the run reproducible. Without it each stage draws fresh
        entropy.
        """

        root = SeededRNG(seed) if seed is not None else None
        current = self._grid
        records: List[StageRecord] = []

        for index, transformation in enumerate(self._transformations):
            if not transformation.enabled:
                logger.debug("skipping disabled stage %d (%s)", index, transformation.name)
                continue

            rng = root.spawn(index) if root is not None else None
            result = transformation.apply(current, self._alphabet, rng)
            record = StageRecord(
                index=index,
                name=transformation.name,
                kind=transformation.kind,
                changed_cells=count_changed_cells(current, result),
            )
            logger.debug(
                "stage %d %s (%s) changed %d cells",
                index,
                record.name,
                record.kind,
                record.changed_cells,
            )
            records.append(record)
            current = result

        self._grid = current
        return records

    def __repr__(self) -> str:
        height, width = self._grid.shape
        return (
            f"Synthesizer(width={width}, height={height}, "
            f"symbols={len(self._alphabet)}, transformations={len(self._transformations)})"
        )


__all__ = ["Synthesizer", "StageRecord"]
