"""Grid statistics shared by the pipeline and the CLI summary."""

from __future__ import annotations

from collections import Counter
from typing import Dict

from .grid import Grid


def count_changed_cells(before: Grid, after: Grid, background: int = 0) -> int:
    """Return the number of cells that differ between two grids.

    Grids may differ in shape; missing cells are treated as the provided
    ``background`` value so rectangular comparisons remain well-defined.
    """

    if before.shape == after.shape:
        return sum(1 for prev, curr in zip(before.cells, after.cells) if prev != curr)

    height = max(before.height, after.height)
    width = max(before.width, after.width)

    diffs = 0
    for y in range(height):
        for x in range(width):
            prev = before.get(x, y) if before.in_bounds(x, y) else background
            curr = after.get(x, y) if after.in_bounds(x, y) else background
            if prev != curr:
                diffs += 1
    return diffs


def symbol_counts(grid: Grid) -> Dict[int, int]:
    """Occurrences of each symbol id, keyed in ascending id order."""

    counts = Counter(grid.cells)
    return {symbol_id: counts[symbol_id] for symbol_id in sorted(counts)}


__all__ = ["count_changed_cells", "symbol_counts"]
