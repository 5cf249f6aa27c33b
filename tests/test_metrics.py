"""Tests for grid statistics."""

from __future__ import annotations

from gridsynth import Grid, count_changed_cells, symbol_counts


def test_count_changed_cells_same_shape() -> None:
    before = Grid.from_rows([[1, 2], [3, 4]])
    after = Grid.from_rows([[1, 0], [3, 0]])
    assert count_changed_cells(before, after) == 2
    assert count_changed_cells(before, before.copy()) == 0


def test_count_changed_cells_pads_with_background() -> None:
    before = Grid.from_rows([[1, 1]])
    after = Grid.from_rows([[1, 1], [0, 5]])
    assert count_changed_cells(before, after) == 1
    assert count_changed_cells(before, after, background=5) == 1


def test_symbol_counts_sorted_by_id() -> None:
    grid = Grid.from_rows([[2, -1, 2], [0, 2, 0]])
    counts = symbol_counts(grid)
    assert counts == {-1: 1, 0: 2, 2: 3}
    assert list(counts) == [-1, 0, 2]
