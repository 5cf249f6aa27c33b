"""Exception hierarchy shared by the grid synthesis modules."""

from __future__ import annotations


class GridSynthError(Exception):
    """Base class for every error raised by :mod:`gridsynth`."""


class ConfigError(GridSynthError, ValueError):
    """Invalid construction arguments or run configuration."""


class FormatError(GridSynthError, ValueError):
    """A persisted synthesizer document could not be parsed."""


class SymbolLookupError(GridSynthError, LookupError):
    """An alphabet lookup referenced an unregistered symbol id."""

    def __init__(self, symbol_id: int) -> None:
        super().__init__(f"unknown symbol id {symbol_id}")
        self.symbol_id = symbol_id


__all__ = ["GridSynthError", "ConfigError", "FormatError", "SymbolLookupError"]
