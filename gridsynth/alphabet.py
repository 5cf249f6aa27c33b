"""Symbol alphabet used to interpret grid cell values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List

from .errors import SymbolLookupError


@dataclass(frozen=True)
class Symbol:
    """Integer identity with a display name."""

    id: int
    name: str


EMPTY = Symbol(0, "empty")
WILDCARD = Symbol(-1, "wildcard")

RESERVED_SYMBOLS: Dict[int, Symbol] = {EMPTY.id: EMPTY, WILDCARD.id: WILDCARD}


class Alphabet:
    """Registry mapping symbol ids to symbols, iterated in id order.

    The reserved ``EMPTY`` and ``WILDCARD`` ids never need registering; they
    are recognised by value wherever cells are matched or displayed.
    """

    def __init__(self) -> None:
        self._symbols: Dict[int, Symbol] = {}

    # -------------------------------------------------------------- mutation
    def add_symbol(self, symbol: Symbol) -> bool:
        """Register ``symbol`` unless its id is taken. Returns whether it was added."""

        if symbol.id in self._symbols:
            return False
        self._symbols[symbol.id] = symbol
        return True

    def remove_symbol(self, symbol_id: int) -> Symbol:
        try:
            return self._symbols.pop(symbol_id)
        except KeyError:
            raise SymbolLookupError(symbol_id) from None

    def clear(self) -> None:
        self._symbols.clear()

    # --------------------------------------------------------------- queries
    def has_symbol(self, symbol_id: int) -> bool:
        return symbol_id in self._symbols

    def get_symbol(self, symbol_id: int) -> Symbol:
        try:
            return self._symbols[symbol_id]
        except KeyError:
            raise SymbolLookupError(symbol_id) from None

    def symbols(self) -> List[Symbol]:
        return [self._symbols[key] for key in sorted(self._symbols)]

    def ids(self) -> List[int]:
        return sorted(self._symbols)

    def name_of(self, symbol_id: int) -> str:
        """Display name for a cell value, reserved ids included."""

        if symbol_id in self._symbols:
            return self._symbols[symbol_id].name
        if symbol_id in RESERVED_SYMBOLS:
            return RESERVED_SYMBOLS[symbol_id].name
        raise SymbolLookupError(symbol_id)

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, symbol_id: object) -> bool:
        return symbol_id in self._symbols

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.symbols())

    def __repr__(self) -> str:
        return f"Alphabet({self.symbols()!r})"


__all__ = ["Symbol", "Alphabet", "EMPTY", "WILDCARD", "RESERVED_SYMBOLS"]
