"""Tests for the symbol alphabet."""

from __future__ import annotations

import pytest

from gridsynth import EMPTY, WILDCARD, Alphabet, Symbol, SymbolLookupError


def test_reserved_symbols() -> None:
    assert EMPTY == Symbol(0, "empty")
    assert WILDCARD == Symbol(-1, "wildcard")


def test_symbols_are_listed_in_id_order() -> None:
    alphabet = Alphabet()
    alphabet.add_symbol(Symbol(5, "wall"))
    alphabet.add_symbol(Symbol(1, "floor"))
    alphabet.add_symbol(Symbol(3, "door"))

    assert alphabet.ids() == [1, 3, 5]
    assert [symbol.name for symbol in alphabet] == ["floor", "door", "wall"]
    assert len(alphabet) == 3


def test_first_registration_wins() -> None:
    alphabet = Alphabet()
    assert alphabet.add_symbol(Symbol(1, "F"))
    assert not alphabet.add_symbol(Symbol(1, "other"))

    assert alphabet.get_symbol(1).name == "F"
    assert len(alphabet) == 1


def test_lookup_and_removal_of_unknown_id_raise() -> None:
    alphabet = Alphabet()
    alphabet.add_symbol(Symbol(2, "G"))

    with pytest.raises(SymbolLookupError):
        alphabet.get_symbol(9)

    with pytest.raises(LookupError):
        alphabet.remove_symbol(9)

    removed = alphabet.remove_symbol(2)
    assert removed == Symbol(2, "G")
    assert not alphabet.has_symbol(2)
    assert 2 not in alphabet


def test_name_of_recognises_reserved_ids() -> None:
    alphabet = Alphabet()
    alphabet.add_symbol(Symbol(1, "F"))

    assert alphabet.name_of(1) == "F"
    assert alphabet.name_of(EMPTY.id) == "empty"
    assert alphabet.name_of(WILDCARD.id) == "wildcard"
    assert not alphabet.has_symbol(EMPTY.id)

    with pytest.raises(SymbolLookupError):
        alphabet.name_of(4)


def test_registered_name_shadows_reserved_name() -> None:
    alphabet = Alphabet()
    alphabet.add_symbol(Symbol(0, "void"))
    assert alphabet.name_of(0) == "void"
