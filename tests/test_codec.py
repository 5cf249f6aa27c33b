"""Tests for the JSON document codec."""

from __future__ import annotations

import copy
import json

import pytest

from gridsynth import (
    FORMAT_VERSION,
    WILDCARD,
    FormatError,
    Grid,
    RandomTransformation,
    RuleBasedTransformation,
    Symbol,
    Synthesizer,
    dumps,
    from_json,
    load,
    loads,
    save,
    to_json,
)

W = WILDCARD.id


def build_synthesizer() -> Synthesizer:
    synth = Synthesizer(3, 2)
    synth.grid.set(0, 0, 1)
    synth.grid.set(2, 1, 2)
    synth.alphabet.add_symbol(Symbol(2, "G"))
    synth.alphabet.add_symbol(Symbol(1, "F"))
    synth.add_transformation(RandomTransformation("Random", enabled=False))
    search = Grid.from_rows([[W, 1], [1, 2]])
    rule = RuleBasedTransformation("Rule-based", search)
    rule.add_replacement(0.75, Grid.from_rows([[W, 1], [1, 1]]))
    rule.add_replacement(0.25, Grid.from_rows([[2]]))
    synth.add_transformation(rule)
    return synth


def test_to_json_layout() -> None:
    document = to_json(build_synthesizer())

    assert document == {
        "version": FORMAT_VERSION,
        "grid": {"width": 3, "height": 2, "data": [1, 0, 0, 0, 0, 2]},
        "alphabet": {"symbols": [{"id": 1, "name": "F"}, {"id": 2, "name": "G"}]},
        "transformations": [
            {"name": "Random", "enabled": False, "type": "random"},
            {
                "name": "Rule-based",
                "enabled": True,
                "type": "rule_based",
                "search": {"width": 2, "height": 2, "data": [W, 1, 1, 2]},
                "replacements": [
                    {"probability": 0.75, "grid": {"width": 2, "height": 2, "data": [W, 1, 1, 1]}},
                    {"probability": 0.25, "grid": {"width": 1, "height": 1, "data": [2]}},
                ],
            },
        ],
    }


def test_round_trip_reproduces_synthesizer() -> None:
    synth = build_synthesizer()
    restored = from_json(to_json(synth))

    assert restored.grid == synth.grid
    assert restored.alphabet.symbols() == synth.alphabet.symbols()
    assert list(restored.transformations) == list(synth.transformations)
    assert isinstance(restored.transformations[1], RuleBasedTransformation)


def test_text_round_trip() -> None:
    synth = build_synthesizer()
    text = dumps(synth, indent=2)
    assert json.loads(text)["version"] == 1
    assert to_json(loads(text)) == to_json(synth)


def test_file_round_trip(tmp_path) -> None:
    synth = build_synthesizer()
    destination = save(tmp_path / "nested" / "doc.json", synth)

    assert destination.exists()
    assert to_json(load(destination)) == to_json(synth)


def test_missing_version_is_accepted() -> None:
    document = to_json(build_synthesizer())
    del document["version"]
    assert from_json(document).grid.shape == (2, 3)


def test_unsupported_version_is_rejected() -> None:
    document = to_json(build_synthesizer())
    document["version"] = 2

    with pytest.raises(FormatError, match="version"):
        from_json(document)


def test_duplicate_symbol_ids_keep_first() -> None:
    document = to_json(build_synthesizer())
    document["alphabet"]["symbols"].append({"id": 1, "name": "other"})

    synth = from_json(document)
    assert synth.alphabet.get_symbol(1).name == "F"
    assert len(synth.alphabet) == 2


def _mutations():
    def drop(*keys):
        def apply(doc):
            target = doc
            for key in keys[:-1]:
                target = target[key]
            del target[keys[-1]]

        return apply

    def put(value, *keys):
        def apply(doc):
            target = doc
            for key in keys[:-1]:
                target = target[key]
            target[keys[-1]] = value

        return apply

    return [
        drop("grid"),
        drop("alphabet"),
        drop("transformations"),
        drop("grid", "data"),
        drop("alphabet", "symbols"),
        drop("transformations", 1, "search"),
        drop("transformations", 1, "replacements"),
        drop("transformations", 0, "enabled"),
        put("3", "grid", "width"),
        put(True, "grid", "height"),
        put(0, "grid", "width"),
        put([1, 0, 0], "grid", "data"),
        put([1, 0, 0, 0, 0, 2, 0], "grid", "data"),
        put([1, 0, 0, 0, 0, 2.5], "grid", "data"),
        put("yes", "transformations", 0, "enabled"),
        put("wave", "transformations", 0, "type"),
        put("0.5", "transformations", 1, "replacements", 0, "probability"),
        put(-0.5, "transformations", 1, "replacements", 0, "probability"),
        put([W, 1], "transformations", 1, "search", "data"),
        put({"id": 1}, "alphabet", "symbols", 0),
        put("F", "alphabet", "symbols"),
        put(1 << 40, "grid", "data", 0),
        put([], "version"),
        put(1.0, "version"),
        put(10**400, "transformations", 1, "replacements", 0, "probability"),
    ]


@pytest.mark.parametrize("mutate", _mutations())
def test_malformed_documents_raise_format_error(mutate) -> None:
    document = copy.deepcopy(to_json(build_synthesizer()))
    mutate(document)

    with pytest.raises(FormatError, match="unparsable synthesizer document"):
        from_json(document)


def test_non_object_document_is_rejected() -> None:
    with pytest.raises(FormatError):
        from_json([])  # type: ignore[arg-type]


def test_huge_probability_literal_is_rejected() -> None:
    text = dumps(build_synthesizer()).replace("0.75", "1" + "0" * 400)

    with pytest.raises(FormatError, match="out of range"):
        loads(text)


def test_invalid_json_text_is_rejected() -> None:
    with pytest.raises(FormatError):
        loads("{not json")
