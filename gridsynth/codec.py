"""Versioned JSON documents describing a complete synthesizer.

Document layout::

    {
      "version": 1,
      "grid": {"width": int, "height": int, "data": [int, ...]},
      "alphabet": {"symbols": [{"id": int, "name": str}, ...]},
      "transformations": [
        {"name": str, "enabled": bool, "type": "random"},
        {"name": str, "enabled": bool, "type": "rule_based",
         "search": {...grid...},
         "replacements": [{"probability": float, "grid": {...grid...}}, ...]}
      ]
    }

``data`` arrays are row-major with exactly ``width * height`` entries.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, cast

from .alphabet import Symbol
from .errors import ConfigError, FormatError
from .grid import Grid
from .synthesizer import Synthesizer
from .transformations import (
    TRANSFORMATION_TYPES,
    RandomTransformation,
    RuleBasedTransformation,
    Transformation,
)

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1


# ---------------------------------------------------------------- encoding
def _encode_grid(grid: Grid) -> Dict[str, Any]:
    return {"width": grid.width, "height": grid.height, "data": grid.flatten()}


def _encode_transformation(transformation: Transformation) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "name": transformation.name,
        "enabled": transformation.enabled,
        "type": transformation.kind,
    }
    if transformation.kind == RuleBasedTransformation.kind:
        rule = cast(RuleBasedTransformation, transformation)
        record["search"] = _encode_grid(rule.search)
        record["replacements"] = [
            {"probability": entry.probability, "grid": _encode_grid(entry.grid)}
            for entry in rule.replacements
        ]
    return record


def to_json(synth: Synthesizer) -> Dict[str, Any]:
    """Snapshot ``synth`` as a JSON-compatible document."""

    return {
        "version": FORMAT_VERSION,
        "grid": _encode_grid(synth.grid),
        "alphabet": {
            "symbols": [{"id": symbol.id, "name": symbol.name} for symbol in synth.alphabet.symbols()]
        },
        "transformations": [_encode_transformation(t) for t in synth.transformations],
    }


# ---------------------------------------------------------------- decoding
def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise FormatError(msg)


def _field(obj: Mapping[str, Any], key: str, path: str) -> Any:
    _require(key in obj, f"{path}.{key} is required")
    return obj[key]


def _as_int(x: Any, path: str) -> int:
    _require(isinstance(x, int) and not isinstance(x, bool), f"{path} must be an integer")
    _require(_INT32_MIN <= x <= _INT32_MAX, f"{path} is outside the 32-bit range")
    return int(x)


def _as_float(x: Any, path: str) -> float:
    _require(
        isinstance(x, (int, float)) and not isinstance(x, bool),
        f"{path} must be a number",
    )
    try:
        return float(x)
    except OverflowError:
        raise FormatError(f"{path} is out of range") from None


def _as_str(x: Any, path: str) -> str:
    _require(isinstance(x, str), f"{path} must be a string")
    return cast(str, x)


def _as_bool(x: Any, path: str) -> bool:
    _require(isinstance(x, bool), f"{path} must be a boolean")
    return cast(bool, x)


def _as_dict(x: Any, path: str) -> Dict[str, Any]:
    _require(isinstance(x, dict), f"{path} must be an object")
    return cast(Dict[str, Any], x)


def _as_list(x: Any, path: str) -> List[Any]:
    _require(isinstance(x, list), f"{path} must be an array")
    return cast(List[Any], x)


def _decode_grid(raw: Any, path: str) -> Grid:
    obj = _as_dict(raw, path)
    width = _as_int(_field(obj, "width", path), f"{path}.width")
    height = _as_int(_field(obj, "height", path), f"{path}.height")
    data = _as_list(_field(obj, "data", path), f"{path}.data")

    _require(width > 0 and height > 0, f"{path} dimensions must be positive")
    _require(
        len(data) == width * height,
        f"{path}.data has {len(data)} entries, expected {width * height}",
    )

    grid = Grid(width, height)
    for index, value in enumerate(data):
        x, y = index % width, index // width
        _require(grid.in_bounds(x, y), f"{path}.data[{index}] is out of bounds")
        grid.set(x, y, _as_int(value, f"{path}.data[{index}]"))
    return grid


def _decode_random(obj: Dict[str, Any], name: str, enabled: bool, path: str) -> Transformation:
    return RandomTransformation(name, enabled=enabled)


def _decode_rule_based(obj: Dict[str, Any], name: str, enabled: bool, path: str) -> Transformation:
    search = _decode_grid(_field(obj, "search", path), f"{path}.search")
    rule = RuleBasedTransformation(name, search, enabled=enabled)

    entries = _as_list(_field(obj, "replacements", path), f"{path}.replacements")
    for index, raw in enumerate(entries):
        entry_path = f"{path}.replacements[{index}]"
        entry = _as_dict(raw, entry_path)
        probability = _as_float(_field(entry, "probability", entry_path), f"{entry_path}.probability")
        pattern = _decode_grid(_field(entry, "grid", entry_path), f"{entry_path}.grid")
        rule.add_replacement(probability, pattern)
    return rule


_Decoder = Callable[[Dict[str, Any], str, bool, str], Transformation]

_DECODERS: Dict[str, _Decoder] = {
    RandomTransformation.kind: _decode_random,
    RuleBasedTransformation.kind: _decode_rule_based,
}


def _decode_transformation(raw: Any, path: str) -> Transformation:
    obj = _as_dict(raw, path)
    name = _as_str(_field(obj, "name", path), f"{path}.name")
    enabled = _as_bool(_field(obj, "enabled", path), f"{path}.enabled")
    kind = _as_str(_field(obj, "type", path), f"{path}.type")

    decoder = _DECODERS.get(kind)
    _require(
        decoder is not None and kind in TRANSFORMATION_TYPES,
        f"{path}.type '{kind}' is not one of {sorted(_DECODERS)}",
    )
    return decoder(obj, name, enabled, path)


def _build(document: Any) -> Synthesizer:
    root = _as_dict(document, "document")

    if "version" in root:
        version = _as_int(root["version"], "document.version")
        _require(
            version == FORMAT_VERSION,
            f"unsupported document version {version!r}, expected {FORMAT_VERSION}",
        )

    grid = _decode_grid(_field(root, "grid", "document"), "document.grid")

    alphabet_obj = _as_dict(_field(root, "alphabet", "document"), "document.alphabet")
    raw_symbols = _as_list(
        _field(alphabet_obj, "symbols", "document.alphabet"),
        "document.alphabet.symbols",
    )
    symbols: List[Symbol] = []
    for index, raw in enumerate(raw_symbols):
        path = f"document.alphabet.symbols[{index}]"
        entry = _as_dict(raw, path)
        symbols.append(
            Symbol(
                id=_as_int(_field(entry, "id", path), f"{path}.id"),
                name=_as_str(_field(entry, "name", path), f"{path}.name"),
            )
        )

    raw_transformations = _as_list(_field(root, "transformations", "document"), "document.transformations")
    transformations = [
        _decode_transformation(raw, f"document.transformations[{index}]")
        for index, raw in enumerate(raw_transformations)
    ]

    synth = Synthesizer(grid.width, grid.height)
    synth.replace_grid(grid)
    for symbol in symbols:
        if not synth.alphabet.add_symbol(symbol):
            logger.debug("ignoring duplicate symbol id %d (%r)", symbol.id, symbol.name)
    for transformation in transformations:
        synth.add_transformation(transformation)
    return synth


def from_json(document: Mapping[str, Any]) -> Synthesizer:
    """Rebuild a synthesizer from a document produced by :func:`to_json`.

    Raises :class:`FormatError` for any malformed document; nothing is
    returned on failure.
    """

    try:
        return _build(document)
    except FormatError as exc:
        raise FormatError(f"unparsable synthesizer document: {exc}") from exc
    except ConfigError as exc:
        raise FormatError(f"unparsable synthesizer document: {exc}") from exc


# ------------------------------------------------------------------ text/io
def dumps(synth: Synthesizer, *, indent: int | None = None) -> str:
    return json.dumps(to_json(synth), indent=indent)


def loads(text: str) -> Synthesizer:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FormatError(f"unparsable synthesizer document: {exc}") from exc
    return from_json(document)


def save(path: str | Path, synth: Synthesizer, *, indent: int | None = 2) -> Path:
    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    with destination.open("w", encoding="utf-8") as handle:
        json.dump(to_json(synth), handle, indent=indent)
        handle.write("\n")
    logger.info("saved synthesizer document to %s", destination)
    return destination


def load(path: str | Path) -> Synthesizer:
    source = Path(path)
    with source.open("r", encoding="utf-8") as handle:
        synth = loads(handle.read())
    logger.info("loaded synthesizer document from %s", source)
    return synth


__all__ = ["FORMAT_VERSION", "to_json", "from_json", "dumps", "loads", "save", "load"]
