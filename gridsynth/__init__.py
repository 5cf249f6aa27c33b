"""Rewrite-rule grid synthesis for procedural content generation."""

from .alphabet import EMPTY, WILDCARD, Alphabet, Symbol
from .codec import FORMAT_VERSION, dumps, from_json, load, loads, save, to_json
from .config import SynthesisConfig, build_synthesis_config, load_config
from .errors import ConfigError, FormatError, GridSynthError, SymbolLookupError
from .grid import Grid, SeededRNG
from .metrics import count_changed_cells, symbol_counts
from .synthesizer import StageRecord, Synthesizer
from .transformations import (
    TRANSFORMATION_TYPES,
    RandomTransformation,
    Replacement,
    RuleBasedTransformation,
    Transformation,
    register_transformation,
)

__all__ = [
    "Grid",
    "SeededRNG",
    "Symbol",
    "Alphabet",
    "EMPTY",
    "WILDCARD",
    "Transformation",
    "RandomTransformation",
    "RuleBasedTransformation",
    "Replacement",
    "TRANSFORMATION_TYPES",
    "register_transformation",
    "Synthesizer",
    "StageRecord",
    "FORMAT_VERSION",
    "to_json",
    "from_json",
    "dumps",
    "loads",
    "save",
    "load",
    "SynthesisConfig",
    "load_config",
    "build_synthesis_config",
    "count_changed_cells",
    "symbol_counts",
    "GridSynthError",
    "ConfigError",
    "FormatError",
    "SymbolLookupError",
]
