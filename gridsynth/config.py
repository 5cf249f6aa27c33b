"""Batch synthesis run configuration loaded from YAML."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from .errors import ConfigError


@dataclass(frozen=True)
class SynthesisConfig:
    """Settings for one batch of synthesis runs over a stored document."""

    document: Path
    output_root: Path
    runs: int = 1
    seed: int | None = None
    summary_path: Path | None = None
    indent: int | None = 2

    def __post_init__(self) -> None:
        if self.runs <= 0:
            raise ConfigError("runs must be positive")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ConfigError("seed must be an integer")
        if self.indent is not None and self.indent < 0:
            raise ConfigError("indent cannot be negative")

    def run_seed(self, run: int) -> int | None:
        """Seed for the ``run``-th synthesis, or ``None`` for fresh entropy."""

        if self.seed is None:
            return None
        return self.seed + run


def load_config(path: str | Path) -> Dict[str, Any]:
    source = Path(path)
    with source.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"configuration must be a mapping: {source}")
    return dict(data)


def build_synthesis_config(raw: Mapping[str, Any], base_dir: Path | None = None) -> SynthesisConfig:
    """Validate a raw mapping; relative paths resolve against ``base_dir``."""

    def resolve(value: Any) -> Path:
        candidate = Path(str(value))
        if base_dir is not None and not candidate.is_absolute():
            return base_dir / candidate
        return candidate

    if "document" not in raw:
        raise ConfigError("config must provide a 'document' path")
    if "output_root" not in raw:
        raise ConfigError("config must provide an 'output_root' path")

    try:
        runs = int(raw.get("runs", 1))
        indent = raw.get("indent", 2)
        indent = None if indent is None else int(indent)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid numeric setting: {exc}") from exc

    summary = raw.get("summary")
    return SynthesisConfig(
        document=resolve(raw["document"]),
        output_root=resolve(raw["output_root"]),
        runs=runs,
        seed=raw.get("seed"),
        summary_path=resolve(summary) if summary is not None else None,
        indent=indent,
    )


__all__ = ["SynthesisConfig", "load_config", "build_synthesis_config"]
