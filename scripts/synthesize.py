"""Run a stored synthesizer document one or more times from YAML configuration."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from statistics import mean, median
from typing import Dict, Iterable, List, Mapping, Sequence

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from gridsynth import (
    GridSynthError,
    StageRecord,
    SynthesisConfig,
    build_synthesis_config,
    load,
    load_config,
    save,
    symbol_counts,
)

logger = logging.getLogger("gridsynth.scripts.synthesize")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synthesize grids from a stored document")
    parser.add_argument("--config", type=Path, default=None, help="Path to YAML config")
    parser.add_argument("--document", type=Path, default=None, help="Override the input document")
    parser.add_argument("--output", type=Path, default=None, help="Override the output root")
    parser.add_argument("--seed", type=int, default=None, help="Base seed for reproducible runs")
    parser.add_argument("--runs", type=int, default=None, help="Number of synthesis runs")
    parser.add_argument("--summary", type=Path, default=None, help="Optional path for JSON summary")
    parser.add_argument("--verbose", action="store_true", help="Log every pipeline stage")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SynthesisConfig:
    raw: Dict[str, object] = {}
    base_dir = None
    if args.config is not None:
        raw = load_config(args.config)
        base_dir = args.config.resolve().parent

    overrides = {
        "document": args.document,
        "output_root": args.output,
        "seed": args.seed,
        "runs": args.runs,
        "summary": args.summary,
    }
    for key, value in overrides.items():
        if value is not None:
            raw[key] = str(value.resolve()) if isinstance(value, Path) else value
    return build_synthesis_config(raw, base_dir=base_dir)


def describe(values: Iterable[int]) -> Dict[str, float]:
    seq = sorted(values)
    if not seq:
        return {}
    return {
        "min": float(seq[0]),
        "max": float(seq[-1]),
        "mean": float(mean(seq)),
        "median": float(median(seq)),
    }


def run_batch(config: SynthesisConfig) -> List[Dict[str, object]]:
    """Synthesize ``config.runs`` times, writing one document per run."""

    results: List[Dict[str, object]] = []
    for run in range(config.runs):
        synth = load(config.document)
        seed = config.run_seed(run)
        records: List[StageRecord] = synth.synthesize(seed=seed)
        destination = save(config.output_root / f"run_{run:04d}.json", synth, indent=config.indent)
        results.append(
            {
                "run": run,
                "seed": seed,
                "path": str(destination),
                "stages": [
                    {"name": record.name, "type": record.kind, "changed_cells": record.changed_cells}
                    for record in records
                ],
                "symbol_counts": symbol_counts(synth.grid),
            }
        )
    return results


def summarise(results: Sequence[Mapping[str, object]]) -> Dict[str, object]:
    totals: Dict[int, int] = {}
    changed: List[int] = []
    for result in results:
        for symbol_id, count in dict(result["symbol_counts"]).items():
            totals[symbol_id] = totals.get(symbol_id, 0) + count
        changed.append(sum(stage["changed_cells"] for stage in result["stages"]))

    return {
        "num_runs": len(results),
        "symbol_totals": {str(key): totals[key] for key in sorted(totals)},
        "changed_cells": describe(changed),
        "runs": list(results),
    }


def write_summary(path: Path, summary: Mapping[str, object]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(summary, handle, indent=2)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = build_config(args)
        results = run_batch(config)
    except (GridSynthError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    print(f"[synthesize] Wrote {len(results)} runs to {config.output_root}")

    summary = summarise(results)
    summary_path = config.summary_path or config.output_root / "summary.json"
    write_summary(summary_path, summary)
    print(f"[synthesize] Summary written to {summary_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
