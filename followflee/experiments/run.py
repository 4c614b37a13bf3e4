"""CLI entrypoint for a single follow/flee simulation run.

This module owns CLI argument parsing only. Domain logic lives in:

- ``followflee.config``              – configuration dataclasses
- ``followflee.simulation.model``    – the per-generation model
- ``followflee.experiments.host``    – host graph and initial population
- ``followflee.experiments.experiment`` – seeded end-to-end run
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path

from followflee.config.coerce import coerce_float, coerce_int, coerce_str
from followflee.config.constants import NUM_GENERATIONS
from followflee.config.types import (
    ModelConfig,
    PopulationConfig,
    ReplacementMode,
    SimulationConfig,
    Topology,
    parse_replacement_mode,
    parse_topology,
)
from followflee.errors import ModelIntegrityError
from followflee.experiments.experiment import run_experiment

logger = logging.getLogger(__name__)


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    return coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_float(
    cli_val: float | None, key: str, file_cfg: dict[str, object], default: float
) -> float:
    return coerce_float(_get_val(cli_val, key, file_cfg, default), key)


def _get_str(cli_val: str | None, key: str, file_cfg: dict[str, object], default: str) -> str:
    return coerce_str(_get_val(cli_val, key, file_cfg, default), key)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Run a follow/flee spatial prisoner's dilemma")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument(
        "--topology", type=str, choices=[t.value for t in Topology], default=None
    )
    parser.add_argument("--size", type=int, default=None)
    parser.add_argument("--degree", type=int, default=None)
    parser.add_argument("--density", type=float, default=None)
    parser.add_argument("--cooperator-fraction", type=float, default=None)
    parser.add_argument(
        "--rep-mode", type=str, choices=[m.value for m in ReplacementMode], default=None
    )
    parser.add_argument("--rep-rate", type=float, default=None)
    parser.add_argument("--steps-per-gen", type=int, default=None)
    parser.add_argument("--generations", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for a simulation run.

    Supports ``--config path/to/config.json`` for reproducibility. CLI
    arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")

    try:
        topology = parse_topology(
            _get_str(args.topology, "topology", file_cfg, Topology.TORUS.value)
        )
        rep_mode = parse_replacement_mode(
            _get_str(args.rep_mode, "rep_mode", file_cfg, ReplacementMode.SIMPLE_BD.value)
        )
        out_dir_raw = _get_val(args.out_dir, "out_dir", file_cfg, None)
        config = SimulationConfig(
            topology=topology,
            size=_get_int(args.size, "size", file_cfg, 20),
            degree=_get_int(args.degree, "degree", file_cfg, 4),
            population=PopulationConfig(
                density=_get_float(args.density, "density", file_cfg, 0.5),
                cooperator_fraction=_get_float(
                    args.cooperator_fraction, "cooperator_fraction", file_cfg, 0.5
                ),
            ),
            model=ModelConfig(
                rep_mode=rep_mode,
                rep_rate=_get_float(args.rep_rate, "rep_rate", file_cfg, 0.1),
                steps_per_gen=_get_int(args.steps_per_gen, "steps_per_gen", file_cfg, 1),
            ),
            generations=_get_int(args.generations, "generations", file_cfg, NUM_GENERATIONS),
            seed=_get_int(args.seed, "seed", file_cfg, 0),
            out_dir=None if out_dir_raw is None else Path(coerce_str(out_dir_raw, "out_dir")),
        )
    except (ValueError, ModelIntegrityError) as exc:
        parser.error(str(exc))

    result = run_experiment(config)
    logger.info("Finished %s", result.run_id)
    print(json.dumps(asdict(result), ensure_ascii=False, indent=2, allow_nan=False))


if __name__ == "__main__":
    main()
