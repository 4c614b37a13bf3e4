"""Generation loop driver with optional Parquet generation log."""

from __future__ import annotations

import logging
from pathlib import Path

import pyarrow.parquet as pq

from followflee.config.constants import FLUSH_THRESHOLD
from followflee.io.paths import generation_log_path, logs_dir
from followflee.io.schemas import GENERATION_LOG_SCHEMA
from followflee.simulation.metrics import summarize_population
from followflee.simulation.model import FollowFleeModel
from followflee.simulation.persistence import flush_generation_columns

logger = logging.getLogger(__name__)


def run_generations(
    model: FollowFleeModel,
    generations: int,
    *,
    run_id: str = "run",
    out_dir: Path | None = None,
    check_invariants: bool = False,
) -> list[dict[str, int | float | str | None]]:
    """Step an initialised model ``generations`` times and summarise each boundary.

    Row 0 describes the population before the first generation. When
    ``out_dir`` is given, rows are also streamed to
    ``<out_dir>/logs/generation_log.parquet``. With ``check_invariants`` the
    agent/empty-cell partition is verified after every generation.
    """
    if generations < 0:
        raise ValueError("generations must be >= 0")

    writer: pq.ParquetWriter | None = None
    log_path: Path | None = None
    if out_dir is not None:
        logs_dir(Path(out_dir)).mkdir(parents=True, exist_ok=True)
        log_path = generation_log_path(Path(out_dir))
    columns: dict[str, list[int | float | str | None]] = {
        f.name: [] for f in GENERATION_LOG_SCHEMA
    }
    rows: list[dict[str, int | float | str | None]] = []

    def record(generation: int) -> None:
        nonlocal writer
        row: dict[str, int | float | str | None] = {"run_id": run_id}
        row.update(summarize_population(model.graph, model.agents, generation))
        rows.append(row)
        if log_path is None:
            return
        for name, values in columns.items():
            values.append(row[name])
        if len(columns["run_id"]) >= FLUSH_THRESHOLD:
            writer = flush_generation_columns(columns, log_path, writer)

    logger.info("Run %s: %d generations, %d agents", run_id, generations, len(model.agents))
    try:
        if check_invariants:
            model.check_partition()
        record(0)
        for generation in range(1, generations + 1):
            if not model.algorithm_step():
                logger.info("Run %s stopped by the model at generation %d", run_id, generation)
                break
            if check_invariants:
                model.check_partition()
            record(generation)
        if log_path is not None:
            writer = flush_generation_columns(columns, log_path, writer)
    finally:
        if writer is not None:
            writer.close()

    logger.info("Run %s finished with %d agents", run_id, len(model.agents))
    return rows
