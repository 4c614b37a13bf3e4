"""Parquet schema definitions for simulation artifacts."""

from __future__ import annotations

import pyarrow as pa

GENERATION_LOG_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("generation", pa.int64()),
        ("n_agents", pa.int64()),
        ("n_cooperators", pa.int64()),
        ("n_defectors", pa.int64()),
        ("mean_score", pa.float64()),
        ("score_variance", pa.float64()),
        ("min_score", pa.int64()),
        ("max_score", pa.int64()),
        ("distinct_genomes", pa.int64()),
        ("genome_entropy", pa.float64()),
    ]
)

# Column order of GENERATION_LOG_SCHEMA, minus run_id
GENERATION_METRIC_NAMES = [f.name for f in GENERATION_LOG_SCHEMA if f.name != "run_id"]
