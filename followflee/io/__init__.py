"""I/O layer: Parquet schemas and output path helpers."""

from followflee.io.paths import generation_log_path, logs_dir
from followflee.io.schemas import GENERATION_LOG_SCHEMA, GENERATION_METRIC_NAMES

__all__ = [
    "GENERATION_LOG_SCHEMA",
    "GENERATION_METRIC_NAMES",
    "generation_log_path",
    "logs_dir",
]
