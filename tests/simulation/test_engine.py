"""Tests for followflee.simulation.engine module."""

from __future__ import annotations

import math
from pathlib import Path
from random import Random

import networkx as nx
import pyarrow.parquet as pq
import pytest

from followflee.config.constants import COOPERATOR, DEFECTOR, EMPTY
from followflee.config.types import ModelConfig, ReplacementMode
from followflee.domain.cells import write_attrs
from followflee.domain.graph import NetworkxNodeGraph
from followflee.io.paths import generation_log_path
from followflee.io.schemas import GENERATION_LOG_SCHEMA
from followflee.simulation.engine import run_generations
from followflee.simulation.model import FollowFleeModel


def _model(rep_rate: float = 0.25) -> FollowFleeModel:
    graph = NetworkxNodeGraph(nx.cycle_graph(10))
    cells = {0: (COOPERATOR, 17, 0), 3: (DEFECTOR, 200, 0), 5: (COOPERATOR, 64, 0)}
    cells[8] = (DEFECTOR, 3, 0)
    for node_id in graph.node_ids():
        write_attrs(graph, node_id, cells.get(node_id, (EMPTY, 0, 0)))
    config = ModelConfig(ReplacementMode.NEIGHBOUR_BD, rep_rate, 2)
    return FollowFleeModel.from_config(graph, config, Random(3))


def test_rows_start_with_initial_state() -> None:
    rows = run_generations(_model(), 3, run_id="ring10")
    assert [row["generation"] for row in rows] == [0, 1, 2, 3]
    assert all(row["run_id"] == "ring10" for row in rows)
    assert all(row["n_agents"] == 4 for row in rows)
    assert rows[0]["mean_score"] == 0.0
    assert rows[0]["distinct_genomes"] == 4


def test_zero_generations_only_records_initial_state() -> None:
    model = _model()
    rows = run_generations(model, 0)
    assert len(rows) == 1
    assert model.generation == 0


def test_negative_generations_rejected() -> None:
    with pytest.raises(ValueError, match="generations"):
        run_generations(_model(), -1)


def test_check_invariants_passes_on_valid_model() -> None:
    rows = run_generations(_model(rep_rate=1.0), 5, check_invariants=True)
    assert len(rows) == 6


def test_writes_generation_log_parquet(tmp_path: Path) -> None:
    rows = run_generations(_model(), 4, run_id="ring10", out_dir=tmp_path)

    table = pq.read_table(generation_log_path(tmp_path))
    assert table.schema.names == GENERATION_LOG_SCHEMA.names
    assert table.num_rows == 5
    assert table.column("generation").to_pylist() == [0, 1, 2, 3, 4]
    assert table.column("n_agents").to_pylist() == [row["n_agents"] for row in rows]
    assert set(table.column("run_id").to_pylist()) == {"ring10"}


def test_no_output_without_out_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    run_generations(_model(), 2)
    assert list(tmp_path.iterdir()) == []


def test_log_flushes_in_batches(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("followflee.simulation.engine.FLUSH_THRESHOLD", 2)
    run_generations(_model(), 6, out_dir=tmp_path)

    parquet = pq.ParquetFile(generation_log_path(tmp_path))
    assert parquet.metadata.num_rows == 7
    assert parquet.metadata.num_row_groups > 1


def test_empty_population_logs_nan_scores(tmp_path: Path) -> None:
    graph = NetworkxNodeGraph(nx.cycle_graph(4))
    model = FollowFleeModel.from_config(graph, ModelConfig(), Random(0))
    rows = run_generations(model, 2, out_dir=tmp_path)
    assert math.isnan(rows[-1]["mean_score"])  # type: ignore[arg-type]
    assert rows[-1]["min_score"] is None

    table = pq.read_table(generation_log_path(tmp_path))
    assert table.column("min_score").to_pylist() == [None, None, None]
