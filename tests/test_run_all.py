"""Tests for run_all entry point (training run outputs)."""
import csv
import json
import os
import sys
import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture(scope="module")
def training_run(tmp_path_factory):
    from src.run_all import run_training
    outputs = tmp_path_factory.mktemp("outputs")
    return run_training(num_seeds=1, outputs_dir=str(outputs)), outputs


def test_run_training_returns_dict_with_required_keys(training_run):
    out, _ = training_run
    for key in (
        "module", "route", "plan_wind", "actual_base_wind", "tas", "flight_log",
        "ata_errors_min", "completed", "total_time_s", "events", "track", "robustness",
    ):
        assert key in out
    assert out["module"] == "Dead-reckoning training run"
    assert out["route"] == ["KWA", "TGU", "PSN", "KWA"]


def test_run_training_completes_route(training_run):
    out, _ = training_run
    assert out["completed"]
    assert len(out["captured_at_s"]) == 3
    assert out["flight_log"][0]["remark"] == "START"
    assert out["flight_log"][-1]["remark"] == "END"
    assert out["robustness"]["runs"] == 1
    assert out["planned_total_ete_min"] > 0


def test_run_training_writes_outputs(training_run):
    out, outputs = training_run
    with open(os.path.join(outputs, "training_run.json")) as f:
        data = json.load(f)
    assert data["route"] == out["route"]
    with open(os.path.join(outputs, "flight_log.csv"), newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 4
    assert rows[1]["navaid"] == "TGU"
    assert os.path.isfile(os.path.join(outputs, "training_track.png"))
