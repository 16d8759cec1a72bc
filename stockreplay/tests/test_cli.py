"""
Tests for the stockreplay command-line interface.
"""

import json
import logging
import os
import tempfile

import pytest
from typer.testing import CliRunner

from cli.main import app
from stockreplay.tests.csvlines import JOURNAL_HEADER, STOCK_HEADER, journal_line, stock_line, write_file

runner = CliRunner()

SNAPSHOT = [stock_line(1, "5.000"), stock_line(2, "2.000", item_number="B-200")]
JOURNAL = [
    journal_line(30, 1, "BEWGAB", "-2.000", "2.000", "2024-03-05"),
    journal_line(20, 3, "BEWGZU", "1.000", "4.000", "2024-03-04"),
    journal_line(10, 1, "INVZHL", "0", "7.000", "2024-03-01"),
]


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI reconfigures the root logger; put the previous handlers back."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def invoke(*args):
    return runner.invoke(app, ["--log-level", "ERROR", *args])


def write_inputs(tmpdir, journal=JOURNAL):
    stock_path = write_file(os.path.join(tmpdir, "stock.csv"), SNAPSHOT, header=STOCK_HEADER)
    movement_path = write_file(os.path.join(tmpdir, "journal.csv"), journal, header=JOURNAL_HEADER)
    return stock_path, movement_path


def test_replay_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        stock_path, movement_path = write_inputs(tmpdir)

        result = invoke("replay", "-s", stock_path, "-m", movement_path, "--no-write", "--json")

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["success"] is True
    assert data["critical"] is False
    assert data["movements_consumed"] == 3
    assert data["stock_lines"] == 3
    assert len(data["stock_hash"]) == 64
    assert data["error_counts"] == {}
    assert "stock_file" not in data


def test_replay_writes_result_files():
    with tempfile.TemporaryDirectory() as tmpdir:
        stock_path, movement_path = write_inputs(tmpdir)
        out = os.path.join(tmpdir, "results")

        result = invoke("replay", "-s", stock_path, "-m", movement_path, "-o", out, "--json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert os.path.exists(data["stock_file"])
        assert os.path.exists(data["error_file"])
        assert sorted(os.listdir(out)) == sorted(
            [os.path.basename(data["error_file"]), os.path.basename(data["stock_file"])]
        )


def test_replay_filter_and_line():
    with tempfile.TemporaryDirectory() as tmpdir:
        stock_path, movement_path = write_inputs(tmpdir)

        result = invoke(
            "replay", "-s", stock_path, "-m", movement_path, "--no-write", "--json",
            "--filter", "B-200", "--line", "1",
        )

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert [line["sequence_number"] for line in data["stock"]] == [2]
    assert data["line"]["quantity_on_hand"] == "7.000"
    assert len(data["line_movements"]) == 2


def test_replay_cutoff_option():
    with tempfile.TemporaryDirectory() as tmpdir:
        stock_path, movement_path = write_inputs(tmpdir)

        result = invoke("replay", "-s", stock_path, "-m", movement_path, "--no-write", "--json", "--date", "2024-03-02")

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["lines_finalized"] == 1


def test_replay_critical_exit_code():
    journal = [journal_line(10, 1, "BEWGNG", "0", "5"), journal_line(11, 1, "BEWGNG", "0", "5")]
    with tempfile.TemporaryDirectory() as tmpdir:
        stock_path, movement_path = write_inputs(tmpdir, journal=journal)

        result = invoke("replay", "-s", stock_path, "-m", movement_path, "--no-write", "--json")

    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["success"] is False
    assert data["error_counts"] == {"MOVEMENT_ID_OUT_OF_ORDER": 1}


def test_replay_missing_input_exit_code():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = invoke(
            "replay", "-s", os.path.join(tmpdir, "missing.csv"), "-m", os.path.join(tmpdir, "missing.csv"),
            "--no-write",
        )

    assert result.exit_code == 2


def test_replay_human_output():
    with tempfile.TemporaryDirectory() as tmpdir:
        stock_path, movement_path = write_inputs(tmpdir)

        result = invoke("replay", "-s", stock_path, "-m", movement_path, "--no-write", "--line", "1")

    assert result.exit_code == 0, result.output
    assert "Replay finished" in result.output
    assert "Stock hash" in result.output


def test_journal_inspect_filters():
    with tempfile.TemporaryDirectory() as tmpdir:
        _, movement_path = write_inputs(tmpdir, journal=JOURNAL + ["bad,line"])

        result = invoke("journal", "inspect", "-m", movement_path, "--kind", "INVENTORY_COUNT", "--json")

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["count"] == 1
    assert data["movements"][0]["sequence_number"] == 10
    assert data["movements"][0]["kind"] == "INVENTORY_COUNT"
    assert [e["type"] for e in data["errors"]] == ["INVALID_FIELD_COUNT"]


def test_journal_inspect_by_code_and_range():
    with tempfile.TemporaryDirectory() as tmpdir:
        _, movement_path = write_inputs(tmpdir)

        by_code = invoke("journal", "inspect", "-m", movement_path, "--kind", "bewgab", "--json")
        by_range = invoke("journal", "inspect", "-m", movement_path, "--from", "15", "--to", "30", "--json")

    assert [mv["sequence_number"] for mv in json.loads(by_code.stdout)["movements"]] == [30]
    assert [mv["sequence_number"] for mv in json.loads(by_range.stdout)["movements"]] == [30, 20]


def test_journal_inspect_unknown_kind():
    with tempfile.TemporaryDirectory() as tmpdir:
        _, movement_path = write_inputs(tmpdir)

        result = invoke("journal", "inspect", "-m", movement_path, "--kind", "NOPE")

    assert result.exit_code == 2


def test_stock_show_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        stock_path, _ = write_inputs(tmpdir)

        result = invoke("stock", "show", "-s", stock_path, "--filter", "b-200", "--json")

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["count"] == 1
    assert data["total"] == 2
    assert data["stock"][0]["item_number"] == "B-200"


def test_stock_show_missing_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = invoke("stock", "show", "-s", os.path.join(tmpdir, "missing.csv"))

    assert result.exit_code == 2


def test_version():
    result = invoke("version")

    assert result.exit_code == 0
    assert "0.1.0" in result.output
