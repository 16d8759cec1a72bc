"""
Tests for journal parsing and streaming.

Critical: every malformed line must surface as a failed result, never as
an exception that would abort the replay.
"""

import datetime
import os
import tempfile
from decimal import Decimal

import pytest

from stockreplay.core.errors import ErrorType, JournalReadError
from stockreplay.core.events import MovementKind
from stockreplay.journal import MovementStream, open_journal, parse_movement_line
from stockreplay.tests.csvlines import JOURNAL_HEADER, journal_line, write_file


def test_parse_valid_line():
    line = journal_line(4711, 815, "BEWGAB", "-2.000", "2.000", "2024-03-01", batch1="B-7")

    result = parse_movement_line(line + "\r\n")

    assert result.ok
    mv = result.value
    assert mv.sequence_number == 4711
    assert mv.stock_key == 815
    assert mv.kind is MovementKind.MOVEMENT_OUT
    assert mv.quantity_change == Decimal("-2.000")
    assert mv.quantity_total == Decimal("2.000")
    assert mv.date == datetime.date(2024, 3, 1)
    assert mv.batch1 == "B-7"
    assert mv.client == 250
    assert mv.raw_line == line


def test_event_code_is_case_insensitive():
    result = parse_movement_line(journal_line(1, 2, "invzhl", "1", "1"))

    assert result.ok
    assert result.value.kind is MovementKind.INVENTORY_COUNT


def test_all_event_codes_parse():
    for kind in MovementKind:
        result = parse_movement_line(journal_line(1, 2, kind.code, "1", "1"))
        assert result.ok, kind
        assert result.value.kind is kind


def test_placeholders_parse_to_none():
    """Underscore runs used by the export for empty values become None."""
    line = journal_line(1, 2, "BEWGZU", "_" * 10, "_" * 20, "", batch1="_" * 10)

    result = parse_movement_line(line)

    assert result.ok
    assert result.value.quantity_change is None
    assert result.value.quantity_total is None
    assert result.value.batch1 is None
    assert result.value.change == Decimal(0)
    assert result.value.total == Decimal(0)


def test_blank_line_fails():
    for line in ("", "   ", "\n"):
        result = parse_movement_line(line)
        assert not result.ok
        assert result.error.type is ErrorType.PARSE_ERROR
        assert result.error.message == "CSV line is null or empty"


def test_wrong_field_count():
    line = journal_line(1, 2, "BEWGZU") + ",extra"

    result = parse_movement_line(line)

    assert not result.ok
    assert result.error.type is ErrorType.INVALID_FIELD_COUNT
    assert result.error.message == "Expected 22 fields but got 23"
    assert result.error.source == line


def test_unknown_event_code():
    result = parse_movement_line(journal_line(1, 2, "XXXXXX"))

    assert not result.ok
    assert result.error.type is ErrorType.INVALID_EVENT
    assert result.error.message == "Invalid event value: XXXXXX"


def test_missing_event_code():
    result = parse_movement_line(journal_line(1, 2, ""))

    assert not result.ok
    assert result.error.type is ErrorType.INVALID_EVENT


def test_bad_number():
    result = parse_movement_line(journal_line(1, 2, "BEWGZU", "1.5x"))

    assert not result.ok
    assert result.error.type is ErrorType.INVALID_NUMBER_FORMAT
    assert "quantity_change" in result.error.message


def test_non_finite_number_is_rejected():
    result = parse_movement_line(journal_line(1, 2, "BEWGZU", "NaN"))

    assert not result.ok
    assert result.error.type is ErrorType.INVALID_NUMBER_FORMAT


def test_bad_sequence_number():
    result = parse_movement_line(journal_line("abc", 2, "BEWGZU"))

    assert not result.ok
    assert result.error.type is ErrorType.INVALID_NUMBER_FORMAT
    assert "sequence_number" in result.error.message


def test_bad_date():
    result = parse_movement_line(journal_line(1, 2, "BEWGZU", date="01.03.2024"))

    assert not result.ok
    assert result.error.type is ErrorType.INVALID_DATE_FORMAT
    assert "date" in result.error.message


def test_missing_keys():
    result = parse_movement_line(journal_line("", 2, "BEWGZU"))
    assert not result.ok
    assert result.error.type is ErrorType.PARSE_ERROR
    assert "sequence_number" in result.error.message

    result = parse_movement_line(journal_line(1, "", "BEWGZU"))
    assert not result.ok
    assert "stock_key" in result.error.message


def test_stream_skips_header_and_yields_in_file_order():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = write_file(
            os.path.join(tmpdir, "journal.csv"),
            [
                journal_line(9, 1, "BEWGZU", "1", "1"),
                "garbage",
                journal_line(7, 2, "BEWGAB", "-1", "1"),
            ],
            header=JOURNAL_HEADER,
        )

        with open_journal(path) as stream:
            results = list(stream)

    assert len(results) == 3
    assert results[0].value.sequence_number == 9
    assert not results[1].ok
    assert results[1].error.type is ErrorType.INVALID_FIELD_COUNT
    assert results[2].value.sequence_number == 7


def test_stream_without_header_keeps_first_line():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = write_file(os.path.join(tmpdir, "journal.csv"), [journal_line(9, 1, "BEWGZU", "1", "1")])

        with open_journal(path) as stream:
            results = list(stream)

    assert [r.value.sequence_number for r in results] == [9]


def test_stream_reports_blank_lines():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = write_file(
            os.path.join(tmpdir, "journal.csv"),
            [journal_line(9, 1, "BEWGZU", "1", "1"), "", journal_line(8, 1, "BEWGZU", "1", "1")],
        )

        with open_journal(path) as stream:
            results = list(stream)

    assert [r.ok for r in results] == [True, False, True]
    assert results[1].error.type is ErrorType.PARSE_ERROR


def test_stream_handles_utf8_bom():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "journal.csv")
        with open(path, "w", encoding="utf-8-sig") as f:
            f.write(journal_line(9, 1, "BEWGZU", "1", "1") + "\n")

        with open_journal(path) as stream:
            results = list(stream)

    assert results[0].ok
    assert results[0].value.sequence_number == 9


def test_stream_closes_on_early_exit():
    """The handle is released even when iteration stops early."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = write_file(
            os.path.join(tmpdir, "journal.csv"),
            [journal_line(seq, 1, "BEWGZU", "1", "1") for seq in (5, 4, 3)],
        )

        with open_journal(path) as stream:
            first = next(iter(stream))
            assert not stream.closed

        assert first.value.sequence_number == 5
        assert stream.closed


def test_missing_journal_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(JournalReadError):
            open_journal(os.path.join(tmpdir, "missing.csv"))


def test_iterating_unopened_stream_raises():
    stream = MovementStream("never-opened.csv")

    with pytest.raises(JournalReadError):
        list(stream)
