"""Tests for the Record model, timestamps and the filter-to-predicate builder."""

import datetime

import pytest
from pydantic import ValidationError

from models import Record, RecordFilter, build_predicates, utc_now_iso


# ---------------------------------------------------------------------------
# Record
# ---------------------------------------------------------------------------

class TestRecord:
    def test_required_fields(self):
        r = Record(id="x", origin="web-app", mime_data="hello", datetime="2025-04-09T00:00:00.000Z")
        assert r.id == "x"
        assert r.origin == "web-app"
        assert r.mime_data == "hello"
        assert r.datetime == "2025-04-09T00:00:00.000Z"

    def test_datetime_defaults_to_now(self):
        r = Record(id="x", origin="o", mime_data="m")
        assert r.datetime.endswith("Z")

    def test_missing_id_raises(self):
        with pytest.raises(ValidationError):
            Record(origin="o", mime_data="m")

    def test_as_row_column_order(self):
        r = Record(id="x", origin="o", mime_data="m", datetime="t")
        assert r.as_row() == ("x", "o", "m", "t")


class TestUtcNowIso:
    def test_format(self):
        ts = utc_now_iso()
        assert len(ts) == len("2025-04-09T12:34:56.789Z")
        assert ts[10] == "T"
        assert ts.endswith("Z")

    def test_is_current_utc(self):
        before = datetime.datetime.now(datetime.timezone.utc)
        ts = utc_now_iso()
        parsed = datetime.datetime.strptime(ts, "%Y-%m-%dT%H:%M:%S.%fZ").replace(
            tzinfo=datetime.timezone.utc
        )
        assert abs((parsed - before).total_seconds()) < 5


# ---------------------------------------------------------------------------
# Predicate builder
# ---------------------------------------------------------------------------

class TestBuildPredicates:
    def test_no_filters(self):
        assert build_predicates(RecordFilter()) == ("", [])

    def test_origin_only(self):
        assert build_predicates(RecordFilter(origin="A")) == (" WHERE origin = ?", ["A"])

    def test_date_only(self):
        clause, params = build_predicates(RecordFilter(date="2025-04-09"))
        assert clause == " WHERE DATE(datetime) = ?"
        assert params == ["2025-04-09"]

    def test_both_filters_and_combined(self):
        clause, params = build_predicates(RecordFilter(origin="A", date="2025-04-09"))
        assert clause == " WHERE origin = ? AND DATE(datetime) = ?"
        assert params == ["A", "2025-04-09"]

    def test_values_never_inlined(self):
        clause, params = build_predicates(RecordFilter(origin="x'; DROP TABLE received_data; --"))
        assert "DROP" not in clause
        assert params == ["x'; DROP TABLE received_data; --"]

    def test_empty_strings_ignored(self):
        assert build_predicates(RecordFilter(origin="", date="")) == ("", [])
