"""Unit tests for header and value normalization."""
import math
from datetime import datetime

import pytest

from windfarm_ops.schemas.enums import Priority, Severity, Status
from windfarm_ops.transformers.normalization import (
    clean_field,
    clean_row,
    normalize_boolean,
    normalize_header,
    normalize_headers,
    normalize_priority,
    normalize_severity,
    normalize_status,
    parse_date,
    parse_float,
)


class TestNormalizeHeader:
    """Test header synonym mapping."""

    @pytest.mark.parametrize("raw,expected", [
        ("site id", "site_id"),
        ("Site ID", "site_id"),
        ("  SITE_ID  ", "site_id"),
        ("siteid", "site_id"),
        ("Turbine Make", "turbine_make"),
        ("Failure Mode", "failure_mode_name"),
        ("Case ID", "case_id"),
        ("Priority Changed", "priority_changed"),
        ("lng", "longitude"),
        ("ID", "id"),
    ])
    def test_known_headers(self, raw, expected):
        """Synonyms map case- and whitespace-insensitively."""
        assert normalize_header(raw) == expected

    def test_unknown_header_strips_whitespace(self):
        """Unmapped headers keep their spelling minus whitespace."""
        assert normalize_header(" Work Order Ref ") == "WorkOrderRef"

    def test_headers_keep_order(self):
        """A header row is normalized position by position."""
        assert normalize_headers(["Site Name", "Lat", "Extra Col"]) == [
            "site_name", "latitude", "ExtraCol",
        ]


class TestCleanField:
    """Test cell cleaning."""

    @pytest.mark.parametrize("raw,expected", [
        ("  abc  ", "abc"),
        ("", None),
        ("   ", None),
        (None, None),
        (float('nan'), None),
        (5, 5),
    ])
    def test_clean_field(self, raw, expected):
        """Blanks become None, strings are trimmed, others pass through."""
        assert clean_field(raw) == expected

    def test_clean_row(self):
        """Keys are normalized and values cleaned together."""
        assert clean_row({"Site ID": " S1 ", "Severity": ""}) == {
            "site_id": "S1",
            "severity": None,
        }


class TestParseDate:
    """Test ISO-8601 parsing."""

    def test_date_only(self):
        """A bare date parses to midnight."""
        assert parse_date("2025-03-04") == datetime(2025, 3, 4)

    def test_datetime(self):
        """A full timestamp keeps its time of day."""
        assert parse_date("2025-03-04T10:30:00") == datetime(2025, 3, 4, 10, 30)

    def test_offset_converted_to_naive_utc(self):
        """Offsets are converted to UTC and dropped."""
        assert parse_date("2025-03-04T10:30:00+02:00") == datetime(2025, 3, 4, 8, 30)

    @pytest.mark.parametrize("raw", [None, "", "   ", "not-a-date", "31/31/2025"])
    def test_invalid_returns_none(self, raw):
        """Missing or garbage input is None, never an exception."""
        assert parse_date(raw) is None

    def test_datetime_passthrough(self):
        """datetime values are accepted as-is."""
        value = datetime(2025, 1, 2, 3, 4, 5)
        assert parse_date(value) == value


class TestParseFloat:
    """Test numeric parsing."""

    def test_valid(self):
        """Numeric strings parse."""
        assert parse_float(" 55.25 ") == 55.25

    @pytest.mark.parametrize("raw", ["abc", "", None, "inf"])
    def test_invalid_uses_default(self, raw):
        """Unparseable input falls back to the default."""
        assert parse_float(raw) is None
        assert parse_float(raw, default=0.0) == 0.0


class TestNormalizeSeverity:
    """Test severity vocabulary."""

    @pytest.mark.parametrize("raw,expected", [
        ("Critical", Severity.CRITICAL),
        ("CRIT", Severity.CRITICAL),
        ("High", Severity.HIGH),
        ("p1", Severity.HIGH),
        ("Medium", Severity.MEDIUM),
        ("med", Severity.MEDIUM),
        ("P2", Severity.MEDIUM),
        ("low", Severity.LOW),
        ("p3", Severity.LOW),
        ("p4", Severity.LOW),
        ("", Severity.LOW),
        (None, Severity.LOW),
        ("unknown", Severity.LOW),
    ])
    def test_vocabulary(self, raw, expected):
        """Substring checks run in the fixed crit/high/med/low order."""
        assert normalize_severity(raw) == expected

    def test_crit_checked_before_high(self):
        """An ambiguous value resolves to the first matching rule."""
        assert normalize_severity("high-critical") == Severity.CRITICAL


class TestNormalizeStatus:
    """Test status vocabulary."""

    @pytest.mark.parametrize("raw,expected", [
        ("Closed", Status.CLOSED),
        ("closed - verified", Status.CLOSED),
        ("done", Status.CLOSED),
        ("complete", Status.CLOSED),
        ("In Progress", Status.IN_PROGRESS),
        ("in-progress", Status.IN_PROGRESS),
        ("inprogress", Status.IN_PROGRESS),
        ("Blocked", Status.BLOCKED),
        ("Open", Status.OPEN),
        ("new", Status.OPEN),
        ("pending", Status.OPEN),
        ("", Status.OPEN),
        ("whatever", Status.OPEN),
    ])
    def test_vocabulary(self, raw, expected):
        """Closed, in-progress, blocked, open are checked in that order."""
        assert normalize_status(raw) == expected


class TestNormalizePriority:
    """Test priority vocabulary."""

    @pytest.mark.parametrize("raw,expected", [
        ("P1", Priority.P1),
        ("p2", Priority.P2),
        (" P3 ", Priority.P3),
        ("p4", Priority.P4),
        ("Critical", Priority.CRITICAL),
        ("high", Priority.HIGH),
        ("Medium", Priority.MEDIUM),
        ("LOW", Priority.LOW),
        ("", Priority.LOW),
        ("P5", Priority.LOW),
    ])
    def test_vocabulary(self, raw, expected):
        """Both notations are preserved as given."""
        assert normalize_priority(raw) == expected

    def test_notations_are_not_merged(self):
        """P1 and Critical stay distinct members."""
        assert normalize_priority("P1") != normalize_priority("Critical")


class TestNormalizeBoolean:
    """Test boolean coercion."""

    @pytest.mark.parametrize("raw,expected", [
        (True, True),
        (False, False),
        (1, True),
        (0, False),
        (2.5, True),
        (math.nan, False),
        ("true", True),
        ("TRUE", True),
        ("1", True),
        ("Yes", True),
        ("no", False),
        ("0", False),
        ("", False),
        (None, False),
    ])
    def test_coercion(self, raw, expected):
        """Only true / 1 / yes strings and non-zero numbers are true."""
        assert normalize_boolean(raw) is expected
