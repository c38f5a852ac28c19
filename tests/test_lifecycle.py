"""
Tests for release lifecycle evaluation.

Tests cover:
- RELEASES / EOM / EOL table integrity
- "major.minor" key derivation
- End of maintenance / end of life evaluation against a reference time
"""

from datetime import datetime, timedelta, timezone

import pytest

from ibexa_system_info.lifecycle import (
    EOL,
    EOM,
    RELEASES,
    evaluate_lifecycle,
    get_end_of_life_date,
    get_end_of_maintenance_date,
    get_release_date,
    parse_table_date,
    release_key,
)
from ibexa_system_info.models import LifecycleStatus

UTC = timezone.utc


# =============================================================================
# Table data
# =============================================================================


class TestLifecycleTables:
    """Test the static lifecycle tables."""

    @pytest.mark.parametrize("table", [RELEASES, EOM, EOL], ids=["releases", "eom", "eol"])
    def test_all_dates_parse(self, table):
        """Test every table date is a valid, timezone aware ISO 8601 timestamp."""
        for key, value in table.items():
            parsed = parse_table_date(value)
            assert parsed.tzinfo is not None, key

    def test_tables_cover_same_releases(self):
        """Test each release has a release, EOM and EOL date."""
        assert set(RELEASES) == set(EOM) == set(EOL)

    def test_keys_are_major_minor(self):
        for key in RELEASES:
            major, minor = key.split(".")
            assert major.isdigit() and minor.isdigit()

    @pytest.mark.parametrize("key", sorted(RELEASES))
    def test_release_precedes_end_of_life(self, key):
        """Test releases happen before they reach end of life."""
        assert get_release_date(key) < get_end_of_life_date(key)
        assert get_end_of_maintenance_date(key) <= get_end_of_life_date(key)

    def test_33_dates(self):
        """Test the 3.3 LTS dates."""
        assert get_end_of_maintenance_date("3.3") == datetime(2023, 12, 30, 23, 59, 59, tzinfo=UTC)
        assert get_end_of_life_date("3.3") == datetime(2025, 12, 30, 23, 59, 59, tzinfo=UTC)
        assert get_release_date("3.3") == datetime(2021, 1, 18, 23, 59, 59, tzinfo=UTC)

    def test_unknown_key(self):
        assert get_release_date("9.9") is None
        assert get_end_of_maintenance_date("9.9") is None
        assert get_end_of_life_date("9.9") is None

    def test_naive_table_date_rejected(self):
        """Test a table date without timezone is a programming error."""
        with pytest.raises(ValueError):
            parse_table_date("2023-12-30T23:59:59")

    def test_malformed_table_date_rejected(self):
        with pytest.raises(ValueError):
            parse_table_date("2023-13-45")


# =============================================================================
# Key derivation
# =============================================================================


class TestReleaseKey:
    """Test "major.minor" key derivation."""

    @pytest.mark.parametrize(
        "version,expected",
        [
            ("3.3.2", "3.3"),
            ("3.3", "3.3"),
            ("2.5.15", "2.5"),
            ("3", "3."),
            ("", "."),
            ("3.3.x-dev", "3.3"),
            ("unknown", "unknown."),
        ],
    )
    def test_release_key(self, version, expected):
        assert release_key(version) == expected


# =============================================================================
# Evaluation
# =============================================================================


class TestEvaluateLifecycle:
    """Test evaluate_lifecycle."""

    def test_33_at_2024(self):
        """Test 3.3 on 2024-01-01 is past maintenance but not end of life."""
        status = evaluate_lifecycle("3.3", now=datetime(2024, 1, 1, tzinfo=UTC))
        assert status.is_end_of_maintenance is True
        assert status.is_end_of_life is False
        assert status.end_of_maintenance_date == datetime(2023, 12, 30, 23, 59, 59, tzinfo=UTC)
        assert status.end_of_life_date == datetime(2025, 12, 30, 23, 59, 59, tzinfo=UTC)

    def test_33_patch_release_uses_minor_key(self):
        status = evaluate_lifecycle("3.3.25", now=datetime(2026, 1, 1, tzinfo=UTC))
        assert status.is_end_of_maintenance is True
        assert status.is_end_of_life is True

    def test_before_end_of_maintenance(self):
        status = evaluate_lifecycle("3.3.2", now=datetime(2022, 6, 1, tzinfo=UTC))
        assert status.is_end_of_maintenance is False
        assert status.is_end_of_life is False

    def test_exactly_on_date_is_not_past(self):
        """Test the milestone only counts once it is strictly in the past."""
        eom = get_end_of_maintenance_date("3.3")
        assert evaluate_lifecycle("3.3", now=eom).is_end_of_maintenance is False
        assert evaluate_lifecycle("3.3", now=eom + timedelta(seconds=1)).is_end_of_maintenance is True

    @pytest.mark.parametrize(
        "now",
        [datetime(1990, 1, 1, tzinfo=UTC), datetime(2024, 1, 1, tzinfo=UTC), datetime(2100, 1, 1, tzinfo=UTC)],
    )
    def test_unknown_version(self, now):
        """Test an unknown release is never past either milestone and has no dates."""
        assert evaluate_lifecycle("9.9", now=now) == LifecycleStatus()

    def test_bare_major_is_unknown(self):
        """Test "3" becomes key "3." which is not in the tables."""
        status = evaluate_lifecycle("3", now=datetime(2030, 1, 1, tzinfo=UTC))
        assert status == LifecycleStatus()

    def test_naive_now_treated_as_utc(self):
        status = evaluate_lifecycle("3.3", now=datetime(2024, 1, 1))
        assert status.is_end_of_maintenance is True

    def test_defaults_to_current_time(self):
        """Test releases long past end of life are reported without a reference time."""
        status = evaluate_lifecycle("3.0")
        assert status.is_end_of_maintenance is True
        assert status.is_end_of_life is True

    def test_result_is_frozen(self):
        status = evaluate_lifecycle("3.3", now=datetime(2024, 1, 1, tzinfo=UTC))
        with pytest.raises(AttributeError):
            status.is_end_of_life = True
