"""
Unit tests for domain models — value objects.

Verifies frozen dataclass behavior, value equality, defaults,
and the days_until_expiry helper.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from certbot_report.domain.errors import FormatError
from certbot_report.domain.models import CertificateRecord

EXPIRY = datetime(2023, 2, 18, 21, 12, 15, tzinfo=UTC)


def _record(**overrides: object) -> CertificateRecord:
    values: dict[str, object] = {
        "name": "test-cert",
        "certificate_path": "/etc/letsencrypt/live/test-cert/fullchain.pem",
        "private_key_path": "/etc/letsencrypt/live/test-cert/privkey.pem",
        "expiry_date": EXPIRY,
    }
    values.update(overrides)
    return CertificateRecord(**values)  # type: ignore[arg-type]


class TestCertificateRecord:
    """Verify CertificateRecord value object behavior."""

    def test_optional_fields_default_to_empty(self) -> None:
        """
        GIVEN a CertificateRecord with only mandatory fields
        WHEN accessed
        THEN optional fields are None and domains is an empty tuple.
        """
        record = _record()
        assert record.serial_number is None
        assert record.key_type is None
        assert record.validity_days is None
        assert record.domains == ()

    def test_frozen_prevents_mutation(self) -> None:
        """
        GIVEN a frozen CertificateRecord
        WHEN attempting to modify a field
        THEN an AttributeError (FrozenInstanceError) is raised.
        """
        record = _record()
        with pytest.raises(AttributeError):
            record.name = "modified"  # type: ignore[misc]

    def test_equal_field_values_mean_equal_records(self) -> None:
        """
        GIVEN two records built from identical values
        WHEN compared
        THEN they are equal and hash identically (no identity beyond values).
        """
        a = _record(domains=("a.example", "b.example"))
        b = _record(domains=("a.example", "b.example"))
        assert a == b
        assert hash(a) == hash(b)

    def test_domain_order_matters_for_equality(self) -> None:
        """
        GIVEN two records whose domains differ only in order
        WHEN compared
        THEN they are not equal (printed order is part of the value).
        """
        assert _record(domains=("a", "b")) != _record(domains=("b", "a"))


class TestDaysUntilExpiry:
    """Verify the expiry display helper."""

    def test_counts_whole_days_remaining(self) -> None:
        """
        GIVEN an expiry 89 days and a few hours after `now`
        WHEN days_until_expiry is called
        THEN it returns 89.
        """
        now = EXPIRY - timedelta(days=89, hours=5)
        assert _record().days_until_expiry(now) == 89

    def test_negative_once_expired(self) -> None:
        """
        GIVEN `now` two days after expiry
        WHEN days_until_expiry is called
        THEN the result is negative.
        """
        now = EXPIRY + timedelta(days=2)
        assert _record().days_until_expiry(now) == -2

    def test_defaults_to_current_time(self) -> None:
        """
        GIVEN a certificate expiring ten days from now
        WHEN days_until_expiry is called without `now`
        THEN it counts from the current UTC time.
        """
        record = _record(expiry_date=datetime.now(UTC) + timedelta(days=10, minutes=5))
        assert record.days_until_expiry() == 10

    def test_ignores_printed_validity_days(self) -> None:
        """
        GIVEN a record whose printed validity annotation disagrees with the dates
        WHEN days_until_expiry is called
        THEN the dates win; validity_days is informational only.
        """
        record = _record(validity_days=1)
        assert record.days_until_expiry(EXPIRY - timedelta(days=30)) == 30


class TestFormatError:
    """Verify FormatError location reporting."""

    def test_range_location(self) -> None:
        """
        GIVEN a FormatError spanning lines 10-13
        WHEN converted to str
        THEN the message and the line range are included.
        """
        error = FormatError("Certificate block is missing mandatory field 'Certificate Path'", 10, 13, "Certificate Path")
        assert str(error) == "Certificate block is missing mandatory field 'Certificate Path' (lines 10-13)"
        assert error.field == "Certificate Path"

    def test_single_line_location(self) -> None:
        """
        GIVEN a FormatError for one line
        WHEN converted to str
        THEN the single line is reported.
        """
        error = FormatError("Unparsable expiry date 'soon'", 7)
        assert error.last_line == 7
        assert str(error).endswith("(line 7)")

    def test_is_a_value_error(self) -> None:
        """FormatError can be handled wherever a ValueError is expected."""
        assert isinstance(FormatError("x", 1), ValueError)
