"""
Unit tests for the certbot report renderer.

Rendering a record into the tool's block format and parsing it back must
give the same record.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from certbot_report.adapters.certbot_parser import parse_report
from certbot_report.adapters.certbot_renderer import (
    DELIMITER,
    render_block,
    render_expiry,
    render_report,
)
from certbot_report.domain.models import CertificateRecord
from tests.conftest import read_fixture


def _record(name: str = "test-cert", **overrides: object) -> CertificateRecord:
    values: dict[str, object] = {
        "name": name,
        "certificate_path": f"/etc/letsencrypt/live/{name}/fullchain.pem",
        "private_key_path": f"/etc/letsencrypt/live/{name}/privkey.pem",
        "expiry_date": datetime(2023, 2, 18, 21, 12, 15, tzinfo=UTC),
    }
    values.update(overrides)
    return CertificateRecord(**values)  # type: ignore[arg-type]


class TestRenderExpiry:
    def test_with_validity_days(self) -> None:
        assert render_expiry(_record(validity_days=89)) == "2023-02-18 21:12:15+00:00 (VALID: 89 days)"

    def test_singular_day(self) -> None:
        assert render_expiry(_record(validity_days=1)).endswith("(VALID: 1 day)")

    def test_without_validity_days(self) -> None:
        assert render_expiry(_record()) == "2023-02-18 21:12:15+00:00"

    def test_non_utc_datetime_printed_in_utc(self) -> None:
        """
        GIVEN a record built by hand with a +02:00 expiry
        WHEN rendered
        THEN the printed timestamp is the UTC instant with +00:00.
        """
        local = datetime(2023, 2, 18, 23, 12, 15, tzinfo=timezone(timedelta(hours=2)))
        assert render_expiry(_record(expiry_date=local)) == "2023-02-18 21:12:15+00:00"


class TestRenderReport:
    def test_layout_matches_certbot(self) -> None:
        """
        GIVEN the record parsed from the captured single-certificate report
        WHEN rendered
        THEN the output reproduces the tool's block lines.
        """
        original = read_fixture("certbot_single.txt")
        rendered = render_report(parse_report(original))
        assert rendered.splitlines() == original.splitlines()[2:]

    def test_optional_lines_omitted(self) -> None:
        lines = render_block(_record())
        assert [line.split(":")[0].strip() for line in lines] == [
            "Certificate Name",
            "Expiry Date",
            "Certificate Path",
            "Private Key Path",
        ]

    def test_empty_inventory(self) -> None:
        rendered = render_report([])
        assert rendered == f"{DELIMITER}\nNo certificates found.\n{DELIMITER}\n"
        assert parse_report(rendered) == []


class TestRoundTrip:
    """render → parse yields field-for-field-equal records."""

    @pytest.mark.parametrize(
        "record",
        [
            _record(),
            _record(validity_days=0),
            _record(
                "example.org",
                serial_number="4bb1c2d3e4f5",
                key_type="ECDSA",
                domains=("example.org", "www.example.org"),
                validity_days=61,
            ),
        ],
        ids=["mandatory-only", "zero-days", "all-fields"],
    )
    def test_single_record(self, record: CertificateRecord) -> None:
        assert parse_report(render_report([record])) == [record]

    def test_inventory_order_preserved(self) -> None:
        records = parse_report(read_fixture("certbot_multiple.txt"))
        assert parse_report(render_report(records)) == records
