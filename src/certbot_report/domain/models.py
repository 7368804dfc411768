"""
Domain models — immutable certificate records parsed from a certbot report.

These are pure value objects: two records with the same field values are
equal, and nothing mutates a record once the parser has built it.
Ownership passes to the caller, which may display, compare or persist them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True, slots=True)
class CertificateRecord:
    """
    One certificate entry of a `certbot certificates` report.

    `expiry_date` is always timezone-aware and normalized to UTC.
    `validity_days` is the tool's own "VALID: n days" annotation, kept as
    printed and never recomputed.
    """

    name: str
    certificate_path: str
    private_key_path: str
    expiry_date: datetime
    serial_number: str | None = None
    key_type: str | None = None
    domains: tuple[str, ...] = field(default_factory=tuple)
    validity_days: int | None = None

    def days_until_expiry(self, now: datetime | None = None) -> int:
        """
        Whole days from `now` (default: current UTC time) until expiry.

        Negative once the certificate has expired.
        """
        reference = now if now is not None else datetime.now(UTC)
        return (self.expiry_date - reference).days
