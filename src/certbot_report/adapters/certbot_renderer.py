"""
certbot report renderer — CertificateRecord list → `certbot certificates` text.

The inverse of the parser for the fields a record keeps: the output
re-parses into field-for-field-equal records. Used to normalize stored
inventories back into the tool's layout and to build report fixtures.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC

from certbot_report.domain.models import CertificateRecord

DELIMITER = "- " * 39 + "-"
_EXPIRY_FORMAT = "%Y-%m-%d %H:%M:%S+00:00"


def render_expiry(record: CertificateRecord) -> str:
    """`2023-02-18 21:12:15+00:00 (VALID: 89 days)`; the annotation only when validity days are known."""
    printed = record.expiry_date.astimezone(UTC).strftime(_EXPIRY_FORMAT)
    if record.validity_days is None:
        return printed
    unit = "day" if record.validity_days == 1 else "days"
    return f"{printed} (VALID: {record.validity_days} {unit})"


def render_block(record: CertificateRecord) -> list[str]:
    lines = [f"  Certificate Name: {record.name}"]
    if record.serial_number is not None:
        lines.append(f"    Serial Number: {record.serial_number}")
    if record.key_type is not None:
        lines.append(f"    Key Type: {record.key_type}")
    if record.domains:
        lines.append(f"    Domains: {' '.join(record.domains)}")
    lines.append(f"    Expiry Date: {render_expiry(record)}")
    lines.append(f"    Certificate Path: {record.certificate_path}")
    lines.append(f"    Private Key Path: {record.private_key_path}")
    return lines


def render_report(records: Iterable[CertificateRecord]) -> str:
    """Render records in the tool's own report layout (LF line endings, trailing newline)."""
    blocks = [render_block(record) for record in records]
    if not blocks:
        return "\n".join([DELIMITER, "No certificates found.", DELIMITER, ""])

    lines = [DELIMITER, "Found the following certs:"]
    for block in blocks:
        lines.extend(block)
    lines.extend([DELIMITER, ""])
    return "\n".join(lines)
