"""
certbot report parser adapter — `certbot certificates` text → CertificateRecord list.

Adapter layer — implements the CertificateReportParser port.

Pipeline:
  raw stdout text
    → scan_lines(): split on CR / CRLF / LF, classify each line
      (DELIMITER, LABELED with a recognized label, UNKNOWN)
    → ReportScanner: SEEKING / IN_BLOCK state machine accumulating
      labeled lines into a pending block
    → pending block finalized into a CertificateRecord (mandatory fields checked)

The report format is foreign and loosely specified:

    Saving debug log to /var/log/letsencrypt/letsencrypt.log

    - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - -
    Found the following certs:
      Certificate Name: example.com
        Serial Number: 42e828677b2c16c675d69d3e62d89b602ed
        Key Type: RSA
        Domains: example.com www.example.com
        Expiry Date: 2023-02-18 21:12:15+00:00 (VALID: 89 days)
        Certificate Path: /etc/letsencrypt/live/example.com/fullchain.pem
        Private Key Path: /etc/letsencrypt/live/example.com/privkey.pem
    - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - - -

Unrecognized labels and free text inside a block are ignored so that new
tool versions adding fields keep parsing. Missing mandatory fields and
unparsable expiry dates raise FormatError and fail the whole report.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, auto
from types import MappingProxyType
from typing import Any

import structlog
from railway import ErrorCode, FailureDescription
from railway.result import Result

from certbot_report.domain.errors import FormatError
from certbot_report.domain.models import CertificateRecord

log = structlog.get_logger()

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

# "-----" as well as certbot's own "- - - - -"
_DELIMITER = re.compile(r"^-+(?: -+)*$")

_EXPIRY_FORMAT = "%Y-%m-%d %H:%M:%S%z"
_VALID_DAYS = re.compile(r"\bVALID:\s*(\d+)\s+days?\b", re.IGNORECASE)
_DOMAIN_SEPARATOR = re.compile(r"[\s,]+")


# ─────────────────────── Field Extraction Table ───────────────────────


@dataclass(slots=True)
class _PendingBlock:
    """Record-in-progress: values collected from one block's labeled lines."""

    first_line: int
    last_line: int
    values: dict[str, Any] = field(default_factory=dict)
    labels: set[str] = field(default_factory=set)

    def has_name(self) -> bool:
        return self.values.get("name") is not None


def _normalize_label(label: str) -> str:
    """Case- and whitespace-insensitive label key: '  Key   TYPE' → 'key type'."""
    return " ".join(label.split()).lower()


def _text_field(attribute: str) -> Callable[[_PendingBlock, str, int], None]:
    def apply(block: _PendingBlock, value: str, line_number: int) -> None:
        block.values[attribute] = value or None

    return apply


def _apply_domains(block: _PendingBlock, value: str, line_number: int) -> None:
    block.values["domains"] = tuple(d for d in _DOMAIN_SEPARATOR.split(value) if d)


def _apply_expiry(block: _PendingBlock, value: str, line_number: int) -> None:
    expiry_date, validity_days = parse_expiry(value, line_number)
    block.values["expiry_date"] = expiry_date
    block.values["validity_days"] = validity_days


@dataclass(frozen=True, slots=True)
class _Field:
    label: str
    apply: Callable[[_PendingBlock, str, int], None]


_NAME_KEY = "certificate name"

_FIELDS: Mapping[str, _Field] = MappingProxyType(
    {
        _normalize_label(f.label): f
        for f in (
            _Field("Certificate Name", _text_field("name")),
            _Field("Serial Number", _text_field("serial_number")),
            _Field("Key Type", _text_field("key_type")),
            _Field("Domains", _apply_domains),
            _Field("Expiry Date", _apply_expiry),
            _Field("Certificate Path", _text_field("certificate_path")),
            _Field("Private Key Path", _text_field("private_key_path")),
        )
    }
)

# Checked in this order when a block is finalized.
_MANDATORY: tuple[tuple[str, str], ...] = (
    ("name", "Certificate Name"),
    ("certificate_path", "Certificate Path"),
    ("private_key_path", "Private Key Path"),
    ("expiry_date", "Expiry Date"),
)


def parse_expiry(value: str, line_number: int = 0) -> tuple[datetime, int | None]:
    """
    Parse an `Expiry Date` value into (UTC timestamp, validity days).

    Accepts `YYYY-MM-DD HH:MM:SS±HH:MM` optionally followed by a
    parenthesized annotation. Only `VALID: <n> day(s)` yields validity
    days; any other annotation (INVALID: EXPIRED, hours) yields None.
    """
    timestamp, _, annotation = value.partition("(")
    timestamp = timestamp.strip()
    try:
        parsed = datetime.strptime(timestamp, _EXPIRY_FORMAT)
    except ValueError as e:
        raise FormatError(
            f"Unparsable expiry date {timestamp!r}",
            line_number,
            field="Expiry Date",
        ) from e

    days = _VALID_DAYS.search(annotation)
    return parsed.astimezone(UTC), int(days.group(1)) if days else None


def _finalize(block: _PendingBlock) -> CertificateRecord:
    """Build the record, or raise FormatError naming the first missing mandatory field."""
    for attribute, label in _MANDATORY:
        if block.values.get(attribute) is None:
            name = block.values.get("name")
            subject = f"Certificate block {name!r}" if name else "Certificate block"
            raise FormatError(
                f"{subject} is missing mandatory field {label!r}",
                block.first_line,
                block.last_line,
                field=label,
            )
    return CertificateRecord(**block.values)


# ─────────────────────── Line Scanner ───────────────────────


class LineKind(Enum):
    DELIMITER = auto()
    LABELED = auto()
    UNKNOWN = auto()


@dataclass(frozen=True, slots=True)
class ScannedLine:
    """One classified input line. `label` is the normalized key of a recognized label."""

    number: int
    kind: LineKind
    label: str | None = None
    value: str = ""


def classify_line(number: int, raw: str) -> ScannedLine:
    text = raw.strip()
    if _DELIMITER.match(text):
        return ScannedLine(number, LineKind.DELIMITER)

    label, separator, value = text.partition(":")
    key = _normalize_label(label)
    if separator and key in _FIELDS:
        return ScannedLine(number, LineKind.LABELED, key, value.strip())
    return ScannedLine(number, LineKind.UNKNOWN)


def scan_lines(report: str) -> Iterator[ScannedLine]:
    """Split on CR, CRLF and LF alike and classify each line (1-based numbers)."""
    for number, raw in enumerate(_LINE_BREAK.split(report), start=1):
        yield classify_line(number, raw)


# ─────────────────────── State Machine ───────────────────────


class ScanState(Enum):
    SEEKING = auto()
    IN_BLOCK = auto()


class ReportScanner:
    """
    Turns classified lines into records.

    Transitions:
      SEEKING  + DELIMITER → IN_BLOCK
      SEEKING  + anything  → SEEKING (preamble, ignored)
      IN_BLOCK + DELIMITER → finalize pending block, IN_BLOCK (next block)
      IN_BLOCK + LABELED   → apply to pending block; a second Certificate Name
                             finalizes the pending block and opens a new one
      IN_BLOCK + UNKNOWN   → IN_BLOCK (ignored)

    A boundary with no recognized labeled lines since the previous one
    produces nothing; this is how the outer delimiter pair and runs of
    consecutive delimiters collapse.
    """

    def __init__(self) -> None:
        self.state = ScanState.SEEKING
        self._pending: _PendingBlock | None = None
        self._records: list[CertificateRecord] = []

    def feed(self, line: ScannedLine) -> None:
        match (self.state, line.kind):
            case (ScanState.SEEKING, LineKind.DELIMITER):
                self.state = ScanState.IN_BLOCK
            case (ScanState.IN_BLOCK, LineKind.DELIMITER):
                self._close_block()
            case (ScanState.IN_BLOCK, LineKind.LABELED):
                self._apply(line)
            case _:
                pass

    def finish(self) -> list[CertificateRecord]:
        """Close a block left open by a missing trailing delimiter and return the records."""
        if self.state is ScanState.IN_BLOCK:
            self._close_block()
        return list(self._records)

    def _apply(self, line: ScannedLine) -> None:
        assert line.label is not None
        if self._pending is not None and line.label == _NAME_KEY and self._pending.has_name():
            self._close_block()
        if self._pending is None:
            self._pending = _PendingBlock(first_line=line.number, last_line=line.number)

        target = _FIELDS[line.label]
        if line.label in self._pending.labels:
            # last one wins
            log.debug("parser.duplicate_label", label=target.label, line=line.number)
        target.apply(self._pending, line.value, line.number)
        self._pending.labels.add(line.label)
        self._pending.last_line = line.number

    def _close_block(self) -> None:
        if self._pending is None:
            return
        record = _finalize(self._pending)
        log.debug(
            "parser.block_parsed",
            name=record.name,
            first_line=self._pending.first_line,
            last_line=self._pending.last_line,
        )
        self._records.append(record)
        self._pending = None


def parse_report(report: str) -> list[CertificateRecord]:
    """
    Parse the full text of a `certbot certificates` report.

    Returns the records in report order; an empty list when the report
    holds no certificate blocks. Raises FormatError on the first block
    that cannot be turned into a complete record.
    """
    scanner = ReportScanner()
    for line in scan_lines(report):
        scanner.feed(line)
    return scanner.finish()


# ─────────────────────── Public Parser Class ───────────────────────


def _describe_failure(error: FailureDescription) -> FailureDescription:
    return FailureDescription(error.code, f"{error.message}: {error.exception}", error.exception)


class CertbotReportParser:
    """
    Parse captured `certbot certificates` output into CertificateRecords.

    Implements the CertificateReportParser port.
    All exceptions are caught at this adapter boundary via Result.from_computation().
    """

    def parse(self, report: str) -> Result[list[CertificateRecord]]:
        """
        Returns Result[list[CertificateRecord]] on success (possibly empty).
        Returns Result.failure(VALIDATION_ERROR, ...) carrying the FormatError
        when any block is malformed.
        """
        return (
            Result.from_computation(
                lambda: parse_report(report),
                ErrorCode.VALIDATION_ERROR,
                "Malformed certbot report",
            )
            .map_failure(_describe_failure)
            .peek(lambda records: log.info("parser.complete", certificates=len(records)))
            .peek_failure(lambda error: log.warning("parser.failed", error=error.message))
        )
