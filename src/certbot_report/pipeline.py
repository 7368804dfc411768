"""
Pipeline — read a captured certbot report and turn it into records.

Application layer — no I/O of its own. The report source and the parser
are injected via ports (Protocol interfaces) and connected with flat_map:

  source.read()
    → parser.parse(text)
      → [find_certificate(records, name)]

Each stage returns Result[T]; the first failure short-circuits the rest.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog
from railway.result import Result
from railway.result_failures import ResultFailures

from certbot_report.domain.models import CertificateRecord
from certbot_report.domain.ports import CertificateReportParser, ReportSource

log = structlog.get_logger()


def run_pipeline(
    source: ReportSource,
    parser: CertificateReportParser,
) -> Result[list[CertificateRecord]]:
    """
    Read the report and parse it.

    Returns Result[list[CertificateRecord]] in report order, or the
    failure of the first failing stage (read error, malformed report).
    """
    return source.read().flat_map(parser.parse)


def find_certificate(
    records: Sequence[CertificateRecord],
    name: str,
) -> Result[CertificateRecord]:
    """First record called `name`, or a NOT_FOUND failure."""
    for record in records:
        if record.name == name:
            return Result.success(record)
    log.warning("pipeline.certificate_not_found", name=name, available=len(records))
    return ResultFailures.not_found("Certificate", name)


def lookup_certificate(
    source: ReportSource,
    parser: CertificateReportParser,
    name: str,
) -> Result[CertificateRecord]:
    """Resolve a single certificate by name from a report."""
    return run_pipeline(source, parser).flat_map(lambda records: find_certificate(records, name))
