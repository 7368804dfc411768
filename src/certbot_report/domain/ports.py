"""
Ports — Protocol-based interfaces for the report adapters.

These define WHAT the application needs without specifying HOW:

  ReportSource             → captured `certbot certificates` output (text)
  CertificateReportParser  → text → ordered CertificateRecord list

Each port is a Protocol (structural typing) so adapters satisfy the
contract simply by implementing the method.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from railway.result import Result

from certbot_report.domain.models import CertificateRecord


@runtime_checkable
class ReportSource(Protocol):
    """
    Port: provide the already-captured stdout of `certbot certificates`.

    Implementations read stored text (file, stream); running the tool
    itself is the caller's business.
    """

    def read(self) -> Result[str]: ...


@runtime_checkable
class CertificateReportParser(Protocol):
    """
    Port: parse report text into certificate records.

    Success carries the records in report order (possibly empty).
    A malformed block fails the whole call; no partial list is returned.
    """

    def parse(self, report: str) -> Result[list[CertificateRecord]]: ...
