"""
Application entry point — wires dependencies and prints the certificate inventory.

Composition root: creates concrete adapters, injects them into the
pipeline and runs it inside a LoggingExecutionContext.

This is the ONLY place where concrete classes are instantiated.
Everything else depends on Protocol interfaces.

Responsibilities:
  1. Parse command-line arguments
  2. Load and validate configuration from environment
  3. Configure structlog (to stderr; stdout carries only the result)
  4. Create the report source + parser adapters
  5. Run the pipeline and turn its Result into output and an exit status

Usage:
  certbot certificates | certbot-report
  certbot-report saved-report.txt --name example.com --format text
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime
from functools import partial
from typing import Any, TextIO

import structlog
from pydantic import ValidationError
from railway import LoggingExecutionContext
from railway.failure import FailureDescription

from certbot_report import __version__
from certbot_report.adapters.certbot_parser import CertbotReportParser
from certbot_report.adapters.report_source import FileReportSource, StreamReportSource
from certbot_report.config import AppSettings
from certbot_report.domain.models import CertificateRecord
from certbot_report.domain.ports import ReportSource
from certbot_report.pipeline import lookup_certificate, run_pipeline

EXIT_OK = 0
EXIT_CONFIGURATION_ERROR = 1
EXIT_LISTING_FAILED = 2


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for structured logging.

    Colored, human-readable console output on stderr so that stdout stays
    machine-readable for the JSON output.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="certbot-report",
        description="Convert the output of `certbot certificates` into structured certificate records",
    )
    parser.add_argument(
        "report",
        nargs="?",
        default="-",
        help="Saved report file (default: read standard input)",
    )
    parser.add_argument("--name", default=None, help="Only print the certificate with this name")
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["json", "text"],
        default=None,
        help="Output format (default: OUTPUT__FORMAT or json)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        default=None,
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _create_adapters(
    report: str,
    settings: AppSettings,
    stdin: TextIO,
) -> tuple[ReportSource, CertbotReportParser]:
    """Instantiate the report source for `report` ("-" means stdin) and the parser."""
    source: ReportSource
    if report == "-":
        source = StreamReportSource(stdin)
    else:
        source = FileReportSource(report, encoding=settings.report.encoding)
    return source, CertbotReportParser()


# ─────────────────────── Output Formatting ───────────────────────


def record_to_dict(record: CertificateRecord) -> dict[str, Any]:
    """JSON-ready mapping; the expiry date as ISO-8601 UTC with a Z suffix."""
    data = asdict(record)
    data["domains"] = list(record.domains)
    data["expiry_date"] = record.expiry_date.isoformat().replace("+00:00", "Z")
    return data


def format_json(payload: CertificateRecord | list[CertificateRecord], indent: int = 2) -> str:
    if isinstance(payload, CertificateRecord):
        return json.dumps(record_to_dict(payload), indent=indent or None)
    return json.dumps([record_to_dict(r) for r in payload], indent=indent or None)


def format_text(records: list[CertificateRecord], now: datetime | None = None) -> str:
    """One aligned line per certificate: name, expiry (UTC), days left, domains."""
    if not records:
        return "No certificates found."
    width = max(len(r.name) for r in records)
    lines = []
    for record in records:
        expiry = record.expiry_date.strftime("%Y-%m-%d %H:%M:%SZ")
        days = record.days_until_expiry(now)
        domains = " ".join(record.domains)
        lines.append(f"{record.name:<{width}}  {expiry}  {days:>5}d  {domains}".rstrip())
    return "\n".join(lines)


def _emit(
    payload: CertificateRecord | list[CertificateRecord],
    output_format: str,
    indent: int,
    stdout: TextIO,
) -> int:
    if output_format == "text":
        records = [payload] if isinstance(payload, CertificateRecord) else payload
        print(format_text(records), file=stdout)  # noqa: T201
    else:
        print(format_json(payload, indent), file=stdout)  # noqa: T201
    return EXIT_OK


def _report_failure(error: FailureDescription, stderr: TextIO) -> int:
    log = structlog.get_logger()
    log.error("app.listing_failed", code=error.code.value, error=error.message)
    print(f"ERROR: {error.message}", file=stderr)  # noqa: T201
    return EXIT_LISTING_FAILED


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Parse arguments, wire dependencies, run the pipeline; returns the exit status."""
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    args = _build_arg_parser().parse_args(argv)

    try:
        settings = AppSettings()
    except ValidationError as e:
        print(f"FATAL: Configuration error: {e}", file=stderr)  # noqa: T201
        return EXIT_CONFIGURATION_ERROR

    log_level = args.log_level or settings.log_level
    output_format = args.output_format or settings.output.format
    configure_structlog(log_level)
    log = structlog.get_logger()

    log.info(
        "app.starting",
        version=__version__,
        report=args.report,
        name=args.name,
        output_format=output_format,
        log_level=log_level,
    )

    source, parser = _create_adapters(args.report, settings, stdin)
    ctx = LoggingExecutionContext(operation="ListCertificates")

    if args.name is None:
        result = ctx.execute(partial(run_pipeline, source, parser))
    else:
        result = ctx.execute(partial(lookup_certificate, source, parser, args.name))

    return result.either(
        on_success=lambda payload: _emit(payload, output_format, settings.output.indent, stdout),
        on_failure=lambda error: _report_failure(error, stderr),
    )


if __name__ == "__main__":
    sys.exit(main())
