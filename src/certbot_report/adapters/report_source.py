"""
Report source adapters — hand already-captured certbot output to the pipeline.

Adapter layer — implements the ReportSource port for:
  - FileReportSource: a file holding the saved stdout of `certbot certificates`
  - StreamReportSource: a text stream (typically stdin, piped from the tool)

I/O errors are captured into Result failures at this boundary; the
ErrorCode is chosen from the exception type (missing file → NOT_FOUND,
permission denied → AUTHORIZATION_ERROR, bad encoding → VALIDATION_ERROR).
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import structlog
from railway.result import Result
from railway.result_failures import ResultFailures

log = structlog.get_logger()


class FileReportSource:
    """Read a saved report from disk. Implements the ReportSource port."""

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self._path = Path(path)
        self._encoding = encoding

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> Result[str]:
        try:
            # newline="" keeps CR / CRLF for the parser to normalize
            with self._path.open(encoding=self._encoding, newline="") as handle:
                text = handle.read()
        except (OSError, ValueError) as e:
            log.error("report_source.read_failed", path=str(self._path), error=str(e))
            return ResultFailures.from_exception(f"Failed to read report {self._path}", e)

        log.info("report_source.read", path=str(self._path), characters=len(text))
        return Result.success(text)


class StreamReportSource:
    """Read a report from an open text stream until EOF. Implements the ReportSource port."""

    def __init__(self, stream: TextIO, name: str = "<stdin>") -> None:
        self._stream = stream
        self._name = name

    def read(self) -> Result[str]:
        try:
            text = self._stream.read()
        except (OSError, ValueError) as e:
            log.error("report_source.read_failed", path=self._name, error=str(e))
            return ResultFailures.from_exception(f"Failed to read report {self._name}", e)

        log.info("report_source.read", path=self._name, characters=len(text))
        return Result.success(text)
