"""
Domain errors raised while converting a certbot report into records.
"""

from __future__ import annotations


class FormatError(ValueError):
    """
    A detected certificate block could not be turned into a complete record.

    Carries the 1-based line range of the offending block (a single line when
    one line is at fault) and, when known, the label of the field involved.
    """

    def __init__(
        self,
        message: str,
        first_line: int,
        last_line: int | None = None,
        field: str | None = None,
    ) -> None:
        self.message = message
        self.first_line = first_line
        self.last_line = last_line if last_line is not None else first_line
        self.field = field
        super().__init__(str(self))

    @property
    def location(self) -> str:
        if self.first_line == self.last_line:
            return f"line {self.first_line}"
        return f"lines {self.first_line}-{self.last_line}"

    def __str__(self) -> str:
        return f"{self.message} ({self.location})"
