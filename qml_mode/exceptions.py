"""Package-specific exception types."""

from __future__ import annotations


class LineOutOfRangeError(IndexError):
    """Raised when a caller asks a document for a line it does not have.

    The indentation engine never triggers this on its own; it signals that a
    host passed a line number outside the document.

    Args:
        line_number: One-based index that was requested.
        line_count: Number of lines in the document.
    """

    def __init__(self, line_number: int, line_count: int):
        self.line_number = line_number
        self.line_count = line_count
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"Line {self.line_number} is outside the document (1-{self.line_count})"


class SourceFileError(Exception):
    """Raised when a QML source file cannot be read or decoded."""
