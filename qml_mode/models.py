"""Data models for qml-mode."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto

from .constants import DEFAULT_TAB_WIDTH, INDENT_WHITESPACE
from .exceptions import LineOutOfRangeError

LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")


class Category(Enum):
    """Display categories assigned by the highlight classifier.

    Attributes:
        COMMENT: Line comments and block comments opened on the line.
        STRING: Single- or double-quoted string literals.
        NUMBER: Integer, decimal, and hexadecimal literals.
        SIGNAL_HANDLER: Handler bindings such as ``onClicked:``.
        PROPERTY: Property names on the left of a binding colon.
        KEYWORD: Declaration and control-flow keywords.
        CONSTANT: Literal constants such as ``true`` and ``null``.
        NAMESPACE: Dotted names such as ``Qt.rgba`` or ``QtQuick.Controls``.
        TYPE: Capitalised identifiers and QML basic types.
        ARROW: Arrow tokens (``=>`` and ``->``).
    """

    COMMENT = auto()
    STRING = auto()
    NUMBER = auto()
    SIGNAL_HANDLER = auto()
    PROPERTY = auto()
    KEYWORD = auto()
    CONSTANT = auto()
    NAMESPACE = auto()
    TYPE = auto()
    ARROW = auto()


@dataclass(frozen=True)
class Token:
    """A classified span of a single line.

    Attributes:
        start: Zero-based column where the span begins.
        end: Zero-based column just past the span.
        category: Display category of the span.
        text: Matched text.
    """

    start: int
    end: int
    category: Category
    text: str


def first_non_blank_char(text: str) -> str | None:
    """Return the first non-whitespace character of `text`, or None."""
    stripped = text.lstrip()
    return stripped[0] if stripped else None


@dataclass(frozen=True)
class Line:
    """One line of a document, without its line terminator.

    Attributes:
        number: One-based position of the line in its document.
        text: Raw line text.
    """

    number: int
    text: str

    @property
    def leading_whitespace(self) -> str:
        return self.text[: len(self.text) - len(self.text.lstrip(INDENT_WHITESPACE))]

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    @property
    def first_char(self) -> str | None:
        return first_non_blank_char(self.text)

    def indentation(self, tab_width: int = DEFAULT_TAB_WIDTH) -> int:
        """Return the column reached by the leading whitespace.

        Tabs advance to the next multiple of `tab_width`.

        Examples:
            Line(1, "\\t  width: 10").indentation(4)  # 6
        """
        columns = 0
        for char in self.leading_whitespace:
            if char == "\t":
                columns += tab_width - (columns % tab_width)
            else:
                columns += 1
        return columns


@dataclass
class Document:
    """An ordered, one-based sequence of lines owned by a host.

    Attributes:
        lines: Line texts without terminators.
        newline: Terminator used when joining lines back into text.
        trailing_newline: Whether the source text ended with a terminator.
    """

    lines: list[str] = field(default_factory=lambda: [""])
    newline: str = "\n"
    trailing_newline: bool = False

    @classmethod
    def from_text(cls, text: str) -> Document:
        """Split `text` into a document, remembering how it was terminated.

        ``\\n``, ``\\r\\n`` and a lone ``\\r`` all end a line. The first
        terminator found becomes `newline`, so text with mixed endings comes
        back from `to_text` using that one terminator throughout. An empty
        string yields a single empty line, matching an empty editor buffer.

        Examples:
            Document.from_text("Item {\\n}\\n").lines  # ["Item {", "}"]
            Document.from_text("a\\rb").newline  # "\\r"
        """
        first_break = LINE_BREAK_PATTERN.search(text)
        newline = first_break.group(0) if first_break else "\n"
        lines = LINE_BREAK_PATTERN.split(text)
        trailing_newline = len(lines) > 1 and lines[-1] == ""
        if trailing_newline:
            lines.pop()
        return cls(lines=lines, newline=newline, trailing_newline=trailing_newline)

    def to_text(self) -> str:
        text = self.newline.join(self.lines)
        if self.trailing_newline:
            text += self.newline
        return text

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self):
        for number, text in enumerate(self.lines, start=1):
            yield Line(number, text)

    def get_line(self, line_number: int) -> Line:
        """Return line `line_number` (one-based).

        Raises:
            LineOutOfRangeError: If `line_number` is below 1 or past the end.
        """
        if line_number < 1 or line_number > len(self.lines):
            raise LineOutOfRangeError(line_number, len(self.lines))
        return Line(line_number, self.lines[line_number - 1])

    def replace_line(self, line_number: int, text: str) -> None:
        self.get_line(line_number)
        self.lines[line_number - 1] = text

    def insert_line(self, after: int, text: str = "") -> int:
        """Insert `text` below line `after` (0 inserts at the top).

        Returns:
            int: One-based number of the inserted line.
        """
        if after < 0 or after > len(self.lines):
            raise LineOutOfRangeError(after, len(self.lines))
        self.lines.insert(after, text)
        return after + 1
