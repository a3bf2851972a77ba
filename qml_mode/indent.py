"""Bracket-depth indentation engine."""

from __future__ import annotations

from typing import Protocol

from .config import ModeConfig, normalize_config, validate_config
from .constants import (
    CLOSING_DELIMITERS,
    DEFAULT_TAB_WIDTH,
    INDENT_WHITESPACE,
    OPENING_DELIMITERS,
)
from .models import Document, Line, first_non_blank_char


class LineSource(Protocol):
    """Line access the engine needs from a host.

    Blank detection and column measurement belong to the source, so the
    engine reads a line the same way the host that rewrites it does.
    """

    def get_line(self, line_number: int) -> Line: ...

    def is_blank(self, line: Line) -> bool: ...

    def leading_whitespace_columns(self, line: Line) -> int: ...


class DocumentLines:
    """Present a bare `Document` as a `LineSource`.

    Tabs in leading whitespace advance to the next multiple of `tab_width`.
    """

    def __init__(self, document: Document, tab_width: int = DEFAULT_TAB_WIDTH):
        self.document = document
        self.tab_width = tab_width

    def get_line(self, line_number: int) -> Line:
        return self.document.get_line(line_number)

    def is_blank(self, line: Line) -> bool:
        return line.is_blank

    def leading_whitespace_columns(self, line: Line) -> int:
        return line.indentation(self.tab_width)


def _line_source(source: Document | LineSource, tab_width: int) -> LineSource:
    if isinstance(source, Document):
        return DocumentLines(source, tab_width)
    return source


def starts_with_closing_delimiter(text: str) -> bool:
    """Tell whether the first non-whitespace character closes a block.

    Examples:
        starts_with_closing_delimiter("  }")  # True
        starts_with_closing_delimiter("x }")  # False
    """
    first_char = first_non_blank_char(text)
    return first_char is not None and first_char in CLOSING_DELIMITERS


def delimiter_balance(text: str) -> int:
    """Count opening minus closing delimiters on a line.

    A leading closing delimiter belongs to the level above, so it is left out
    of the count. Delimiters inside strings and comments are counted like any
    other character.

    Args:
        text: Line text.

    Returns:
        int: Net nesting change contributed by the line.

    Examples:
        delimiter_balance("a { b [")  # 2
        delimiter_balance("x { y }")  # 0
        delimiter_balance("} else {")  # 1
    """
    opened = sum(text.count(char) for char in OPENING_DELIMITERS)
    closed = sum(text.count(char) for char in CLOSING_DELIMITERS)
    if starts_with_closing_delimiter(text):
        closed -= 1
    return opened - closed


def _check_tab_width(tab_width: int) -> None:
    if isinstance(tab_width, bool) or not isinstance(tab_width, int) or tab_width <= 0:
        raise ValueError(f"tab_width must be a positive integer, got {tab_width!r}")


def reference_indentation(
    source: Document | LineSource, line_number: int, tab_width: int = DEFAULT_TAB_WIDTH
) -> int:
    """Compute the indentation inherited by `line_number` from above.

    Walks upward from the previous line, skipping lines the source reports
    as blank. The nearest non-blank line contributes its leading whitespace
    columns, as the source measures them, plus one `tab_width` per unit of
    delimiter balance. Reaching the top of the document yields 0.

    Args:
        source: Document, or host providing the `LineSource` primitives.
        line_number: One-based target line.
        tab_width: Columns per indentation level.

    Returns:
        int: Reference column, possibly negative for unbalanced input.
    """
    source = _line_source(source, tab_width)
    for number in range(line_number - 1, 0, -1):
        line = source.get_line(number)
        if not source.is_blank(line):
            columns = source.leading_whitespace_columns(line)
            return columns + tab_width * delimiter_balance(line.text)
    return 0


def compute_indent(
    source: Document | LineSource, line_number: int, tab_width: int = DEFAULT_TAB_WIDTH
) -> int:
    """Return the column that line `line_number` should be indented to.

    The first line is never indented. Any other line takes the reference
    indentation of the nearest non-blank line above it, one level less when
    the line itself starts with ``}`` or ``]``. The result is a heuristic and
    may be negative when delimiters are unbalanced.

    Args:
        source: Document, or host providing the `LineSource` primitives. A
            bare `Document` measures tabs at `tab_width`.
        line_number: One-based target line; must exist in `source`.
        tab_width: Columns per indentation level.

    Returns:
        int: Target indentation in columns.

    Raises:
        ValueError: If `tab_width` is not a positive integer.

    Examples:
        doc = Document.from_text("  foo {\\n}\\n")
        compute_indent(doc, 2)  # 2
    """
    _check_tab_width(tab_width)
    if line_number == 1:
        return 0

    indentation = reference_indentation(source, line_number, tab_width)
    if starts_with_closing_delimiter(source.get_line(line_number).text):
        indentation -= tab_width
    return indentation


def indentation_string(columns: int, tab_width: int = DEFAULT_TAB_WIDTH, use_tabs: bool = False) -> str:
    """Build leading whitespace for `columns`, clamping negatives to zero.

    Examples:
        indentation_string(5, tab_width=4, use_tabs=True)  # "\\t "
    """
    columns = max(columns, 0)
    if use_tabs:
        return "\t" * (columns // tab_width) + " " * (columns % tab_width)
    return " " * columns


def reindent_text(text: str, columns: int, config: ModeConfig | None = None) -> str:
    """Replace the leading whitespace of `text` so it starts at `columns`.

    Whitespace-only lines come back empty.
    """
    config = config or ModeConfig()
    body = text.lstrip(INDENT_WHITESPACE)
    if not body.strip():
        return ""
    return indentation_string(columns, config.tab_width, config.indent_tabs_mode) + body


def reindent_document(document: Document, config: ModeConfig | None = None) -> Document:
    """Reindent every line of `document`, top to bottom.

    Each line is computed against the lines above it as already reindented,
    so the result is stable: reindenting it again changes nothing.

    Args:
        document: Source document; left untouched.
        config: Mode configuration. Defaults to a new `ModeConfig`.

    Returns:
        Document: New document with corrected indentation.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        reindent_document(Document.from_text("Item {\\nwidth: 2\\n}\\n")).to_text()
        # "Item {\\n  width: 2\\n}\\n"
    """
    config = normalize_config(config or ModeConfig())
    validate_config(config)

    result = Document(
        lines=list(document.lines),
        newline=document.newline,
        trailing_newline=document.trailing_newline,
    )
    for line in document:
        columns = compute_indent(result, line.number, config.tab_width)
        result.replace_line(line.number, reindent_text(line.text, columns, config))
    return result
