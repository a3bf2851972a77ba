"""Editor host integration for the QML mode.

A host is whatever owns the live document: a real editor binding or the
in-memory `BufferHost` below. The mode registers a line-edit hook with the
host; each committed edit recomputes the edited line's indentation with the
pure engine in `qml_mode.indent` and hands the result back to the host.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from .config import ModeConfig, normalize_config, validate_config
from .constants import MODE_NAME
from .highlight import classify_line
from .indent import LineSource, compute_indent, indentation_string
from .models import Document, Line, Token

logger = logging.getLogger(__name__)

LineEditCallback = Callable[["Host", int], object]


class Host(LineSource, Protocol):
    """Primitives a host editor provides to the mode.

    `get_line`, `is_blank` and `leading_whitespace_columns` are read by the
    indentation engine itself, so the hook measures lines the way the host
    does.
    """

    def current_line_number(self) -> int: ...

    def set_leading_whitespace(self, line_number: int, columns: int) -> None: ...


class BufferHost:
    """In-memory host over a `Document`.

    Tracks a cursor line and a list of callbacks fired whenever an edit is
    committed. Useful for driving the mode outside an editor and in tests.

    Args:
        document: Document to edit in place.
        config: Mode configuration, used for tab expansion and for the
            whitespace written by `set_leading_whitespace`.
    """

    def __init__(self, document: Document, config: ModeConfig | None = None):
        self.document = document
        self.config = config or ModeConfig()
        self._cursor = 1
        self._listeners: list[LineEditCallback] = []

    @classmethod
    def from_text(cls, text: str, config: ModeConfig | None = None) -> BufferHost:
        return cls(Document.from_text(text), config)

    @property
    def text(self) -> str:
        return self.document.to_text()

    def get_line(self, line_number: int) -> Line:
        return self.document.get_line(line_number)

    def current_line_number(self) -> int:
        return self._cursor

    def move_to(self, line_number: int) -> None:
        self.document.get_line(line_number)
        self._cursor = line_number

    def leading_whitespace_columns(self, line: Line) -> int:
        return line.indentation(self.config.tab_width)

    def is_blank(self, line: Line) -> bool:
        return line.is_blank

    def set_leading_whitespace(self, line_number: int, columns: int) -> None:
        line = self.document.get_line(line_number)
        body = line.text[len(line.leading_whitespace) :]
        whitespace = indentation_string(
            columns, self.config.tab_width, self.config.indent_tabs_mode
        )
        self.document.replace_line(line_number, whitespace + body)

    def register(self, callback: LineEditCallback) -> None:
        self._listeners.append(callback)

    def unregister(self, callback: LineEditCallback) -> None:
        self._listeners.remove(callback)

    def commit_edit(self, line_number: int | None = None) -> None:
        """Notify listeners that `line_number` (default: the cursor line) changed."""
        if line_number is None:
            line_number = self._cursor
        else:
            self.move_to(line_number)
        for callback in list(self._listeners):
            callback(self, line_number)

    def insert_line(self, after: int, text: str = "") -> int:
        """Open a new line below `after`, move the cursor there and commit it.

        Returns:
            int: One-based number of the new line.
        """
        line_number = self.document.insert_line(after, text)
        self.commit_edit(line_number)
        return line_number


def on_line_edit_committed(
    host: Host, line_number: int | None = None, config: ModeConfig | None = None
) -> int:
    """Reindent one line of a host document after an edit.

    Computes the target column with `compute_indent`, reading blank lines
    and columns through the host's own primitives, and asks the host to
    rewrite the line's leading whitespace when it differs from the current
    indentation. Negative targets from unbalanced input are passed to the host
    unchanged; `BufferHost` writes them as zero columns.

    Args:
        host: Host owning the document.
        line_number: One-based line to reindent. Defaults to the host's
            current line.
        config: Mode configuration. Defaults to a new `ModeConfig`.

    Returns:
        int: Column computed by the engine.

    Examples:
        host = BufferHost.from_text("Item {\\nwidth: 1\\n}")
        on_line_edit_committed(host, 2)  # 2
    """
    config = config or ModeConfig()
    if line_number is None:
        line_number = host.current_line_number()

    columns = compute_indent(host, line_number, config.tab_width)
    line = host.get_line(line_number)
    if host.leading_whitespace_columns(line) != max(columns, 0):
        logger.debug("Reindenting line %d to %d columns", line_number, columns)
        host.set_leading_whitespace(line_number, columns)
    return columns


@dataclass
class QmlMode:
    """Registration record for the QML editing mode.

    Attributes:
        config: Mode configuration shared by every attached host.
        name: Display name of the mode.
        attached: Hosts the indentation hook is registered with.
    """

    config: ModeConfig = field(default_factory=ModeConfig)
    name: str = MODE_NAME
    attached: list[BufferHost] = field(default_factory=list, repr=False)

    def __post_init__(self):
        self.config = normalize_config(self.config)
        validate_config(self.config)

    @property
    def file_extensions(self) -> tuple[str, ...]:
        return self.config.file_extensions

    @property
    def comment_start(self) -> str:
        return self.config.comment_start

    @property
    def comment_end(self) -> str:
        return self.config.comment_end

    def matches(self, path: str | Path) -> bool:
        return Path(path).suffix.lower() in self.file_extensions

    def indent_line(self, host: Host, line_number: int | None = None) -> int:
        return on_line_edit_committed(host, line_number, self.config)

    def highlight_line(self, text: str) -> list[Token]:
        return classify_line(text)

    def _on_edit(self, host: Host, line_number: int) -> None:
        self.indent_line(host, line_number)

    def attach(self, host: BufferHost) -> None:
        """Register the indentation hook so every committed edit reindents."""
        if host in self.attached:
            return
        host.register(self._on_edit)
        self.attached.append(host)
        logger.debug("%s mode attached to %r", self.name, host)

    def detach(self, host: BufferHost) -> None:
        if host not in self.attached:
            return
        host.unregister(self._on_edit)
        self.attached.remove(host)


def mode_for_path(path: str | Path, config: ModeConfig | None = None) -> QmlMode | None:
    """Return a `QmlMode` when `path` carries one of the configured extensions.

    Examples:
        mode_for_path("main.qml")  # QmlMode(...)
        mode_for_path("main.cpp")  # None
    """
    mode = QmlMode(config or ModeConfig())
    return mode if mode.matches(path) else None
