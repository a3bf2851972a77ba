"""Constants used across the qml-mode package."""

from __future__ import annotations

from .config import ModeConfig

DEFAULT_CONFIG = ModeConfig()

# Nesting delimiters counted by the indentation engine
OPENING_DELIMITERS = "{["
CLOSING_DELIMITERS = "}]"

# Leading whitespace recognised when measuring indentation
INDENT_WHITESPACE = " \t"

# Mode registration defaults
MODE_NAME = "QML"
DEFAULT_TAB_WIDTH = DEFAULT_CONFIG.tab_width
QML_EXTENSIONS = DEFAULT_CONFIG.file_extensions
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
