"""
qml-mode: QML editing support for text editors.

Provides bracket-depth indentation and lexical highlighting for QML, usable
from an editor host, as a library, or from the command line.

CLI Usage:
    qml-mode indent main.qml --in-place

Library Usage:
    from qml_mode import Document, compute_indent, reindent_document

    document = Document.from_text("Item {\\nwidth: 10\\n}\\n")
    compute_indent(document, 2)  # 2
    reindent_document(document).to_text()
"""

from .config import ConfigError, ModeConfig
from .exceptions import LineOutOfRangeError, SourceFileError
from .highlight import HIGHLIGHT_RULES, classify_document, classify_line
from .indent import (
    DocumentLines,
    LineSource,
    compute_indent,
    delimiter_balance,
    reference_indentation,
    reindent_document,
)
from .mode import BufferHost, Host, QmlMode, mode_for_path, on_line_edit_committed
from .models import Category, Document, Line, Token

__version__ = "0.1.0"

__all__ = [
    # Indentation
    "LineSource",
    "DocumentLines",
    "compute_indent",
    "delimiter_balance",
    "reference_indentation",
    "reindent_document",
    # Highlighting
    "HIGHLIGHT_RULES",
    "classify_line",
    "classify_document",
    # Host integration
    "Host",
    "BufferHost",
    "QmlMode",
    "mode_for_path",
    "on_line_edit_committed",
    # Data models
    "Category",
    "Document",
    "Line",
    "Token",
    # Configuration
    "ModeConfig",
    # Exceptions
    "ConfigError",
    "LineOutOfRangeError",
    "SourceFileError",
    # Version
    "__version__",
]
