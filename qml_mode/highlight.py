"""Lexical highlighting for QML source lines."""

from __future__ import annotations

import re

from .models import Category, Document, Token

KEYWORDS = (
    "import",
    "as",
    "pragma",
    "property",
    "alias",
    "readonly",
    "default",
    "required",
    "signal",
    "function",
    "component",
    "enum",
    "on",
    "var",
    "let",
    "const",
    "if",
    "else",
    "for",
    "while",
    "do",
    "switch",
    "case",
    "break",
    "continue",
    "return",
    "new",
    "delete",
    "typeof",
    "instanceof",
    "in",
    "of",
    "this",
    "try",
    "catch",
    "finally",
    "throw",
)

CONSTANTS = ("true", "false", "null", "undefined", "NaN", "Infinity")

BASIC_TYPES = (
    "bool",
    "color",
    "date",
    "double",
    "font",
    "int",
    "list",
    "point",
    "real",
    "rect",
    "size",
    "string",
    "url",
    "variant",
    "vector2d",
    "vector3d",
)


def _words(words: tuple[str, ...]) -> str:
    return r"\b(?:" + "|".join(words) + r")\b"


# Order matters: at each position the first matching rule wins.
HIGHLIGHT_RULES: tuple[tuple[re.Pattern[str], Category], ...] = (
    (re.compile(r"//.*"), Category.COMMENT),
    (re.compile(r"/\*.*?(?:\*/|$)"), Category.COMMENT),
    (re.compile(r'"(?:[^"\\]|\\.)*"?'), Category.STRING),
    (re.compile(r"'(?:[^'\\]|\\.)*'?"), Category.STRING),
    (
        re.compile(
            r"(?<![\w.])(?:0[xX][0-9a-fA-F]+|\d+(?:\.\d*)?(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)(?!\w)"
        ),
        Category.NUMBER,
    ),
    (re.compile(r"\bon[A-Z]\w*(?=\s*:(?!:))"), Category.SIGNAL_HANDLER),
    # Keywords and the middle operand of a conditional are not property names.
    (
        re.compile(
            r"(?<!\?)(?<!\?\s)\b(?!" + _words(KEYWORDS) + r")[a-z_]\w*(?:\.[a-z_]\w*)*(?=\s*:(?!:))"
        ),
        Category.PROPERTY,
    ),
    (re.compile(_words(KEYWORDS)), Category.KEYWORD),
    (re.compile(_words(CONSTANTS)), Category.CONSTANT),
    (re.compile(r"\b[A-Z]\w*(?:\.\w+)+"), Category.NAMESPACE),
    (re.compile(r"\b[A-Z]\w*\b|" + _words(BASIC_TYPES)), Category.TYPE),
    (re.compile(r"=>|->"), Category.ARROW),
)

_WORD = re.compile(r"\w+")


def classify_line(
    text: str, rules: tuple[tuple[re.Pattern[str], Category], ...] = HIGHLIGHT_RULES
) -> list[Token]:
    """Split a line into highlighted tokens.

    Scans left to right. At each position the rules are tried in table order
    and the first one that matches claims the span. Identifiers no rule claims
    are skipped whole, so rules never fire in the middle of a word. Each line
    is classified on its own; a block comment never continues onto the next
    line.

    Args:
        text: Line text without its terminator.
        rules: Ordered ``(pattern, category)`` pairs.

    Returns:
        list[Token]: Non-overlapping tokens in column order. Unclassified text
            produces no token.

    Examples:
        classify_line("Rectangle { width: 10 }")
        # [Token(0, 9, TYPE, "Rectangle"), Token(12, 17, PROPERTY, "width"),
        #  Token(19, 21, NUMBER, "10")]
    """
    tokens: list[Token] = []
    pos = 0
    length = len(text)

    while pos < length:
        for pattern, category in rules:
            match = pattern.match(text, pos)
            if match and match.end() > pos:
                tokens.append(Token(pos, match.end(), category, match.group(0)))
                pos = match.end()
                break
        else:
            word = _WORD.match(text, pos)
            pos = word.end() if word else pos + 1

    return tokens


def classify_document(document: Document) -> dict[int, list[Token]]:
    """Classify every line of `document`, keyed by one-based line number."""
    return {line.number: classify_line(line.text) for line in document}
