from __future__ import annotations

import pytest

from qml_mode.highlight import HIGHLIGHT_RULES, classify_document, classify_line
from qml_mode.models import Category, Document, Token


def _pairs(text: str) -> list[tuple[str, Category]]:
    return [(token.text, token.category) for token in classify_line(text)]


def test_object_declaration():
    assert classify_line("Rectangle { width: 10 }") == [
        Token(0, 9, Category.TYPE, "Rectangle"),
        Token(12, 17, Category.PROPERTY, "width"),
        Token(19, 21, Category.NUMBER, "10"),
    ]


def test_import_statement():
    assert _pairs("import QtQuick.Controls 2.15 as Controls") == [
        ("import", Category.KEYWORD),
        ("QtQuick.Controls", Category.NAMESPACE),
        ("2.15", Category.NUMBER),
        ("as", Category.KEYWORD),
        ("Controls", Category.TYPE),
    ]


def test_property_declaration():
    assert _pairs("    readonly property int count: 0") == [
        ("readonly", Category.KEYWORD),
        ("property", Category.KEYWORD),
        ("int", Category.TYPE),
        ("count", Category.PROPERTY),
        ("0", Category.NUMBER),
    ]


def test_signal_handler():
    assert _pairs("onClicked: root.visible = false") == [
        ("onClicked", Category.SIGNAL_HANDLER),
        ("false", Category.CONSTANT),
    ]


def test_attached_handler_is_namespace_qualified():
    assert _pairs("Component.onCompleted: init()") == [
        ("Component.onCompleted", Category.NAMESPACE),
    ]


def test_dotted_property_name():
    assert _pairs("anchors.fill: parent") == [("anchors.fill", Category.PROPERTY)]


def test_namespace_call():
    assert _pairs("color: Qt.rgba(1, 0, 0, 1)")[:2] == [
        ("color", Category.PROPERTY),
        ("Qt.rgba", Category.NAMESPACE),
    ]


def test_strings_hide_their_contents():
    assert _pairs('text: "Item { width: 1 }"') == [
        ("text", Category.PROPERTY),
        ('"Item { width: 1 }"', Category.STRING),
    ]


def test_single_quoted_string_with_escape():
    assert _pairs(r"'it\'s'") == [(r"'it\'s'", Category.STRING)]


def test_unterminated_string_runs_to_end_of_line():
    assert _pairs('"abc') == [('"abc', Category.STRING)]


def test_line_comment():
    assert _pairs("x: 1 // true {") == [
        ("x", Category.PROPERTY),
        ("1", Category.NUMBER),
        ("// true {", Category.COMMENT),
    ]


def test_block_comment_on_one_line():
    assert _pairs("/* note */ Item") == [
        ("/* note */", Category.COMMENT),
        ("Item", Category.TYPE),
    ]


def test_block_comment_does_not_span_lines():
    tokens = classify_document(Document(lines=["/* open", "Item */"]))
    assert tokens[1] == [Token(0, 7, Category.COMMENT, "/* open")]
    assert [token.category for token in tokens[2]] == [Category.TYPE]


def test_arrow_function():
    assert _pairs("onPressed: (mouse) => accept()") == [
        ("onPressed", Category.SIGNAL_HANDLER),
        ("=>", Category.ARROW),
    ]


@pytest.mark.parametrize("word", ["true", "false", "null", "undefined", "NaN", "Infinity"])
def test_constants(word: str):
    assert _pairs(f"value = {word}") == [(word, Category.CONSTANT)]


def test_keywords_inside_identifiers_are_ignored():
    assert classify_line("important = format") == []


def test_numbers_inside_identifiers_are_ignored():
    assert classify_line("item2 = x1") == []


def test_hex_number():
    assert _pairs("0xff") == [("0xff", Category.NUMBER)]


def test_empty_line():
    assert classify_line("") == []


def test_tokens_do_not_overlap():
    tokens = classify_line('Item { id: a; property var b: [1, "x"] // c')
    for previous, current in zip(tokens, tokens[1:]):
        assert previous.end <= current.start


def test_custom_rule_table():
    rules = tuple(rule for rule in HIGHLIGHT_RULES if rule[1] is not Category.PROPERTY)
    assert _pairs_with(rules, "width: 1") == [("1", Category.NUMBER)]


def _pairs_with(rules, text: str) -> list[tuple[str, Category]]:
    return [(token.text, token.category) for token in classify_line(text, rules)]


def test_classify_document_is_keyed_by_line_number():
    result = classify_document(Document(lines=["Item {", "", "}"]))
    assert list(result) == [1, 2, 3]
    assert result[2] == []


def test_switch_labels_are_keywords():
    assert _pairs("default: break") == [
        ("default", Category.KEYWORD),
        ("break", Category.KEYWORD),
    ]


@pytest.mark.parametrize("text", ["x = a ? b : c", "x = a ?b : c"])
def test_conditional_operand_is_not_a_property(text: str):
    assert Category.PROPERTY not in [token.category for token in classify_line(text)]


def test_property_names_starting_with_keywords():
    assert _pairs("defaultValue: 1") == [
        ("defaultValue", Category.PROPERTY),
        ("1", Category.NUMBER),
    ]
