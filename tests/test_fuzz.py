from __future__ import annotations

import os

import pytest
from qml_mode.highlight import classify_line
from qml_mode.indent import compute_indent, reindent_document
from qml_mode.models import Document

atheris = pytest.importorskip("atheris")


def test_compute_indent_with_fuzzed_document():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    lines: list[str] = []

    while provider.remaining_bytes() > 0 and len(lines) < 64:
        lines.append(provider.ConsumeUnicodeNoSurrogates(32))

    document = Document(lines=lines or [""])
    for line_number in range(1, len(document) + 1):
        assert isinstance(compute_indent(document, line_number), int)

    once = reindent_document(document)
    assert reindent_document(once) == once


def test_classify_line_with_fuzzed_input():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    classified = 0

    for _ in range(128):
        if provider.remaining_bytes() == 0:
            break
        text = provider.ConsumeUnicodeNoSurrogates(64)
        for token in classify_line(text):
            assert text[token.start : token.end] == token.text
        classified += 1

    assert classified  # ensure we exercised the loop
