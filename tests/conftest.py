import textwrap

import pytest
from click.testing import CliRunner

from qml_mode.models import Document


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def make_document():
    """Builds a `Document` from dedented source text."""

    def _make(source: str) -> Document:
        return Document.from_text(textwrap.dedent(source).lstrip("\n"))

    return _make
