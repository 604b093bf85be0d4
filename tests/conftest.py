import os
import sys
from typing import Iterator

import pytest

# Ensure local src path is importable
_here = os.path.dirname(os.path.dirname(__file__))
_src = os.path.join(_here, "src")
if os.path.isdir(_src) and _src not in sys.path:
    sys.path.insert(0, _src)

from twinpane.utils.diff_engine import Operation, coerce_operation  # noqa: E402
from twinpane.utils.diff_model import Content, SpanState  # noqa: E402
from twinpane.utils.pane_builder import clear_render_cache  # noqa: E402

_SESSION_ENV = ("TWINPANE_LEFT", "TWINPANE_RIGHT", "TWINPANE_MODE")


def side_text(content: Content) -> str:
    """Text of one pane without spacer fill, i.e. the source text of that side."""
    return "".join(
        span.content for line in content for span in line.spans if span.state is not SpanState.SPACER
    )


def line_numbers(content: Content) -> list:
    """Per-row line numbers (``None`` for unnumbered rows)."""
    return [line.line_number for line in content]


def operations_to_texts(operations) -> tuple:
    """Rebuild ``(text_a, text_b)`` from an operation stream."""
    left, right = [], []
    for item in operations:
        op = coerce_operation(item)
        if op.operation is not Operation.INSERT:
            left.append(op.text)
        if op.operation is not Operation.DELETE:
            right.append(op.text)
    return "".join(left), "".join(right)


@pytest.fixture(autouse=True)
def fresh_render_cache() -> Iterator[None]:
    """Each test starts and ends with an empty render memo."""
    clear_render_cache()
    yield
    clear_render_cache()


@pytest.fixture
def clean_session_env(monkeypatch):
    """Remove session environment variables that would leak into CLI parsing."""
    for key in _SESSION_ENV:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def text_file(tmp_path):
    """Factory writing a text file into a temp dir and returning its path."""

    def make(name: str, content: str) -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return make
