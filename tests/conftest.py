"""Shared fixtures for parser tests."""

import pytest

from resume_outreach.parsing.fragments import DEFAULT_CHAR_WIDTH, is_all_caps
from resume_outreach.parsing.lines import organize_line
from resume_outreach.parsing.models import Line, TextFragment


@pytest.fixture
def make_line():
    """Factory for single-fragment lines."""

    def _make(
        text: str, y: float = 700.0, bold: bool = False, page: int = 1, x1: float = 72.0
    ) -> Line:
        fragment = TextFragment(
            text=text,
            x1=x1,
            x2=x1 + len(text) * DEFAULT_CHAR_WIDTH,
            y=y,
            page=page,
            bold=bold,
            all_caps=is_all_caps(text),
        )
        return organize_line([fragment])

    return _make


@pytest.fixture
def stack_lines(make_line):
    """Factory laying out (text, bold) rows top to bottom.

    A None row leaves an extra blank gap before the next line.
    """

    def _stack(rows, top: float = 700.0, pitch: float = 14.0, blank: float = 26.0) -> list[Line]:
        lines = []
        y = top
        for row in rows:
            if row is None:
                y -= blank - pitch
                continue
            text, bold = row if isinstance(row, tuple) else (row, False)
            lines.append(make_line(text, y=y, bold=bold))
            y -= pitch
        return lines

    return _stack
