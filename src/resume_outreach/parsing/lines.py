"""Line reconstruction: merge positioned fragments into visual lines."""

import re
from collections.abc import Sequence

from .config import DEFAULT_LINE_TOLERANCE, DEFAULT_MERGE_RATIO, DEFAULT_TEXT_LINE_PITCH
from .errors import EmptyDocumentError
from .fragments import DEFAULT_CHAR_WIDTH, char_width, is_all_caps
from .models import Line, TextFragment

BULLET_PREFIXES = ("•", "-")

# Baseline of the first synthetic line when parsing plain text
TEXT_TOP_Y = 792.0


def average_char_width(fragments: Sequence[TextFragment]) -> float:
    """Average character width over non-bold fragments with text.

    Bold fragments are skipped because their wider glyphs would inflate the
    estimate. Falls back to the default width when nothing qualifies.
    """
    total_width = 0.0
    total_chars = 0
    for fragment in fragments:
        if not fragment.bold and fragment.text.strip():
            total_width += fragment.x2 - fragment.x1
            total_chars += len(fragment.text)
    if total_chars == 0:
        return DEFAULT_CHAR_WIDTH
    return total_width / total_chars


def merge_threshold(
    fragments: Sequence[TextFragment], merge_ratio: float = DEFAULT_MERGE_RATIO
) -> float:
    """Maximum horizontal gap for two fragments on a line to be one run."""
    return average_char_width(fragments) * merge_ratio


def _is_bullet(text: str) -> bool:
    return text.strip().startswith(BULLET_PREFIXES)


def organize_line(fragments: Sequence[TextFragment]) -> Line:
    """Build a Line from the fragments of one visual row.

    Args:
        fragments: Non-empty fragments belonging to the same row.

    Returns:
        Line with fragments sorted by x1 and flags derived from its text.
    """
    ordered = sorted(fragments, key=lambda f: f.x1)
    text = re.sub(r"\s+", " ", " ".join(f.text.strip() for f in ordered)).strip()
    return Line(
        text=text,
        fragments=ordered,
        bold=all(f.bold for f in ordered),
        all_caps=is_all_caps(text),
        bullet=_is_bullet(text),
        y=ordered[0].y,
        page=ordered[0].page,
    )


def group_into_lines(
    fragments: Sequence[TextFragment],
    line_tolerance: float = DEFAULT_LINE_TOLERANCE,
    merge_ratio: float = DEFAULT_MERGE_RATIO,
) -> list[Line]:
    """Group ordered fragments into lines, merging adjacent runs of text.

    A new line starts whenever the baseline moves more than line_tolerance
    away from the current line's first baseline or the page changes. Within a
    line, a fragment whose gap to the previous fragment is at most the merge
    threshold is concatenated onto it; otherwise it is kept as a separate
    fragment of the same line.

    Args:
        fragments: Fragments in extraction order.
        line_tolerance: Vertical tolerance for sharing a line.
        merge_ratio: Multiplier applied to the average character width.

    Returns:
        Lines in reading order.
    """
    if not fragments:
        return []

    threshold = merge_threshold(fragments, merge_ratio)

    lines: list[Line] = []
    current: list[TextFragment] = []
    current_y: float | None = None
    current_page: int | None = None

    for fragment in fragments:
        if (
            current_y is None
            or fragment.page != current_page
            or abs(fragment.y - current_y) > line_tolerance
        ):
            if current:
                lines.append(organize_line(current))
            current = [fragment]
            current_y = fragment.y
            current_page = fragment.page
            continue

        previous = current[-1]
        if fragment.x1 - previous.x2 <= threshold:
            current[-1] = previous.model_copy(
                update={
                    "text": previous.text + fragment.text,
                    "x2": fragment.x2,
                    "all_caps": is_all_caps(previous.text + fragment.text),
                }
            )
        else:
            current.append(fragment)

    if current:
        lines.append(organize_line(current))

    return lines


def lines_from_text(
    text: str, line_pitch: float = DEFAULT_TEXT_LINE_PITCH
) -> list[Line]:
    """Build lines directly from already-extracted plain text.

    Each non-blank text line becomes a single-fragment line. Baselines step
    down by line_pitch per text line, blank lines included, so a blank line
    shows up as a vertical gap of twice the pitch.

    Raises:
        EmptyDocumentError: If the text has no non-blank line.
    """
    lines: list[Line] = []
    y = TEXT_TOP_Y
    for raw in text.splitlines():
        stripped = raw.strip()
        if stripped:
            width = char_width("")
            fragment = TextFragment(
                text=stripped,
                x1=0.0,
                x2=len(stripped) * width,
                y=y,
                page=1,
                bold=False,
                all_caps=is_all_caps(stripped),
            )
            lines.append(organize_line([fragment]))
        y -= line_pitch

    if not lines:
        raise EmptyDocumentError("No text could be extracted from the document")

    return lines
