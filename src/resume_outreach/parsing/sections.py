"""Section segmentation: group lines under resume headings."""

import re
import statistics
from collections.abc import Sequence
from dataclasses import dataclass, field

from .config import DEFAULT_SUBSECTION_GAP
from .models import Line, Section

PROFILE_SECTION = "PROFILE"

SECTION_KEYWORDS = (
    "EDUCATION",
    "EXPERIENCE",
    "WORK EXPERIENCE",
    "EMPLOYMENT",
    "SKILLS",
    "TECHNICAL SKILLS",
    "PROFICIENCIES",
    "PROJECTS",
    "PROJECT EXPERIENCE",
    "CERTIFICATIONS",
    "ACHIEVEMENTS",
    "HONORS",
    "AWARDS",
    "VOLUNTEER",
    "VOLUNTEERING",
    "COMMUNITY SERVICE",
    "PUBLICATIONS",
    "PRESENTATIONS",
    "RESEARCH",
    "LANGUAGES",
    "INTERESTS",
    "ACTIVITIES",
    "OBJECTIVE",
    "SUMMARY",
    "PROFILE",
    "ABOUT",
)

# Sections whose content is a list of entries (one job, one degree, ...)
MULTI_ENTRY_KEYWORDS = (
    "EDUCATION",
    "EXPERIENCE",
    "WORK EXPERIENCE",
    "EMPLOYMENT",
    "VOLUNTEER",
    "PROJECT",
)

MAX_KEYWORD_HEADING_WORDS = 4

# A blank line is a gap this many times the document's usual line pitch
BLANK_LINE_PITCH_RATIO = 1.5


def typical_line_pitch(lines: Sequence[Line]) -> float:
    """Median baseline distance between consecutive lines on the same page.

    Returns 0.0 when no two consecutive lines share a page.
    """
    deltas = [
        previous.y - line.y
        for previous, line in zip(lines, lines[1:])
        if previous.page == line.page and previous.y > line.y
    ]
    if not deltas:
        return 0.0
    return statistics.median(deltas)


def blank_line_gap(
    lines: Sequence[Line], min_gap: float = DEFAULT_SUBSECTION_GAP
) -> float:
    """Vertical gap above which two lines have a blank line between them.

    Scales with the document's line pitch so that loosely leaded text is
    not read as blank-separated; min_gap is the floor.
    """
    return max(min_gap, typical_line_pitch(lines) * BLANK_LINE_PITCH_RATIO)


def clean_section_name(text: str) -> str:
    """Strip punctuation and upper-case a heading's text."""
    return re.sub(r"[^\w\s]", "", text).strip().upper()


def is_preceded_by_blank(
    line: Line,
    previous: Line | None,
    blank_gap: float = DEFAULT_SUBSECTION_GAP,
) -> bool:
    """True when a blank line separates line from the one before it.

    Blank lines never survive extraction as text, so an empty previous line,
    a page break or a vertical gap wider than blank_gap all count.
    """
    if previous is None:
        return False
    if not previous.text.strip():
        return True
    if previous.page != line.page:
        return True
    return abs(previous.y - line.y) > blank_gap


def is_section_heading(
    line: Line,
    previous: Line | None = None,
    blank_gap: float = DEFAULT_SUBSECTION_GAP,
) -> bool:
    """Decide whether a line labels a new section.

    Either the line is bold, all caps and a single fragment, or it is a short
    line containing a known section keyword that is bold or follows a blank
    line.
    """
    if line.bold and line.all_caps and len(line.fragments) == 1:
        return True

    upper = line.text.upper()
    if not any(keyword in upper for keyword in SECTION_KEYWORDS):
        return False
    if len(line.text.split()) > MAX_KEYWORD_HEADING_WORDS:
        return False
    return line.bold or is_preceded_by_blank(line, previous, blank_gap)


def is_multi_entry_section(name: str) -> bool:
    return any(keyword in name for keyword in MULTI_ENTRY_KEYWORDS)


def split_subsections(
    lines: Sequence[Line], gap: float = DEFAULT_SUBSECTION_GAP
) -> list[list[Line]]:
    """Split a section body into one subsection per entry.

    A subsection closes when the vertical gap to the next line exceeds gap,
    or when the next line is bold, the current one is not and the next one
    is not a bullet. The last subsection is always closed.

    Args:
        lines: Section body, heading excluded.
        gap: Vertical gap that reads as a blank line.

    Returns:
        Subsections in order; empty when lines is empty.
    """
    subsections: list[list[Line]] = []
    current: list[Line] = []

    for i, line in enumerate(lines):
        current.append(line)
        next_line = lines[i + 1] if i + 1 < len(lines) else None

        ends_here = next_line is None or (
            next_line.page != line.page
            or abs(line.y - next_line.y) > gap
            or (next_line.bold and not line.bold and not next_line.bullet)
        )
        if ends_here:
            subsections.append(current)
            current = []

    return subsections


def group_by_title_lines(lines: Sequence[Line]) -> list[list[Line]]:
    """Group a flat body into entries using bold, non-bullet title lines.

    Lines before the first title are dropped. When the body has no title
    line at all it is returned as a single entry.
    """
    if not lines:
        return []
    if not any(line.bold and not line.bullet for line in lines):
        return [list(lines)]

    entries: list[list[Line]] = []
    current: list[Line] | None = None
    for line in lines:
        if line.bold and not line.bullet:
            if current:
                entries.append(current)
            current = [line]
        elif current is not None:
            current.append(line)
    if current:
        entries.append(current)
    return entries


def section_entries(section: Section | None) -> list[list[Line]]:
    """Entries of a multi-entry section, whichever way it was grouped."""
    if section is None:
        return []
    if section.subsections is not None:
        return [list(sub) for sub in section.subsections if sub]
    return group_by_title_lines(section.body)


@dataclass
class _SegmentState:
    """Accumulator threaded through the segmentation fold."""

    current: str = PROFILE_SECTION
    sections: dict[str, Section] = field(default_factory=dict)
    previous: Line | None = None


def _step(state: _SegmentState, line: Line, blank_gap: float) -> _SegmentState:
    if is_section_heading(line, state.previous, blank_gap):
        name = clean_section_name(line.text) or state.current
        section = state.sections.setdefault(name, Section(name=name))
        section.headings.append(line)
        state.current = name
    state.sections.setdefault(state.current, Section(name=state.current)).lines.append(line)
    state.previous = line
    return state


def group_lines_into_sections(
    lines: Sequence[Line], subsection_gap: float = DEFAULT_SUBSECTION_GAP
) -> dict[str, Section]:
    """Group lines into named sections and split multi-entry sections.

    Content before the first heading goes to PROFILE. Every line lands in
    exactly one section; heading lines are kept in their section's lines and
    recorded in its headings.

    Args:
        lines: Lines in reading order.
        subsection_gap: Smallest vertical gap that reads as a blank line.
            Documents with wider line spacing use a proportionally wider gap.

    Returns:
        Sections keyed by cleaned name, in first-seen order.
    """
    if not lines:
        return {}

    blank_gap = blank_line_gap(lines, subsection_gap)

    state = _SegmentState(sections={PROFILE_SECTION: Section(name=PROFILE_SECTION)})
    for line in lines:
        state = _step(state, line, blank_gap)

    for name, section in state.sections.items():
        if is_multi_entry_section(name):
            section.subsections = split_subsections(section.body, blank_gap)

    return state.sections
