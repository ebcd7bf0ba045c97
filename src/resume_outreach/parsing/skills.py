"""Skills extraction into technical, languages, soft and other categories."""

import re
from dataclasses import dataclass, field

from .models import Line, Section, SkillSet

# Keywords that switch the current category, checked in order
CATEGORY_KEYWORDS = (
    ("technical", ("technical", "computer", "programming")),
    ("languages", ("language",)),
    ("soft", ("soft", "interpersonal")),
)
DEFAULT_CATEGORY = "other"

SKILL_DELIMITERS = re.compile(r"[,|]")
LEADING_BULLET = re.compile(r"^\s*[•◦▪\-*]\s*")


def split_skill_list(text: str) -> list[str]:
    """Split a comma or pipe delimited list, dropping blanks."""
    return [part.strip() for part in SKILL_DELIMITERS.split(text) if part.strip()]


def detect_category(text: str, current: str) -> str:
    lowered = text.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return current


@dataclass
class _SkillsState:
    category: str = DEFAULT_CATEGORY
    skills: dict[str, list[str]] = field(
        default_factory=lambda: {"technical": [], "languages": [], "soft": [], "other": []}
    )


def _step(state: _SkillsState, line: Line) -> _SkillsState:
    state.category = detect_category(line.text, state.category)
    text = LEADING_BULLET.sub("", line.text).strip()

    _, colon, rest = text.partition(":")
    if colon:
        state.skills[state.category].extend(split_skill_list(rest))
    elif not line.bold:
        state.skills[state.category].extend(split_skill_list(text))
    return state


def extract_skills(section: Section | None) -> SkillSet:
    """Collect skills per category.

    A line mentioning a category keyword switches the current category for
    that line and the ones after it. "Label: a, b" lines contribute the part
    after the colon; plain non-bold lines contribute the whole line. Skills
    are not de-duplicated.
    """
    if section is None:
        return SkillSet()

    state = _SkillsState()
    for line in section.body:
        state = _step(state, line)
    return SkillSet(**state.skills)
