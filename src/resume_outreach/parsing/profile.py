"""Profile extraction by independent per-field line scoring.

Each field has its own scoring function over a Line. The highest scoring
line wins the field when its score is positive. Fields are chosen
independently, so one line may win more than one field.
"""

import re
from collections.abc import Callable, Sequence

from .models import Line, ProfileRecord, Section

NAME_CHARS = re.compile(r"^[a-zA-Z\s.]+$")
EMAIL = re.compile(r"\S+@\S+\.\S+")
PHONE = re.compile(r"\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}")
CITY_STATE = re.compile(r"[A-Z][a-zA-Z\s]+, [A-Z]{2}")
URL_PATH = re.compile(r"\S+\.[a-z]+/\S+")
COMMON_TLD = re.compile(r"\.(com|net|org|io|me)")


def score_name(line: Line) -> int:
    text = line.text
    score = 0
    if NAME_CHARS.match(text):
        score += 3
    if line.bold:
        score += 2
    if line.all_caps:
        score += 2
    if "@" in text:
        score -= 4
    if re.search(r"\d", text):
        score -= 4
    if "," in text:
        score -= 4
    if "/" in text:
        score -= 4
    return score


def score_email(line: Line) -> int:
    text = line.text
    score = 0
    if EMAIL.search(text):
        score += 4
    if "@" in text:
        score += 2
    if line.bold:
        score -= 1
    return score


def score_phone(line: Line) -> int:
    text = line.text
    score = 0
    if PHONE.search(text):
        score += 4
    if re.search(r"\d", text):
        score += 2
    if line.bold:
        score -= 1
    return score


def score_location(line: Line) -> int:
    text = line.text
    score = 0
    if CITY_STATE.search(text):
        score += 3
    if "," in text:
        score += 2
    if line.bold:
        score -= 1
    return score


def score_url(line: Line) -> int:
    text = line.text
    score = 0
    if URL_PATH.search(text):
        score += 3
    if COMMON_TLD.search(text):
        score += 2
    if "http" in text:
        score += 2
    if line.bold:
        score -= 1
    return score


SCORERS: dict[str, Callable[[Line], int]] = {
    "name": score_name,
    "email": score_email,
    "phone": score_phone,
    "location": score_location,
    "url": score_url,
}


def best_line(lines: Sequence[Line], scorer: Callable[[Line], int]) -> Line | None:
    """Highest scoring line (first on ties), or None if no score is positive."""
    best: Line | None = None
    best_score = 0
    for line in lines:
        score = scorer(line)
        if score > best_score:
            best, best_score = line, score
    return best


def extract_profile(section: Section | None) -> ProfileRecord:
    """Pick name, email, phone, location and url from the header lines."""
    if section is None:
        return ProfileRecord()
    lines = section.body
    fields = {}
    for field_name, scorer in SCORERS.items():
        winner = best_line(lines, scorer)
        fields[field_name] = winner.text.strip() if winner else ""
    return ProfileRecord(**fields)
