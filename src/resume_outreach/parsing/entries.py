"""Entry extractors for education, experience, project and achievement sections."""

import re
from collections.abc import Sequence

from .dates import has_date, split_date
from .models import (
    AchievementEntry,
    EducationEntry,
    ExperienceEntry,
    Line,
    ProjectEntry,
    Section,
)
from .sections import section_entries

DEGREE = re.compile(
    r"bachelor|master|associate|ph\.?d|doctorate|degree|diploma"
    r"|\b[bm]\.[as]\.|\b[bm]\.?sc\b|\b[bm]\.?tech\b|\bmba\b",
    re.IGNORECASE,
)
GPA_LINE = re.compile(r"\b(?:gpa|grade)\b.*?\b[0-4]\.\d{1,2}\b", re.IGNORECASE)
GPA_VALUE = re.compile(r"\b[0-4]\.\d{1,2}\b")
TECHNOLOGIES = re.compile(r"technologies|tools|tech stack|built with", re.IGNORECASE)
LOCATION = re.compile(r"^(?:[A-Z][a-zA-Z.\s]+,\s*[A-Z]{2}|Remote)$")
BULLET_MARKER = re.compile(r"^\s*[•\-]\s*")


def strip_bullet(text: str) -> str:
    return BULLET_MARKER.sub("", text).strip()


def extract_objective(section: Section | None) -> str:
    """Join every line after the heading into one statement."""
    if section is None:
        return ""
    return " ".join(line.text for line in section.body).strip()


# --- Education ---


def extract_education_entry(lines: Sequence[Line]) -> EducationEntry:
    """One school: name and date from the first line, then degree, GPA, date."""
    entry = EducationEntry()
    if not lines:
        return entry

    entry.name, entry.date = split_date(lines[0].text)

    for line in lines[1:]:
        text = line.text.strip()
        if DEGREE.search(text):
            degree, date = split_date(text)
            entry.degree = degree or text
            if date and not entry.date:
                entry.date = date
            entry.gpa = entry.gpa or _gpa(text)
        elif GPA_LINE.search(text):
            entry.gpa = _gpa(text)
        elif not entry.date and has_date(text):
            entry.date = text

    return entry


def _gpa(text: str) -> str:
    line_match = GPA_LINE.search(text)
    if line_match is None:
        return ""
    return GPA_VALUE.search(line_match.group(0)).group(0)


def extract_education(section: Section | None) -> list[EducationEntry]:
    return [extract_education_entry(entry) for entry in section_entries(section)]


# --- Experience / Volunteer ---


def extract_experience_entry(lines: Sequence[Line]) -> ExperienceEntry:
    """One position.

    The first line names the company (a trailing date is split off). Bullets
    become description items, and a wrapped non-bullet line after them is
    joined onto the last item. Before any bullet, the first date line sets
    the date and the first other line is the title.
    """
    entry = ExperienceEntry()
    if not lines:
        return entry

    entry.company, entry.date = split_date(lines[0].text)

    for line in lines[1:]:
        text = line.text.strip()
        if line.bullet:
            entry.description.append(strip_bullet(text))
        elif not entry.date and not entry.description and has_date(text):
            head, entry.date = split_date(text)
            if head and not entry.title:
                entry.title = head
        elif not entry.title and not entry.description:
            entry.title = text
        elif not entry.location and not entry.description and LOCATION.match(text):
            entry.location = text
        elif entry.description:
            entry.description[-1] = f"{entry.description[-1]} {text}"

    return entry


def extract_experience(section: Section | None) -> list[ExperienceEntry]:
    return [extract_experience_entry(entry) for entry in section_entries(section)]


def extract_volunteer(section: Section | None) -> list[ExperienceEntry]:
    """Volunteer roles share the experience layout."""
    return extract_experience(section)


# --- Projects ---


def extract_project_entry(lines: Sequence[Line]) -> ProjectEntry:
    """One project: name/date from the first line, then details."""
    entry = ProjectEntry()
    if not lines:
        return entry

    entry.name, entry.date = split_date(lines[0].text)
    if " | " in entry.name:
        entry.name, entry.technologies = (
            part.strip() for part in entry.name.split(" | ", 1)
        )

    for line in lines[1:]:
        text = line.text.strip()
        if line.bullet:
            entry.description.append(strip_bullet(text))
        elif TECHNOLOGIES.search(text):
            entry.technologies = text
        elif not entry.date and not entry.description and has_date(text):
            entry.date = text
        else:
            entry.description.append(text)

    return entry


def extract_projects(section: Section | None) -> list[ProjectEntry]:
    return [extract_project_entry(entry) for entry in section_entries(section)]


# --- Achievements ---


def _start_achievement(text: str) -> AchievementEntry:
    title, date = split_date(strip_bullet(text))
    return AchievementEntry(title=title, date=date)


def extract_achievements(section: Section | None) -> list[AchievementEntry]:
    """Group achievement lines; bold or bulleted lines start a new entry.

    Description lines are space-joined into one string.
    """
    if section is None:
        return []

    achievements: list[AchievementEntry] = []
    descriptions: list[list[str]] = []
    for line in section.body:
        text = line.text.strip()
        if line.bold or line.bullet or not achievements:
            achievements.append(_start_achievement(text))
            descriptions.append([])
        elif has_date(text):
            achievements[-1].date = text
        else:
            descriptions[-1].append(text)

    for achievement, parts in zip(achievements, descriptions):
        achievement.description = " ".join(parts)
    return achievements
