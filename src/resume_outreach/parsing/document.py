"""Assemble a ResumeDocument from segmented sections."""

from collections.abc import Mapping

from .entries import (
    extract_achievements,
    extract_education,
    extract_experience,
    extract_objective,
    extract_projects,
    extract_volunteer,
)
from .models import ResumeDocument, Section
from .profile import extract_profile
from .sections import PROFILE_SECTION
from .skills import extract_skills

# field -> (exact section names in priority order, fallback substrings, excluded substrings)
SECTION_ALIASES: dict[str, tuple[tuple[str, ...], tuple[str, ...], tuple[str, ...]]] = {
    "objective": (
        ("OBJECTIVE", "SUMMARY", "PROFESSIONAL SUMMARY", "CAREER OBJECTIVE", "ABOUT", "ABOUT ME"),
        ("OBJECTIVE", "SUMMARY"),
        (),
    ),
    "education": (("EDUCATION",), ("EDUCATION",), ()),
    "experience": (
        ("EXPERIENCE", "WORK EXPERIENCE", "EMPLOYMENT"),
        ("EXPERIENCE", "EMPLOYMENT"),
        ("PROJECT", "VOLUNTEER"),
    ),
    "skills": (
        ("SKILLS", "TECHNICAL SKILLS"),
        ("SKILL", "PROFICIENCIES"),
        (),
    ),
    "projects": (("PROJECTS", "PROJECT EXPERIENCE"), ("PROJECT",), ()),
    "volunteer": (("VOLUNTEER", "VOLUNTEERING"), ("VOLUNTEER", "COMMUNITY SERVICE"), ()),
    "achievements": (
        ("ACHIEVEMENTS", "HONORS", "AWARDS"),
        ("ACHIEVEMENT", "HONOR", "AWARD"),
        (),
    ),
}


def find_section(sections: Mapping[str, Section], field: str) -> Section | None:
    """Locate the section feeding a resume field.

    Exact names are tried first, in priority order; otherwise the first
    section whose name contains a fallback substring (and none of the
    excluded ones) is used.
    """
    exact, contains, excluded = SECTION_ALIASES[field]
    for name in exact:
        if name in sections:
            return sections[name]
    for name, section in sections.items():
        if any(word in name for word in excluded):
            continue
        if any(word in name for word in contains):
            return section
    return None


def extract_resume(sections: Mapping[str, Section]) -> ResumeDocument:
    """Run every field extractor over its section."""
    return ResumeDocument(
        profile=extract_profile(sections.get(PROFILE_SECTION)),
        objective=extract_objective(find_section(sections, "objective")),
        education=extract_education(find_section(sections, "education")),
        experience=extract_experience(find_section(sections, "experience")),
        skills=extract_skills(find_section(sections, "skills")),
        projects=extract_projects(find_section(sections, "projects")),
        volunteer=extract_volunteer(find_section(sections, "volunteer")),
        achievements=extract_achievements(find_section(sections, "achievements")),
    )
