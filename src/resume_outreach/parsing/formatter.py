"""Map a ResumeDocument to the shape consumed outside the parser."""

from .dates import extract_end_date, extract_start_date
from .models import (
    ExperienceEntry,
    FormattedEducation,
    FormattedExperience,
    FormattedProfile,
    FormattedProject,
    FormattedResume,
    ResumeDocument,
    SkillSet,
)

# Order in which skill categories are flattened
SKILL_CATEGORY_ORDER = ("technical", "languages", "soft", "other")


def flatten_skills(skills: SkillSet) -> list[str]:
    flattened: list[str] = []
    for category in SKILL_CATEGORY_ORDER:
        flattened.extend(getattr(skills, category))
    return flattened


def _format_experience(entry: ExperienceEntry) -> FormattedExperience:
    return FormattedExperience(
        company=entry.company,
        title=entry.title,
        location=entry.location,
        start_date=extract_start_date(entry.date),
        end_date=extract_end_date(entry.date),
        description=list(entry.description),
    )


def format_resume(document: ResumeDocument) -> FormattedResume:
    """Normalize a parsed resume for persistence and email generation.

    Skills are flattened in a fixed category order, project descriptions are
    joined into one string and start/end dates are derived from each entry's
    raw date. Missing values are empty strings.
    """
    profile = document.profile
    return FormattedResume(
        profile=FormattedProfile(
            name=profile.name,
            email=profile.email,
            phone=profile.phone,
            location=profile.location,
            website=profile.url,
        ),
        objective=document.objective,
        experience=[_format_experience(exp) for exp in document.experience],
        education=[
            FormattedEducation(
                school=edu.name,
                degree=edu.degree,
                start_date=extract_start_date(edu.date),
                end_date=extract_end_date(edu.date),
                gpa=edu.gpa,
            )
            for edu in document.education
        ],
        skills=flatten_skills(document.skills),
        projects=[
            FormattedProject(
                name=proj.name,
                date=proj.date,
                description=" ".join(proj.description),
                technologies=proj.technologies,
            )
            for proj in document.projects
        ],
        volunteer=[_format_experience(vol) for vol in document.volunteer],
        achievements=[a.model_copy() for a in document.achievements],
    )
