"""Data models shared by the resume parsing stages."""

from pydantic import BaseModel, ConfigDict, Field


class TextItem(BaseModel):
    """One text-content item as emitted by a PDF text reader."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(alias="str")
    transform: list[float]  # [a, b, c, d, x, y]
    font_name: str = Field(default="", alias="fontName")
    bold: bool = False


class TextFragment(BaseModel):
    """A positioned run of text. Immutable once extracted."""

    model_config = ConfigDict(frozen=True)

    text: str
    x1: float
    x2: float
    y: float  # baseline, larger is higher on the page
    page: int
    bold: bool = False
    all_caps: bool = False


class Line(BaseModel):
    """A visual text row made of one or more fragments sorted by x1."""

    text: str
    fragments: list[TextFragment]
    bold: bool = False
    all_caps: bool = False
    bullet: bool = False
    y: float
    page: int


class Section(BaseModel):
    """A named run of lines opened by a heading (or the implicit PROFILE)."""

    name: str
    lines: list[Line] = Field(default_factory=list)
    headings: list[Line] = Field(default_factory=list)
    subsections: list[list[Line]] | None = None

    @property
    def body(self) -> list[Line]:
        """Lines of the section without the heading lines that labelled it."""
        return [
            line
            for line in self.lines
            if not any(line is heading for heading in self.headings)
        ]

    @property
    def is_subsectioned(self) -> bool:
        return self.subsections is not None


class ProfileRecord(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    url: str = ""


class EducationEntry(BaseModel):
    name: str = ""
    degree: str = ""
    date: str = ""
    gpa: str = ""


class ExperienceEntry(BaseModel):
    company: str = ""
    title: str = ""
    date: str = ""
    location: str = ""
    description: list[str] = Field(default_factory=list)


class ProjectEntry(BaseModel):
    name: str = ""
    date: str = ""
    technologies: str = ""
    description: list[str] = Field(default_factory=list)


class AchievementEntry(BaseModel):
    title: str = ""
    date: str = ""
    description: str = ""


class SkillSet(BaseModel):
    """Skills grouped by category, in extraction order."""

    technical: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    soft: list[str] = Field(default_factory=list)
    other: list[str] = Field(default_factory=list)


class ResumeDocument(BaseModel):
    """Structured resume produced by one parse."""

    profile: ProfileRecord = Field(default_factory=ProfileRecord)
    objective: str = ""
    education: list[EducationEntry] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    skills: SkillSet = Field(default_factory=SkillSet)
    projects: list[ProjectEntry] = Field(default_factory=list)
    volunteer: list[ExperienceEntry] = Field(default_factory=list)
    achievements: list[AchievementEntry] = Field(default_factory=list)


# --- External (formatted) shape ---


class FormattedProfile(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    website: str = ""


class FormattedExperience(BaseModel):
    company: str = ""
    title: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    description: list[str] = Field(default_factory=list)


class FormattedEducation(BaseModel):
    school: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""
    gpa: str = ""


class FormattedProject(BaseModel):
    name: str = ""
    date: str = ""
    description: str = ""
    technologies: str = ""


class FormattedResume(BaseModel):
    """Resume in the shape consumed by persistence and the email generator."""

    profile: FormattedProfile = Field(default_factory=FormattedProfile)
    objective: str = ""
    experience: list[FormattedExperience] = Field(default_factory=list)
    education: list[FormattedEducation] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    projects: list[FormattedProject] = Field(default_factory=list)
    volunteer: list[FormattedExperience] = Field(default_factory=list)
    achievements: list[AchievementEntry] = Field(default_factory=list)

    @property
    def is_degraded(self) -> bool:
        """True when none of skills, experience or projects were recovered."""
        return not (self.skills or self.experience or self.projects)
