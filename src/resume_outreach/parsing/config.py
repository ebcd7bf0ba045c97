"""Tunable thresholds for the parsing stages."""

import os

from pydantic import BaseModel, Field

# Vertical delta (page units) above which two fragments sit on different lines
DEFAULT_LINE_TOLERANCE = 5.0
# Fraction of the average character width under which fragments are merged
DEFAULT_MERGE_RATIO = 0.8
# Vertical gap (page units) that reads as a blank line between entries
DEFAULT_SUBSECTION_GAP = 15.0
# Caller-side minimum for text to be trusted as a resume
DEFAULT_MIN_TEXT_CHARS = 100
# Synthetic baseline pitch used when parsing already-extracted text
DEFAULT_TEXT_LINE_PITCH = 12.0


class ParserSettings(BaseModel):
    """Thresholds shared by the line, section and gate stages."""

    line_tolerance: float = Field(default=DEFAULT_LINE_TOLERANCE, gt=0)
    merge_ratio: float = Field(default=DEFAULT_MERGE_RATIO, gt=0)
    subsection_gap: float = Field(default=DEFAULT_SUBSECTION_GAP, gt=0)
    min_text_chars: int = Field(default=DEFAULT_MIN_TEXT_CHARS, ge=0)
    text_line_pitch: float = Field(default=DEFAULT_TEXT_LINE_PITCH, gt=0)

    @classmethod
    def from_env(cls) -> "ParserSettings":
        """Build settings, overriding defaults from RESUME_* env vars."""
        overrides = {}
        for field_name, env_var in (
            ("line_tolerance", "RESUME_LINE_TOLERANCE"),
            ("merge_ratio", "RESUME_MERGE_RATIO"),
            ("subsection_gap", "RESUME_SUBSECTION_GAP"),
            ("min_text_chars", "RESUME_MIN_TEXT_CHARS"),
        ):
            value = os.getenv(env_var)
            if value:
                overrides[field_name] = value
        return cls(**overrides)
