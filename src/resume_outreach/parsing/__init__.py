from .config import ParserSettings
from .errors import EmptyDocumentError, ResumeParseError, TooShortError, UnreadablePDFError
from .formatter import format_resume
from .models import FormattedResume, ResumeDocument, Section
from .pipeline import (
    FallbackExtractor,
    ParseOutcome,
    ResumeParser,
    ensure_min_length,
    parse_resume,
    parse_resume_file,
    parse_text_content,
)

__all__ = [
    "ParserSettings",
    "EmptyDocumentError",
    "ResumeParseError",
    "TooShortError",
    "UnreadablePDFError",
    "format_resume",
    "FormattedResume",
    "ResumeDocument",
    "Section",
    "FallbackExtractor",
    "ParseOutcome",
    "ResumeParser",
    "ensure_min_length",
    "parse_resume",
    "parse_resume_file",
    "parse_text_content",
]
