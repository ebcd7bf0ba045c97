"""Resume parsing pipeline: fragments -> lines -> sections -> fields -> format."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from ..logger import log_context, logger
from .config import ParserSettings
from .document import extract_resume
from .errors import ResumeParseError, TooShortError
from .formatter import format_resume
from .fragments import PageContent, extract_fragments, load_text_content
from .lines import group_into_lines, lines_from_text
from .models import FormattedResume, Line, ResumeDocument
from .sections import group_lines_into_sections

ResumeSource = bytes | bytearray | str | Path

PARSE_METHOD_REGULAR = "regular"
PARSE_METHOD_FALLBACK = "fallback"
PARSE_METHOD_PREVIOUS = "previous_version_fallback"


def lines_to_text(lines: Sequence[Line]) -> str:
    """Plain text of the reconstructed lines, one per row."""
    return "\n".join(line.text for line in lines)


def ensure_min_length(text: str, min_chars: int) -> None:
    """Caller-side sanity gate on the amount of extracted text.

    Raises:
        TooShortError: If the stripped text has fewer than min_chars characters.
    """
    char_count = len(text.strip())
    if char_count < min_chars:
        raise TooShortError(char_count, min_chars)


def build_lines(
    source: ResumeSource, settings: ParserSettings | None = None
) -> list[Line]:
    """Run the extraction stages up to reconstructed lines.

    Bytes are read as a PDF, a Path as a PDF file on disk and a str as text
    that has already been extracted (the fragment stage is skipped).

    Raises:
        EmptyDocumentError: If no text is found.
        UnreadablePDFError: If bytes cannot be opened as a PDF.
        FileNotFoundError: If a Path does not exist.
    """
    settings = settings or ParserSettings()
    if isinstance(source, str):
        return lines_from_text(source, line_pitch=settings.text_line_pitch)
    if isinstance(source, Path):
        if not source.exists():
            raise FileNotFoundError(f"PDF file not found: {source}")
        source = source.read_bytes()
    pages = load_text_content(bytes(source))
    return _lines_from_pages(pages, settings)


def _lines_from_pages(
    pages: Sequence[PageContent], settings: ParserSettings
) -> list[Line]:
    fragments = extract_fragments(pages, line_tolerance=settings.line_tolerance)
    return group_into_lines(
        fragments,
        line_tolerance=settings.line_tolerance,
        merge_ratio=settings.merge_ratio,
    )


def structure_lines(
    lines: Sequence[Line], settings: ParserSettings | None = None
) -> ResumeDocument:
    """Segment lines into sections and extract the resume fields."""
    settings = settings or ParserSettings()
    sections = group_lines_into_sections(lines, subsection_gap=settings.subsection_gap)
    return extract_resume(sections)


def _document_counts(lines: Sequence[Line], document: ResumeDocument) -> dict[str, Any]:
    return {
        "lines": len(lines),
        "pages": len({line.page for line in lines}),
        "education": len(document.education),
        "experience": len(document.experience),
        "projects": len(document.projects),
    }


def parse_resume(
    source: ResumeSource, settings: ParserSettings | None = None
) -> ResumeDocument:
    """Parse a resume from PDF bytes, a PDF path or already-extracted text.

    Args:
        source: PDF bytes, a Path to a PDF, or plain text.
        settings: Optional thresholds; defaults are used when omitted.

    Returns:
        The structured ResumeDocument.

    Raises:
        EmptyDocumentError: If no text is found.
        UnreadablePDFError: If bytes cannot be opened as a PDF.
    """
    settings = settings or ParserSettings()
    with logger.timed("resume parsed") as fields:
        lines = build_lines(source, settings)
        document = structure_lines(lines, settings)
        fields.update(_document_counts(lines, document))
    return document


def parse_text_content(
    pages: Sequence[PageContent], settings: ParserSettings | None = None
) -> ResumeDocument:
    """Parse a resume from per-page text-content items.

    Items follow the PDF reader contract: {"str", "transform", "fontName",
    "bold"?}.
    """
    settings = settings or ParserSettings()
    with logger.timed("resume parsed") as fields:
        lines = _lines_from_pages(pages, settings)
        document = structure_lines(lines, settings)
        fields.update(_document_counts(lines, document))
    return document


def parse_resume_file(
    file_path: str | Path, settings: ParserSettings | None = None
) -> ResumeDocument:
    """Parse a resume PDF from disk.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    return parse_resume(Path(file_path), settings)


class FallbackExtractor(ABC):
    """Alternate extractor consulted when the rule-based parse degrades.

    Implementations typically prompt an LLM with the resume text and map its
    answer onto the formatted shape.
    """

    @abstractmethod
    def extract(self, text: str) -> FormattedResume:
        """Extract a formatted resume from raw resume text.

        Args:
            text: Plain text of the resume, one visual line per row.

        Returns:
            FormattedResume with whatever fields could be recovered.
        """


class ParseOutcome(BaseModel):
    """Result of one caller-level parse, including how it was obtained."""

    resume: FormattedResume | None = None
    document: ResumeDocument | None = None
    parse_method: str | None = None
    text: str = ""
    warning: str | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.resume is None


class ResumeParser:
    """Caller-side wrapper applying the length gate and fallback policy."""

    def __init__(
        self,
        settings: ParserSettings | None = None,
        fallback: FallbackExtractor | None = None,
    ):
        """Initialize the parser.

        Args:
            settings: Thresholds; read from the environment when omitted.
            fallback: Optional extractor used when the parse is degraded.
        """
        self.settings = settings or ParserSettings.from_env()
        self.fallback = fallback

    def parse(
        self,
        source: ResumeSource,
        previous: FormattedResume | None = None,
        source_name: str | None = None,
    ) -> ParseOutcome:
        """Parse one resume and decide which result to hand to the caller.

        Args:
            source: PDF bytes, a Path to a PDF, or plain text.
            previous: Previously stored resume, used when this parse fails or
                recovers nothing useful.
            source_name: Label attached to log records.

        Returns:
            ParseOutcome. A failed parse without previous data has resume set
            to None and error set. Missing or unreadable files count as failed
            parses.
        """
        if source_name is None:
            source_name = source.name if isinstance(source, Path) else type(source).__name__

        with log_context(source_name=source_name):
            try:
                lines = build_lines(source, self.settings)
                text = lines_to_text(lines)
                ensure_min_length(text, self.settings.min_text_chars)
            except (ResumeParseError, OSError) as e:
                logger.error("resume parse failed", error=str(e))
                if previous is not None:
                    return ParseOutcome(
                        resume=previous,
                        parse_method=PARSE_METHOD_PREVIOUS,
                        warning="Parsing failed. Using previously extracted data.",
                        error=str(e),
                    )
                return ParseOutcome(error=str(e))

            with logger.timed("resume parsed") as fields:
                document = structure_lines(lines, self.settings)
                fields.update(_document_counts(lines, document))

            formatted = format_resume(document)
            if not formatted.is_degraded:
                return ParseOutcome(
                    resume=formatted,
                    document=document,
                    parse_method=PARSE_METHOD_REGULAR,
                    text=text,
                )

            logger.warn("parsed resume has no skills, experience or projects")
            return self._recover(document, formatted, text, previous)

    def _recover(
        self,
        document: ResumeDocument,
        formatted: FormattedResume,
        text: str,
        previous: FormattedResume | None,
    ) -> ParseOutcome:
        if self.fallback is not None:
            try:
                recovered = self.fallback.extract(text)
                logger.info(
                    "fallback extraction complete",
                    skills=len(recovered.skills),
                    experience=len(recovered.experience),
                    projects=len(recovered.projects),
                )
                return ParseOutcome(
                    resume=recovered,
                    document=document,
                    parse_method=PARSE_METHOD_FALLBACK,
                    text=text,
                )
            except Exception as e:
                logger.error("fallback extraction failed", error=str(e))

        if previous is not None and not previous.is_degraded:
            return ParseOutcome(
                resume=previous,
                document=document,
                parse_method=PARSE_METHOD_PREVIOUS,
                text=text,
                warning="Parsed resume was incomplete. Using previously extracted data.",
            )

        return ParseOutcome(
            resume=formatted,
            document=document,
            parse_method=PARSE_METHOD_REGULAR,
            text=text,
            warning="No skills, experience or projects were found.",
        )

    def parse_batch(
        self,
        sources: Sequence[ResumeSource],
        max_workers: int = 4,
    ) -> list[ParseOutcome]:
        """Parse several resumes with independent pipelines.

        Args:
            sources: Resume sources, each parsed on its own.
            max_workers: Maximum number of parallel workers. Set to 1 for
                sequential processing.

        Returns:
            ParseOutcome objects in the same order as sources.
        """
        total = len(sources)
        if total == 0:
            return []

        logger.info("starting batch parse", total=total, max_workers=max_workers)
        results: dict[int, ParseOutcome] = {}

        with logger.timed("batch parse complete", total=total) as fields:
            if max_workers == 1:
                for i, source in enumerate(sources):
                    results[i] = self._parse_guarded(source)
            else:
                with ThreadPoolExecutor(max_workers=max_workers) as executor:
                    future_to_index = {
                        executor.submit(self._parse_guarded, source): i
                        for i, source in enumerate(sources)
                    }
                    for future in as_completed(future_to_index):
                        results[future_to_index[future]] = future.result()

            outcomes = [results[i] for i in range(total)]
            fields["failed"] = sum(1 for o in outcomes if o.failed)
            fields["degraded"] = sum(1 for o in outcomes if o.warning)

        return outcomes

    def _parse_guarded(self, source: ResumeSource) -> ParseOutcome:
        try:
            return self.parse(source)
        except Exception as e:
            logger.error("failed to parse resume", error=str(e))
            return ParseOutcome(error=str(e))
