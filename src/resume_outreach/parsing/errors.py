"""Errors raised at the text-extraction boundary of the parser."""


class ResumeParseError(ValueError):
    """Base class for fatal resume parsing failures."""

    pass


class EmptyDocumentError(ResumeParseError):
    """Raised when no usable text could be extracted from any page."""

    pass


class TooShortError(ResumeParseError):
    """Raised by the caller-side gate when extracted text is implausibly short."""

    def __init__(self, char_count: int, min_chars: int):
        self.char_count = char_count
        self.min_chars = min_chars
        super().__init__(
            f"Extracted text is too short to be a resume: "
            f"{char_count} characters (minimum {min_chars})"
        )


class UnreadablePDFError(ResumeParseError):
    """Raised when the input bytes cannot be opened as a PDF."""

    pass
