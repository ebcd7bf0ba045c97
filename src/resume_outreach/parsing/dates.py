"""Date detection shared by every entry extractor and the formatter."""

import re

MONTHS = (
    r"jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|"
    r"aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)
SEASONS = r"spring|summer|fall|autumn|winter"
YEAR = r"(?:19|20)\d{2}"

# "Jan 2020", "Sept. 2019", "Fall 2021", "05/2020" or a bare year
DATE_VALUE = rf"(?:(?:{MONTHS}|{SEASONS})\.?,?\s*|\d{{1,2}}/)?{YEAR}"

DATE_PATTERN = re.compile(rf"\b(?:{DATE_VALUE}\b|present\b)", re.IGNORECASE)
DATE_RANGE_PATTERN = re.compile(
    rf"\b{DATE_VALUE}\b.*?[-–—].*?\b{DATE_VALUE}\b", re.IGNORECASE
)
ONGOING_PATTERN = re.compile(r"present|current", re.IGNORECASE)
RANGE_SEPARATOR = re.compile(r"[-–—]")

# Characters left dangling between a name and the date that followed it
_TRAILING_SEPARATORS = " \t,|·•-–—:("


def find_date(text: str) -> re.Match | None:
    """Return the first date match in text, or None."""
    if not text:
        return None
    return DATE_PATTERN.search(text)


def has_date(text: str) -> bool:
    return find_date(text) is not None


def split_date(text: str) -> tuple[str, str]:
    """Split text at its first date match.

    Args:
        text: A line such as "Acme Corp Jan 2020 - Present".

    Returns:
        (head, date) where head is the text before the match with trailing
        separators removed and date runs from the match to the end of the
        text. date is "" when no date is present.
    """
    match = find_date(text)
    if match is None:
        return text.strip(), ""
    head = text[: match.start()].strip().rstrip(_TRAILING_SEPARATORS).strip()
    return head, text[match.start() :].strip()


def extract_start_date(date_text: str) -> str:
    """First month/season-plus-year (or year) in a raw date string."""
    if not date_text:
        return ""
    match = re.search(rf"\b{DATE_VALUE}\b", date_text, re.IGNORECASE)
    return match.group(0).strip() if match else ""


def extract_end_date(date_text: str) -> str:
    """End of a date range: "Present" for ongoing ranges, else the right side."""
    if not date_text:
        return ""
    if ONGOING_PATTERN.search(date_text):
        return "Present"
    match = DATE_RANGE_PATTERN.search(date_text)
    if match:
        full = match.group(0)
        separator = RANGE_SEPARATOR.search(full)
        if separator:
            return full[separator.end() :].strip()
    return ""
