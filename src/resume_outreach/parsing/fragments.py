"""Fragment extraction: PDF text-content items to positioned text fragments."""

from collections.abc import Iterable, Sequence

import fitz  # PyMuPDF

from ..logger import logger
from .config import DEFAULT_LINE_TOLERANCE
from .errors import EmptyDocumentError, UnreadablePDFError
from .models import TextFragment, TextItem

# Approximate glyph widths (page units) used in place of real font metrics
DEFAULT_CHAR_WIDTH = 5.5
BOLD_CHAR_WIDTH = 6.5
MONOSPACE_CHAR_WIDTH = 6.0

# Threshold for detecting garbage text (corrupted font encodings)
GARBAGE_CONTROL_CHAR_RATIO = 0.1  # >10% control chars = garbage

BOLD_FONT_FLAG = 2**4

PageContent = Sequence[TextItem | dict]


def _is_garbage_text(text: str) -> bool:
    """Detect if extracted text is binary garbage from corrupted font encodings.

    Args:
        text: The extracted text to check.

    Returns:
        True if the text appears to be garbage (high ratio of control characters).
    """
    if not text or len(text) < 20:
        return False
    control_chars = sum(1 for c in text if ord(c) < 32 and c not in "\n\t\r ")
    return control_chars / len(text) > GARBAGE_CONTROL_CHAR_RATIO


def _is_bold_font(font_name: str) -> bool:
    return "bold" in font_name.lower()


def _is_monospace_font(font_name: str) -> bool:
    name = font_name.lower()
    return "mono" in name or "courier" in name


def is_all_caps(text: str) -> bool:
    """True when the text is upper case and contains at least one cased letter."""
    return text == text.upper() and text != text.lower()


def char_width(font_name: str, bold: bool = False) -> float:
    """Approximate average glyph width for a font.

    Monospace fonts take precedence over bold ones.
    """
    if _is_monospace_font(font_name):
        return MONOSPACE_CHAR_WIDTH
    if bold or _is_bold_font(font_name):
        return BOLD_CHAR_WIDTH
    return DEFAULT_CHAR_WIDTH


def load_text_content(pdf_bytes: bytes) -> list[list[TextItem]]:
    """Read text-content items from every page of a PDF.

    Each PyMuPDF span becomes one item. The baseline is converted to the
    bottom-up PDF convention so that larger y means higher on the page.

    Args:
        pdf_bytes: Raw bytes believed to contain a PDF.

    Returns:
        One list of TextItem per page, in page order.

    Raises:
        UnreadablePDFError: If the bytes cannot be opened as a PDF.
    """
    try:
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    except Exception as e:
        raise UnreadablePDFError(f"Could not open PDF: {e}") from e

    try:
        if doc.page_count == 0:
            raise UnreadablePDFError("PDF has no pages")

        pages: list[list[TextItem]] = []
        for page_num, page in enumerate(doc, 1):
            page_height = page.rect.height
            items: list[TextItem] = []
            for block in page.get_text("dict").get("blocks", []):
                if block.get("type") != 0:  # Skip images
                    continue
                for line in block.get("lines", []):
                    for span in line.get("spans", []):
                        text = span.get("text", "").replace("\x00", "")
                        if not text.strip():
                            continue
                        x, baseline = span.get("origin", (0.0, 0.0))
                        size = span.get("size", 12.0)
                        font_name = span.get("font", "")
                        flags = span.get("flags", 0)
                        items.append(
                            TextItem(
                                text=text,
                                transform=[size, 0.0, 0.0, size, x, page_height - baseline],
                                font_name=font_name,
                                bold=bool(flags & BOLD_FONT_FLAG),
                            )
                        )

            page_text = "".join(item.text for item in items)
            if _is_garbage_text(page_text):
                logger.warn(
                    "garbage text detected, skipping page",
                    page_number=page_num,
                    items=len(items),
                )
                items = []

            pages.append(items)

        logger.debug(
            "pdf text content loaded",
            total_pages=len(pages),
            total_items=sum(len(p) for p in pages),
        )
        return pages
    finally:
        doc.close()


def _fragment_from_item(item: TextItem, page: int) -> TextFragment:
    bold = item.bold or _is_bold_font(item.font_name)
    x1 = float(item.transform[4])
    return TextFragment(
        text=item.text,
        x1=x1,
        x2=x1 + len(item.text) * char_width(item.font_name, bold),
        y=float(item.transform[5]),
        page=page,
        bold=bold,
        all_caps=is_all_caps(item.text),
    )


def sort_fragments(
    fragments: Iterable[TextFragment],
    line_tolerance: float = DEFAULT_LINE_TOLERANCE,
) -> list[TextFragment]:
    """Order fragments for reading: page, then rows top to bottom, then x1.

    Fragments whose baseline lies within line_tolerance of a row's first
    fragment share that row, so small baseline jitter never reorders text
    that sits on the same visual line.
    """
    ordered = sorted(fragments, key=lambda f: (f.page, -f.y, f.x1))

    result: list[TextFragment] = []
    row: list[TextFragment] = []
    for fragment in ordered:
        if row and (
            fragment.page != row[0].page
            or abs(fragment.y - row[0].y) > line_tolerance
        ):
            result.extend(sorted(row, key=lambda f: f.x1))
            row = []
        row.append(fragment)
    result.extend(sorted(row, key=lambda f: f.x1))
    return result


def extract_fragments(
    pages: Sequence[PageContent],
    line_tolerance: float = DEFAULT_LINE_TOLERANCE,
) -> list[TextFragment]:
    """Turn per-page text-content items into ordered text fragments.

    Args:
        pages: One sequence of items per page. Items are TextItem instances or
            dicts with "str", "transform", "fontName" and optional "bold".
        line_tolerance: Baseline tolerance used when ordering rows.

    Returns:
        Fragments ordered by page, row (top first) and x1.

    Raises:
        EmptyDocumentError: If no page yields any non-blank text.
    """
    fragments: list[TextFragment] = []
    for page_num, items in enumerate(pages, 1):
        page_count = 0
        for raw in items:
            item = raw if isinstance(raw, TextItem) else TextItem.model_validate(raw)
            if not item.text.strip():
                continue
            fragments.append(_fragment_from_item(item, page_num))
            page_count += 1
        if page_count == 0:
            logger.debug("no text on page", page_number=page_num)

    if not fragments:
        raise EmptyDocumentError("No text could be extracted from the document")

    return sort_fragments(fragments, line_tolerance=line_tolerance)
