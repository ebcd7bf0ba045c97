"""Tests for fragment extraction."""

import fitz  # PyMuPDF
import pytest

from resume_outreach.parsing.errors import EmptyDocumentError, UnreadablePDFError
from resume_outreach.parsing.fragments import (
    BOLD_CHAR_WIDTH,
    DEFAULT_CHAR_WIDTH,
    MONOSPACE_CHAR_WIDTH,
    _is_garbage_text,
    char_width,
    extract_fragments,
    is_all_caps,
    load_text_content,
)
from resume_outreach.parsing.models import TextItem


def _item(text, x, y, font="Helvetica", **extra):
    return {"str": text, "transform": [12, 0, 0, 12, x, y], "fontName": font, **extra}


@pytest.fixture(scope="module")
def resume_pdf_bytes() -> bytes:
    """A one-page PDF with a bold name and a regular contact line."""
    doc = fitz.open()
    page = doc.new_page(width=612, height=792)
    page.insert_text((72, 72), "Jane Smith", fontsize=14, fontname="hebo")
    page.insert_text((72, 90), "jane@example.com", fontsize=10, fontname="helv")
    data = doc.tobytes()
    doc.close()
    return data


class TestExtractFragments:
    """Tests for extract_fragments function."""

    def test_dict_items(self):
        """Test that reader dicts become fragments with estimated widths."""
        fragments = extract_fragments([[_item("Hello", 72, 700)]])
        assert len(fragments) == 1
        fragment = fragments[0]
        assert fragment.text == "Hello"
        assert fragment.x1 == 72
        assert fragment.x2 == pytest.approx(72 + 5 * DEFAULT_CHAR_WIDTH)
        assert fragment.y == 700
        assert fragment.page == 1
        assert not fragment.bold
        assert not fragment.all_caps

    def test_text_item_instances(self):
        """Test that TextItem models are accepted alongside dicts."""
        item = TextItem(text="EDUCATION", transform=[12, 0, 0, 12, 72, 650])
        fragments = extract_fragments([[item]])
        assert fragments[0].all_caps

    def test_bold_from_font_name(self):
        """Test that a bold font name marks the fragment bold."""
        fragments = extract_fragments([[_item("Acme", 72, 700, font="Helvetica-Bold")]])
        assert fragments[0].bold
        assert fragments[0].x2 == pytest.approx(72 + 4 * BOLD_CHAR_WIDTH)

    def test_bold_from_flag(self):
        """Test that the reader's bold flag is honored."""
        fragments = extract_fragments([[_item("Acme", 72, 700, bold=True)]])
        assert fragments[0].bold

    def test_monospace_width_wins(self):
        """Test that monospace fonts use the monospace width even when bold."""
        fragments = extract_fragments([[_item("code", 0, 700, font="Courier-Bold")]])
        assert fragments[0].bold
        assert fragments[0].x2 == pytest.approx(4 * MONOSPACE_CHAR_WIDTH)

    def test_blank_items_dropped(self):
        """Test that whitespace-only items are skipped."""
        fragments = extract_fragments([[_item("  ", 72, 700), _item("Text", 72, 680)]])
        assert [f.text for f in fragments] == ["Text"]

    def test_reading_order(self):
        """Test ordering by page, then row top to bottom, then x1."""
        pages = [
            [
                _item("low", 72, 600),
                _item("right", 300, 700),
                _item("left", 72, 702),
                _item("middle", 200, 698),
            ],
            [_item("next page", 72, 750)],
        ]
        fragments = extract_fragments(pages)
        assert [f.text for f in fragments] == ["left", "middle", "right", "low", "next page"]
        assert fragments[-1].page == 2

    def test_empty_pages_raise(self):
        """Test that documents without text raise EmptyDocumentError."""
        with pytest.raises(EmptyDocumentError):
            extract_fragments([])
        with pytest.raises(EmptyDocumentError):
            extract_fragments([[], [_item("   ", 72, 700)]])


class TestLoadTextContent:
    """Tests for load_text_content function."""

    def test_reads_spans(self, resume_pdf_bytes):
        """Test that spans are read with bottom-up baselines."""
        pages = load_text_content(resume_pdf_bytes)
        assert len(pages) == 1
        texts = [item.text for item in pages[0]]
        assert texts == ["Jane Smith", "jane@example.com"]

        name, contact = pages[0]
        assert name.transform[4] == pytest.approx(72, abs=1)
        assert name.transform[5] == pytest.approx(792 - 72, abs=1)
        assert name.transform[5] > contact.transform[5]

    def test_bold_font_detected(self, resume_pdf_bytes):
        """Test that bold spans yield bold fragments."""
        fragments = extract_fragments(load_text_content(resume_pdf_bytes))
        assert fragments[0].bold
        assert not fragments[1].bold

    def test_unreadable_bytes(self):
        """Test that non-PDF bytes raise UnreadablePDFError."""
        with pytest.raises(UnreadablePDFError):
            load_text_content(b"this is not a pdf")


class TestHelpers:
    """Tests for font and text helpers."""

    def test_is_all_caps(self):
        assert is_all_caps("EXPERIENCE")
        assert is_all_caps("WORK EXPERIENCE:")
        assert not is_all_caps("Experience")
        assert not is_all_caps("2020")

    def test_char_width(self):
        assert char_width("Helvetica") == DEFAULT_CHAR_WIDTH
        assert char_width("Helvetica", bold=True) == BOLD_CHAR_WIDTH
        assert char_width("DejaVuSansMono") == MONOSPACE_CHAR_WIDTH

    def test_garbage_text(self):
        """Test detection of control-character garbage."""
        assert _is_garbage_text("\x01\x02\x03\x04" * 10)
        assert not _is_garbage_text("Plain readable resume text here.")
        assert not _is_garbage_text("\x01\x02")
