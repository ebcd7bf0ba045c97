"""Tests for section segmentation."""

from resume_outreach.parsing.models import Section
from resume_outreach.parsing.entries import extract_experience
from resume_outreach.parsing.sections import (
    PROFILE_SECTION,
    blank_line_gap,
    clean_section_name,
    group_by_title_lines,
    group_lines_into_sections,
    is_multi_entry_section,
    is_section_heading,
    section_entries,
    split_subsections,
)
from resume_outreach.parsing.skills import extract_skills


class TestIsSectionHeading:
    """Tests for is_section_heading function."""

    def test_bold_all_caps_single_fragment(self, make_line):
        assert is_section_heading(make_line("CERTIFICATES", bold=True))

    def test_keyword_bold(self, make_line):
        assert is_section_heading(make_line("Work Experience", bold=True))

    def test_keyword_after_blank(self, make_line):
        """Test that a keyword line after a blank gap is a heading."""
        previous = make_line("jane@example.com", y=700)
        assert is_section_heading(make_line("Education", y=670), previous)

    def test_keyword_without_blank_or_bold(self, make_line):
        """Test that a plain keyword line in running text is not a heading."""
        previous = make_line("Technical: Python", y=700)
        assert not is_section_heading(make_line("Languages: English", y=686), previous)

    def test_keyword_line_too_long(self, make_line):
        assert not is_section_heading(
            make_line("Summary of my experience as an engineer", bold=True)
        )

    def test_page_change_counts_as_blank(self, make_line):
        previous = make_line("last line", y=60, page=1)
        assert is_section_heading(make_line("Projects", y=740, page=2), previous)

    def test_plain_line(self, make_line):
        assert not is_section_heading(make_line("Software Engineer", bold=True))


class TestGroupLinesIntoSections:
    """Tests for group_lines_into_sections function."""

    def test_empty(self):
        assert group_lines_into_sections([]) == {}

    def test_skills_heading(self, make_line):
        """Test a SKILLS heading followed by a categorized list."""
        heading = make_line("SKILLS", y=700, bold=True)
        content = make_line("Technical: Python, Go, Rust", y=686)
        sections = group_lines_into_sections([heading, content])

        assert sections["SKILLS"].lines == [heading, content]
        assert extract_skills(sections["SKILLS"]).technical == ["Python", "Go", "Rust"]

    def test_profile_collects_leading_lines(self, stack_lines):
        """Test that lines before the first heading go to PROFILE."""
        lines = stack_lines(
            ["Jane Smith", "jane@example.com", ("EDUCATION", True), "MIT 2020"]
        )
        sections = group_lines_into_sections(lines)
        assert list(sections) == [PROFILE_SECTION, "EDUCATION"]
        assert [line.text for line in sections[PROFILE_SECTION].lines] == [
            "Jane Smith",
            "jane@example.com",
        ]

    def test_profile_always_present(self, stack_lines):
        sections = group_lines_into_sections(stack_lines([("SKILLS", True), "Python"]))
        assert sections[PROFILE_SECTION].lines == []

    def test_every_line_in_exactly_one_section(self, stack_lines):
        """Test that segmentation neither drops nor duplicates lines."""
        lines = stack_lines(
            [
                "Jane Smith",
                ("EXPERIENCE", True),
                ("Acme Corp 2020 - Present", True),
                "Engineer",
                "• Built things",
                None,
                ("Globex 2018 - 2019", True),
                "Intern",
                ("SKILLS", True),
                "Python, Go",
            ]
        )
        sections = group_lines_into_sections(lines)
        placed = [line for section in sections.values() for line in section.lines]
        assert len(placed) == len(lines)
        for line in lines:
            assert sum(1 for other in placed if other is line) == 1

    def test_headings_excluded_from_entries(self, stack_lines):
        """Test that heading lines never appear as entry content."""
        lines = stack_lines(
            [
                ("EXPERIENCE", True),
                ("Acme Corp 2020 - Present", True),
                "Engineer",
                ("EDUCATION", True),
                "MIT 2020",
                ("AWARDS", True),
                "Dean's List 2019",
            ]
        )
        sections = group_lines_into_sections(lines)
        for section in sections.values():
            entry_lines = [line for entry in section_entries(section) for line in entry]
            for heading in section.headings:
                assert all(line is not heading for line in entry_lines)
                assert all(line is not heading for line in section.body)

    def test_repeated_heading_appends(self, stack_lines):
        """Test that a heading seen twice keeps collecting into one section."""
        lines = stack_lines(
            [("SKILLS", True), "Python", ("EDUCATION", True), "MIT 2020", ("SKILLS", True), "Go"]
        )
        sections = group_lines_into_sections(lines)
        assert [line.text for line in sections["SKILLS"].body] == ["Python", "Go"]
        assert len(sections["SKILLS"].headings) == 2

    def test_multi_entry_sections_subsectioned(self, stack_lines):
        """Test that only multi-entry sections are split into subsections."""
        lines = stack_lines(
            [
                ("EXPERIENCE", True),
                ("Acme Corp 2020 - Present", True),
                "Engineer",
                None,
                ("Globex 2018 - 2019", True),
                "Intern",
                ("SKILLS", True),
                "Python",
            ]
        )
        sections = group_lines_into_sections(lines)
        experience = sections["EXPERIENCE"]
        assert experience.is_subsectioned
        assert [[line.text for line in sub] for sub in experience.subsections] == [
            ["Acme Corp 2020 - Present", "Engineer"],
            ["Globex 2018 - 2019", "Intern"],
        ]
        assert not sections["SKILLS"].is_subsectioned


class TestLooseLineSpacing:
    """Segmentation of documents whose line pitch exceeds the minimum blank gap."""

    def test_keyword_line_without_blank_is_content(self, stack_lines):
        """Test that a short keyword line at normal 16-unit spacing stays in its entry."""
        lines = stack_lines(
            [
                ("EXPERIENCE", True),
                ("Acme Corp Jan 2020 - Present", True),
                "Research Assistant",
                "- Built data pipelines",
            ],
            pitch=16.0,
        )
        sections = group_lines_into_sections(lines)

        assert list(sections) == [PROFILE_SECTION, "EXPERIENCE"]
        (entry,) = extract_experience(sections["EXPERIENCE"])
        assert entry.company == "Acme Corp"
        assert entry.title == "Research Assistant"
        assert entry.description == ["Built data pipelines"]

    def test_blank_lines_still_detected(self, stack_lines):
        """Test that real blank lines are found at a wider pitch."""
        lines = stack_lines(
            [
                "Jane Smith",
                "jane@example.com",
                None,
                "Summary",
                "Builds data tools.",
                None,
                "Experience",
                "Acme Corp 2020",
                "Engineer",
                None,
                "Globex 2019",
                "Analyst",
            ],
            pitch=16.0,
            blank=32.0,
        )
        sections = group_lines_into_sections(lines)

        assert list(sections) == [PROFILE_SECTION, "SUMMARY", "EXPERIENCE"]
        assert [[line.text for line in sub] for sub in sections["EXPERIENCE"].subsections] == [
            ["Acme Corp 2020", "Engineer"],
            ["Globex 2019", "Analyst"],
        ]


class TestBlankLineGap:
    """Tests for blank_line_gap function."""

    def test_scales_with_pitch(self, stack_lines):
        assert blank_line_gap(stack_lines(["a", "b", "c"], pitch=14.0)) == 21.0
        assert blank_line_gap(stack_lines(["a", "b", "c"], pitch=20.0)) == 30.0

    def test_minimum_gap_is_floor(self, stack_lines):
        assert blank_line_gap(stack_lines(["a", "b", "c"], pitch=8.0)) == 15.0
        assert blank_line_gap([]) == 15.0

    def test_ignores_page_breaks(self, make_line):
        lines = [make_line("a", y=60, page=1), make_line("b", y=740, page=2)]
        assert blank_line_gap(lines) == 15.0


class TestSplitSubsections:
    """Tests for split_subsections function."""

    def test_empty(self):
        assert split_subsections([]) == []

    def test_single_subsection_without_gaps(self, stack_lines):
        lines = stack_lines(["MIT 2020", "Bachelor of Science", "GPA 3.9"])
        assert split_subsections(lines) == [lines]

    def test_gap_closes_subsection(self, stack_lines):
        lines = stack_lines(["MIT 2020", "Bachelor of Science", None, "Harvard 2022", "MBA"])
        assert [len(sub) for sub in split_subsections(lines)] == [2, 2]

    def test_bold_title_closes_subsection(self, stack_lines):
        """Test that a bold non-bullet line after regular text opens an entry."""
        lines = stack_lines(
            [("Acme", True), "Engineer", ("Globex", True), "Intern", ("• Bold bullet", True)]
        )
        subsections = split_subsections(lines)
        assert [[line.text for line in sub] for sub in subsections] == [
            ["Acme", "Engineer"],
            ["Globex", "Intern", "• Bold bullet"],
        ]


class TestEntryGrouping:
    """Tests for group_by_title_lines and section_entries."""

    def test_group_by_title_lines(self, stack_lines):
        lines = stack_lines(["orphan", ("Acme", True), "Engineer", ("Globex", True), "Intern"])
        entries = group_by_title_lines(lines)
        assert [[line.text for line in entry] for entry in entries] == [
            ["Acme", "Engineer"],
            ["Globex", "Intern"],
        ]

    def test_no_title_lines_is_one_entry(self, stack_lines):
        lines = stack_lines(["Acme", "Engineer"])
        assert group_by_title_lines(lines) == [lines]

    def test_flat_section_falls_back(self, stack_lines):
        """Test that sections without subsections are grouped by title lines."""
        lines = stack_lines([("Acme", True), "Engineer", ("Globex", True), "Intern"])
        section = Section(name="EXPERIENCE", lines=lines)
        assert len(section_entries(section)) == 2

    def test_none_section(self):
        assert section_entries(None) == []


class TestHelpers:
    """Tests for section name helpers."""

    def test_clean_section_name(self):
        assert clean_section_name("Work Experience:") == "WORK EXPERIENCE"
        assert clean_section_name("  Skills & Tools ") == "SKILLS  TOOLS"

    def test_is_multi_entry_section(self):
        assert is_multi_entry_section("WORK EXPERIENCE")
        assert is_multi_entry_section("PROJECTS")
        assert not is_multi_entry_section("SKILLS")
