#!/usr/bin/env python3
"""Verification script for resume parsing quality.

Usage:
    python scripts/verify_extraction.py <pdf_path> [--lines N]

Outputs reconstructed lines, sections and the formatted resume for manual
verification of extraction quality.
"""

import argparse
import sys
from pathlib import Path

from resume_outreach.parsing import ParserSettings, ResumeParseError, format_resume
from resume_outreach.parsing.document import extract_resume
from resume_outreach.parsing.pipeline import build_lines
from resume_outreach.parsing.sections import group_lines_into_sections


def main():
    parser = argparse.ArgumentParser(description="Verify resume parsing quality")
    parser.add_argument("pdf_path", help="Path to PDF file")
    parser.add_argument(
        "--lines", type=int, default=60, help="Number of lines to display (default: 60)"
    )
    args = parser.parse_args()

    pdf_path = Path(args.pdf_path)
    if not pdf_path.exists():
        print(f"Error: File not found: {pdf_path}")
        sys.exit(1)

    print(f"Parsing: {pdf_path}")
    print("=" * 80)

    settings = ParserSettings.from_env()
    try:
        lines = build_lines(pdf_path, settings)
    except ResumeParseError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Total lines: {len(lines)}")
    print("=" * 80)

    for line in lines[: args.lines]:
        markers = "".join(
            marker
            for flag, marker in ((line.bold, "B"), (line.all_caps, "C"), (line.bullet, "L"))
            if flag
        )
        print(f"  p{line.page} y={line.y:7.1f} [{markers:<3}] {line.text}")

    sections = group_lines_into_sections(lines, subsection_gap=settings.subsection_gap)
    print("\n" + "=" * 80)
    print("Sections:")
    for name, section in sections.items():
        entries = f", {len(section.subsections)} entries" if section.is_subsectioned else ""
        print(f"  {name}: {len(section.body)} lines{entries}")

    resume = format_resume(extract_resume(sections))
    print("\n" + "=" * 80)
    print(resume.model_dump_json(indent=2))

    if resume.is_degraded:
        print("\nWarning: no skills, experience or projects were found.")


if __name__ == "__main__":
    main()
