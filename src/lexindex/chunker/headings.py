# src/lexindex/chunker/headings.py
"""Heading detection rules for legal and markdown texts.

Each rule is matched against the start of a stripped line. Rules are kept
separate so they can be tested and extended one at a time.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class HeadingRule:
    """A named pattern that marks a line as a section heading."""

    name: str
    pattern: re.Pattern[str]

    def matches(self, line: str) -> bool:
        return self.pattern.match(line) is not None


DEFAULT_HEADING_RULES: tuple[HeadingRule, ...] = (
    # "# Title" through "#### Title"
    HeadingRule("markdown", re.compile(r"#{1,4}\s")),
    # Dutch statute structure: Artikel 7:670, Art. 3, Afdeling 2, Titel 10, Boek 7, Hoofdstuk 4
    HeadingRule(
        "legal_article",
        re.compile(r"(?:Artikel\s+\d|Art\.\s*\d|Afdeling\s+\d|Titel\s+\d|Boek\s+\d|Hoofdstuk\s+\d)"),
    ),
    # "2.1 Scope" or "2.1. Scope"
    HeadingRule("section_number", re.compile(r"\d+\.\d+[\s.]")),
    # Whole line in capitals, at least 6 characters
    HeadingRule("all_caps", re.compile(r"[A-Z][A-Z\s]{5,}$")),
    # ECLI identifiers and case numbers such as AR-2023-1234
    HeadingRule("citation", re.compile(r"(?:ECLI:|AR-\d{4}-\d+)")),
)


class HeadingDetector:
    """Classifies lines as headings using an ordered list of rules."""

    def __init__(self, rules: tuple[HeadingRule, ...] | list[HeadingRule] | None = None) -> None:
        self.rules = tuple(rules) if rules is not None else DEFAULT_HEADING_RULES

    def match(self, line: str) -> HeadingRule | None:
        """Return the first rule matching the line, or None."""
        stripped = line.strip()
        if not stripped:
            return None
        for rule in self.rules:
            if rule.matches(stripped):
                return rule
        return None

    def is_heading(self, line: str) -> bool:
        return self.match(line) is not None
