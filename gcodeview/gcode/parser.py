"""
GCODE Tokenizer for gcodeview

Cleans raw GCODE lines and splits them into letter/value words.
Tokenizing never fails: text that does not form a word is skipped.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class GcodeToken:
    """A single letter/value word, e.g. ``X-1.5`` or a bare flag ``G``"""

    letter: str  # 'G', 'X', 'F', ...
    value: str = ""  # Raw numeric text, empty for flag-style words

    @property
    def number(self) -> float | None:
        """Numeric value of the word, or None when it carries no number"""
        if not self.value:
            return None
        try:
            return float(self.value)
        except ValueError:
            # Sign or dot without digits, e.g. "X-"
            return None

    def __str__(self):
        return f"{self.letter}{self.value}"


class GcodeParser:
    """Line cleanup and tokenization for GCODE programs"""

    # Regex patterns for parsing
    COMMENT_PATTERN = re.compile(r"\([^)]*\)?|;.*$")
    WHITESPACE_PATTERN = re.compile(r"\s+")
    LINE_NUMBER_PATTERN = re.compile(r"^N\d+")
    WORD_PATTERN = re.compile(r"([A-Z])([+-]?(?:\d+\.?\d*|\.\d+)?)")

    def clean_line(self, line: str) -> str:
        """
        Normalize a raw GCODE line for tokenizing

        Upper-cases the text, removes ``(...)`` and ``;`` comments,
        removes all whitespace and strips a leading line number word.

        Args:
            line: Raw GCODE line

        Returns:
            Cleaned line, possibly empty
        """
        line = line.strip().upper()
        if not line:
            return ""
        line = self.COMMENT_PATTERN.sub("", line)
        line = self.WHITESPACE_PATTERN.sub("", line)
        return self.LINE_NUMBER_PATTERN.sub("", line, count=1)

    def tokenize(self, line: str) -> list[GcodeToken]:
        """
        Split a cleaned, upper-cased line into ordered tokens

        Args:
            line: Line as produced by clean_line

        Returns:
            Tokens in source order; empty if nothing matched
        """
        return [
            GcodeToken(letter=match.group(1), value=match.group(2))
            for match in self.WORD_PATTERN.finditer(line)
        ]

    def parse_line(self, line: str) -> list[GcodeToken]:
        """Clean and tokenize a raw line in one step"""
        cleaned = self.clean_line(line)
        if not cleaned:
            return []
        return self.tokenize(cleaned)


_default_parser = GcodeParser()


def clean_line(line: str) -> str:
    """Module-level shortcut for GcodeParser.clean_line"""
    return _default_parser.clean_line(line)


def tokenize(line: str) -> list[GcodeToken]:
    """Module-level shortcut for GcodeParser.tokenize"""
    return _default_parser.tokenize(line)
