"""
Error and advisory types for the gcodeview interpreter.

Nothing here is fatal to an evaluation pass: exceptions are raised inside a
single line's processing and converted into advisories by the interpreter.
"""

from dataclasses import dataclass
from enum import Enum


class ArcGeometryError(RuntimeError):
    """Arc center could not be resolved (no I/J/R words, zero chord, zero radius)."""

    def __init__(self, message: str):
        self.original_message = message
        super().__init__(f"Arc Geometry Error: {message}")

    def __str__(self):
        return f"Arc Geometry Error: {self.original_message}"


class AdvisoryKind(Enum):
    DEGENERATE_ARC = "degenerate_arc"
    NON_POSITIVE_FEED = "non_positive_feed"
    ARC_RADIUS_MISMATCH = "arc_radius_mismatch"


@dataclass(frozen=True)
class Advisory:
    """Non-blocking diagnostic attached to a program line"""

    line_number: int
    kind: AdvisoryKind
    message: str

    def __str__(self):
        return f"Line {self.line_number}: {self.message}"
