"""
gcodeview Python Package

A G-code motion interpreter that evaluates program text into a millimeter
toolpath, a per-move distance/time log and a modal state snapshot, for use
by toolpath viewers and statistics panels.

Key components:
- GcodeInterpreter: Evaluates complete programs, one fresh pass per call
- evaluate: Convenience wrapper around a new GcodeInterpreter
- summarize_moves: Totals and recent moves for statistics displays
"""

from ._version import __version__
from .gcode import (
    EvaluationResult,
    GcodeInterpreter,
    ModalState,
    MoveKind,
    MoveRecord,
    Position,
    evaluate,
    summarize_moves,
)

__all__ = [
    "__version__",
    "EvaluationResult",
    "GcodeInterpreter",
    "ModalState",
    "MoveKind",
    "MoveRecord",
    "Position",
    "evaluate",
    "summarize_moves",
]
