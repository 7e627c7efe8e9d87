"""
GCODE evaluation for gcodeview

Turns GCODE program text into toolpath points, a move log and a modal
state snapshot.

Main components:
- parser.py: Line cleanup and tokenization
- state.py: Immutable modal state (units, positioning mode, plane, feeds)
- motion.py: Rapid and linear target resolution
- arcs.py: Arc center, sweep, analytic length and display sampling
- recorder.py: Path and move log accumulation
- interpreter.py: Main GCODE interpreter
- stats.py: Move log aggregation
- utils.py: Distance, angle and duration helpers
"""

from .arcs import Arc, ArcDirection, resolve_arc
from .interpreter import EvaluationResult, GcodeInterpreter, evaluate
from .parser import GcodeParser, GcodeToken, clean_line, tokenize
from .recorder import MoveKind, MoveRecord, PathRecorder, Position
from .state import ModalState, Plane
from .stats import MoveSummary, summarize_moves

__all__ = [
    "Arc",
    "ArcDirection",
    "EvaluationResult",
    "GcodeInterpreter",
    "GcodeParser",
    "GcodeToken",
    "ModalState",
    "MoveKind",
    "MoveRecord",
    "MoveSummary",
    "PathRecorder",
    "Plane",
    "Position",
    "clean_line",
    "evaluate",
    "resolve_arc",
    "summarize_moves",
    "tokenize",
]
