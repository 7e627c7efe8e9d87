"""
Main GCODE Interpreter for gcodeview

Evaluates a whole GCODE program into toolpath geometry and move statistics.
Each evaluation starts from a fresh modal state at the origin, so results
depend only on the program text and the interpreter's configuration.
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from gcodeview.config import (
    ARC_RADIUS_MISMATCH_TOL_MM,
    FEED_DEFAULT_MM_MIN,
    RAPID_FEED_DEFAULT,
    TRACE,
)
from gcodeview.utils.errors import Advisory, AdvisoryKind, ArcGeometryError

from .arcs import ArcDirection, resolve_arc
from .motion import has_axis_words, resolve_linear
from .parser import GcodeParser
from .recorder import MoveRecord, PathRecorder, Position
from .state import MOTION_CODES, ModalState
from .utils import format_gcode_number

logger = logging.getLogger(__name__)


@dataclass
class EvaluationResult:
    """Output of one evaluation pass"""

    path: list[Position]
    moves: list[MoveRecord]
    state: ModalState
    advisories: list[Advisory] = field(default_factory=list)

    def path_array(self) -> np.ndarray:
        """Path as an (N, 3) array in mm, for renderers"""
        return np.array([p.to_array() for p in self.path], dtype=float).reshape(-1, 3)


class GcodeInterpreter:
    """Evaluates GCODE programs into toolpath points and a move log"""

    def __init__(
        self,
        rapid_feed: float = RAPID_FEED_DEFAULT,
        default_feed: float = FEED_DEFAULT_MM_MIN,
    ):
        """
        Initialize GCODE interpreter

        Args:
            rapid_feed: Rapid (G0) feed in program units per minute
            default_feed: Feed in mm/min before any F word
        """
        self.rapid_feed = rapid_feed
        self.default_feed = default_feed
        self.parser = GcodeParser()
        self.recorder = PathRecorder()
        self.advisories: list[Advisory] = []

    def initial_state(self) -> ModalState:
        return ModalState(current_feed=self.default_feed, rapid_feed_source=self.rapid_feed)

    def reset(self) -> ModalState:
        """Reset position, path, move log and advisories; return the initial state"""
        self.recorder.reset()
        self.advisories = []
        return self.initial_state()

    def evaluate(self, program: str | list[str]) -> EvaluationResult:
        """
        Evaluate a complete GCODE program

        Args:
            program: GCODE program as string or list of lines

        Returns:
            EvaluationResult with path, move log, final state and advisories
        """
        if isinstance(program, str):
            lines = program.splitlines()
        else:
            lines = program

        state = self.reset()
        for line_number, line in enumerate(lines, 1):
            state = self.process_line(line, state, line_number)

        logger.debug(
            f"Evaluated {len(lines)} lines: {len(self.recorder.moves)} moves, "
            f"{len(self.advisories)} advisories"
        )
        return EvaluationResult(
            path=list(self.recorder.path),
            moves=list(self.recorder.moves),
            state=state,
            advisories=list(self.advisories),
        )

    def process_line(self, line: str, state: ModalState, line_number: int = 0) -> ModalState:
        """
        Process a single GCODE line against the given state

        Modal words are applied in left-to-right order as they are met; the
        motion directive, if any, is dispatched after the scan.

        Args:
            line: Raw GCODE line
            state: Modal state before the line
            line_number: 1-based source line, used in advisories

        Returns:
            Modal state after the line
        """
        tokens = self.parser.parse_line(line)
        if not tokens:
            return state

        motion_code: int | None = None
        words: dict[str, float] = {}
        for token in tokens:
            state = state.update_from_token(token)
            number = token.number
            if number is None:
                logger.log(TRACE, "word_without_value line=%d word=%s", line_number, token)
                continue
            if token.letter == "G" and number in MOTION_CODES:
                motion_code = int(number)
            elif token.letter != "G":
                words[token.letter] = number

        if motion_code in (2, 3):
            self._dispatch_arc(motion_code, words, state, line_number)
        elif has_axis_words(words):
            # Implicit continuation without a motion word is a linear move
            self._dispatch_linear(1 if motion_code is None else motion_code, words, state, line_number)
        elif motion_code is not None:
            logger.log(TRACE, "motion_without_axes line=%d code=G%d", line_number, motion_code)

        return state

    def _dispatch_linear(
        self, code: int, words: dict[str, float], state: ModalState, line_number: int
    ) -> None:
        target, feed, kind = resolve_linear(code, words, self.recorder.position, state)
        self._check_feed(feed, line_number)
        self.recorder.record_move(target, feed, kind, line_number)

    def _dispatch_arc(
        self, code: int, words: dict[str, float], state: ModalState, line_number: int
    ) -> None:
        direction = ArcDirection.from_code(code)
        try:
            arc = resolve_arc(direction, words, self.recorder.position, state)
        except ArcGeometryError as e:
            self._advise(line_number, AdvisoryKind.DEGENERATE_ARC, f"{e.original_message}; no motion")
            # Zero-length record, position unchanged
            position = self.recorder.position
            self.recorder.record_move(position, state.current_feed, direction.kind, line_number)
            return

        if arc.end_radius is not None and abs(arc.end_radius - arc.radius) > ARC_RADIUS_MISMATCH_TOL_MM:
            self._advise(
                line_number,
                AdvisoryKind.ARC_RADIUS_MISMATCH,
                f"Arc start radius {format_gcode_number(arc.radius, 4)} mm and end radius "
                f"{format_gcode_number(arc.end_radius, 4)} mm differ",
            )

        self._check_feed(state.current_feed, line_number)
        self.recorder.record_arc(
            arc.display_points(),
            arc.target,
            arc.length,
            state.current_feed,
            direction.kind,
            line_number,
        )

    def _check_feed(self, feed: float, line_number: int) -> None:
        if feed <= 0:
            self._advise(
                line_number,
                AdvisoryKind.NON_POSITIVE_FEED,
                f"Feed rate {format_gcode_number(feed)} mm/min is not positive; move time is 0",
            )

    def _advise(self, line_number: int, kind: AdvisoryKind, message: str) -> None:
        advisory = Advisory(line_number=line_number, kind=kind, message=message)
        self.advisories.append(advisory)
        logger.warning(str(advisory))


def evaluate(program: str | list[str], **kwargs) -> EvaluationResult:
    """Evaluate a program with a fresh GcodeInterpreter"""
    return GcodeInterpreter(**kwargs).evaluate(program)
