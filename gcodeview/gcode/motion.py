"""
Rapid and linear motion resolution (G0/G1 and implicit continuation)
"""

from collections.abc import Mapping
from dataclasses import replace

from .recorder import MoveKind, Position
from .state import ModalState
from .utils import AXES


def resolve_target(
    words: Mapping[str, float], position: Position, state: ModalState
) -> Position:
    """
    Calculate target position based on positioning mode and axis words

    Args:
        words: Numeric words of the line keyed by upper-case letter,
            in program units
        position: Current machine position in mm
        state: Modal state in effect for the motion

    Returns:
        Target position in mm; axes without a word are carried over
    """
    updates = {}
    for axis in AXES:
        letter = axis.upper()
        if letter not in words:
            continue
        value = state.to_mm(words[letter])
        if state.absolute_mode:
            updates[axis] = value
        else:
            updates[axis] = position.get_axis(axis) + value
    return replace(position, **updates)


def resolve_linear(
    code: int, words: Mapping[str, float], position: Position, state: ModalState
) -> tuple[Position, float, MoveKind]:
    """
    Resolve a G0/G1 move into (target, feed in mm/min, kind)

    G0 travels at the rapid feed, G1 at the current feed.
    """
    target = resolve_target(words, position, state)
    if code == 0:
        return target, state.rapid_feed, MoveKind.RAPID
    return target, state.current_feed, MoveKind.LINEAR


def has_axis_words(words: Mapping[str, float]) -> bool:
    return any(axis.upper() in words for axis in AXES)
