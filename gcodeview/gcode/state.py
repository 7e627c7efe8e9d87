"""
GCODE Modal State for gcodeview

Tracks modal states during GCODE evaluation:
- Units (G20/G21) and the derived rapid feed
- Positioning modes (G90/G91)
- Active plane (G17/G18/G19)
- Feed rate (F)

The state is an immutable value: every transition returns a new instance,
so the interpreter threads it explicitly from token to token and from line
to line.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum

from gcodeview.config import (
    FEED_DEFAULT_MM_MIN,
    MM_PER_INCH,
    MM_PER_MM,
    RAPID_FEED_DEFAULT,
    TRACE,
)

from .parser import GcodeToken

logger = logging.getLogger(__name__)


class Plane(Enum):
    XY = "G17"
    XZ = "G18"
    YZ = "G19"


MOTION_CODES = (0, 1, 2, 3)


@dataclass(frozen=True)
class ModalState:
    """Snapshot of modal GCODE state"""

    units_factor: float = MM_PER_MM  # Multiplier to convert program units to mm
    absolute_mode: bool = True
    plane: Plane = Plane.XY
    current_feed: float = FEED_DEFAULT_MM_MIN  # mm/min
    rapid_feed_source: float = RAPID_FEED_DEFAULT  # program units/min

    @property
    def rapid_feed(self) -> float:
        """Rapid feed in mm/min, always consistent with the active units"""
        return self.rapid_feed_source * self.units_factor

    @property
    def units(self) -> str:
        return "G20" if self.units_factor == MM_PER_INCH else "G21"

    @property
    def positioning_mode(self) -> str:
        return "G90" if self.absolute_mode else "G91"

    def to_mm(self, value: float) -> float:
        """Convert a program-unit value to millimeters"""
        return value * self.units_factor

    def update_from_token(self, token: GcodeToken) -> "ModalState":
        """
        Apply a single token and return the resulting state

        Motion words (G0-G3) are not state changes here; the interpreter
        records them as the line's motion directive. Unknown G words and
        non-modal letters return the state unchanged.

        Args:
            token: GcodeToken taken in left-to-right order

        Returns:
            The updated state (self when nothing changed)
        """
        number = token.number
        if number is None:
            return self

        if token.letter == "G":
            if number == 20:  # Inches
                return replace(self, units_factor=MM_PER_INCH)
            if number == 21:  # Millimeters
                return replace(self, units_factor=MM_PER_MM)
            if number == 90:
                return replace(self, absolute_mode=True)
            if number == 91:
                return replace(self, absolute_mode=False)
            if number == 17:
                return replace(self, plane=Plane.XY)
            if number == 18:
                return replace(self, plane=Plane.XZ)
            if number == 19:
                return replace(self, plane=Plane.YZ)
            if number not in MOTION_CODES:
                logger.log(TRACE, "gcode_ignored word=%s", token)
            return self

        if token.letter == "F":
            # Uses the units in effect at this point of the scan
            return replace(self, current_feed=self.to_mm(number))

        return self

    def get_status(self) -> dict:
        """Get current state as dictionary for status reporting"""
        return {
            "units": self.units,
            "units_factor": self.units_factor,
            "positioning_mode": self.positioning_mode,
            "plane": self.plane.value,
            "feed_rate": self.current_feed,
            "rapid_feed": self.rapid_feed,
        }
