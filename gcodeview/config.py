"""
Central configuration for gcodeview tunables and shared constants.
"""

import logging
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}, using {default}")
        return default


# Unit factors (program units -> mm)
MM_PER_INCH: float = 25.4
MM_PER_MM: float = 1.0

# Feed defaults. The rapid feed is expressed in program units per minute and
# is rescaled whenever the unit system changes.
RAPID_FEED_DEFAULT: float = _env_float("GCODEVIEW_RAPID_FEED", 24.0)
FEED_DEFAULT_MM_MIN: float = _env_float("GCODEVIEW_DEFAULT_FEED", 1000.0)

# Arc display sampling (visual only, never used for timing)
ARC_SAMPLE_DEG: float = max(0.1, _env_float("GCODEVIEW_ARC_SAMPLE_DEG", 10.0))
ARC_MIN_SAMPLES: int = max(1, _env_int("GCODEVIEW_ARC_MIN_SAMPLES", 6))

# Geometry tolerances (mm)
ARC_ENDPOINT_TOL_MM: float = 1e-9  # Append exact target when last sample is further than this
ARC_RADIUS_MISMATCH_TOL_MM: float = 0.01  # Start/end radius disagreement worth reporting
ZERO_LENGTH_TOL_MM: float = 1e-12

LOG_LEVEL_DEFAULT: str = os.getenv("GCODEVIEW_LOG_LEVEL", "WARNING").upper()
