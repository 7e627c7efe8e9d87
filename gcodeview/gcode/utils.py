"""
Utility functions for GCODE processing

Provides distance, angle and duration helpers shared by the motion and arc
resolvers, plus number formatting for summaries.
"""

import math

import numpy as np

AXES = ("x", "y", "z")


def feed_rate_to_duration(distance: float, feed_rate: float) -> float:
    """
    Convert feed rate to duration for a given distance

    Args:
        distance: Distance to travel in mm
        feed_rate: Feed rate in mm/min

    Returns:
        Duration in seconds, 0 when the feed rate is not positive
    """
    if feed_rate <= 0:
        return 0.0

    # Convert mm/min to mm/s
    feed_rate_mm_s = feed_rate / 60.0

    return distance / feed_rate_mm_s


def calculate_distance(start, end) -> float:
    """
    Calculate Euclidean distance between two positions

    Args:
        start: Starting position (anything with x, y, z)
        end: Ending position

    Returns:
        Distance in mm
    """
    delta = np.array([end.x - start.x, end.y - start.y, end.z - start.z], dtype=float)
    return float(np.linalg.norm(delta))


def normalize_angle(angle: float) -> float:
    """Wrap an angle in radians into (-pi, pi]"""
    wrapped = math.atan2(math.sin(angle), math.cos(angle))
    if wrapped <= -math.pi:
        wrapped += 2 * math.pi
    return wrapped


def format_gcode_number(value: float, decimals: int = 3) -> str:
    """
    Format number for display

    Args:
        value: Numeric value
        decimals: Number of decimal places

    Returns:
        Formatted string without trailing zeros
    """
    formatted = f"{value:.{decimals}f}"
    formatted = formatted.rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted

