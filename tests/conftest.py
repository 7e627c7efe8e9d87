"""
Pytest configuration and shared fixtures for gcodeview tests.

Registers markers and provides interpreter fixtures and small program
helpers used across the unit tests.
"""

import logging
import os
import sys

import pytest

# Add the parent directory to Python path so we can import the package
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from gcodeview.gcode import GcodeInterpreter, ModalState

logger = logging.getLogger(__name__)


# ============================================================================
# PYTEST CONFIGURATION HOOKS
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "gcode: Tests specifically for GCODE parsing and interpretation functionality"
    )


# ============================================================================
# INTERPRETER FIXTURES
# ============================================================================

@pytest.fixture
def interpreter() -> GcodeInterpreter:
    """Interpreter with the default configuration."""
    return GcodeInterpreter()


@pytest.fixture
def state() -> ModalState:
    """Default modal state (mm, absolute, XY, 1000 mm/min)."""
    return ModalState()


@pytest.fixture
def run(interpreter):
    """Evaluate a program given as separate lines."""
    def _run(*lines: str):
        return interpreter.evaluate("\n".join(lines))
    return _run
