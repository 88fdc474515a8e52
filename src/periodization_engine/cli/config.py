"""Environment-variable-based configuration for the command-line interface.

Values are kept as read; ``cli.main`` validates them, and command-line
flags take precedence.
"""

from __future__ import annotations

import os

LOG_LEVEL: str = os.environ.get("PERIODIZATION_LOG_LEVEL", "INFO")
MIN_PHASE_WEEKS: str = os.environ.get("PERIODIZATION_MIN_PHASE_WEEKS", "")
TARGET_MODEL: str = os.environ.get("PERIODIZATION_TARGET_MODEL", "")
MIN_ANALYSIS_WEEKS: str = os.environ.get("PERIODIZATION_MIN_ANALYSIS_WEEKS", "")
