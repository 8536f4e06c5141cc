"""Shared helpers for path handling, sequences, clocks, and logging."""

from repofixture.utils._clock import DEFAULT_EPOCH, Clock, StepClock, utc_now
from repofixture.utils._logging import create_harness_logger, get_harness_logger
from repofixture.utils._paths import ensure_directory, make_absolute, normalize_path
from repofixture.utils._sequence import index_of

__all__ = [
    "DEFAULT_EPOCH",
    "Clock",
    "StepClock",
    "create_harness_logger",
    "ensure_directory",
    "get_harness_logger",
    "index_of",
    "make_absolute",
    "normalize_path",
    "utc_now",
]
