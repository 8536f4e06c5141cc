"""Sequence helpers for assertions over result lists."""

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def index_of(sequence: Sequence[T], target: T) -> int:
    """Return the index of the first element equal to target, or -1."""
    for i, element in enumerate(sequence):
        if element == target:
            return i
    return -1
