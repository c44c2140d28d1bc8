"""
Error types raised by the edge extraction stages.
"""

from __future__ import annotations


class EdgeExtractionError(Exception):
    """Base class for edge extraction failures."""


class UnimplementedPathError(EdgeExtractionError, NotImplementedError):
    """Raised when a gradient mode is selected that has no implementation."""

    def __init__(self, mode: object) -> None:
        super().__init__(f"Gradient mode {mode!s} is not implemented")
        self.mode = mode


class DirectionClassificationError(EdgeExtractionError, ValueError):
    """Raised when an angle falls outside all four direction sectors."""

    def __init__(self, angle: float) -> None:
        super().__init__(f"Angle out of range: {angle}")
        self.angle = angle
