"""
CPU reference non-maximum suppression along the gradient direction.
"""

from __future__ import annotations

import numpy as np

from common.errors import DirectionClassificationError
from common.log import setup_logger
from cpu.direction import NEIGHBOR_OFFSETS, discretize_direction

logger = setup_logger("nms")


def cpu_non_max_suppression(gradient: np.ndarray, direction: np.ndarray) -> np.ndarray:
    """
    Keep only pixels that are local maxima along their own gradient direction.

    Reads from `gradient` and writes a new buffer, so the result does not
    depend on scan order. A pixel whose angle cannot be classified keeps its
    magnitude and a warning is logged.

    Args:
        gradient: 2D uint8 magnitude image
        direction: 2D float angle image in degrees, same shape

    Returns:
        2D uint8 thinned magnitude image with a zero border
    """
    if gradient.ndim != 2:
        raise ValueError("cpu_non_max_suppression expects 2D gradient image")
    if direction.shape != gradient.shape:
        raise ValueError(
            f"direction shape {direction.shape} does not match gradient shape {gradient.shape}"
        )

    h, w = gradient.shape
    edge = np.zeros((h, w), dtype=np.uint8)

    for y in range(1, h - 1):
        for x in range(1, w - 1):
            magnitude = gradient[y, x]
            try:
                d = discretize_direction(direction[y, x])
            except DirectionClassificationError as exc:
                logger.warning(f"({x}, {y}): {exc}; keeping magnitude {magnitude}")
                edge[y, x] = magnitude
                continue

            (dx1, dy1), (dx2, dy2) = NEIGHBOR_OFFSETS[d]
            if magnitude >= gradient[y + dy1, x + dx1] and magnitude >= gradient[y + dy2, x + dx2]:
                edge[y, x] = magnitude

    return edge
