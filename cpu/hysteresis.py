"""
CPU reference hysteresis tracking with 8-connected flood fill.
"""

from __future__ import annotations

import numpy as np

from common.log import setup_logger
from cpu.adaptive_threshold import ThresholdPair

logger = setup_logger("hysteresis")

STRONG_EDGE = 255
SUPPRESSED = 0


def effective_thresholds(thresholds: ThresholdPair) -> tuple[int, int]:
    """
    (low, high) as applied by the tracker. A zero-strength pixel is never an
    edge, so both are at least 1.
    """
    return max(thresholds.low, 1), max(thresholds.high, 1)


def mark(edge: np.ndarray, x: int, y: int, low_threshold: int) -> int:
    """
    Promote (x, y) to a strong edge and flood through 8-connected neighbours
    that are at least `low_threshold` and not yet marked.

    Uses an explicit stack; pixels are claimed before they are pushed so each
    is visited once even on cycles. Mutates `edge` in place.

    Returns:
        number of pixels promoted
    """
    h, w = edge.shape
    edge[y, x] = STRONG_EDGE
    stack = [(x, y)]
    promoted = 1

    while stack:
        cx, cy = stack.pop()
        for dy in (-1, 0, 1):
            ny = cy + dy
            if ny < 0 or ny >= h:
                continue
            for dx in (-1, 0, 1):
                nx = cx + dx
                if nx < 0 or nx >= w:
                    continue
                value = edge[ny, nx]
                if value != STRONG_EDGE and value >= low_threshold:
                    edge[ny, nx] = STRONG_EDGE
                    stack.append((nx, ny))
                    promoted += 1

    return promoted


def cpu_track_edges(edge: np.ndarray, thresholds: ThresholdPair) -> np.ndarray:
    """
    Double-threshold hysteresis over a thinned edge image.

    Raster scan: pixels >= high (and not already 255) seed a flood fill,
    pixels < low are cleared. A final pass clears every pixel that was not
    promoted, so weak pixels never reached from a seed are dropped.

    Args:
        edge: 2D uint8 thinned magnitude image (not modified)
        thresholds: threshold pair from cpu_edge_thresholds

    Returns:
        2D uint8 binary image (0 or 255)
    """
    if edge.ndim != 2:
        raise ValueError("cpu_track_edges expects 2D edge image")

    out = edge.copy()
    low, high = effective_thresholds(thresholds)
    h, w = out.shape

    seeds = 0
    for y in range(h):
        for x in range(w):
            value = out[y, x]
            if value >= high and value != STRONG_EDGE:
                mark(out, x, y, low)
                seeds += 1
            elif value < low:
                out[y, x] = SUPPRESSED

    out[out != STRONG_EDGE] = SUPPRESSED
    logger.debug(f"hysteresis low={low} high={high} seeds={seeds} edges={int(np.count_nonzero(out))}")
    return out
