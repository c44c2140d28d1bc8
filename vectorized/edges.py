"""
Vectorized edge extraction using whole-array NumPy/OpenCV operations.

Produces the same output as the CPU reference (cpu.edges) without per-pixel
Python loops.
"""

from __future__ import annotations

import cv2
import numpy as np

from common.errors import UnimplementedPathError
from common.log import setup_logger
from cpu.adaptive_threshold import ThresholdPair, cpu_edge_thresholds
from cpu.direction import NEIGHBOR_OFFSETS, Direction
from cpu.edges import GradientMode, parse_mode
from cpu.gradient import SOBEL, KernelPair
from cpu.grayscale import GRAY_WEIGHTS
from cpu.hysteresis import STRONG_EDGE, effective_thresholds

logger = setup_logger("nms")

INVALID_DIRECTION = -1


def vec_grayscale(image: np.ndarray) -> np.ndarray:
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError("vec_grayscale expects (H, W, 3) RGB image")
    rgb = image.astype(np.float64)
    wr, wg, wb = GRAY_WEIGHTS
    return np.trunc(wr * rgb[:, :, 0] + wg * rgb[:, :, 1] + wb * rgb[:, :, 2]).astype(np.uint8)


def vec_gradient_in_gray(
    gray: np.ndarray,
    kernels: KernelPair = SOBEL,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Gradient magnitude (uint8, wrapped) and direction (float32 degrees) for
    all interior pixels at once.
    """
    if gray.ndim != 2:
        raise ValueError("vec_gradient_in_gray expects 2D grayscale image")

    h, w = gray.shape
    gradient = np.zeros((h, w), dtype=np.uint8)
    direction = np.zeros((h, w), dtype=np.float32)
    if h < 3 or w < 3:
        return gradient, direction

    img = gray.astype(np.int64)
    gx = np.zeros((h - 2, w - 2), dtype=np.int64)
    gy = np.zeros((h - 2, w - 2), dtype=np.int64)

    # Correlate by summing shifted windows, one kernel tap at a time
    for i in range(3):
        for j in range(3):
            window = img[i:i + h - 2, j:j + w - 2]
            gx += kernels.x[i][j] * window
            gy += kernels.y[i][j] * window

    magnitude = np.sqrt((gx * gx + gy * gy).astype(np.float64))
    gradient[1:-1, 1:-1] = (magnitude.astype(np.int64) & 0xFF).astype(np.uint8)
    direction[1:-1, 1:-1] = (np.arctan2(gy, gx) * 180 / np.pi).astype(np.float32)
    return gradient, direction


def vec_discretize_direction(angle: np.ndarray) -> np.ndarray:
    """
    Array form of cpu.direction.discretize_direction.

    Returns:
        int8 array of Direction values, INVALID_DIRECTION where no sector matches
    """
    a = np.asarray(angle, dtype=np.float64)
    a = np.where(a < 0, a + 180, a)

    conditions = [
        ((a >= -22.5) & (a < 22.5)) | (a >= 157.5) | (a < -157.5),
        ((a >= 22.5) & (a < 67.5)) | ((a >= -157.5) & (a < -112.5)),
        ((a >= 67.5) & (a < 112.5)) | ((a >= -112.5) & (a < -67.5)),
        ((a >= 112.5) & (a < 157.5)) | ((a >= -67.5) & (a < -22.5)),
    ]
    choices = [
        int(Direction.EAST_WEST),
        int(Direction.NE_SW),
        int(Direction.NORTH_SOUTH),
        int(Direction.NW_SE),
    ]
    return np.select(conditions, choices, default=INVALID_DIRECTION).astype(np.int8)


def vec_non_max_suppression(gradient: np.ndarray, direction: np.ndarray) -> np.ndarray:
    """
    Vectorized non-maximum suppression: keep only local maxima along gradient direction.
    """
    if gradient.ndim != 2:
        raise ValueError("vec_non_max_suppression expects 2D gradient image")
    if direction.shape != gradient.shape:
        raise ValueError(
            f"direction shape {direction.shape} does not match gradient shape {gradient.shape}"
        )

    h, w = gradient.shape
    edge = np.zeros((h, w), dtype=np.uint8)
    if h < 3 or w < 3:
        return edge

    center = gradient[1:-1, 1:-1]
    labels = vec_discretize_direction(direction[1:-1, 1:-1])

    def shifted(dx: int, dy: int) -> np.ndarray:
        return gradient[1 + dy:h - 1 + dy, 1 + dx:w - 1 + dx]

    keep = labels == INVALID_DIRECTION
    n_invalid = int(np.count_nonzero(keep))
    if n_invalid:
        logger.warning(f"{n_invalid} pixel(s) with unclassifiable direction; keeping magnitude")

    for d, ((dx1, dy1), (dx2, dy2)) in NEIGHBOR_OFFSETS.items():
        keep |= (labels == d) & (center >= shifted(dx1, dy1)) & (center >= shifted(dx2, dy2))

    edge[1:-1, 1:-1] = np.where(keep, center, 0)
    return edge


def vec_track_edges(edge: np.ndarray, thresholds: ThresholdPair) -> np.ndarray:
    """
    Hysteresis by labelling 8-connected components.

    Seeds (>= high, not already 255) and weak pixels (>= low, not already 255)
    form the graph; a component is kept when it contains a seed. Pixels that
    were 255 on input are kept but do not join components, matching the
    flood fill which never expands through them.
    """
    if edge.ndim != 2:
        raise ValueError("vec_track_edges expects 2D edge image")
    if edge.size == 0:
        return np.zeros_like(edge, dtype=np.uint8)

    low, high = effective_thresholds(thresholds)
    preset = edge == STRONG_EDGE
    seeds = (edge >= high) & ~preset
    nodes = seeds | ((edge >= low) & ~preset)

    _, labels = cv2.connectedComponents(nodes.astype(np.uint8), connectivity=8)
    seeded = np.unique(labels[seeds])
    marked = np.isin(labels, seeded) & nodes

    return np.where(marked | preset, STRONG_EDGE, 0).astype(np.uint8)


def vec_canny_edges(
    image: np.ndarray,
    mode: GradientMode | int | str = GradientMode.GRAY,
    kernels: KernelPair = SOBEL,
    low_k: float = 1.0,
    high_k: float = 2.0,
) -> tuple[np.ndarray, ThresholdPair]:
    """
    Vectorized counterpart of cpu.edges.cpu_canny_with_thresholds.

    Returns:
        edges: 2D uint8 edge image (0 or 255)
        thresholds: threshold pair used for hysteresis
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError("vec_canny_edges expects (H, W, 3) RGB image")
    if image.dtype != np.uint8:
        raise ValueError(f"vec_canny_edges expects uint8 image, got {image.dtype}")

    if parse_mode(mode) != GradientMode.GRAY:
        raise UnimplementedPathError(GradientMode.COLOR.name)

    gray = vec_grayscale(image)
    gradient, direction = vec_gradient_in_gray(gray, kernels)
    edge = vec_non_max_suppression(gradient, direction)
    thresholds = cpu_edge_thresholds(edge, low_k=low_k, high_k=high_k)
    return vec_track_edges(edge, thresholds), thresholds
