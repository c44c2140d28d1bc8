"""
CPU reference Canny-style edge extraction for the mesh pipeline.
"""

from __future__ import annotations

import enum

import numpy as np

from common.errors import UnimplementedPathError
from common.log import setup_logger
from cpu.adaptive_threshold import ThresholdPair, cpu_edge_thresholds
from cpu.gradient import SOBEL, KernelPair, cpu_gradient_in_gray
from cpu.grayscale import cpu_grayscale
from cpu.hysteresis import cpu_track_edges
from cpu.nms import cpu_non_max_suppression

logger = setup_logger("edges")


class GradientMode(enum.IntEnum):
    GRAY = 0
    COLOR = 1


def parse_mode(mode: GradientMode | int | str) -> GradientMode:
    """Accept a GradientMode, its integer value, or its name."""
    if isinstance(mode, str):
        try:
            return GradientMode[mode.upper()]
        except KeyError:
            raise ValueError(f"Unknown gradient mode: {mode}") from None
    try:
        return GradientMode(mode)
    except ValueError:
        raise ValueError(f"Unknown gradient mode: {mode}") from None


def cpu_gradient_in_color(image: np.ndarray, kernels: KernelPair = SOBEL) -> tuple[np.ndarray, np.ndarray]:
    """
    Per-channel gradient combined across RGB.
    """
    raise UnimplementedPathError(GradientMode.COLOR.name)


def cpu_canny_with_thresholds(
    image: np.ndarray,
    mode: GradientMode | int | str = GradientMode.GRAY,
    kernels: KernelPair = SOBEL,
    low_k: float = 1.0,
    high_k: float = 2.0,
) -> tuple[np.ndarray, ThresholdPair]:
    """
    Run every stage and return the edge image with the thresholds it used.

    See cpu_canny_edges for the arguments.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError("cpu_canny_edges expects (H, W, 3) RGB image")
    if image.dtype != np.uint8:
        raise ValueError(f"cpu_canny_edges expects uint8 image, got {image.dtype}")

    mode = parse_mode(mode)
    if mode == GradientMode.GRAY:
        gray = cpu_grayscale(image)
        gradient, direction = cpu_gradient_in_gray(gray, kernels)
    else:
        gradient, direction = cpu_gradient_in_color(image, kernels)

    edge = cpu_non_max_suppression(gradient, direction)
    thresholds = cpu_edge_thresholds(edge, low_k=low_k, high_k=high_k)
    edges = cpu_track_edges(edge, thresholds)

    logger.info(
        f"{image.shape[1]}x{image.shape[0]}: low={thresholds.low} high={thresholds.high} "
        f"edges={int(np.count_nonzero(edges))}"
    )
    return edges, thresholds


def cpu_canny_edges(
    image: np.ndarray,
    mode: GradientMode | int | str = GradientMode.GRAY,
    kernels: KernelPair = SOBEL,
    low_k: float = 1.0,
    high_k: float = 2.0,
) -> np.ndarray:
    """
    CPU reference edge extractor with adaptive thresholds.

    Args:
        image: (H, W, 3) uint8 RGB image, already denoised
        mode: GRAY (0) for the grayscale gradient path, COLOR (1) is not implemented
        kernels: derivative kernel pair (Sobel by default)
        low_k: standard deviations above the mean for the low threshold
        high_k: standard deviations above the mean for the high threshold

    Returns:
        2D uint8 edge image (0 or 255) - edges are 255, non-edges are 0

    Raises:
        UnimplementedPathError: if the COLOR mode is selected
    """
    edges, _ = cpu_canny_with_thresholds(image, mode, kernels, low_k, high_k)
    return edges
