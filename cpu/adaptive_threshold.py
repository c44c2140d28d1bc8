"""
CPU reference implementation for adaptive hysteresis thresholds.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from cpu.gradient import wrap_u8


@dataclass(frozen=True)
class ThresholdPair:
    low: int
    high: int
    mean: float
    std_dev: float


def cpu_edge_thresholds(
    edge: np.ndarray,
    low_k: float = 1.0,
    high_k: float = 2.0,
) -> ThresholdPair:
    """
    Derive low/high thresholds from the statistics of a thinned edge image.

    Mean and population standard deviation are taken over every pixel,
    border zeros included. low = mean + low_k*std, high = mean + high_k*std,
    each stored as uint8 (truncated, low byte kept).

    Args:
        edge: 2D uint8 image (0-255)
        low_k: standard deviations above the mean for the low threshold
        high_k: standard deviations above the mean for the high threshold

    Returns:
        ThresholdPair with the stored thresholds and the raw statistics
    """
    if edge.ndim != 2:
        raise ValueError("cpu_edge_thresholds expects 2D edge image")

    num_pixels = edge.size
    if num_pixels == 0:
        return ThresholdPair(low=0, high=0, mean=0.0, std_dev=0.0)

    values = edge.astype(np.float64)
    mean = float(values.sum()) / num_pixels
    sum_sq = float(((values - mean) ** 2).sum())
    std_dev = math.sqrt(sum_sq / num_pixels)

    return ThresholdPair(
        low=wrap_u8(mean + low_k * std_dev),
        high=wrap_u8(mean + high_k * std_dev),
        mean=mean,
        std_dev=std_dev,
    )
