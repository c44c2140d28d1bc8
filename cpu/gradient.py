"""
CPU reference gradient estimation over a grayscale image.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple, Tuple

import numpy as np

Kernel3 = Tuple[Tuple[int, int, int], Tuple[int, int, int], Tuple[int, int, int]]


@dataclass(frozen=True)
class KernelPair:
    """3x3 derivative kernels, indexed [dy + 1][dx + 1]."""

    name: str
    x: Kernel3
    y: Kernel3


SOBEL = KernelPair(
    name="sobel",
    x=((-1, 0, 1), (-2, 0, 2), (-1, 0, 1)),
    y=((-1, -2, -1), (0, 0, 0), (1, 2, 1)),
)

# Alternative with larger weights and inverted sign. Not used by default.
SCHARR = KernelPair(
    name="scharr",
    x=((3, 0, -3), (10, 0, -10), (3, 0, -3)),
    y=((3, 10, 3), (0, 0, 0), (-3, -10, -3)),
)

KERNELS = {k.name: k for k in (SOBEL, SCHARR)}


def get_kernels(name: str) -> KernelPair:
    try:
        return KERNELS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown gradient kernel: {name}") from None


class GradientSample(NamedTuple):
    magnitude: float
    direction: float  # degrees, as returned by atan2


def wrap_u8(value: float) -> int:
    """Truncate to an integer and keep the low byte, like a uint8 store."""
    return int(value) & 0xFF


def calculate_gradient(
    gray: np.ndarray,
    x: int,
    y: int,
    kernels: KernelPair = SOBEL,
) -> GradientSample:
    """
    Gradient magnitude and direction for a single interior pixel.

    Args:
        gray: 2D uint8 image (0-255)
        x, y: pixel column and row, 1 <= x <= W-2 and 1 <= y <= H-2
        kernels: derivative kernel pair

    Returns:
        GradientSample with the unclipped magnitude and the atan2 angle in degrees
    """
    h, w = gray.shape
    if not (0 < x < w - 1 and 0 < y < h - 1):
        raise ValueError(f"calculate_gradient expects an interior pixel, got ({x}, {y})")

    gx = 0
    gy = 0
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            value = int(gray[y + dy, x + dx])
            gx += kernels.x[dy + 1][dx + 1] * value
            gy += kernels.y[dy + 1][dx + 1] * value

    return GradientSample(
        magnitude=math.sqrt(gx * gx + gy * gy),
        direction=math.atan2(gy, gx) * 180 / math.pi,
    )


def cpu_gradient_in_gray(
    gray: np.ndarray,
    kernels: KernelPair = SOBEL,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Per-pixel gradient of a grayscale image.

    Magnitudes above 255 wrap when stored (only the low byte is kept). Border
    pixels are left at zero in both outputs.

    Returns:
        gradient: 2D uint8 magnitude image
        direction: 2D float32 angle image in degrees
    """
    if gray.ndim != 2:
        raise ValueError("cpu_gradient_in_gray expects 2D grayscale image")

    h, w = gray.shape
    gradient = np.zeros((h, w), dtype=np.uint8)
    direction = np.zeros((h, w), dtype=np.float32)

    for y in range(1, h - 1):
        for x in range(1, w - 1):
            sample = calculate_gradient(gray, x, y, kernels)
            gradient[y, x] = wrap_u8(sample.magnitude)
            direction[y, x] = sample.direction

    return gradient, direction
