"""
CPU reference implementation for RGB to grayscale reduction.
"""

from __future__ import annotations

import numpy as np

# Perceptual luminance weights for R, G, B.
GRAY_WEIGHTS = (0.299, 0.587, 0.114)


def cpu_grayscale(image: np.ndarray) -> np.ndarray:
    """
    Collapse an RGB image to one luminance channel.

    Each output pixel is 0.299*R + 0.587*G + 0.114*B, truncated (not rounded)
    to uint8. OpenCV's cvtColor rounds, so it is not used here.

    Args:
        image: (H, W, 3) uint8 RGB image

    Returns:
        (H, W) uint8 grayscale image
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError("cpu_grayscale expects (H, W, 3) RGB image")

    rgb = image.astype(np.float64)
    wr, wg, wb = GRAY_WEIGHTS
    gray = wr * rgb[:, :, 0] + wg * rgb[:, :, 1] + wb * rgb[:, :, 2]
    return np.trunc(gray).astype(np.uint8)
