from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np


def load_image(path: str | Path) -> np.ndarray:
    """
    Load an image from disk as an RGB uint8 array of shape (H, W, 3).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None:
        raise RuntimeError(f"Failed to decode image: {path}")
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def save_edges(edges: np.ndarray, path: str | Path) -> None:
    """
    Save a single-channel edge map (0 or 255) as an image file.
    """
    if edges.ndim != 2:
        raise ValueError("save_edges expects 2D edge image")
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(path), edges.astype(np.uint8)):
        raise RuntimeError(f"Failed to write edge image: {path}")


def edge_points(edges: np.ndarray) -> np.ndarray:
    """
    Coordinates of edge pixels for the triangulation stage.

    Args:
        edges: 2D uint8 edge image (0 or 255)

    Returns:
        (N, 2) int32 array of (x, y) points in raster order
    """
    if edges.ndim != 2:
        raise ValueError("edge_points expects 2D edge image")
    ys, xs = np.nonzero(edges == 255)
    return np.stack([xs, ys], axis=1).astype(np.int32)
