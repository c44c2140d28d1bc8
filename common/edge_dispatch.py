"""
Edge extraction dispatch function supporting CPU, VECTORIZED, and AUTO backends.
"""

from __future__ import annotations

import time
from typing import Any, Dict

import numpy as np

from common.config import edge_settings
from common.log import setup_logger
from cpu.edges import cpu_canny_with_thresholds
from cpu.gradient import get_kernels
from vectorized.edges import vec_canny_edges

logger = setup_logger("edge_dispatch")


def dispatch_edge_extraction(
    image: np.ndarray,
    cfg: Dict[str, Any],
) -> tuple[np.ndarray, dict]:
    """
    Dispatch edge extraction based on config backend.

    Args:
        image: (H, W, 3) uint8 RGB image
        cfg: Configuration dict

    Returns:
        edges: 2D uint8 edge image (0 or 255)
        info: dict with backend, thresholds and timing information
    """
    settings = edge_settings(cfg)
    backend = settings["backend"]
    kernels = get_kernels(settings["kernel"])

    if backend == "AUTO":
        n_pixels = image.shape[0] * image.shape[1]
        backend = "VECTORIZED" if n_pixels >= settings["vectorized_min_pixels"] else "CPU"

    if backend == "CPU":
        extract = cpu_canny_with_thresholds
    elif backend == "VECTORIZED":
        extract = vec_canny_edges
    else:
        raise ValueError(f"Unknown edges backend: {backend}")

    t0 = time.perf_counter()
    edges, thresholds = extract(
        image,
        mode=settings["mode"],
        kernels=kernels,
        low_k=settings["low_k"],
        high_k=settings["high_k"],
    )
    t_edges_ms = (time.perf_counter() - t0) * 1000.0

    info = {
        "backend": backend,
        "low_thresh": thresholds.low,
        "high_thresh": thresholds.high,
        "edge_count": int(np.count_nonzero(edges)),
        "t_edges_ms": t_edges_ms,
    }
    logger.debug(f"dispatch {info}")
    return edges, info
