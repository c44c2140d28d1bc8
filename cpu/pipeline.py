from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import numpy as np

from common.config import edge_settings
from common.image_io import edge_points
from cpu.adaptive_threshold import ThresholdPair
from cpu.edges import cpu_canny_with_thresholds
from cpu.gradient import get_kernels


@dataclass
class EdgeResultCPU:
    edges: np.ndarray  # (H, W) uint8, 0 or 255
    thresholds: ThresholdPair
    points: np.ndarray  # (N, 2) int32 (x, y)

    @property
    def edge_count(self) -> int:
        return len(self.points)


def run_cpu_pipeline(image: np.ndarray, cfg: Dict[str, Any]) -> EdgeResultCPU:
    """
    Convenience wrapper: extract edges on CPU using the `edges` config block.
    """
    settings = edge_settings(cfg)
    edges, thresholds = cpu_canny_with_thresholds(
        image,
        mode=settings["mode"],
        kernels=get_kernels(settings["kernel"]),
        low_k=settings["low_k"],
        high_k=settings["high_k"],
    )
    return EdgeResultCPU(edges=edges, thresholds=thresholds, points=edge_points(edges))
