from __future__ import annotations

import csv
from collections import deque
from pathlib import Path
from typing import Iterable, Sequence

import numpy as np


def write_csv(path: Path, header: Sequence[str], rows: Iterable[Sequence]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for row in rows:
            writer.writerow(row)


def save_numpy(path: Path, array: np.ndarray) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    np.save(path, array)


def uniform_image(h: int, w: int, value: int) -> np.ndarray:
    return np.full((h, w, 3), value, dtype=np.uint8)


def step_image(h: int = 5, w: int = 5, step_col: int = 2, low: int = 0, high: int = 255) -> np.ndarray:
    """
    Vertical step edge: columns < step_col are `low`, the rest are `high`.
    """
    img = np.full((h, w, 3), low, dtype=np.uint8)
    img[:, step_col:, :] = high
    return img


def random_image(h: int, w: int, seed: int = 0, smooth: bool = True) -> np.ndarray:
    """
    Random RGB image; with `smooth`, a few blocky blobs so edges are structured.
    """
    rng = np.random.default_rng(seed)
    if not smooth:
        return rng.integers(0, 256, size=(h, w, 3), dtype=np.uint8)

    coarse = rng.integers(0, 256, size=(max(h // 4, 1), max(w // 4, 1), 3))
    img = np.repeat(np.repeat(coarse, 4, axis=0), 4, axis=1)[:h, :w]
    pad_h, pad_w = h - img.shape[0], w - img.shape[1]
    img = np.pad(img, ((0, pad_h), (0, pad_w), (0, 0)), mode="edge")
    noise = rng.integers(-8, 9, size=img.shape)
    return np.clip(img + noise, 0, 255).astype(np.uint8)


def reachable_from_seeds(values: np.ndarray, low: int, high: int) -> np.ndarray:
    """
    Pixels connected (8-neighbourhood) to a pixel >= high through pixels >= low.
    Brute-force BFS used to check tracker output.
    """
    h, w = values.shape
    seen = np.zeros((h, w), dtype=bool)
    queue = deque()
    for y, x in zip(*np.nonzero(values >= high)):
        seen[y, x] = True
        queue.append((y, x))

    while queue:
        y, x = queue.popleft()
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                ny, nx = y + dy, x + dx
                if 0 <= ny < h and 0 <= nx < w and not seen[ny, nx] and values[ny, nx] >= low:
                    seen[ny, nx] = True
                    queue.append((ny, nx))
    return seen


def border_mask(h: int, w: int) -> np.ndarray:
    mask = np.zeros((h, w), dtype=bool)
    mask[0, :] = mask[-1, :] = True
    mask[:, 0] = mask[:, -1] = True
    return mask
