"""
Direction discretization and non-maximum suppression.
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import logging

import numpy as np
import pytest

from common.errors import DirectionClassificationError, EdgeExtractionError
from cpu.direction import Direction, discretize_direction
from cpu.gradient import cpu_gradient_in_gray
from cpu.grayscale import cpu_grayscale
from cpu.nms import cpu_non_max_suppression
from tests.helpers import random_image


@pytest.mark.parametrize(
    "angle, expected",
    [
        (0.0, Direction.EAST_WEST),
        (22.4, Direction.EAST_WEST),
        (22.5, Direction.NE_SW),
        (45.0, Direction.NE_SW),
        (67.5, Direction.NORTH_SOUTH),
        (90.0, Direction.NORTH_SOUTH),
        (112.5, Direction.NW_SE),
        (135.0, Direction.NW_SE),
        (157.5, Direction.EAST_WEST),
        (180.0, Direction.EAST_WEST),
        (-45.0, Direction.NW_SE),
        (-90.0, Direction.NORTH_SOUTH),
        (-135.0, Direction.NE_SW),
        (-179.9, Direction.EAST_WEST),
        (-20.0, Direction.EAST_WEST),
        (-250.0, Direction.NORTH_SOUTH),
        (400.0, Direction.EAST_WEST),
    ],
)
def test_discretize_direction(angle, expected):
    assert discretize_direction(angle) == expected


def test_discretize_direction_is_total():
    # 1000 samples in (-180, 180] at 0.1 degree steps
    angles = [-180.0 + 0.1 * (i + 1) for i in range(1000)]
    angles += [180.0 - 0.1 * i for i in range(1000)]
    for angle in angles:
        assert discretize_direction(angle) in set(Direction)


def test_discretize_direction_nan_raises():
    with pytest.raises(DirectionClassificationError) as excinfo:
        discretize_direction(float("nan"))
    assert isinstance(excinfo.value, EdgeExtractionError)
    assert isinstance(excinfo.value, ValueError)


def _ridge(direction_deg: float) -> tuple[np.ndarray, np.ndarray]:
    gradient = np.array(
        [
            [0, 0, 0, 0, 0],
            [0, 50, 60, 50, 0],
            [0, 60, 90, 60, 0],
            [0, 50, 60, 50, 0],
            [0, 0, 0, 0, 0],
        ],
        dtype=np.uint8,
    )
    direction = np.full(gradient.shape, direction_deg, dtype=np.float32)
    return gradient, direction


def test_nms_keeps_peak_and_writes_new_buffer():
    gradient, direction = _ridge(0.0)
    before = gradient.copy()
    edge = cpu_non_max_suppression(gradient, direction)

    assert edge is not gradient
    assert np.array_equal(gradient, before)
    assert edge[2, 2] == 90
    # (1, 2) has 0 to the west and 90 to the east
    assert edge[2, 1] == 0
    assert edge[2, 3] == 0


@pytest.mark.parametrize(
    "angle, neighbours",
    [
        (0.0, [(2, 1), (2, 3)]),
        (45.0, [(1, 1), (3, 3)]),
        (90.0, [(1, 2), (3, 2)]),
        (135.0, [(1, 3), (3, 1)]),
    ],
)
def test_nms_compares_along_direction(angle, neighbours):
    gradient = np.full((5, 5), 10, dtype=np.uint8)
    gradient[2, 2] = 50
    # A larger pixel on a neighbour along the direction suppresses the centre
    (y, x), _ = neighbours
    gradient[y, x] = 80
    direction = np.full(gradient.shape, angle, dtype=np.float32)
    assert cpu_non_max_suppression(gradient, direction)[2, 2] == 0

    # The same larger pixel off-axis has no effect
    gradient[y, x] = 10
    for oy, ox in [(1, 1), (1, 2), (1, 3), (2, 1), (2, 3), (3, 1), (3, 2), (3, 3)]:
        if (oy, ox) in neighbours:
            continue
        probe = gradient.copy()
        probe[oy, ox] = 80
        assert cpu_non_max_suppression(probe, direction)[2, 2] == 50


def test_nms_ties_are_kept():
    gradient = np.zeros((3, 5), dtype=np.uint8)
    gradient[1, 1:4] = 40
    direction = np.zeros(gradient.shape, dtype=np.float32)
    edge = cpu_non_max_suppression(gradient, direction)
    assert list(edge[1]) == [0, 40, 40, 40, 0]


def test_nms_border_is_zero():
    gradient = np.full((6, 7), 200, dtype=np.uint8)
    direction = np.zeros(gradient.shape, dtype=np.float32)
    edge = cpu_non_max_suppression(gradient, direction)

    assert not edge[0].any() and not edge[-1].any()
    assert not edge[:, 0].any() and not edge[:, -1].any()


def test_nms_unclassifiable_direction_keeps_pixel(caplog):
    gradient, direction = _ridge(90.0)
    direction[2, 1] = np.nan
    with caplog.at_level(logging.WARNING, logger="nms"):
        edge = cpu_non_max_suppression(gradient, direction)

    assert edge[2, 1] == 60
    assert edge[2, 2] == 90
    assert "Angle out of range" in caplog.text


def test_nms_shape_mismatch():
    with pytest.raises(ValueError):
        cpu_non_max_suppression(np.zeros((4, 4), np.uint8), np.zeros((4, 5), np.float32))


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_nms_is_idempotent(seed):
    gray = cpu_grayscale(random_image(24, 31, seed=seed))
    gradient, direction = cpu_gradient_in_gray(gray)

    once = cpu_non_max_suppression(gradient, direction)
    twice = cpu_non_max_suppression(once, direction)
    assert np.array_equal(once, twice)
