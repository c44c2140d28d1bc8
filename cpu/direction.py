"""
Discretization of continuous gradient angles into four edge orientations.
"""

from __future__ import annotations

import enum

from common.errors import DirectionClassificationError


class Direction(enum.IntEnum):
    EAST_WEST = 0
    NE_SW = 1
    NORTH_SOUTH = 2
    NW_SE = 3


# (dx, dy) of the two neighbours compared during non-maximum suppression.
NEIGHBOR_OFFSETS = {
    Direction.EAST_WEST: ((-1, 0), (1, 0)),
    Direction.NE_SW: ((-1, -1), (1, 1)),
    Direction.NORTH_SOUTH: ((0, -1), (0, 1)),
    Direction.NW_SE: ((1, -1), (-1, 1)),
}


def discretize_direction(angle: float) -> Direction:
    """
    Map an angle in degrees to one of four 45-degree sectors.

    Negative angles are folded once by adding 180. The negative sector bounds
    are still checked so angles below -180 classify by their mirror.

    Raises:
        DirectionClassificationError: if the angle lands in no sector (NaN).
    """
    a = float(angle)
    if a < 0:
        a += 180

    if (-22.5 <= a < 22.5) or a >= 157.5 or a < -157.5:
        return Direction.EAST_WEST
    if (22.5 <= a < 67.5) or (-157.5 <= a < -112.5):
        return Direction.NE_SW
    if (67.5 <= a < 112.5) or (-112.5 <= a < -67.5):
        return Direction.NORTH_SOUTH
    if (112.5 <= a < 157.5) or (-67.5 <= a < -22.5):
        return Direction.NW_SE

    raise DirectionClassificationError(angle)
