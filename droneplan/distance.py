"""Flight-distance calculations for a drone surveying a rectangular estate."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

logger = logging.getLogger(__name__)

PLOT_SIZE = 10
"""Horizontal distance, in metres, between the centres of neighbouring plots."""

CLEARANCE = 1
"""Height, in metres, the drone keeps above the ground or a tree top."""


@dataclass(frozen=True)
class Tree:
    """A tree standing on plot (x, y) of an estate."""

    x: int
    y: int
    height: int


@dataclass(frozen=True)
class _Stop:
    """The drone above one plot, with the distance flown once it moves on."""

    x: int
    y: int
    height: int
    total: int


def _check_dimensions(length: int, width: int) -> None:
    if length < 0 or width < 0:
        raise ValueError(
            f"estate dimensions must not be negative, got length={length}, width={width}"
        )


def _flight_path(length: int, width: int, trees: Iterable[Tree]) -> Iterator[_Stop]:
    """Fly the estate row by row in a zigzag, yielding every plot visited."""
    heights = {(tree.x, tree.y): tree.height for tree in trees}
    total = 0
    current_height = 0

    for y in range(1, width + 1):
        row = range(1, length + 1) if y % 2 == 1 else range(length, 0, -1)
        row_end = row[-1] if row else None
        for x in row:
            target_height = heights.get((x, y), 0) + CLEARANCE
            total += abs(current_height - target_height)
            current_height = target_height
            if not (x == row_end and y == width):
                total += PLOT_SIZE
            yield _Stop(x, y, target_height, total)
        if y < width:
            total += PLOT_SIZE


def calculate_drone_distance(length: int, width: int, trees: Iterable[Tree]) -> int:
    """Return the total distance flown to survey the whole estate and land."""
    _check_dimensions(length, width)
    last: _Stop | None = None
    for stop in _flight_path(length, width, trees):
        logger.debug(
            "Moving to (%d, %d) with height %d, total distance: %d",
            stop.x, stop.y, stop.height, stop.total,
        )
        last = stop
    if last is None:
        return PLOT_SIZE * max(width - 1, 0)
    return last.total + last.height


def max_distance_drone(
    length: int, width: int, trees: Iterable[Tree], max_distance: int
) -> tuple[int, int]:
    """Return the plot where the drone stops once it exceeds ``max_distance``.

    If the whole estate can be flown within the limit, the last plot visited is
    returned; ``(0, 0)`` means no plot was visited at all.
    """
    _check_dimensions(length, width)
    last = (0, 0)
    for stop in _flight_path(length, width, trees):
        if stop.total > max_distance:
            logger.debug(
                "Max distance reached at (%d, %d) with height %d, total distance: %d",
                stop.x, stop.y, stop.height, stop.total,
            )
            return (stop.x, stop.y)
        logger.debug(
            "Moving to (%d, %d) with height %d, total distance: %d",
            stop.x, stop.y, stop.height, stop.total,
        )
        last = (stop.x, stop.y)
    return last