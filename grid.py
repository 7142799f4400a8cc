from __future__ import annotations

import logging
import random
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from search import shortest_path


logger = logging.getLogger(__name__)

Coord = Tuple[int, ...]


class OccupancyGrid:
    """Boolean obstacle mask over an N-dimensional box of integer cells.

    Flat indices run with the first axis varying fastest, so a 2-D cell
    (x, y) is number x + y * width.
    """

    def __init__(self, shape: Sequence[int], obstacles: Iterable[Sequence[int]] = ()) -> None:
        if not shape or any(extent <= 0 for extent in shape):
            raise ValueError(f"Grid shape must have positive extents, got {tuple(shape)}.")
        self.shape: Coord = tuple(int(extent) for extent in shape)
        self._cells = np.zeros(self.shape, dtype=np.bool_)

        self.block_all(tuple(coord) for coord in obstacles)

    @property
    def size(self) -> int:
        return int(self._cells.size)

    @property
    def blocked_count(self) -> int:
        return int(np.count_nonzero(self._cells))

    def blocked_cells(self) -> np.ndarray:
        """Coordinates of every blocked cell, one row per cell."""
        return np.argwhere(self._cells)

    def _check_dimensions(self, coord: Sequence[int]) -> None:
        if len(coord) != len(self.shape):
            raise ValueError(
                f"Coordinate {tuple(coord)} does not match grid dimensions {self.shape}."
            )

    def in_bounds(self, coord: Sequence[int]) -> bool:
        self._check_dimensions(coord)
        return all(0 <= value < extent for value, extent in zip(coord, self.shape))

    def index(self, coord: Sequence[int]) -> Optional[int]:
        """Flat index of coord, or None when it lies outside the grid."""
        if not self.in_bounds(coord):
            return None
        return int(np.ravel_multi_index(tuple(coord), self.shape, order="F"))

    def is_blocked(self, coord: Sequence[int]) -> bool:
        return self.in_bounds(coord) and bool(self._cells[tuple(coord)])

    def block(self, coord: Sequence[int]) -> None:
        if self.in_bounds(coord):
            self._cells[tuple(coord)] = True

    def block_all(self, coords: Iterable[Sequence[int]]) -> None:
        for coord in coords:
            self.block(coord)

    def neighbors(self, coord: Coord) -> Iterator[Coord]:
        """Open axis-aligned neighbors of coord, read from the live mask."""
        self._check_dimensions(coord)
        for axis in range(len(coord)):
            for step in (-1, 1):
                neighbor = coord[:axis] + (coord[axis] + step,) + coord[axis + 1 :]
                if self.in_bounds(neighbor) and not self._cells[neighbor]:
                    yield neighbor


def unit_cost(origin: Coord, target: Coord) -> int:
    return 1


def random_goals(
    rng: random.Random, shape: Sequence[int], count: int
) -> List[Tuple[Coord, Coord]]:
    """Draw count random (begin, end) cell pairs inside shape."""

    def random_coord() -> Coord:
        return tuple(rng.randrange(extent) for extent in shape)

    return [(random_coord(), random_coord()) for _ in range(count)]


def carve_paths(
    grid: OccupancyGrid,
    goals: Sequence[Tuple[Coord, Coord]],
    max_iterations: int | None = None,
) -> List[Optional[List[Coord]]]:
    """Route each goal pair in turn, turning every found path into obstacles.

    Queries run strictly in order because each one changes the mask the
    next one searches.
    """
    paths: List[Optional[List[Coord]]] = []
    for goal_idx, (begin, end) in enumerate(goals):
        if goal_idx and goal_idx % 1_000 == 0:
            logger.info("Carved %d of %d goal pairs.", goal_idx, len(goals))

        path = shortest_path(
            unit_cost, grid.neighbors, begin, end, max_iterations=max_iterations
        )
        if path is None:
            logger.debug("No path from %s to %s.", begin, end)
        else:
            grid.block_all(path)
        paths.append(path)

    return paths
