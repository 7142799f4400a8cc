"""Shared graphs and grids for the search tests."""

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pytest

from graph import AdjacencyIndex
from grid import OccupancyGrid


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def reference_edges() -> list[tuple[str, str, int]]:
    """Return the six-vertex reference graph as an edge list."""
    return [
        ("a", "b", 7),
        ("a", "c", 9),
        ("a", "f", 14),
        ("b", "c", 10),
        ("b", "d", 15),
        ("c", "d", 11),
        ("c", "f", 2),
        ("d", "e", 6),
        ("e", "f", 9),
    ]


@pytest.fixture
def reference_index(reference_edges) -> AdjacencyIndex:
    return AdjacencyIndex.build(reference_edges)


@pytest.fixture
def open_grid() -> OccupancyGrid:
    """Return an obstacle-free 5x5 grid."""
    return OccupancyGrid((5, 5))
