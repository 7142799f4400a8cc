import pytest

from grid import OccupancyGrid, carve_paths
from visualize import (
    SegmentBuffer,
    build_networkx_graph,
    draw_graph_path,
    draw_grid_paths,
    path_colour,
    path_segments,
)


def test_path_segments_pairs_consecutive_vertices():
    assert path_segments(["e", "f", "c", "a"]) == [("e", "f"), ("f", "c"), ("c", "a")]
    assert path_segments(["a"]) == []


def test_segment_buffer_indexes_endpoints():
    buffer = SegmentBuffer()
    buffer.push_path([(0, 0), (1, 0), (1, 1)])
    assert buffer.vertices == [(0, 0), (1, 0), (1, 0), (1, 1)]
    assert buffer.indices == [0, 1, 2, 3]

    buffer.clear()
    assert buffer.vertices == [] and buffer.indices == []


def test_segment_buffer_overflow_is_fatal():
    buffer = SegmentBuffer(max_vertices=3)
    with pytest.raises(OverflowError):
        buffer.push_path(["a", "b", "c"])


def test_path_colour_is_stable():
    colour = path_colour(4)
    assert colour == path_colour(4)
    assert all(0.0 <= channel <= 1.0 for channel in colour)


def test_networkx_graph_carries_costs(reference_index):
    g = build_networkx_graph(reference_index)
    assert g.number_of_nodes() == 6
    assert g.number_of_edges() == 9
    assert g["c"]["f"]["cost"] == 2


def test_draw_graph_path(reference_index, tmp_path):
    output = tmp_path / "graph.png"
    draw_graph_path(reference_index, reference_index.shortest_path("a", "e"), output=output)
    assert output.exists()


def test_draw_graph_without_path(reference_index, tmp_path):
    output = tmp_path / "empty.png"
    draw_graph_path(reference_index, None, output=output)
    assert output.exists()


@pytest.mark.parametrize("shape", [(6, 6), (4, 4, 4)])
def test_draw_grid_paths(shape, tmp_path):
    grid = OccupancyGrid(shape)
    start = tuple(0 for _ in shape)
    end = tuple(extent - 1 for extent in shape)
    paths = carve_paths(grid, [(start, end), (start, end)])
    output = tmp_path / "grid.png"
    draw_grid_paths(grid, paths, output=output)
    assert output.exists()
