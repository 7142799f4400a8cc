from __future__ import annotations

import random
from pathlib import Path
from typing import Dict, Hashable, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import networkx as nx

from config import MAX_SEGMENT_VERTICES
from graph import AdjacencyIndex
from grid import Coord, OccupancyGrid


# Base colours cycled across carved paths.
PATH_COLOURS: Tuple[Tuple[int, int, int], ...] = (
    (0xFF, 0xEC, 0x04),
    (0x38, 0xC6, 0xDB),
    (0xDB, 0x38, 0x83),
)


def path_segments(path: Sequence[Hashable]) -> List[Tuple[Hashable, Hashable]]:
    return list(zip(path[:-1], path[1:]))


class SegmentBuffer:
    """Indexed line-segment list, the shape a line renderer consumes."""

    def __init__(self, max_vertices: int = MAX_SEGMENT_VERTICES) -> None:
        self.max_vertices = max_vertices
        self.vertices: List[Hashable] = []
        self.indices: List[int] = []

    def push_vertex(self, vertex: Hashable) -> int:
        idx = len(self.vertices)
        if idx >= self.max_vertices:
            raise OverflowError(
                f"Vertex limit exceeded: buffer holds at most {self.max_vertices} vertices."
            )
        self.vertices.append(vertex)
        return idx

    def push_path(self, path: Sequence[Hashable]) -> None:
        for begin, end in path_segments(path):
            self.indices.extend((self.push_vertex(begin), self.push_vertex(end)))

    def clear(self) -> None:
        self.vertices.clear()
        self.indices.clear()


def path_colour(path_idx: int) -> Tuple[float, float, float]:
    """Jittered colour for the path_idx-th path, stable across runs."""
    base = PATH_COLOURS[path_idx % len(PATH_COLOURS)]
    rng = random.Random(path_idx)
    diff = 30
    return tuple(
        min(255, max(0, channel + rng.randint(-diff, diff))) / 255.0 for channel in base
    )


def build_networkx_graph(index: AdjacencyIndex) -> nx.Graph:
    g = nx.Graph()
    g.add_nodes_from(index.nodes)
    for origin, target, cost in index.edges():
        g.add_edge(origin, target, cost=cost)
    return g


def compute_layout(graph: nx.Graph) -> Dict[Hashable, Tuple[float, float]]:
    return nx.spring_layout(graph, seed=42)


def _finish(fig, output: Path | None, show: bool) -> None:
    if output:
        fig.savefig(output, bbox_inches="tight")
    if show:
        plt.show()
    else:
        plt.close(fig)


def draw_graph_path(
    index: AdjacencyIndex,
    path: Optional[Sequence[Hashable]],
    output: Path | None = None,
    show: bool = False,
) -> None:
    graph_nx = build_networkx_graph(index)
    layout = compute_layout(graph_nx)

    fig, ax = plt.subplots(figsize=(10, 8))
    nx.draw_networkx_edges(graph_nx, layout, ax=ax, edge_color="lightgray", width=1.0)

    if path:
        nx.draw_networkx_edges(
            graph_nx,
            layout,
            edgelist=path_segments(path),
            edge_color="#d62728",
            width=2.5,
            ax=ax,
        )

    on_path = set(path or ())
    nx.draw_networkx_nodes(
        graph_nx,
        layout,
        node_color=["#d62728" if node in on_path else "#9ecae1" for node in graph_nx.nodes],
        node_size=600,
        ax=ax,
    )
    nx.draw_networkx_labels(graph_nx, layout, font_size=9, ax=ax)

    edge_labels = {(u, v): data["cost"] for u, v, data in graph_nx.edges(data=True)}
    nx.draw_networkx_edge_labels(graph_nx, layout, edge_labels=edge_labels, font_size=8, ax=ax)

    if path:
        summary = f"{path[-1]} -> {path[0]}: cost {index.path_cost(path)}"
    else:
        summary = "No path"
    ax.set_axis_off()
    ax.set_title(summary)

    _finish(fig, output, show)


def draw_grid_paths(
    grid: OccupancyGrid,
    paths: Sequence[Optional[Sequence[Coord]]],
    output: Path | None = None,
    show: bool = False,
) -> None:
    """Plot paths over the grid, flattening any axes beyond the first two."""
    width = grid.shape[0]
    height = grid.shape[1] if len(grid.shape) > 1 else 1

    buffer = SegmentBuffer()
    fig, ax = plt.subplots(figsize=(8, 8))
    ax.set_xlim(-0.5, width - 0.5)
    ax.set_ylim(height - 0.5, -0.5)
    ax.set_aspect("equal")

    if len(grid.shape) == 2:
        carved = {tuple(coord) for path in paths if path for coord in path}
        blocked = [
            cell for cell in map(tuple, grid.blocked_cells().tolist()) if cell not in carved
        ]
        if blocked:
            ax.scatter(
                [x for x, _ in blocked],
                [y for _, y in blocked],
                marker="s",
                color="dimgray",
                s=40,
            )

    for path_idx, path in enumerate(paths):
        if not path:
            continue
        buffer.push_path(path)
        xs = [coord[0] for coord in path]
        ys = [coord[1] if len(coord) > 1 else 0 for coord in path]
        ax.plot(xs, ys, color=path_colour(path_idx), linewidth=1.5)

    found = sum(1 for path in paths if path)
    ax.set_title(
        f"{found}/{len(paths)} paths, {len(buffer.indices) // 2} segments "
        f"on a {'x'.join(str(extent) for extent in grid.shape)} grid"
    )

    _finish(fig, output, show)
