from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Hashable, List, Optional, Sequence, Tuple

import yaml

from config import (
    DEFAULT_CARVE_MAX_ITERATIONS,
    DEFAULT_CARVE_PATHS,
    DEFAULT_GRID_WIDTH,
    DEFAULT_INSTANCE_PATH,
    LOG_LEVEL,
)
from graph import AdjacencyIndex
from grid import OccupancyGrid, carve_paths, random_goals, unit_cost
from search import path_cost, shortest_path


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryResult:
    start: Hashable
    end: Hashable
    path: Optional[List[Hashable]]
    cost: Optional[float]

    @property
    def route(self) -> List[Hashable]:
        """Path in travel order, start first."""
        return list(reversed(self.path)) if self.path else []


def load_config(path: Path) -> Dict:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def build_index(graph_config: Dict) -> AdjacencyIndex:
    return AdjacencyIndex(
        (tuple(edge) for edge in graph_config["edges"]),
        nodes=graph_config.get("nodes", ()),
    )


def build_grid(grid_config: Dict) -> OccupancyGrid:
    shape = grid_config.get("shape") or [DEFAULT_GRID_WIDTH] * 3
    return OccupancyGrid(shape, grid_config.get("obstacles") or ())


def instance_kind(config: Dict) -> str:
    kinds = [kind for kind in ("graph", "grid") if config.get(kind) is not None]
    if len(kinds) != 1:
        raise ValueError(
            "Instance must define exactly one of 'graph' or 'grid', "
            f"found {kinds or 'neither'}."
        )
    return kinds[0]


def _vertex(value) -> Hashable:
    # YAML has no tuples; grid coordinates arrive as lists.
    return tuple(value) if isinstance(value, list) else value


def run_queries(
    config: Dict, max_iterations: int | None = None
) -> Tuple[AdjacencyIndex | OccupancyGrid, List[QueryResult]]:
    """Answer every start/end pair listed under 'queries' in the instance."""
    kind = instance_kind(config)
    if kind == "graph":
        index = build_index(config["graph"])
        target: AdjacencyIndex | OccupancyGrid = index
        cost, neighbors = index.cost, index.neighbors
    else:
        grid = build_grid(config["grid"])
        target = grid
        cost, neighbors = unit_cost, grid.neighbors

    if max_iterations is None:
        max_iterations = config.get("max_iterations")

    results: List[QueryResult] = []
    for start, end in config.get("queries") or []:
        start, end = _vertex(start), _vertex(end)
        path = shortest_path(cost, neighbors, start, end, max_iterations=max_iterations)
        total = path_cost(cost, path) if path is not None else None
        results.append(QueryResult(start=start, end=end, path=path, cost=total))

    return target, results


def run_carving(
    config: Dict, count: int, seed: int | None, max_iterations: int | None = None
) -> Tuple[OccupancyGrid, List[Optional[List[Tuple[int, ...]]]]]:
    if instance_kind(config) != "grid":
        raise ValueError("Path carving needs a 'grid' instance.")

    grid = build_grid(config["grid"])
    if seed is None:
        seed = random.randrange(2**32)
    logger.info("Carving %d paths on a %s grid with seed %d.", count, grid.shape, seed)

    goals = random_goals(random.Random(seed), grid.shape, count)
    if max_iterations is None:
        max_iterations = config.get("max_iterations")
    if max_iterations is None:
        max_iterations = DEFAULT_CARVE_MAX_ITERATIONS
    return grid, carve_paths(grid, goals, max_iterations=max_iterations)


def format_vertex(vertex: Hashable) -> str:
    if isinstance(vertex, tuple):
        return "(" + ", ".join(str(value) for value in vertex) + ")"
    return str(vertex)


def print_results(results: Sequence[QueryResult]) -> None:
    print("=== Shortest Paths ===")
    if not results:
        print("No queries in instance.")
        return

    for idx, result in enumerate(results, start=1):
        label = f"[Query {idx}] {format_vertex(result.start)} -> {format_vertex(result.end)}"
        if result.path is None:
            print(f"{label}: no path")
            continue
        route = " -> ".join(format_vertex(vertex) for vertex in result.route)
        print(f"{label}: cost {result.cost}")
        print(f"  {route}")


def print_carving(paths: Sequence[Optional[Sequence]]) -> None:
    found = [path for path in paths if path]
    print("=== Path Carving ===")
    print(f"Routed {len(found)} of {len(paths)} goal pairs.")
    if found:
        print(f"Carved cells: {sum(len(path) for path in found)}")


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Find shortest paths on a weighted graph or an obstacle grid."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_INSTANCE_PATH,
        help="Path to the YAML instance configuration.",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        help="Give up on a query after this many frontier pops.",
    )
    parser.add_argument(
        "--carve",
        type=int,
        nargs="?",
        const=DEFAULT_CARVE_PATHS,
        help="Route this many random goal pairs on the grid, blocking each found path.",
    )
    parser.add_argument("--seed", type=int, help="Random seed for --carve.")
    parser.add_argument(
        "--plot",
        type=Path,
        help="Optional path to save a PNG of the result.",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.carve is not None:
        grid, paths = run_carving(config, args.carve, args.seed, args.max_iterations)
        print_carving(paths)
        if args.plot:
            from visualize import draw_grid_paths

            draw_grid_paths(grid, paths, output=args.plot)
        return

    target, results = run_queries(config, args.max_iterations)
    print_results(results)

    if args.plot:
        from visualize import draw_graph_path, draw_grid_paths

        if isinstance(target, AdjacencyIndex):
            if len(results) > 1:
                print(f"Plotting query 1 out of {len(results)}.")
            draw_graph_path(target, results[0].path if results else None, output=args.plot)
        else:
            draw_grid_paths(target, [result.path for result in results], output=args.plot)
        print(f"Plot stored at: {args.plot}")


if __name__ == "__main__":
    main()
