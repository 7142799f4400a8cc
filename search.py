from __future__ import annotations

import logging
from heapq import heappop, heappush
from itertools import count
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple, TypeVar


logger = logging.getLogger(__name__)

V = TypeVar("V", bound=Hashable)
W = TypeVar("W")

CostFn = Callable[[V, V], W]
NeighborsFn = Callable[[V], Iterable[V]]
RelaxHook = Callable[[V, Optional[W], W], None]


def shortest_path(
    cost: CostFn,
    neighbors: NeighborsFn,
    start: V,
    end: V,
    max_iterations: int | None = None,
    zero: W = 0,
    on_relax: RelaxHook | None = None,
) -> Optional[List[V]]:
    """Find a minimum-cost path from start to end over an implicit graph.

    cost(u, v) gives the non-negative weight of the step u -> v and is only
    asked about pairs produced by neighbors(u). The returned list runs from
    end back to start; None means end was not reached, either because the
    frontier ran dry or because more than max_iterations entries were popped.
    """
    if max_iterations is not None and max_iterations < 0:
        raise ValueError(f"max_iterations must be non-negative, got {max_iterations}.")

    distances: Dict[V, W] = {start: zero}
    predecessors: Dict[V, V] = {}

    # The counter keeps heap comparisons away from the vertices themselves.
    tie = count()
    queue: List[Tuple[W, int, V]] = [(zero, next(tie), start)]
    pops = 0

    while queue:
        distance_u, _, u = heappop(queue)
        pops += 1
        if max_iterations is not None and pops > max_iterations:
            logger.debug("Iteration cap of %d reached before %r.", max_iterations, end)
            return None

        if distance_u > distances[u]:
            continue

        if u == end:
            path = reconstruct_path(predecessors, start, end)
            logger.debug("Reached %r after %d pops, path of %d vertices.", end, pops, len(path))
            return path

        for v in neighbors(u):
            candidate = distance_u + cost(u, v)
            previous = distances.get(v)
            if previous is None or candidate < previous:
                if on_relax is not None:
                    on_relax(v, previous, candidate)
                distances[v] = candidate
                predecessors[v] = u
                heappush(queue, (candidate, next(tie), v))

    logger.debug("Frontier exhausted after %d pops, %r unreachable.", pops, end)
    return None


def reconstruct_path(predecessors: Dict[V, V], start: V, end: V) -> List[V]:
    """Walk predecessors from end, stopping at start or where the chain ends."""
    path: List[V] = [end]
    current = end
    while current != start and current in predecessors:
        current = predecessors[current]
        path.append(current)
    return path


def path_cost(cost: CostFn, path: Sequence[V], zero: W = 0) -> W:
    """Total cost of an end-to-start path, charged in travel direction."""
    total = zero
    for u, v in zip(path[:0:-1], path[-2::-1]):
        total = total + cost(u, v)
    return total
