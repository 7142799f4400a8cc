from __future__ import annotations

from typing import Dict, Generic, Hashable, Iterable, Iterator, List, Optional, Sequence, Tuple, TypeVar

from search import path_cost, shortest_path


V = TypeVar("V", bound=Hashable)
W = TypeVar("W")


class MissingEdgeError(KeyError):
    """Raised when a cost is requested for two vertices that share no edge."""

    def __init__(self, origin, target) -> None:
        super().__init__((origin, target))
        self.origin = origin
        self.target = target

    def __str__(self) -> str:
        return f"Edge {self.origin!r}-{self.target!r} not present in graph."


class AdjacencyIndex(Generic[V, W]):
    """Undirected weighted graph answering cost/neighbor queries for the search."""

    def __init__(
        self, edges: Iterable[Tuple[V, V, W]], nodes: Iterable[V] = ()
    ) -> None:
        self._adjacency: Dict[V, Dict[V, W]] = {node: {} for node in nodes}

        for origin, target, weight in edges:
            self._add_edge(origin, target, weight)

    @classmethod
    def build(cls, edges: Iterable[Tuple[V, V, W]]) -> "AdjacencyIndex[V, W]":
        return cls(edges)

    def _add_edge(self, origin: V, target: V, weight: W) -> None:
        # Re-inserting a pair replaces its weight.
        self._adjacency.setdefault(origin, {})[target] = weight
        self._adjacency.setdefault(target, {})[origin] = weight

    @property
    def nodes(self) -> List[V]:
        return list(self._adjacency)

    def __contains__(self, node: object) -> bool:
        return node in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    def cost(self, origin: V, target: V) -> W:
        try:
            return self._adjacency[origin][target]
        except KeyError:
            raise MissingEdgeError(origin, target) from None

    def neighbors(self, node: V) -> List[V]:
        return list(self._adjacency.get(node, {}))

    def edges(self) -> Iterator[Tuple[V, V, W]]:
        """Yield every undirected edge once, in insertion order."""
        seen: set = set()
        for origin, targets in self._adjacency.items():
            for target, weight in targets.items():
                if target in seen:
                    continue
                yield origin, target, weight
            seen.add(origin)

    def shortest_path(
        self, start: V, end: V, max_iterations: int | None = None
    ) -> Optional[List[V]]:
        """Cheapest route from start to end, listed from end back to start."""
        return shortest_path(
            self.cost, self.neighbors, start, end, max_iterations=max_iterations
        )

    def path_cost(self, path: Sequence[V]) -> W | int:
        """Weight of an end-to-start path; a single vertex costs nothing."""
        return path_cost(self.cost, path)
