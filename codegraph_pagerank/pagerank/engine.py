"""
PageRank Engine

Compute PageRank scores for a directed graph built incrementally from
(from, to) link insertions.

Node identifiers are arbitrary hashable values (typically unsigned ints)
mapped to dense indices on first sight. The engine keeps reverse adjacency
(in-links) and out-degree counts, and ranks with a damped power iteration
that redistributes dangling mass and renormalizes every step.
"""

import operator
from collections.abc import Callable, Hashable

import numpy as np

from codegraph_pagerank.common.exceptions import CapacityError, InvalidParameterError
from codegraph_pagerank.infra.config.groups import PageRankConfig
from codegraph_pagerank.infra.config.settings import settings
from codegraph_pagerank.infra.observability.logging import LogPerformance, get_logger

from .index_map import NodeIndex
from .kernel import PowerIterationKernel

logger = get_logger(__name__)

ResultFunc = Callable[[Hashable, float], None]


class PageRank:
    """
    Accumulate links and compute PageRank scores.

    Storage is pre-sized for `capacity` distinct nodes and never
    reallocated; clear() returns the engine to its just-constructed state.

    Example:
        ```python
        engine = PageRank(100)
        engine.link(1, 2)
        engine.rank(0.85, 1e-6, lambda node, score: print(node, score))
        ```
    """

    def __init__(self, capacity: int, config: PageRankConfig | None = None):
        """
        Initialize PageRank engine.

        Args:
            capacity: Maximum number of distinct nodes
            config: Power iteration config (defaults to settings.pagerank)
        """
        try:
            capacity = operator.index(capacity)
        except TypeError:
            raise InvalidParameterError("capacity", capacity, "must be an integer") from None
        if capacity < 0:
            raise InvalidParameterError("capacity", capacity, "must be non-negative")

        if config is None:
            config = settings.pagerank

        self.config = config
        self._capacity = capacity
        self._in_links: list[list[int]] = [[] for _ in range(capacity)]
        self._out_degree = np.zeros(capacity, dtype=np.int64)
        self._index = NodeIndex(capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        """Number of nodes that have been assigned an index."""
        return len(self._index)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._index

    def link(self, from_key: Hashable, to_key: Hashable) -> None:
        """
        Add a directed link from `from_key` to `to_key`.

        Unseen identifiers are registered up to the capacity of the graph.
        Repeated links are additive; self-loops are ordinary links.

        Args:
            from_key: Identifier of the node where the link originates
            to_key: Identifier of the node the link points to

        Raises:
            CapacityError: If a new node would exceed capacity. Nothing is
                registered in that case.
        """
        try:
            from_index, to_index = self._index.resolve(from_key, to_key)
        except CapacityError as e:
            logger.warning(
                "pagerank_capacity_exceeded",
                from_key=from_key,
                to_key=to_key,
                index=e.index,
                capacity=e.capacity,
            )
            raise

        self._in_links[to_index].append(from_index)
        self._out_degree[from_index] += 1

    def in_links(self, key: Hashable) -> list[Hashable]:
        """Identifiers of recorded link sources pointing at `key` (with duplicates)."""
        index = self._index.get(key)
        if index is None:
            raise KeyError(key)
        return [self._index.key_of(source) for source in self._in_links[index]]

    def out_degree(self, key: Hashable) -> int:
        """Number of recorded links leaving `key` (with duplicates)."""
        index = self._index.get(key)
        if index is None:
            raise KeyError(key)
        return int(self._out_degree[index])

    def dangling_nodes(self) -> list[Hashable]:
        """Registered identifiers without outgoing links, in first-seen order."""
        size = len(self._index)
        return [self._index.key_of(int(i)) for i in np.flatnonzero(self._out_degree[:size] == 0)]

    def rank(
        self,
        following_prob: float,
        tolerance: float,
        result_func: ResultFunc | None = None,
    ) -> list[tuple[Hashable, float]]:
        """
        Compute PageRank scores for all registered nodes.

        Iterates until the L1 change between successive probability vectors
        is at most `tolerance`. At least one iteration runs for any
        non-empty graph; an empty graph returns immediately.

        Args:
            following_prob: Probability of following a link (damping factor), in (0, 1)
            tolerance: Convergence threshold, >= 0
            result_func: Optional callback invoked with (identifier, score)
                for every node, in first-seen order

        Returns:
            List of (identifier, score) pairs in first-seen order

        Raises:
            InvalidParameterError: If following_prob or tolerance is out of range
        """
        if not 0.0 < following_prob < 1.0:
            raise InvalidParameterError("following_prob", following_prob, "must be in the open interval (0, 1)")
        if not tolerance >= 0.0:
            raise InvalidParameterError("tolerance", tolerance, "must be non-negative")

        size = len(self._index)
        if size == 0:
            return []

        with LogPerformance(logger, "pagerank_rank", nodes=size):
            kernel = PowerIterationKernel(
                self._in_links[:size],
                self._out_degree[:size],
                workers=self.config.workers,
                chunk_size=self.config.chunk_size,
            )
            result = kernel.run(following_prob, tolerance, self.config.max_iterations)

        if result.converged:
            logger.debug(
                "pagerank_converged",
                nodes=size,
                iterations=result.iterations,
                change=result.change,
            )
        else:
            logger.warning(
                "pagerank_max_iterations_reached",
                nodes=size,
                iterations=result.iterations,
                change=result.change,
                tolerance=tolerance,
            )

        ranked = [(key, float(score)) for key, score in zip(self._index.keys(), result.scores)]
        if result_func is not None:
            for key, score in ranked:
                result_func(key, score)
        return ranked

    def top_nodes(
        self,
        following_prob: float | None = None,
        tolerance: float | None = None,
        top_n: int = 20,
    ) -> list[tuple[Hashable, float]]:
        """
        Get top N nodes by PageRank score.

        Args:
            following_prob: Damping factor (defaults to config.default_damping)
            tolerance: Convergence threshold (defaults to config.default_tolerance)
            top_n: Number of top nodes to return

        Returns:
            List of (identifier, score) tuples sorted by score descending;
            equal scores keep first-seen order
        """
        if following_prob is None:
            following_prob = self.config.default_damping
        if tolerance is None:
            tolerance = self.config.default_tolerance

        scores = self.rank(following_prob, tolerance)

        # sorted() is stable, so ties stay in first-seen order
        sorted_scores = sorted(scores, key=lambda x: x[1], reverse=True)

        return sorted_scores[:top_n]

    def clear(self) -> None:
        """Drop all nodes and links; capacity and buffers are kept."""
        for links in self._in_links:
            links.clear()
        self._out_degree.fill(0)
        self._index.clear()
        logger.debug("pagerank_cleared", capacity=self._capacity)

    def __str__(self) -> str:
        size = len(self._index)
        key_to_index = {key: i for i, key in enumerate(self._index.keys())}
        index_to_key = {i: key for key, i in key_to_index.items()}
        return (
            "PageRank:\n"
            f"InLinks: {self._in_links[:size]}\n"
            f"NumberOutLinks: {self._out_degree[:size].tolist()}\n"
            f"CurrentAvailableIndex: {size}\n"
            f"KeyToIndex: {key_to_index}\n"
            f"IndexToKey: {index_to_key}\n"
            f"Capacity: {self._capacity}"
        )

    def __repr__(self) -> str:
        return f"PageRank(capacity={self._capacity}, nodes={len(self._index)})"
