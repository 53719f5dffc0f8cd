"""
Power Iteration Kernel

Damped PageRank power iteration over a frozen snapshot of the link graph.

Snapshot layout (CSR over in-links):
- indptr[i]:indptr[i + 1] slices the in-link block of node i
- sources: source index of every recorded link, grouped by target
- inv_out_degree: 1 / out-degree, 0.0 for dangling nodes

Each step is split into fixed-size node chunks. A chunk reads only the
previous probability vector and writes only its own slice of the next one,
so chunks run on a thread pool without synchronization. Chunk boundaries
depend on chunk_size alone; partial sums are combined in chunk order, which
keeps results identical for any worker count.
"""

import itertools
from collections.abc import Callable, Iterable, Iterator, Sequence
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import TypeVar

import numpy as np

T = TypeVar("T")
R = TypeVar("R")

# Initial change value; L1 distance between probability vectors never exceeds 2
INITIAL_CHANGE = 2.0


@dataclass(frozen=True)
class _Chunk:
    start: int
    stop: int
    sources: np.ndarray
    local_targets: np.ndarray
    dangling: np.ndarray


@dataclass
class KernelResult:
    """Outcome of a power iteration run."""

    scores: np.ndarray
    iterations: int
    change: float
    converged: bool


class PowerIterationKernel:
    """
    Parallel PageRank power iteration.

    Built once per rank() call from the engine's in-link lists and
    out-degree buffer; never mutates them.
    """

    def __init__(
        self,
        in_links: Sequence[Sequence[int]],
        out_degree: np.ndarray,
        workers: int = 1,
        chunk_size: int = 4096,
    ):
        """
        Freeze graph state into CSR arrays.

        Args:
            in_links: In-link lists of the assigned nodes (index i -> sources of i)
            out_degree: Out-degree per assigned node (same length as in_links)
            workers: Worker threads for a step (1 = run inline)
            chunk_size: Nodes per work unit
        """
        size = len(in_links)
        self.size = size
        self.workers = workers
        self.chunk_size = chunk_size

        counts = np.fromiter((len(links) for links in in_links), dtype=np.int64, count=size)
        indptr = np.zeros(size + 1, dtype=np.int64)
        np.cumsum(counts, out=indptr[1:])
        sources = np.fromiter(itertools.chain.from_iterable(in_links), dtype=np.int64, count=int(indptr[-1]))
        targets = np.repeat(np.arange(size, dtype=np.int64), counts)

        out_degree = np.asarray(out_degree[:size], dtype=np.float64)
        is_dangling = out_degree == 0
        inv_out_degree = np.zeros(size, dtype=np.float64)
        np.divide(1.0, out_degree, out=inv_out_degree, where=~is_dangling)
        dangling = np.flatnonzero(is_dangling)

        self.indptr = indptr
        self.sources = sources
        self.inv_out_degree = inv_out_degree
        self.dangling = dangling

        chunks = []
        for start in range(0, size, chunk_size):
            stop = min(start + chunk_size, size)
            lo, hi = indptr[start], indptr[stop]
            d_lo, d_hi = np.searchsorted(dangling, [start, stop])
            chunks.append(
                _Chunk(
                    start=start,
                    stop=stop,
                    sources=sources[lo:hi],
                    local_targets=targets[lo:hi] - start,
                    dangling=dangling[d_lo:d_hi],
                )
            )
        self._chunks = chunks

    def _map(self, executor: Executor | None, fn: Callable[[T], R], items: Iterable[T]) -> Iterator[R]:
        if executor is None:
            return map(fn, items)
        return executor.map(fn, items)

    def dangling_mass(self, p: np.ndarray, executor: Executor | None = None) -> float:
        """Total probability currently held by dangling nodes."""
        partials = self._map(executor, lambda chunk: float(p[chunk.dangling].sum()), self._chunks)
        return sum(partials)

    def step(
        self,
        following_prob: float,
        p: np.ndarray,
        new_p: np.ndarray,
        executor: Executor | None = None,
    ) -> None:
        """
        Compute the next probability vector into new_p.

        new_p[i] = d * (sum_{j -> i} p[j] / out[j] + dangling_mass / n) + (1 - d) / n,
        then new_p is renormalized to sum to 1.

        Args:
            following_prob: Damping factor d
            p: Current probabilities (read only)
            new_p: Output buffer, fully overwritten
            executor: Thread pool for chunk tasks (None = inline)
        """
        size = self.size
        t_over_size = (1.0 - following_prob) / size
        dangling_over_size = self.dangling_mass(p, executor) / size
        contributions = p * self.inv_out_degree

        def gather(chunk: _Chunk) -> float:
            rank_sum = np.bincount(
                chunk.local_targets,
                weights=contributions[chunk.sources],
                minlength=chunk.stop - chunk.start,
            )
            out = new_p[chunk.start : chunk.stop]
            np.multiply(following_prob, rank_sum + dangling_over_size, out=out)
            out += t_over_size
            return float(out.sum())

        total = sum(self._map(executor, gather, self._chunks))

        def normalize(chunk: _Chunk) -> None:
            new_p[chunk.start : chunk.stop] /= total

        for _ in self._map(executor, normalize, self._chunks):
            pass

    @staticmethod
    def change(p: np.ndarray, new_p: np.ndarray) -> float:
        """L1 distance between two probability vectors."""
        return float(np.abs(p - new_p).sum())

    def run(
        self,
        following_prob: float,
        tolerance: float,
        max_iterations: int | None = None,
    ) -> KernelResult:
        """
        Iterate until the L1 change drops to tolerance.

        At least one step always runs. Two buffers are swapped after every
        step instead of updating in place.

        Args:
            following_prob: Damping factor d
            tolerance: Convergence threshold on the L1 change
            max_iterations: Optional iteration guard

        Returns:
            KernelResult with final scores (empty when the graph is empty)
        """
        size = self.size
        if size == 0:
            return KernelResult(scores=np.zeros(0), iterations=0, change=0.0, converged=True)

        p = np.full(size, 1.0 / size)
        new_p = np.zeros(size)
        change = INITIAL_CHANGE
        iterations = 0

        executor = ThreadPoolExecutor(max_workers=self.workers) if self.workers > 1 and len(self._chunks) > 1 else None
        try:
            while change > tolerance:
                if max_iterations is not None and iterations >= max_iterations:
                    break
                self.step(following_prob, p, new_p, executor)
                change = self.change(p, new_p)
                p, new_p = new_p, p
                iterations += 1
        finally:
            if executor is not None:
                executor.shutdown(wait=True)

        return KernelResult(scores=p, iterations=iterations, change=change, converged=change <= tolerance)
