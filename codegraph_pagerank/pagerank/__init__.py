"""
PageRank Computation

Components:
- NodeIndex: identifier <-> dense index mapping
- PowerIterationKernel: parallel damped power iteration
- PageRank: link accumulation, ranking and reset
"""

from .engine import PageRank
from .index_map import NodeIndex
from .kernel import KernelResult, PowerIterationKernel

__all__ = [
    "PageRank",
    "NodeIndex",
    "PowerIterationKernel",
    "KernelResult",
]
