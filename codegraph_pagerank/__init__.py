"""
Codegraph PageRank - incremental link graph with a parallel PageRank engine.

This package contains:
- pagerank/: engine, node index and power iteration kernel
- common/: exception hierarchy
- infra/: configuration (pydantic-settings) and structured logging (structlog)
"""

from codegraph_pagerank.common.exceptions import CapacityError, InvalidParameterError, PageRankError
from codegraph_pagerank.pagerank import PageRank

__all__ = [
    "PageRank",
    "PageRankError",
    "CapacityError",
    "InvalidParameterError",
]
