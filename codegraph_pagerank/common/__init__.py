from codegraph_pagerank.common.exceptions import CapacityError, InvalidParameterError, PageRankError

__all__ = [
    "PageRankError",
    "CapacityError",
    "InvalidParameterError",
]
