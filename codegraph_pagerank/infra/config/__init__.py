from codegraph_pagerank.infra.config.groups import ObservabilityConfig, PageRankConfig
from codegraph_pagerank.infra.config.settings import Settings, settings

__all__ = [
    # Settings
    "Settings",
    "settings",
    # Config Groups
    "ObservabilityConfig",
    "PageRankConfig",
]
