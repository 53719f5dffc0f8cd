from functools import cached_property
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from codegraph_pagerank.infra.config.groups import ObservabilityConfig, PageRankConfig


def _readable_env_file(path: Path) -> str | None:
    """Return `path` as an env_file value, or None if it is missing or unreadable."""
    if not path.is_file():
        return None
    try:
        # PermissionError-safe
        path.open("r", encoding="utf-8").close()
    except OSError:
        return None
    return str(path)


class Settings(BaseSettings):
    """
    PageRank engine settings

    Environment variables use the PAGERANK_ prefix.
    Example: PAGERANK_WORKERS, PAGERANK_CHUNK_SIZE, PAGERANK_LOG_LEVEL

    Grouped access:
        settings.pagerank       # PageRankConfig
        settings.observability  # ObservabilityConfig
    """

    model_config = SettingsConfigDict(
        env_file=_readable_env_file(Path(".env")),
        env_file_encoding="utf-8",
        env_prefix="PAGERANK_",
        extra="ignore",
    )

    # ========================================================================
    # Grouped Config Accessors
    # ========================================================================

    @cached_property
    def pagerank(self) -> PageRankConfig:
        """Power iteration settings group."""
        return PageRankConfig(
            workers=self.workers,
            chunk_size=self.chunk_size,
            max_iterations=self.max_iterations,
            default_damping=self.default_damping,
            default_tolerance=self.default_tolerance,
        )

    @cached_property
    def observability(self) -> ObservabilityConfig:
        """Logging settings group."""
        return ObservabilityConfig(
            log_level=self.log_level,
            log_format=self.log_format,
        )

    # ========================================================================
    # PageRank
    # ========================================================================

    workers: int = 4
    chunk_size: int = 4096
    max_iterations: int | None = None
    default_damping: float = 0.85
    default_tolerance: float = 1e-6

    # ========================================================================
    # Observability
    # ========================================================================

    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"


settings = Settings()
