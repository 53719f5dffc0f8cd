"""
Config group definitions.

Settings are split into logical groups. Each group can be used on its own
and is assembled from the flat fields in Settings.
"""

from typing import Literal

from pydantic import BaseModel, Field


class PageRankConfig(BaseModel):
    """Power iteration settings."""

    workers: int = Field(default=4, ge=1, le=64, description="Worker threads per power iteration step")
    chunk_size: int = Field(default=4096, ge=1, description="Nodes per parallel work unit")
    max_iterations: int | None = Field(default=None, ge=1, description="Iteration guard (None = until converged)")
    default_damping: float = Field(default=0.85, gt=0.0, lt=1.0, description="Default following probability")
    default_tolerance: float = Field(default=1e-6, ge=0.0, description="Default L1 convergence tolerance")


class ObservabilityConfig(BaseModel):
    """Logging settings."""

    log_level: str = Field(default="INFO", description="Log level")
    log_format: Literal["console", "json"] = Field(default="console", description="Log renderer")
