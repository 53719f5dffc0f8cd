"""
Unit tests for settings and config groups.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from codegraph_pagerank.infra.config.groups import ObservabilityConfig, PageRankConfig
from codegraph_pagerank.infra.config.settings import Settings, _readable_env_file


class TestPageRankConfig:
    def test_defaults(self):
        config = PageRankConfig()

        assert config.workers == 4
        assert config.chunk_size == 4096
        assert config.max_iterations is None
        assert config.default_damping == 0.85
        assert config.default_tolerance == 1e-6

    @pytest.mark.parametrize(
        "field,value",
        [
            ("workers", 0),
            ("chunk_size", 0),
            ("max_iterations", 0),
            ("default_damping", 1.0),
            ("default_tolerance", -1e-6),
        ],
    )
    def test_rejects_out_of_range(self, field, value):
        with pytest.raises(ValidationError):
            PageRankConfig(**{field: value})


class TestSettings:
    def test_grouped_accessors(self):
        settings = Settings()

        assert isinstance(settings.pagerank, PageRankConfig)
        assert isinstance(settings.observability, ObservabilityConfig)

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("PAGERANK_WORKERS", "8")
        monkeypatch.setenv("PAGERANK_CHUNK_SIZE", "128")
        monkeypatch.setenv("PAGERANK_MAX_ITERATIONS", "50")
        monkeypatch.setenv("PAGERANK_LOG_FORMAT", "json")

        settings = Settings()

        assert settings.pagerank.workers == 8
        assert settings.pagerank.chunk_size == 128
        assert settings.pagerank.max_iterations == 50
        assert settings.observability.log_format == "json"

    def test_invalid_group_value(self, monkeypatch):
        monkeypatch.setenv("PAGERANK_WORKERS", "0")

        settings = Settings()

        with pytest.raises(ValidationError):
            settings.pagerank


class TestEnvFileDetection:
    def test_missing_file(self, tmp_path):
        assert _readable_env_file(tmp_path / ".env") is None

    def test_directory_is_not_an_env_file(self, tmp_path):
        (tmp_path / ".env").mkdir()

        assert _readable_env_file(tmp_path / ".env") is None

    def test_readable_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("PAGERANK_WORKERS=2\n", encoding="utf-8")

        assert _readable_env_file(env_file) == str(env_file)

    def test_unreadable_file_is_skipped(self, tmp_path, monkeypatch):
        """A .env that cannot be opened must not break settings import."""
        env_file = tmp_path / ".env"
        env_file.write_text("PAGERANK_WORKERS=2\n", encoding="utf-8")

        def deny(self, *args, **kwargs):
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(Path, "open", deny)

        assert _readable_env_file(env_file) is None
