"""Tests for TOML config loader."""

import os
import tempfile
from pathlib import Path

from code_quality.infrastructure.config.toml_loader import _apply_env_overrides, load_config


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_default_config(self):
        """Loads the repository configuration."""
        config = load_config()

        assert config.server is not None
        assert config.llm.enabled is False
        assert config.analysis.lexical_file_limit == 50
        assert config.analysis.max_workers == 8
        assert config.persistence.cache_dir == ".code-quality-cache"

    def test_loads_from_custom_dir(self):
        """Loads config from custom directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "default.toml").write_text("""
[analysis]
lexical_file_limit = 20
ignore_dirs = ["node_modules", "generated"]

[server]
port = 9999
""")
            config = load_config(Path(tmpdir))

            assert config.analysis.lexical_file_limit == 20
            assert config.analysis.ignore_dirs == ("node_modules", "generated")
            assert config.server.port == 9999

    def test_merges_development_config(self):
        """Merges development.toml over default.toml."""
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "default.toml").write_text("""
[llm]
model = "qwen2.5-coder:7b"

[server]
port = 8000
""")
            (Path(tmpdir) / "development.toml").write_text("""
[llm]
enabled = true
""")
            config = load_config(Path(tmpdir))

            assert config.llm.enabled is True
            assert config.llm.model == "qwen2.5-coder:7b"
            assert config.server.port == 8000

    def test_handles_missing_files(self):
        """Empty directory yields defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config = load_config(Path(tmpdir))

            assert config.llm.enabled is False
            assert config.analysis.route_probe_limit == 5
            assert config.log_level == "INFO"


class TestApplyEnvOverrides:
    """Tests for _apply_env_overrides function."""

    def test_ai_enabled_override(self):
        """QUALITY_AI_ENABLED env var toggles the oracle."""
        os.environ["QUALITY_AI_ENABLED"] = "True"
        try:
            result = _apply_env_overrides({})
            assert result["llm"]["enabled"] is True
        finally:
            del os.environ["QUALITY_AI_ENABLED"]

    def test_ai_disabled_values(self):
        os.environ["QUALITY_AI_ENABLED"] = "0"
        try:
            result = _apply_env_overrides({"llm": {"enabled": True}})
            assert result["llm"]["enabled"] is False
        finally:
            del os.environ["QUALITY_AI_ENABLED"]

    def test_ai_model_override(self):
        os.environ["QUALITY_AI_MODEL"] = " llama3.1 "
        try:
            result = _apply_env_overrides({})
            assert result["llm"]["model"] == "llama3.1"
        finally:
            del os.environ["QUALITY_AI_MODEL"]

    def test_cache_dir_override(self):
        os.environ["QUALITY_CACHE_DIR"] = "/tmp/snapshots"
        try:
            result = _apply_env_overrides({})
            assert result["persistence"]["cache_dir"] == "/tmp/snapshots"
        finally:
            del os.environ["QUALITY_CACHE_DIR"]

    def test_ollama_host_override(self):
        """OLLAMA_HOST env var overrides config."""
        os.environ["OLLAMA_HOST"] = "http://custom:11434"
        try:
            result = _apply_env_overrides({})
            assert result["ollama"]["host"] == "http://custom:11434"
        finally:
            del os.environ["OLLAMA_HOST"]

    def test_invalid_port_ignored(self):
        """Invalid PORT value is ignored."""
        os.environ["PORT"] = "not_a_number"
        try:
            result = _apply_env_overrides({"server": {"port": 8000}})
            assert result["server"]["port"] == 8000
        finally:
            del os.environ["PORT"]

    def test_log_level_override(self):
        os.environ["LOG_LEVEL"] = "debug"
        try:
            result = _apply_env_overrides({})
            assert result["logging"]["level"] == "DEBUG"
        finally:
            del os.environ["LOG_LEVEL"]

    def test_cors_origins_override(self):
        os.environ["CORS_ORIGINS"] = "http://a.com, http://b.com"
        try:
            result = _apply_env_overrides({})
            assert result["security"]["cors_origins"] == ["http://a.com", "http://b.com"]
        finally:
            del os.environ["CORS_ORIGINS"]

    def test_rate_limit_override(self):
        os.environ["RATE_LIMIT_PER_MINUTE"] = "200"
        try:
            result = _apply_env_overrides({})
            assert result["security"]["rate_limit_requests_per_minute"] == 200
        finally:
            del os.environ["RATE_LIMIT_PER_MINUTE"]
