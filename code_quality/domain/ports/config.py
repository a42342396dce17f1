"""Config Port - interface for configuration access."""

from typing import Protocol

from pydantic import BaseModel, ConfigDict


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000


class LLMConfig(BaseModel):
    """LLM settings for the deep-analysis oracle (served by Ollama)."""

    # Off by default: deep mode then uses the no-op oracle.
    enabled: bool = False
    model: str = "qwen2.5-coder:7b"


class OllamaConfig(BaseModel):
    """Ollama connection configuration."""

    host: str = "http://localhost:11434"
    timeout: int = 120
    num_ctx: int | None = None
    num_predict: int | None = None


class AnalysisConfig(BaseModel):
    """Analyzer tuning. Frozen: shared across worker threads."""

    model_config = ConfigDict(frozen=True)

    ignore_dirs: tuple[str, ...] = (
        "node_modules",
        "build",
        "dist",
        "target",
        "bin",
        "obj",
        ".git",
        ".next",
        "coverage",
        "vendor",
        "Pods",
        "ios",
        "android",
        ".code-quality-cache",
    )
    source_extensions: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx", ".java", ".cs")
    # Sampling bounds
    lexical_file_limit: int = 50
    stats_file_limit: int = 100
    dependency_probe_limit: int = 10
    route_probe_limit: int = 5
    deep_file_limit: int = 10
    # Unicode block flagged in comments (default: Hebrew)
    comment_script_range: str = "\u0590-\u05ff"
    # Files whose marker words are data, not debt
    analysis_logic_globs: tuple[str, ...] = (
        "*QualityRules*",
        "*qualityRules*",
        "*quality_rules*",
        "*Analyzer*",
        "*analyzer*",
    )
    max_workers: int = 8


class PersistenceConfig(BaseModel):
    """Snapshot store settings."""

    cache_dir: str = ".code-quality-cache"


class SecurityConfig(BaseModel):
    """Security settings."""

    rate_limit_requests_per_minute: int = 100
    cors_origins: list[str] = ["http://localhost:5173"]


class AppConfig(BaseModel):
    """Full application configuration."""

    server: ServerConfig = ServerConfig()
    llm: LLMConfig = LLMConfig()
    ollama: OllamaConfig = OllamaConfig()
    analysis: AnalysisConfig = AnalysisConfig()
    persistence: PersistenceConfig = PersistenceConfig()
    security: SecurityConfig = SecurityConfig()
    log_level: str = "INFO"
    # Log file: path relative to cwd or absolute. Empty = only stdout.
    log_file: str = ""
    log_rotation_max_mb: int = 5
    log_rotation_backups: int = 3


class ConfigPort(Protocol):
    """Interface for configuration providers."""

    def get_config(self) -> AppConfig:
        """Get the full application configuration."""
        ...
