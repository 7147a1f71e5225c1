"""Config Port - configuration schema shared by loader, container and API."""

from pydantic import BaseModel, ConfigDict


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000


class SecurityConfig(BaseModel):
    """Security settings."""

    rate_limit_requests_per_minute: int = 100
    cors_origins: list[str] = ["http://localhost:5173"]


class PlannerConfig(BaseModel):
    """Which analyzers run and how remediation commands are phrased."""

    # Registry order; selection itself does not depend on it
    enabled_analyzers: list[str] = ["maintenance", "docs", "refactoring"]
    # "npm" | "pip"
    package_manager: str = "npm"

    model_config = ConfigDict(extra="ignore")


class AppConfig(BaseModel):
    """Full application configuration."""

    server: ServerConfig = ServerConfig()
    security: SecurityConfig = SecurityConfig()
    planner: PlannerConfig = PlannerConfig()
    log_level: str = "INFO"
    # Log file: path relative to cwd or absolute. Empty = only stdout. Rotation when file exceeds max_mb.
    log_file: str = ""
    log_rotation_max_mb: int = 5
    log_rotation_backups: int = 3

