"""Audit configuration."""

from dataclasses import dataclass

from common.constants import FRONTEND_DIR, OPTIONAL_DIRS
from common.env import Environment


@dataclass(frozen=True)
class AuditConfig:
    """Options recognized by the audit orchestrator. Durations are in seconds."""

    max_retries: int = 2
    build_timeout: float = 120.0
    incremental_timeout: float = 60.0
    install_timeout: float = 120.0
    max_cache_age: float = 24 * 60 * 60.0
    health_retries: int = 3
    health_retry_delay: float = 5.0
    health_timeout: float = 10.0
    expected_status: int = 200
    build_command: tuple[str, ...] = ("npm", "run", "build")
    install_command: tuple[str, ...] = ("npm", "install", "--legacy-peer-deps")
    frontend_dir: str = FRONTEND_DIR
    optional_dirs: tuple[str, ...] = OPTIONAL_DIRS

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.build_timeout <= 0 or self.incremental_timeout <= 0:
            raise ValueError("build timeouts must be positive")

    @classmethod
    def from_env(cls) -> "AuditConfig":
        """Build a config from AUDIT_* environment variables (and .env)."""
        return cls(
            max_retries=Environment.max_retries(),
            build_timeout=Environment.build_timeout(),
            incremental_timeout=Environment.incremental_timeout(),
            install_timeout=Environment.install_timeout(),
            max_cache_age=Environment.max_cache_age(),
            health_retries=Environment.health_retries(),
            health_retry_delay=Environment.health_retry_delay(),
            health_timeout=Environment.health_timeout(),
            build_command=Environment.build_command(),
            install_command=Environment.install_command(),
        )
