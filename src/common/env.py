"""Environment configuration interface for the audit pipeline.

All environment variable access goes through this module. Durations are
read in seconds.
"""

import os
import shlex

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


def _get_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _get_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


def _get_command(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = os.getenv(name)
    if not value:
        return default
    return tuple(shlex.split(value))


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def max_retries() -> int:
        """Get the number of remediation retries for full audits.

        Returns:
            Retry count, defaults to 2 (three build attempts in total)
        """
        return _get_int("AUDIT_MAX_RETRIES", 2)

    @staticmethod
    def build_timeout() -> float:
        """Get the timeout for one full-audit build.

        Returns:
            Timeout in seconds, defaults to 120
        """
        return _get_float("AUDIT_BUILD_TIMEOUT", 120.0)

    @staticmethod
    def incremental_timeout() -> float:
        """Get the timeout for the single incremental-audit build.

        Returns:
            Timeout in seconds, defaults to 60
        """
        return _get_float("AUDIT_INCREMENTAL_TIMEOUT", 60.0)

    @staticmethod
    def install_timeout() -> float:
        """Get the timeout for dependency installation.

        Returns:
            Timeout in seconds, defaults to 120
        """
        return _get_float("AUDIT_INSTALL_TIMEOUT", 120.0)

    @staticmethod
    def max_cache_age() -> float:
        """Get the staleness window for installed dependencies.

        Returns:
            Maximum age in seconds, defaults to 24 hours
        """
        return _get_float("AUDIT_MAX_CACHE_AGE", 24 * 60 * 60.0)

    @staticmethod
    def health_retries() -> int:
        """Get the number of attempts per live health check.

        Returns:
            Attempt count, defaults to 3
        """
        return _get_int("AUDIT_HEALTH_RETRIES", 3)

    @staticmethod
    def health_retry_delay() -> float:
        """Get the delay between live health check attempts.

        Returns:
            Delay in seconds, defaults to 5
        """
        return _get_float("AUDIT_HEALTH_RETRY_DELAY", 5.0)

    @staticmethod
    def health_timeout() -> float:
        """Get the per-request timeout for live health checks.

        Returns:
            Timeout in seconds, defaults to 10
        """
        return _get_float("AUDIT_HEALTH_TIMEOUT", 10.0)

    @staticmethod
    def build_command() -> tuple[str, ...]:
        """Get the build command, shell-split from AUDIT_BUILD_COMMAND.

        Returns:
            Command argv, defaults to ("npm", "run", "build")
        """
        return _get_command("AUDIT_BUILD_COMMAND", ("npm", "run", "build"))

    @staticmethod
    def install_command() -> tuple[str, ...]:
        """Get the dependency install command, shell-split from AUDIT_INSTALL_COMMAND.

        Returns:
            Command argv, defaults to ("npm", "install", "--legacy-peer-deps")
        """
        return _get_command("AUDIT_INSTALL_COMMAND", ("npm", "install", "--legacy-peer-deps"))


# Singleton instance for convenient access
env = Environment()
