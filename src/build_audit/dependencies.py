"""Make sure a source tree's dependencies are installed before building."""

import time
from collections.abc import Sequence
from pathlib import Path

from common.constants import DEPENDENCY_DIR, MANIFEST_FILE
from common.logger import get_logger

from .errors import ManifestNotFoundError
from .executor import run_process
from .models import DependencyResult

logger = get_logger(__name__)

INSTALL_TIMEOUT_ERROR = "Dependency install timeout"


class DependencyResolver:
    """Installs dependencies unless a recent install is already on disk."""

    def __init__(
        self,
        install_command: Sequence[str] = ("npm", "install", "--legacy-peer-deps"),
        max_cache_age: float = 24 * 60 * 60.0,
        timeout: float = 120.0,
    ):
        """Initialize the resolver.

        Args:
            install_command: Command that materializes the manifest's dependencies
            max_cache_age: Seconds an existing install stays trusted
            timeout: Seconds before the install is killed
        """
        self.install_command = tuple(install_command)
        self.max_cache_age = max_cache_age
        self.timeout = timeout

    def is_fresh(self, tree: Path) -> bool:
        """Check if the tree's dependency directory exists and is within the staleness window."""
        cache_dir = tree / DEPENDENCY_DIR
        if not cache_dir.is_dir():
            return False
        age = time.time() - cache_dir.stat().st_mtime
        return age < self.max_cache_age

    def ensure(self, tree: Path) -> DependencyResult:
        """Install the tree's dependencies if needed.

        Args:
            tree: Root of the source tree (holds the manifest)

        Returns:
            DependencyResult; cached=True when the install was skipped

        Raises:
            ManifestNotFoundError: If the tree has no manifest
        """
        if not (tree / MANIFEST_FILE).is_file():
            raise ManifestNotFoundError(f"No {MANIFEST_FILE} found in {tree}", path=tree)

        if self.is_fresh(tree):
            logger.info(f"Using cached {DEPENDENCY_DIR} in {tree.name}")
            return DependencyResult(success=True, cached=True)

        logger.info(f"Installing dependencies in {tree.name}...")
        outcome = run_process(
            self.install_command,
            cwd=tree,
            timeout=self.timeout,
            timeout_error=INSTALL_TIMEOUT_ERROR,
        )

        if outcome.success:
            return DependencyResult(success=True, cached=False, duration=outcome.duration)

        error = outcome.error or f"{' '.join(self.install_command)} exited with {outcome.exit_code}"
        return DependencyResult(
            success=False,
            cached=False,
            duration=outcome.duration,
            error=error,
            stderr=outcome.stderr,
        )
