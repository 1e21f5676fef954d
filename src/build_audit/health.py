"""HTTP health checks against deployed endpoints."""

import time
from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor

import requests

from common.constants import BACKEND_HEALTH_PATH
from common.logger import get_logger

from .models import HealthCheck, HealthCheckResult

logger = get_logger(__name__)

# Logical URL name -> display name, in check order
CHECK_NAMES: dict[str, str] = {
    "frontend": "Frontend",
    "admin": "Admin",
    "backend": "Backend Health",
}


def build_checks(urls: Mapping[str, str | None], expected_status: int = 200) -> list[HealthCheck]:
    """Turn a map of deployed URLs into the checks a live audit runs.

    The backend is checked at its health sub-path; missing URLs are skipped.

    Args:
        urls: Map with any of "frontend", "admin", "backend"
        expected_status: Status code every check must observe

    Returns:
        Checks in frontend, admin, backend order
    """
    checks = []
    for key, name in CHECK_NAMES.items():
        url = urls.get(key)
        if not url:
            continue
        if key == "backend":
            url = url.rstrip("/") + BACKEND_HEALTH_PATH
        checks.append(HealthCheck(name=name, url=url, expected_status=expected_status))
    return checks


class LiveHealthChecker:
    """Checks endpoints with bounded retries.

    Each endpoint is retried sequentially with a fixed delay; different
    endpoints are checked concurrently.
    """

    def __init__(
        self,
        retries: int = 3,
        retry_delay: float = 5.0,
        timeout: float = 10.0,
        session: requests.Session | None = None,
        max_workers: int = 4,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the checker.

        Args:
            retries: Attempts per endpoint
            retry_delay: Seconds between failed attempts
            timeout: Per-request timeout in seconds
            session: HTTP session to reuse (default: a new one)
            max_workers: Endpoints checked at the same time
            sleep: Delay function, replaceable in tests
        """
        self.retries = max(1, retries)
        self.retry_delay = retry_delay
        self.timeout = timeout
        self.max_workers = max_workers
        self.sleep = sleep
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": "build-audit/1.0 (health check)"})

    def check(self, check: HealthCheck) -> HealthCheckResult:
        """Request one endpoint until it answers with the expected status.

        Args:
            check: Endpoint to request

        Returns:
            Result of the last attempt; error is set only when it got no response
        """
        result = HealthCheckResult(name=check.name, url=check.url)

        for attempt in range(self.retries):
            try:
                start = time.monotonic()
                response = self.session.get(check.url, timeout=self.timeout, allow_redirects=True)
                result.response_time = time.monotonic() - start
                result.status_code = response.status_code
                result.tls = (response.url or check.url).startswith("https://")
                result.success = response.status_code == check.expected_status
                result.error = None
            except requests.RequestException as e:
                result.status_code = None
                result.error = str(e)

            if result.success:
                logger.info(
                    f"[green]✓[/green] {check.name}: {result.status_code} "
                    f"({result.response_time * 1000:.0f}ms)"
                )
                break

            if attempt < self.retries - 1:
                logger.info(f"{check.name}: retry {attempt + 1}/{self.retries - 1}...")
                self.sleep(self.retry_delay)

        if not result.success:
            reason = result.error or f"status {result.status_code}"
            logger.warning(f"{check.name} failed after {self.retries} attempt(s): {reason}")

        return result

    def check_all(self, checks: list[HealthCheck]) -> list[HealthCheckResult]:
        """Check every endpoint; one failure never stops the others.

        Returns:
            Results in the same order as checks
        """
        if not checks:
            return []
        max_workers = min(len(checks), self.max_workers)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(self.check, checks))
