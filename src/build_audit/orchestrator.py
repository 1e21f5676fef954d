"""Sequence dependency resolution, remediation and builds into audits.

Three checkpoints are supported:

- full: after generation. Dependencies, pre-build fixes, then a bounded
  build/classify/remediate loop.
- incremental: after customization. Skips unchanged or cosmetic-only trees,
  otherwise one build without remediation.
- live: after deployment. HTTP checks against the deployed URLs.
"""

import time
from collections.abc import Iterable, Mapping
from pathlib import Path

from common.constants import MANIFEST_FILE
from common.logger import get_logger

from .cache import ContentHashCache, snapshot
from .classifier import ErrorClassifier
from .config import AuditConfig
from .dependencies import DependencyResolver
from .errors import ManifestNotFoundError
from .executor import BuildExecutor
from .fixer import PostBuildRemediator
from .health import LiveHealthChecker, build_checks
from .models import (
    AppliedFix,
    AuditKind,
    AuditResult,
    BuildOutcome,
    ClassificationResult,
    ClassifiedError,
    ErrorCategory,
    Severity,
    SkipReason,
)
from .patterns import PatternRegistry, default_registry
from .prebuild import PreBuildRemediator
from .structure import find_missing_pages

logger = get_logger(__name__)


def audit_error(
    type: str,
    category: ErrorCategory,
    message: str,
    severity: Severity = Severity.ERROR,
) -> ClassifiedError:
    """An error recorded by the orchestrator itself rather than parsed from output."""
    return ClassifiedError(type=type, category=category, severity=severity, message=message)


class AuditOrchestrator:
    """Runs full, incremental and live audits.

    All collaborators are injectable so that independent orchestrators (and
    tests) never share a pattern table or cache by accident.
    """

    def __init__(
        self,
        config: AuditConfig | None = None,
        registry: PatternRegistry | None = None,
        cache: ContentHashCache | None = None,
        executor: BuildExecutor | None = None,
        resolver: DependencyResolver | None = None,
        prebuild: PreBuildRemediator | None = None,
        fixer: PostBuildRemediator | None = None,
        health_checker: LiveHealthChecker | None = None,
    ):
        """Initialize orchestrator.

        Args:
            config: Audit options (default: AuditConfig())
            registry: Error pattern table (default: the standard table)
            cache: Content-hash cache for incremental audits (default: a new, empty one)
            executor: Build executor (default: runs config.build_command)
            resolver: Dependency resolver (default: runs config.install_command)
            prebuild: Pre-build remediator (default: the standard rules)
            fixer: Post-build remediator (default: fixes from the registry)
            health_checker: Live health checker (default: from config)
        """
        self.config = config if config is not None else AuditConfig()
        self.registry = registry if registry is not None else default_registry()
        self.classifier = ErrorClassifier(self.registry)
        self.cache = cache if cache is not None else ContentHashCache()
        self.executor = executor or BuildExecutor(self.config.build_command)
        self.resolver = resolver or DependencyResolver(
            install_command=self.config.install_command,
            max_cache_age=self.config.max_cache_age,
            timeout=self.config.install_timeout,
        )
        self.prebuild = prebuild or PreBuildRemediator()
        self.fixer = fixer or PostBuildRemediator(self.registry)
        self.health_checker = health_checker or LiveHealthChecker(
            retries=self.config.health_retries,
            retry_delay=self.config.health_retry_delay,
            timeout=self.config.health_timeout,
        )

    def _finish(self, result: AuditResult, start: float) -> AuditResult:
        result.duration = time.monotonic() - start
        logger.info(f"Audit ({result.kind.value}) completed in {result.duration:.1f}s")
        return result

    def _classify_failure(self, outcome: BuildOutcome) -> ClassificationResult:
        """Classify a failed build, making sure at least one error explains it."""
        classification = self.classifier.classify(outcome.output)

        if outcome.timed_out:
            classification.errors.insert(
                0, audit_error("BUILD_TIMEOUT", ErrorCategory.BUILD, outcome.error or "Build timeout")
            )
        elif not classification.errors:
            message = outcome.error or f"Build failed with exit code {outcome.exit_code}"
            classification.errors.append(audit_error("BUILD_FAILED", ErrorCategory.BUILD, message))

        return classification

    def _resolve_optional_trees(self, project: Path) -> list[ClassifiedError]:
        """Install dependencies of auxiliary trees; failures only warn."""
        warnings = []
        for name in self.config.optional_dirs:
            tree = project / name
            if not (tree / MANIFEST_FILE).is_file():
                continue

            deps = self.resolver.ensure(tree)
            if not deps.success:
                logger.warning(f"Dependency install failed for {name}: {deps.error}")
                warnings.append(
                    audit_error(
                        "DEPENDENCY_WARNING",
                        ErrorCategory.DEPENDENCY,
                        f"{name}: {deps.error}",
                        severity=Severity.WARNING,
                    )
                )
        return warnings

    def _missing_frontend(self, result: AuditResult, frontend: Path, start: float) -> AuditResult:
        logger.error(f"Frontend directory not found: {frontend}")
        result.errors.append(
            audit_error(
                "MISSING_FRONTEND",
                ErrorCategory.ENVIRONMENT,
                f"Frontend directory not found: {frontend}",
            )
        )
        return self._finish(result, start)

    def audit_full(
        self,
        project: Path,
        expected_pages: Iterable[str] | None = None,
    ) -> AuditResult:
        """Validate a freshly generated project, repairing what can be repaired.

        Args:
            project: Project root holding the frontend (and optional admin/backend) trees
            expected_pages: Page identifiers the generator meant to produce, for
                completeness warnings

        Returns:
            AuditResult of kind "full"; retry_count is the index of the last build attempt

        Example:
            >>> orchestrator = AuditOrchestrator()
            >>> result = orchestrator.audit_full(Path("generated/acme-bakery"))
            >>> print(result.success, result.retry_count)
        """
        start = time.monotonic()
        project = Path(project)
        frontend = project / self.config.frontend_dir
        result = AuditResult(kind=AuditKind.FULL)
        max_attempts = self.config.max_retries + 1

        logger.info(f"[bold]Full audit[/bold]: post-generation build validation of {project.name}")

        if not frontend.is_dir():
            return self._missing_frontend(result, frontend, start)

        # Dependencies
        logger.info("Step 1: checking dependencies...")
        try:
            deps = self.resolver.ensure(frontend)
        except ManifestNotFoundError as e:
            logger.error(str(e))
            result.errors.append(audit_error("MISSING_MANIFEST", ErrorCategory.ENVIRONMENT, str(e)))
            return self._finish(result, start)

        if not deps.success:
            logger.error(f"Dependency install failed: {deps.error}")
            result.errors.append(
                audit_error("DEPENDENCY_ERROR", ErrorCategory.DEPENDENCY, deps.error or "")
            )
            result.build_log = deps.stderr
            return self._finish(result, start)

        base_warnings = self._resolve_optional_trees(project)

        # Pre-build fixes
        logger.info("Step 2: fixing known generation defects...")
        remediation = self.prebuild.remediate(frontend)
        for rule_name, files in remediation.by_rule.items():
            logger.info(f"[green]✓[/green] {rule_name}: fixed {len(files)} file(s)")
            result.auto_fixes_applied.append(
                AppliedFix(
                    type=rule_name,
                    description=f"Fixed {rule_name.lower().replace('_', ' ')} in {len(files)} file(s)",
                    files=list(files),
                )
            )

        if expected_pages:
            for page in find_missing_pages(frontend, expected_pages):
                base_warnings.append(
                    audit_error(
                        "MISSING_PAGE",
                        ErrorCategory.ENVIRONMENT,
                        f"Expected page '{page}' was not generated",
                        severity=Severity.WARNING,
                    )
                )

        # Build loop
        for attempt in range(max_attempts):
            result.retry_count = attempt
            logger.info(f"Step 3: running build (attempt {attempt + 1}/{max_attempts})...")

            outcome = self.executor.run(frontend, timeout=self.config.build_timeout)
            result.build_log = outcome.output

            if outcome.success:
                logger.info("[green]✓[/green] Build passed")
                result.success = True
                result.errors = []
                result.warnings = base_warnings + self.classifier.classify(outcome.output).warnings
                self.cache.set(project, snapshot(frontend))
                break

            classification = self._classify_failure(outcome)
            result.errors = classification.errors
            result.warnings = base_warnings + classification.warnings
            logger.warning(f"Build failed with {len(classification.errors)} error(s)")

            if attempt == max_attempts - 1:
                break

            fixes = self.fixer.apply(frontend, classification.errors)
            if not fixes:
                logger.info("No auto-fix changed anything, giving up")
                break

            logger.info(f"Applied {len(fixes)} auto-fix(es), retrying...")
            result.auto_fixes_applied.extend(fixes)

        return self._finish(result, start)

    def audit_incremental(self, project: Path) -> AuditResult:
        """Validate a project after user customization.

        Unchanged trees and stylesheet-only changes are not rebuilt. Failures
        are classified but never auto-remediated.

        Args:
            project: Project root holding the frontend tree

        Returns:
            AuditResult of kind "incremental"
        """
        start = time.monotonic()
        project = Path(project)
        frontend = project / self.config.frontend_dir
        result = AuditResult(kind=AuditKind.INCREMENTAL)

        logger.info(f"[bold]Incremental audit[/bold]: post-customization validation of {project.name}")

        if not frontend.is_dir():
            return self._missing_frontend(result, frontend, start)

        cached = self.cache.get(project)
        if cached is not None:
            current = snapshot(frontend)
            if current.hash == cached.hash:
                logger.info("No changes detected, skipping build")
                result.success = True
                result.skipped = True
                result.reason = SkipReason.NO_CHANGES
                return self._finish(result, start)

            if (
                current.script_hash == cached.script_hash
                and current.stylesheets == cached.stylesheets
            ):
                logger.info("Only stylesheet contents changed, skipping build")
                result.success = True
                result.skipped = True
                result.reason = SkipReason.COSMETIC_ONLY
                return self._finish(result, start)

        logger.info("Running incremental build...")
        outcome = self.executor.run(frontend, timeout=self.config.incremental_timeout)
        result.build_log = outcome.output

        if outcome.success:
            result.success = True
            result.warnings = self.classifier.classify(outcome.output).warnings
            self.cache.set(project, snapshot(frontend))
        else:
            classification = self._classify_failure(outcome)
            result.errors = classification.errors
            result.warnings = classification.warnings
            logger.warning(f"Incremental build failed with {len(result.errors)} error(s)")

        return self._finish(result, start)

    def audit_live(
        self,
        urls: Mapping[str, str | None],
        expected_status: int | None = None,
    ) -> AuditResult:
        """Check that deployed endpoints are serving.

        Every endpoint is checked; each failure adds one error.

        Args:
            urls: Map with any of "frontend", "admin", "backend"
            expected_status: Status every check must see (default: config.expected_status)

        Returns:
            AuditResult of kind "live" carrying one HealthCheckResult per endpoint
        """
        start = time.monotonic()
        result = AuditResult(kind=AuditKind.LIVE)
        status = expected_status if expected_status is not None else self.config.expected_status

        logger.info("[bold]Live audit[/bold]: post-deployment validation")

        checks = build_checks(urls, expected_status=status)
        if not checks:
            result.warnings.append(
                audit_error(
                    "NO_ENDPOINTS",
                    ErrorCategory.NETWORK,
                    "No URLs given, nothing to check",
                    severity=Severity.WARNING,
                )
            )

        result.checks = self.health_checker.check_all(checks)
        for check in result.checks:
            if check.success:
                continue
            reason = check.error or f"Status {check.status_code}"
            result.errors.append(
                audit_error(
                    "HTTP_CHECK_FAILED",
                    ErrorCategory.NETWORK,
                    f"{check.name} check failed: {reason}",
                )
            )

        result.success = not result.errors
        return self._finish(result, start)
