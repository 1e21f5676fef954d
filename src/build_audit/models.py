"""Data models for build outcomes, classified errors and audit results."""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum


class Severity(Enum):
    """Severity levels for classified build output."""

    ERROR = "error"  # Breaks the build
    WARNING = "warning"  # Build passes, output likely wrong


class ErrorCategory(Enum):
    """Category tags for error patterns and synthetic audit errors."""

    IMPORT = "import"
    SYNTAX = "syntax"
    JSX = "jsx"
    FRAMEWORK = "framework"
    ICON = "icon"
    STYLE = "style"
    BUILD = "build"  # Timeouts and failures nothing else explains
    ENVIRONMENT = "environment"  # Missing tree or manifest
    DEPENDENCY = "dependency"
    NETWORK = "network"  # Live health checks
    UNKNOWN = "unknown"


class AuditKind(Enum):
    """The three audit checkpoints."""

    FULL = "full"  # Post-generation
    INCREMENTAL = "incremental"  # Post-customization
    LIVE = "live"  # Post-deployment


class SkipReason(Enum):
    """Why an incremental audit did not build."""

    NO_CHANGES = "no_changes"
    COSMETIC_ONLY = "cosmetic_only"


SuggestionFunc = Callable[[re.Match[str]], str]
FixFunc = Callable[[str, tuple[str, ...]], str]


@dataclass(frozen=True)
class ErrorPattern:
    """A named rule recognizing one kind of build failure.

    ``fix`` maps file content to corrected content, given the groups captured
    from the matching output line. Patterns flagged auto-fixable must carry one.
    """

    name: str
    regex: re.Pattern[str]
    severity: Severity
    category: ErrorCategory
    auto_fixable: bool = False
    suggestion: SuggestionFunc | None = None
    fix: FixFunc | None = None

    def __post_init__(self):
        if self.auto_fixable and self.fix is None:
            raise ValueError(f"Pattern {self.name} is auto-fixable but defines no fix")

    def match(self, line: str) -> re.Match[str] | None:
        return self.regex.search(line)


@dataclass
class ClassifiedError:
    """One pattern match against a line of build output."""

    type: str  # Pattern name, e.g. "IMPORT_PATH_MISMATCH"
    category: ErrorCategory
    severity: Severity
    message: str
    file: str | None = None
    line: int | None = None
    column: int | None = None
    auto_fixable: bool = False
    suggestion: str | None = None
    groups: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "auto_fixable": self.auto_fixable,
            "suggestion": self.suggestion,
        }


@dataclass
class ClassificationResult:
    """Errors and warnings extracted from one build's output."""

    errors: list[ClassifiedError] = field(default_factory=list)
    warnings: list[ClassifiedError] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        """Check if nothing was recognized."""
        return not self.errors and not self.warnings


@dataclass(frozen=True)
class BuildOutcome:
    """Result of one external process invocation."""

    success: bool
    exit_code: int | None
    duration: float  # Seconds
    stdout: str = ""
    stderr: str = ""
    error: str | None = None  # "Build timeout", or why the process could not start
    timed_out: bool = False

    @property
    def output(self) -> str:
        """Combined output, stderr first since build tools report failures there."""
        return "\n".join(part for part in (self.stderr, self.stdout) if part)


@dataclass
class DependencyResult:
    """Outcome of materializing a tree's dependencies."""

    success: bool
    cached: bool = False
    duration: float = 0.0
    error: str | None = None
    stderr: str = ""


@dataclass
class RemediationResult:
    """Files rewritten by the pre-build remediation pass."""

    fixed: int = 0
    files: list[str] = field(default_factory=list)
    by_rule: dict[str, list[str]] = field(default_factory=dict)  # Rule name -> files


@dataclass
class AppliedFix:
    """A remediation that changed at least one file."""

    type: str
    description: str
    file: str | None = None
    files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "description": self.description,
            "file": self.file,
            "files": list(self.files),
        }


@dataclass
class HealthCheck:
    """One endpoint a live audit should check."""

    name: str
    url: str
    expected_status: int = 200


@dataclass
class HealthCheckResult:
    """Outcome of probing one endpoint."""

    name: str
    url: str
    success: bool = False
    status_code: int | None = None
    response_time: float | None = None  # Seconds
    tls: bool | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "url": self.url,
            "success": self.success,
            "status_code": self.status_code,
            "response_time": self.response_time,
            "tls": self.tls,
            "error": self.error,
        }


@dataclass(frozen=True)
class CacheEntry:
    """Last known content hashes of a successfully built tree."""

    hash: str
    script_hash: str  # Hash of the build-affecting subset only
    timestamp: float
    stylesheets: tuple[str, ...] = ()  # Relative paths; adding or removing one is not cosmetic


@dataclass
class AuditResult:
    """Top-level result of one audit call."""

    kind: AuditKind
    success: bool = False
    duration: float = 0.0
    errors: list[ClassifiedError] = field(default_factory=list)
    warnings: list[ClassifiedError] = field(default_factory=list)
    auto_fixes_applied: list[AppliedFix] = field(default_factory=list)
    retry_count: int = 0
    skipped: bool = False
    reason: SkipReason | None = None
    checks: list[HealthCheckResult] = field(default_factory=list)
    build_log: str = ""

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "success": self.success,
            "duration": round(self.duration, 3),
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "auto_fixes_applied": [f.to_dict() for f in self.auto_fixes_applied],
            "retry_count": self.retry_count,
            "skipped": self.skipped,
            "reason": self.reason.value if self.reason else None,
            "checks": [c.to_dict() for c in self.checks],
        }


@dataclass
class AuditSummary:
    """Display view of an AuditResult for logs and UIs."""

    status: str  # "PASSED" or "FAILED"
    success: bool
    error_count: int
    warning_count: int
    fix_count: int
    duration: float
    skipped: bool
    top_errors: list[str]
