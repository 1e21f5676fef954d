"""Validate, repair and verify generated project trees."""

from .cache import ContentHashCache, compute_hash
from .classifier import ErrorClassifier
from .config import AuditConfig
from .models import (
    AuditKind,
    AuditResult,
    AuditSummary,
    BuildOutcome,
    ClassifiedError,
    ErrorCategory,
    ErrorPattern,
    HealthCheckResult,
    Severity,
    SkipReason,
)
from .orchestrator import AuditOrchestrator
from .patterns import PatternRegistry, default_registry
from .reporters import AuditReporter, summarize

__all__ = [
    "AuditConfig",
    "AuditKind",
    "AuditOrchestrator",
    "AuditReporter",
    "AuditResult",
    "AuditSummary",
    "BuildOutcome",
    "ClassifiedError",
    "ContentHashCache",
    "ErrorCategory",
    "ErrorClassifier",
    "ErrorPattern",
    "HealthCheckResult",
    "PatternRegistry",
    "Severity",
    "SkipReason",
    "compute_hash",
    "default_registry",
    "summarize",
]
