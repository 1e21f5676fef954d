"""Turn raw build output into classified errors and warnings."""

import re

from .constants import MIN_UNKNOWN_LINE_LENGTH
from .models import ClassificationResult, ClassifiedError, ErrorCategory, Severity
from .patterns import PatternRegistry, default_registry

# "... in src/App.jsx:12:5", "at src/App.jsx:12", "from src/App.jsx:12"
LOCATION_RE = re.compile(r"\b(?:in|at|from)\s+([^\s:]+):(\d+)(?::(\d+))?")
# esbuild prefixes the location: "src/App.jsx:12:5: ERROR: ..."
LEADING_LOCATION_RE = re.compile(r"^\s*([^\s:]+\.[cm]?[jt]sx?):(\d+):(\d+):")

UNKNOWN_TYPE = "UNKNOWN"


def extract_location(line: str) -> tuple[str, int, int | None] | None:
    """Find the file, line and optional column a build output line points at.

    Args:
        line: One line of build output

    Returns:
        (file, line, column) or None when the line names no location
    """
    match = LOCATION_RE.search(line) or LEADING_LOCATION_RE.search(line)
    if not match:
        return None
    column = int(match.group(3)) if match.group(3) else None
    return match.group(1).strip("\"'"), int(match.group(2)), column


def _looks_like_error(line: str) -> bool:
    return ("error" in line or "Error" in line) and len(line) > MIN_UNKNOWN_LINE_LENGTH


class ErrorClassifier:
    """Classifies build output line by line against a pattern registry."""

    def __init__(self, registry: PatternRegistry | None = None):
        """Initialize the classifier.

        Args:
            registry: Pattern table to classify against (default: the standard table)
        """
        self.registry = registry if registry is not None else default_registry()

    def classify_line(self, line: str) -> ClassifiedError | None:
        """Classify one line; the first matching pattern wins.

        Returns:
            The classified error, or None when no pattern matches
        """
        for pattern in self.registry:
            match = pattern.match(line)
            if not match:
                continue

            error = ClassifiedError(
                type=pattern.name,
                category=pattern.category,
                severity=pattern.severity,
                message=line.strip(),
                auto_fixable=pattern.auto_fixable,
                suggestion=pattern.suggestion(match) if pattern.suggestion else None,
                groups=tuple(g for g in match.groups() if g is not None),
            )
            location = extract_location(line)
            if location:
                error.file, error.line, error.column = location
            return error

        return None

    def classify(self, output: str) -> ClassificationResult:
        """Classify everything in a build's output.

        Lines matching no pattern but mentioning an error are kept as UNKNOWN
        errors, so a failure is never dropped silently.

        Args:
            output: Raw build-tool output

        Returns:
            Errors and warnings in output order
        """
        result = ClassificationResult()

        for line in output.splitlines():
            classified = self.classify_line(line)
            if classified is not None:
                if classified.severity == Severity.ERROR:
                    result.errors.append(classified)
                else:
                    result.warnings.append(classified)
                continue

            message = line.strip()
            if not _looks_like_error(message):
                continue
            if any(e.message == message for e in result.errors):
                continue

            unknown = ClassifiedError(
                type=UNKNOWN_TYPE,
                category=ErrorCategory.UNKNOWN,
                severity=Severity.ERROR,
                message=message,
            )
            location = extract_location(line)
            if location:
                unknown.file, unknown.line, unknown.column = location
            result.errors.append(unknown)

        return result
