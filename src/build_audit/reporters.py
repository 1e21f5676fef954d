"""Audit result reporters."""

import json

from common.logger import get_logger

from .constants import SUMMARY_TOP_ERRORS
from .models import AuditResult, AuditSummary

logger = get_logger(__name__)


def summarize(result: AuditResult, top: int = SUMMARY_TOP_ERRORS) -> AuditSummary:
    """Condense an audit result into counts plus the first few error messages.

    Args:
        result: Audit result to summarize
        top: How many error messages to quote verbatim

    Returns:
        AuditSummary for logs and UIs
    """
    return AuditSummary(
        status="PASSED" if result.success else "FAILED",
        success=result.success,
        error_count=len(result.errors),
        warning_count=len(result.warnings),
        fix_count=len(result.auto_fixes_applied),
        duration=result.duration,
        skipped=result.skipped,
        top_errors=[e.message for e in result.errors[:top]],
    )


class AuditReporter:
    """Format and display audit results."""

    def __init__(self, show_warnings: bool = True):
        """Initialize the reporter.

        Args:
            show_warnings: Whether to list individual warnings
        """
        self.show_warnings = show_warnings

    def report_console(self, result: AuditResult) -> int:
        """Print an audit result to the console.

        Args:
            result: Audit result to report

        Returns:
            Exit code (0 if the audit passed, 1 otherwise)
        """
        summary = summarize(result)
        icon = "[green]✓[/green]" if summary.success else "[red]✗[/red]"

        logger.info("\n" + "=" * 60)
        logger.info(f"{icon} [bold]{result.kind.value} audit {summary.status}[/bold]")
        if result.skipped and result.reason:
            logger.info(f"  Skipped: {result.reason.value}")

        for fix in result.auto_fixes_applied:
            target = fix.file or ", ".join(fix.files)
            logger.info(f"  [cyan]🔧[/cyan] {fix.description} ({target})")

        for check in result.checks:
            check_icon = "[green]✓[/green]" if check.success else "[red]✗[/red]"
            timing = f" {check.response_time * 1000:.0f}ms" if check.response_time is not None else ""
            logger.info(f"  {check_icon} {check.name}: {check.status_code or '-'}{timing} {check.url}")

        for error in result.errors:
            location = f" ({error.file}:{error.line})" if error.file else ""
            logger.info(f"  [red]✗[/red] [bold]{error.type}[/bold]{location}: {error.message}")
            if error.suggestion:
                logger.info(f"      Suggestion: {error.suggestion}")

        if self.show_warnings:
            for warning in result.warnings:
                logger.info(f"  [yellow]⚠[/yellow] {warning.type}: {warning.message}")

        logger.info(
            f"Total: [bold]{summary.error_count}[/bold] errors, "
            f"[bold]{summary.warning_count}[/bold] warnings, "
            f"[bold]{summary.fix_count}[/bold] fixes in {summary.duration:.1f}s"
        )

        return 0 if summary.success else 1

    def report_json(self, result: AuditResult) -> str:
        """Format a result as JSON.

        Args:
            result: Audit result to report

        Returns:
            JSON string with the full result and its summary
        """
        summary = summarize(result)
        data = result.to_dict()
        data["summary"] = {
            "status": summary.status,
            "error_count": summary.error_count,
            "warning_count": summary.warning_count,
            "fix_count": summary.fix_count,
            "top_errors": summary.top_errors,
        }
        return json.dumps(data, indent=2)
