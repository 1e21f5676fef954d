#!/usr/bin/env python3
"""CLI interface for build_audit module."""

import argparse
from pathlib import Path

from common.logger import error, setup_logging, success

from .config import AuditConfig
from .models import AuditResult
from .orchestrator import AuditOrchestrator
from .reporters import AuditReporter


def _report(result: AuditResult, args) -> int:
    reporter = AuditReporter()
    if args.format == "json":
        output = reporter.report_json(result)
        if args.output:
            Path(args.output).write_text(output, encoding="utf-8")
            success(f"Audit result written to {args.output}")
        else:
            print(output)
        return 0 if result.success else 1

    exit_code = reporter.report_console(result)
    if args.output:
        Path(args.output).write_text(reporter.report_json(result), encoding="utf-8")
        success(f"Audit result also written to {args.output}")
    return exit_code


def cmd_full(args):
    """Run a full post-generation audit.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if the audit passed)
    """
    project = Path(args.project)
    if not project.exists():
        error(f"Project directory '{project}' does not exist")
        return 1

    orchestrator = AuditOrchestrator(AuditConfig.from_env())
    result = orchestrator.audit_full(project, expected_pages=args.pages or None)
    return _report(result, args)


def cmd_incremental(args):
    """Run an incremental post-customization audit.

    The hash cache lives in process memory, so from the command line this
    always builds.
    """
    project = Path(args.project)
    if not project.exists():
        error(f"Project directory '{project}' does not exist")
        return 1

    orchestrator = AuditOrchestrator(AuditConfig.from_env())
    return _report(orchestrator.audit_incremental(project), args)


def cmd_live(args):
    """Run a live post-deployment audit against deployed URLs."""
    urls = {"frontend": args.frontend, "admin": args.admin, "backend": args.backend}
    if not any(urls.values()):
        error("Give at least one of --frontend, --admin, --backend")
        return 1

    orchestrator = AuditOrchestrator(AuditConfig.from_env())
    return _report(orchestrator.audit_live(urls, expected_status=args.expected_status), args)


def _add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=["console", "json"],
        default="console",
        help="Output format",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Also write the JSON result to this file",
    )


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Validate, repair and verify generated projects")
    parser.add_argument("--log-file", type=str, help="Also write log records to this file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Full command
    full_parser = subparsers.add_parser("full", help="Post-generation build validation")
    full_parser.add_argument("project", type=str, help="Generated project directory")
    full_parser.add_argument(
        "--pages",
        nargs="*",
        default=[],
        help="Page identifiers the generator was asked for (completeness warnings)",
    )
    _add_output_arguments(full_parser)
    full_parser.set_defaults(func=cmd_full)

    # Incremental command
    incremental_parser = subparsers.add_parser(
        "incremental", help="Post-customization validation"
    )
    incremental_parser.add_argument("project", type=str, help="Generated project directory")
    _add_output_arguments(incremental_parser)
    incremental_parser.set_defaults(func=cmd_incremental)

    # Live command
    live_parser = subparsers.add_parser("live", help="Post-deployment health checks")
    live_parser.add_argument("--frontend", type=str, help="Deployed frontend URL")
    live_parser.add_argument("--admin", type=str, help="Deployed admin URL")
    live_parser.add_argument("--backend", type=str, help="Deployed backend base URL")
    live_parser.add_argument(
        "--expected-status",
        type=int,
        default=None,
        help="HTTP status every endpoint must return (default: 200)",
    )
    _add_output_arguments(live_parser)
    live_parser.set_defaults(func=cmd_live)

    args = parser.parse_args()
    setup_logging(log_file=args.log_file)
    return args.func(args)


if __name__ == "__main__":
    exit(main())
