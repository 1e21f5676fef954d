"""Rewrite known-bad generated constructs before the first build."""

from pathlib import Path

from common.constants import SOURCE_DIR
from common.logger import get_logger

from .constants import SCRIPT_EXTENSIONS
from .file_utils import find_source_files, relative_to
from .models import RemediationResult
from .rules import default_rules

logger = get_logger(__name__)


class PreBuildRemediator:
    """Applies unconditional source rewrites to every script in a tree."""

    def __init__(self, rules: list | None = None):
        """Initialize the remediator.

        Args:
            rules: Objects with NAME, EXTENSIONS and apply(content) -> content, applied in order
        """
        self.rules = rules if rules is not None else default_rules()

    def remediate(self, tree: Path) -> RemediationResult:
        """Rewrite every script under <tree>/src that a rule changes.

        A file that cannot be read or written is logged and skipped.

        Args:
            tree: Root of the source tree

        Returns:
            Count and relative paths of changed files, also grouped by rule
        """
        result = RemediationResult()

        for file_path in find_source_files(tree / SOURCE_DIR, SCRIPT_EXTENSIONS):
            rel_path = relative_to(file_path, tree)
            applied: list[str] = []
            try:
                original = file_path.read_text(encoding="utf-8")
                content = original
                for rule in self.rules:
                    if not file_path.name.endswith(rule.EXTENSIONS):
                        continue
                    rewritten = rule.apply(content)
                    if rewritten != content:
                        applied.append(rule.NAME)
                        content = rewritten

                if content == original:
                    continue
                file_path.write_text(content, encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Pre-build fix failed for {rel_path}: {e}")
                continue

            result.fixed += 1
            result.files.append(rel_path)
            for rule_name in applied:
                result.by_rule.setdefault(rule_name, []).append(rel_path)

        return result
