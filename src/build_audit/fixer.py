"""Apply pattern fixes to the files named by classified build errors."""

from pathlib import Path

from common.logger import get_logger

from .models import AppliedFix, ClassifiedError
from .patterns import PatternRegistry, default_registry

logger = get_logger(__name__)


class PostBuildRemediator:
    """Applies auto-fixes for classified errors, one file at a time."""

    def __init__(self, registry: PatternRegistry | None = None):
        """Initialize the remediator.

        Args:
            registry: Pattern table whose fix functions are applied
        """
        self.registry = registry if registry is not None else default_registry()

    def resolve_file(self, tree: Path, file: str) -> Path:
        """Resolve an error's file reference against the tree root."""
        path = Path(file)
        return path if path.is_absolute() else tree / path

    def apply_fix(self, tree: Path, error: ClassifiedError) -> AppliedFix | None:
        """Apply the fix for a single classified error.

        Args:
            tree: Root of the source tree the build ran in
            error: The classified error to fix

        Returns:
            The applied fix, or None if nothing was fixable or nothing changed
        """
        if not error.auto_fixable or not error.file:
            return None

        pattern = self.registry.get(error.type)
        if pattern is None or pattern.fix is None:
            return None

        file_path = self.resolve_file(tree, error.file)
        if not file_path.is_file():
            logger.debug(f"Skipping {error.type} fix, {error.file} does not exist")
            return None

        try:
            content = file_path.read_text(encoding="utf-8")
            fixed = pattern.fix(content, error.groups)
        except Exception as e:
            logger.warning(f"Auto-fix {error.type} failed for {error.file}: {e}")
            return None

        if fixed == content:
            return None

        try:
            file_path.write_text(fixed, encoding="utf-8")
        except OSError as e:
            logger.warning(f"Error writing {error.file}: {e}")
            return None

        return AppliedFix(
            type=error.type,
            file=error.file,
            description=f"Applied {error.type} fix",
            files=[error.file],
        )

    def apply(self, tree: Path, errors: list[ClassifiedError]) -> list[AppliedFix]:
        """Apply every applicable fix for a failed build.

        Args:
            tree: Root of the source tree
            errors: Errors classified from the build output

        Returns:
            Fixes that changed a file, in error order
        """
        fixes: list[AppliedFix] = []
        for error in errors:
            fix = self.apply_fix(tree, error)
            if fix is not None:
                fixes.append(fix)
        return fixes

