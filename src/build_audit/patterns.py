"""Error pattern table used to classify build output.

Patterns are tested in registration order and the first match wins, so
specific, actionable patterns must be registered before generic ones.
"""

import re
from collections.abc import Iterable, Iterator

from .constants import FALLBACK_ICON, ICON_PACKAGE
from .models import ErrorCategory, ErrorPattern, Severity

MODULES_IMPORT_RE = re.compile(r"""from\s+(['"])\.\./modules/""")
ICON_IMPORT_RE = re.compile(
    r"""import\s*\{([^}]+)\}\s*from\s*(['"])""" + re.escape(ICON_PACKAGE) + r"""\2"""
)


def _first_group(match: re.Match[str]) -> str:
    return next((g for g in match.groups() if g), "")


def fix_modules_import(content: str, groups: tuple[str, ...]) -> str:
    """Point ../modules/ imports at ../components/, keeping the quote style."""
    return MODULES_IMPORT_RE.sub(r"from \1../components/", content)


def fix_missing_icon(content: str, groups: tuple[str, ...]) -> str:
    """Swap an icon the icon package does not export for the fallback icon.

    The import list is rewritten (duplicates dropped) and, unless the icon was
    imported under an alias, every later use of the name is renamed too.
    """
    if not groups:
        return content
    icon = groups[0]

    import_match = ICON_IMPORT_RE.search(content)
    if not import_match:
        return content

    names = [n.strip() for n in import_match.group(1).split(",") if n.strip()]
    new_names: list[str] = []
    found = False
    aliased = False
    for name in names:
        base, _, alias = (part.strip() for part in name.partition(" as "))
        if base == icon:
            found = True
            if alias:
                aliased = True
                name = f"{FALLBACK_ICON} as {alias}"
            else:
                name = FALLBACK_ICON
        if name not in new_names:
            new_names.append(name)

    if not found:
        return content

    quote = import_match.group(2)
    new_import = f"import {{ {', '.join(new_names)} }} from {quote}{ICON_PACKAGE}{quote}"
    head = content[: import_match.start()]
    tail = content[import_match.end() :]
    if not aliased:
        tail = re.sub(rf"\b{re.escape(icon)}\b", FALLBACK_ICON, tail)
    return head + new_import + tail


class PatternRegistry:
    """An ordered, explicitly constructed table of error patterns."""

    def __init__(self, patterns: Iterable[ErrorPattern] = ()):
        self._patterns: dict[str, ErrorPattern] = {}
        for pattern in patterns:
            self.register(pattern)

    def register(self, pattern: ErrorPattern) -> None:
        """Append a pattern; it loses ties against everything registered earlier.

        Raises:
            ValueError: If a pattern with the same name is already registered
        """
        if pattern.name in self._patterns:
            raise ValueError(f"Pattern {pattern.name} is already registered")
        self._patterns[pattern.name] = pattern

    def get(self, name: str) -> ErrorPattern | None:
        return self._patterns.get(name)

    def __iter__(self) -> Iterator[ErrorPattern]:
        return iter(self._patterns.values())

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, name: object) -> bool:
        return name in self._patterns


def default_patterns() -> list[ErrorPattern]:
    """The standard pattern table, most specific first."""
    return [
        # Import/module errors
        ErrorPattern(
            name="IMPORT_PATH_MISMATCH",
            regex=re.compile(r"""(?:from|resolve|import)\s+['"]\.\./modules/""", re.IGNORECASE),
            severity=Severity.ERROR,
            category=ErrorCategory.IMPORT,
            auto_fixable=True,
            suggestion=lambda m: "Import from ../components/ instead of ../modules/.",
            fix=fix_modules_import,
        ),
        ErrorPattern(
            name="IMPORT_NOT_FOUND",
            regex=re.compile(r"""Could not resolve ["']([^"']+)["']""", re.IGNORECASE),
            severity=Severity.ERROR,
            category=ErrorCategory.IMPORT,
            suggestion=lambda m: (
                f'Module "{m.group(1)}" not found. Check import path or install package.'
            ),
        ),
        # Syntax errors
        ErrorPattern(
            name="UNTERMINATED_STRING",
            regex=re.compile(r"Unterminated string literal", re.IGNORECASE),
            severity=Severity.ERROR,
            category=ErrorCategory.SYNTAX,
        ),
        ErrorPattern(
            name="UNEXPECTED_TOKEN",
            regex=re.compile(r"Unexpected token", re.IGNORECASE),
            severity=Severity.ERROR,
            category=ErrorCategory.SYNTAX,
        ),
        # JSX errors
        ErrorPattern(
            name="JSX_UNCLOSED",
            regex=re.compile(r"Expected corresponding JSX closing tag for <(\w+)>", re.IGNORECASE),
            severity=Severity.ERROR,
            category=ErrorCategory.JSX,
            suggestion=lambda m: f"Add a closing tag for <{m.group(1)}>.",
        ),
        ErrorPattern(
            name="JSX_INVALID_CHILD",
            regex=re.compile(
                r"JSX element '(\w+)' has no corresponding closing tag", re.IGNORECASE
            ),
            severity=Severity.ERROR,
            category=ErrorCategory.JSX,
        ),
        # Framework (hooks/context) errors
        ErrorPattern(
            name="MISSING_PROVIDER",
            regex=re.compile(r"use\w+ must be used within|useContext.*null", re.IGNORECASE),
            severity=Severity.ERROR,
            category=ErrorCategory.FRAMEWORK,
            suggestion=lambda m: "Component using context is not wrapped in required Provider.",
        ),
        ErrorPattern(
            name="INVALID_HOOK_CALL",
            regex=re.compile(r"Invalid hook call", re.IGNORECASE),
            severity=Severity.ERROR,
            category=ErrorCategory.FRAMEWORK,
        ),
        # Icon errors
        ErrorPattern(
            name="INVALID_ICON",
            regex=re.compile(
                r"""export '(\w+)' was not found in 'lucide-react'"""
                r"""|"(\w+)" is not exported by "[^"]*lucide-react[^"]*\"""",
                re.IGNORECASE,
            ),
            severity=Severity.ERROR,
            category=ErrorCategory.ICON,
            auto_fixable=True,
            suggestion=lambda m: (
                f"'{_first_group(m)}' is not exported by {ICON_PACKAGE}; "
                f"it will be replaced with {FALLBACK_ICON}."
            ),
            fix=fix_missing_icon,
        ),
        # Style errors
        ErrorPattern(
            name="INVALID_CSS_VALUE",
            regex=re.compile(r"Invalid CSS value", re.IGNORECASE),
            severity=Severity.WARNING,
            category=ErrorCategory.STYLE,
        ),
    ]


def default_registry() -> PatternRegistry:
    """Build a fresh registry holding the standard pattern table."""
    return PatternRegistry(default_patterns())
