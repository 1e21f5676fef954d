"""Add icon imports that generated pages use but forgot to import."""

import re

from ..constants import ICON_PACKAGE, JSX_EXTENSIONS, KNOWN_ICONS

# A JSX opening tag; generics such as useState<User> or Array<Star> follow an identifier
JSX_TAG_RE = re.compile(r"(?<![\w$.:])<([A-Z][a-zA-Z0-9]+)[\s/>]")
NAMED_IMPORT_RE = re.compile(r"import\s+(?:(\w+)\s*,?\s*)?(?:\*\s+as\s+(\w+)\s*)?(?:\{([^}]*)\})?\s*from\s")
LOCAL_DEFINITION_RE = re.compile(r"\b(?:function|const|let|var|class|interface|type|enum)\s+([A-Z]\w*)\b")
ICON_IMPORT_RE = re.compile(
    r"""import\s*\{([^}]*)\}\s*from\s*(['"])""" + re.escape(ICON_PACKAGE) + r"""\2"""
)
FIRST_IMPORT_RE = re.compile(r"^import\s", re.MULTILINE)


def imported_names(content: str) -> set[str]:
    """Every local name bound by an import statement."""
    names: set[str] = set()
    for match in NAMED_IMPORT_RE.finditer(content):
        default_name, namespace, braces = match.groups()
        if default_name:
            names.add(default_name)
        if namespace:
            names.add(namespace)
        for spec in (braces or "").split(","):
            spec = spec.strip()
            if not spec:
                continue
            base, _, alias = spec.partition(" as ")
            names.add((alias or base).strip())
    return names


def used_icons(content: str) -> set[str]:
    """Known icon components rendered as JSX tags."""
    return {name for name in JSX_TAG_RE.findall(content) if name in KNOWN_ICONS}


class MissingIconImportRule:
    """Adds missing icon imports.

    An icon counts as missing when it is rendered but neither imported from
    any module nor defined in the file.
    """

    NAME = "MISSING_ICON_IMPORTS"
    DESCRIPTION = "Added missing icon imports"
    EXTENSIONS = JSX_EXTENSIONS

    def apply(self, content: str) -> str:
        missing = sorted(
            used_icons(content)
            - imported_names(content)
            - set(LOCAL_DEFINITION_RE.findall(content))
        )
        if not missing:
            return content

        icon_import = ICON_IMPORT_RE.search(content)
        if icon_import:
            current = [n.strip() for n in icon_import.group(1).split(",") if n.strip()]
            quote = icon_import.group(2)
            statement = (
                f"import {{ {', '.join(current + missing)} }} from {quote}{ICON_PACKAGE}{quote}"
            )
            return content[: icon_import.start()] + statement + content[icon_import.end() :]

        statement = f"import {{ {', '.join(missing)} }} from '{ICON_PACKAGE}';\n"
        first_import = FIRST_IMPORT_RE.search(content)
        if first_import:
            return content[: first_import.start()] + statement + content[first_import.start() :]
        return statement + content
