"""Deterministic discovery of source files in a generated tree."""

from pathlib import Path

from common.constants import IGNORED_DIRS


def find_source_files(directory: Path, extensions: tuple[str, ...]) -> list[Path]:
    """
    Recursively list files with the given extensions.

    Entries are visited in lexicographic order at every level, so the result
    is identical across runs and platforms. Dot-directories and dependency
    directories are skipped.

    Args:
        directory: Directory to walk
        extensions: File suffixes to keep, e.g. (".jsx", ".css")

    Returns:
        Matching files, depth-first in sorted order (empty if directory is missing)
    """
    if not directory.is_dir():
        return []

    files: list[Path] = []
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            if entry.name.startswith(".") or entry.name in IGNORED_DIRS:
                continue
            files.extend(find_source_files(entry, extensions))
        elif entry.is_file() and entry.name.endswith(extensions):
            files.append(entry)

    return files


def relative_to(path: Path, root: Path) -> str:
    """Path of a file relative to a tree root, with forward slashes."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()
