"""Content hashing and the in-memory cache of validated trees."""

import hashlib
import time
from collections.abc import Iterable
from pathlib import Path

from common.constants import SOURCE_DIR

from .constants import SCRIPT_EXTENSIONS, SOURCE_EXTENSIONS, STYLE_EXTENSIONS
from .file_utils import find_source_files, relative_to
from .models import CacheEntry


def compute_hash(
    tree: Path,
    target_dirs: Iterable[str] = (SOURCE_DIR,),
    extensions: tuple[str, ...] = SOURCE_EXTENSIONS,
) -> str:
    """
    Fingerprint the content of a tree's relevant files.

    Each file's relative path and bytes are hashed together, and the per-file
    digests are hashed again in traversal order. Renames therefore change the
    hash; timestamps never do.

    Args:
        tree: Root of the source tree
        target_dirs: Sub-directories to include, in order
        extensions: File suffixes to include

    Returns:
        Hex SHA256 digest
    """
    digests: list[str] = []
    for target in target_dirs:
        for file_path in find_source_files(tree / target, extensions):
            digest = hashlib.sha256(relative_to(file_path, tree).encode("utf-8") + b"\0")
            digest.update(file_path.read_bytes())
            digests.append(digest.hexdigest())

    return hashlib.sha256("".join(digests).encode("utf-8")).hexdigest()


def snapshot(tree: Path, target_dirs: Iterable[str] = (SOURCE_DIR,)) -> CacheEntry:
    """Hash a tree twice (everything, and only the build-affecting scripts) and list its stylesheets."""
    target_dirs = tuple(target_dirs)
    return CacheEntry(
        hash=compute_hash(tree, target_dirs, SOURCE_EXTENSIONS),
        script_hash=compute_hash(tree, target_dirs, SCRIPT_EXTENSIONS),
        timestamp=time.time(),
        stylesheets=tuple(
            relative_to(path, tree)
            for target in target_dirs
            for path in find_source_files(tree / target, STYLE_EXTENSIONS)
        ),
    )


class ContentHashCache:
    """Last successfully built hashes, keyed by tree location.

    Not locked: callers serialize audits that target the same tree.
    """

    def __init__(self):
        self._entries: dict[str, CacheEntry] = {}

    @staticmethod
    def _key(tree: Path) -> str:
        return str(Path(tree).resolve())

    def get(self, tree: Path) -> CacheEntry | None:
        return self._entries.get(self._key(tree))

    def set(self, tree: Path, entry: CacheEntry) -> None:
        self._entries[self._key(tree)] = entry

    def invalidate(self, tree: Path) -> None:
        self._entries.pop(self._key(tree), None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
