"""Resolution of the root namespace bounding all discovery queries.

The scope is found by descending a source tree depth-first until the first
directory containing a regular file. That directory's path, relative to the
starting point and stripped of a conventional source root such as ``src``,
becomes a dotted module path:

    project/src/myapp/__init__.py  ->  "myapp"
    project/src/main/python/org/app/core.py  ->  "org.app"  (root "src/main/python")
"""

from pathlib import Path, PurePosixPath
from typing import Iterable, Optional, Union

from registrar.logging import get_logger

__all__ = ["DEFAULT_SOURCE_ROOTS", "resolve_scope"]

DEFAULT_SOURCE_ROOTS = ("src",)

logger = get_logger(__name__)


def resolve_scope(
    start: Union[str, Path], source_roots: Iterable[str] = DEFAULT_SOURCE_ROOTS
) -> Optional[str]:
    """Resolve the scope below ``start``.

    Args:
        start: Directory to descend from.
        source_roots: Path prefixes stripped from the front of the found
            directory, longest match first.

    Returns:
        The dotted scope, or None if no file is found, or if the first file sits
        directly in ``start`` or a source root.
    """
    start = Path(start)
    found = _first_directory_with_file(start)
    if found is None:
        logger.info("scope_unresolved", start=str(start), reason="no files found")
        return None

    parts = _strip_source_root(found.relative_to(start).parts, source_roots)
    if not parts:
        logger.info("scope_unresolved", start=str(start), reason="file at source root")
        return None

    scope = ".".join(parts)
    logger.info("scope_resolved", start=str(start), scope=scope)
    return scope


def _first_directory_with_file(directory: Path) -> Optional[Path]:
    if not directory.is_dir():
        return None

    entries = sorted(e for e in directory.iterdir() if not _ignored(e))
    if any(e.is_file() for e in entries):
        return directory

    for entry in entries:
        if entry.is_dir():
            found = _first_directory_with_file(entry)
            if found is not None:
                return found
    return None


def _ignored(entry: Path) -> bool:
    return entry.name.startswith(".") or entry.name == "__pycache__"


def _strip_source_root(parts: tuple[str, ...], source_roots: Iterable[str]) -> tuple[str, ...]:
    roots = sorted(
        (PurePosixPath(root).parts for root in source_roots), key=len, reverse=True
    )
    for root in roots:
        if root and parts[: len(root)] == root:
            return parts[len(root):]
    return parts
