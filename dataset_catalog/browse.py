import logging
from dataclasses import dataclass
from pathlib import Path

from dataset_catalog.filesystem import DirEntry, list_dir
from dataset_catalog.utils import resolve_within

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Listing:
    directory: str
    entries: list[DirEntry]


def browse(storage_root: Path, declared_path: str | None) -> Listing | None:
    """Single-level listing for a declared storage path, ``None`` if not found.

    A path naming a file lists the directory that contains it.
    """
    target = resolve_within(storage_root, declared_path)
    try:
        found = target is not None and target.exists()
        directory = target if found and target.is_dir() else None
    except OSError:
        found = False
    if not found:
        logger.info("Browse target rejected or missing: %r", declared_path)
        return None
    if directory is None:
        directory = target.parent
    root = storage_root.resolve()
    name = directory.relative_to(root).as_posix()
    return Listing(directory=name, entries=list_dir(directory, root))
