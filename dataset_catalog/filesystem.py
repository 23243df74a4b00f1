import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

from dataset_catalog.utils import relative_posix


@dataclass(frozen=True)
class DirEntry:
    name: str
    path: str
    is_dir: bool
    size: int | None


def _sort_key(item: Path) -> tuple[bool, str]:
    return (not item.is_dir(), item.name.lower())


def _descend(item: Path) -> bool:
    # Symlinked directories are shown but never walked.
    return item.is_dir() and not item.is_symlink()


def list_dir(target: Path, root: Path) -> list[DirEntry]:
    entries: list[DirEntry] = []
    for entry in sorted(target.iterdir(), key=_sort_key):
        entries.append(
            DirEntry(
                name=entry.name,
                path=relative_posix(entry, root),
                is_dir=entry.is_dir(),
                size=entry.stat().st_size if entry.is_file() else None,
            )
        )
    return entries


def build_tree(directory: Path, root: Path) -> list[dict[str, Any]]:
    """Recursively describe ``directory`` as nested nodes.

    Entries are stat'ed directly, so an unreadable directory, a dangling
    symlink or an entry vanishing mid-walk fails the whole build.
    """
    nodes: list[dict[str, Any]] = []
    for entry in directory.iterdir():
        is_dir = stat.S_ISDIR(entry.stat().st_mode)
        node: dict[str, Any] = {
            "name": entry.name,
            "path": relative_posix(entry, root),
            "type": "directory" if is_dir else "file",
        }
        if is_dir:
            node["children"] = [] if entry.is_symlink() else build_tree(entry, root)
        nodes.append(node)
    return sorted(nodes, key=lambda node: (node["type"] != "directory", node["name"].lower()))


def iter_descriptions(directory: Path, suffix: str) -> Iterator[Path]:
    for entry in directory.iterdir():
        if _descend(entry):
            yield from iter_descriptions(entry, suffix)
        elif entry.name.endswith(suffix) and entry.is_file() and not entry.is_symlink():
            yield entry


def find_descriptions(directory: Path, suffix: str) -> list[Path]:
    return list(iter_descriptions(directory, suffix))
