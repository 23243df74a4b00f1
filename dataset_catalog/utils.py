from pathlib import Path


def resolve_within(root: Path, candidate: str | Path | None) -> Path | None:
    # Symlinks are resolved before the containment check.
    if candidate is None or str(candidate).strip() == "":
        return None
    try:
        base = Path(root).resolve()
        target = (base / candidate).resolve()
    except (OSError, RuntimeError, ValueError):
        return None
    if target != base and base not in target.parents:
        return None
    return target


def exists_within(root: Path, candidate: str | Path | None) -> bool:
    target = resolve_within(root, candidate)
    if target is None:
        return False
    try:
        return target.exists()
    except OSError:
        return False


def relative_posix(path: Path, root: Path) -> str:
    return Path(path).relative_to(root).as_posix()
