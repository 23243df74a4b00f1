import json
import logging
from pathlib import Path
from typing import Any

from dataset_catalog.config import AppConfig
from dataset_catalog.filesystem import build_tree, find_descriptions
from dataset_catalog.normalizer import DatasetSummary, normalize

logger = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    pass


class DescriptionError(ValueError):
    pass


def load_description(path: Path) -> dict:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DescriptionError(f"{path}: {exc}") from exc
    if not isinstance(data, dict):
        raise DescriptionError(f"{path}: top-level JSON value is not an object")
    return data


def load_summaries(dataset_root: Path, storage_root: Path, suffix: str) -> list[DatasetSummary]:
    # Unreadable or malformed files are logged and left out.
    summaries: list[DatasetSummary] = []
    for path in find_descriptions(dataset_root, suffix):
        try:
            data = load_description(path)
        except DescriptionError as exc:
            logger.warning("Skipping description file: %s", exc)
            continue
        summaries.append(normalize(data, path, dataset_root, storage_root))
    return sorted(summaries, key=lambda summary: summary.name.lower())


def build_catalog(config: AppConfig) -> dict[str, Any]:
    dataset_root = config.dataset_root
    try:
        summaries = load_summaries(dataset_root, config.storage_root, config.description_suffix)
        tree = build_tree(dataset_root, dataset_root)
    except OSError as exc:
        raise CatalogError(f"Failed to scan {dataset_root}") from exc
    logger.debug("Catalog built with %d datasets", len(summaries))
    return {"datasets": [summary.to_dict() for summary in summaries], "tree": tree}
