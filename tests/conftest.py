import json
from pathlib import Path

import pytest

from dataset_catalog.config import AppConfig
from dataset_catalog.main import create_app


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    root = tmp_path / "service"
    (root / "dataset").mkdir(parents=True)
    (root / "public").mkdir()
    return root


@pytest.fixture
def dataset_root(storage_root: Path) -> Path:
    return storage_root / "dataset"


@pytest.fixture
def config(storage_root: Path) -> AppConfig:
    return AppConfig(
        storage_root=storage_root.resolve(),
        dataset_root=(storage_root / "dataset").resolve(),
        public_dir=(storage_root / "public").resolve(),
    )


@pytest.fixture
def write_description(dataset_root: Path):
    """Write a description file below the dataset root and return its path."""

    def write(relative: str, payload) -> Path:
        path = dataset_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(payload, str):
            path.write_text(payload, encoding="utf-8")
        else:
            path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return write


@pytest.fixture
def client(config: AppConfig):
    app = create_app(config)
    app.config["TESTING"] = True
    return app.test_client()
