import os
from dataclasses import dataclass
from pathlib import Path

import yaml

DEFAULT_SUFFIX = "_description.json"
DEFAULT_PORT = 59023


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class AppConfig:
    storage_root: Path
    dataset_root: Path
    public_dir: Path
    description_suffix: str = DEFAULT_SUFFIX
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"


def _load_file_settings(path: Path) -> dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")
    return payload


def load_config() -> AppConfig:
    settings = _load_file_settings(Path(os.environ.get("CATALOG_CONFIG", "config/catalog.yaml")))

    def setting(env_name: str, key: str, default=None):
        value = os.environ.get(env_name)
        if value is not None:
            return value
        return settings.get(key, default)

    storage_root = Path(setting("STORAGE_ROOT", "storage_root", os.getcwd())).resolve()
    dataset_root = Path(setting("DATASET_ROOT", "dataset_root", storage_root / "dataset")).resolve()
    public_dir = Path(setting("PUBLIC_DIR", "public_dir", storage_root / "public")).resolve()

    suffix = str(setting("DESCRIPTION_SUFFIX", "description_suffix", DEFAULT_SUFFIX))
    if not suffix:
        raise ConfigError("DESCRIPTION_SUFFIX must not be empty")

    raw_port = setting("PORT", "port", DEFAULT_PORT)
    try:
        port = int(raw_port)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid port: {raw_port!r}") from exc

    return AppConfig(
        storage_root=storage_root,
        dataset_root=dataset_root,
        public_dir=public_dir,
        description_suffix=suffix,
        host=str(setting("HOST", "host", "0.0.0.0")),
        port=port,
        log_level=str(setting("LOG_LEVEL", "log_level", "INFO")).upper(),
    )
