from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, Callable

from dataset_catalog.utils import exists_within, relative_posix

Rule = Callable[[dict], Any]


def field(*keys: str) -> Rule:
    def rule(data: dict) -> Any:
        value: Any = data
        for key in keys:
            if not isinstance(value, dict):
                return None
            value = value.get(key)
        return value

    rule.__name__ = ".".join(keys)
    return rule


# Ordered per field; the first rule yielding an acceptable value wins.
FIELD_RULES: dict[str, tuple[Rule, ...]] = {
    "id": (field("id"),),
    "name": (field("dataset", "name"),),
    "crop": (field("dataset", "crop"),),
    "cropCode": (field("dataset", "cropCode"),),
    "version": (field("version"),),
    "type": (field("dataset", "type"), field("dataType", "type")),
    "numberOfData": (
        field("numberOfData"),
        field("dataType", "numberOfPhenotype"),
        field("dataType", "numberOfSNP"),
    ),
    "numberOfPhenotype": (field("numberOfPhenotype"), field("dataType", "numberOfPhenotype")),
    "informationOfGenotypeGb": (
        field("informationOfGenotypeGb"),
        field("dataType", "informationOfGenotypeGb"),
    ),
    "dataType": (field("dataType", "type"),),
    "storage": (field("storage", "locationOfFile"),),
    "generatedAt": (field("generatedAt"),),
    "relatedGenotype": (field("relatedGenotype"),),
}


def as_text(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value) if value else None
    if isinstance(value, str) and value:
        return value
    return None


def as_number(value: Any) -> int | float | None:
    # JSON booleans decode to bool, which is an int subclass.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def as_reference(value: Any) -> dict[str, Any] | None:
    if not isinstance(value, dict) or not value:
        return None
    return {"name": value.get("name"), "type": value.get("type")}


def resolve(data: dict, name: str, accept: Callable[[Any], Any], default: Any = None) -> Any:
    for rule in FIELD_RULES[name]:
        value = accept(rule(data))
        if value is not None:
            return value
    return default


@dataclass(frozen=True)
class DatasetSummary:
    id: str
    name: str
    crop: str
    crop_code: str
    type: str
    version: str
    subtitle: str
    number_of_data: int | float | None
    number_of_phenotype: int | float | None
    information_of_genotype_gb: int | float | None
    data_type: str | None
    storage_path: str
    storage_browse_path: str | None
    storage_file_available: bool
    generated_at: str | None
    related_genotype: dict[str, Any] | None
    file_path: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "crop": self.crop,
            "cropCode": self.crop_code,
            "type": self.type,
            "version": self.version,
            "subtitle": self.subtitle,
            "numberOfData": self.number_of_data,
            "numberOfPhenotype": self.number_of_phenotype,
            "informationOfGenotypeGb": self.information_of_genotype_gb,
            "dataType": self.data_type,
            "storagePath": self.storage_path,
            "storageBrowsePath": self.storage_browse_path,
            "storageFileAvailable": self.storage_file_available,
            "generatedAt": self.generated_at,
            "relatedGenotype": self.related_genotype,
            "filePath": self.file_path,
        }


def subtitle_for(relative_path: str, version: str | None) -> str:
    # Only meaningful for the <crop>/<kind>/<group>/.../<file> layout.
    segments = PurePosixPath(relative_path).parts
    detail = " / ".join(segment for segment in segments[3:-1] if segment)
    return detail or version or ""


def normalize(
    data: dict,
    file_path: Path,
    dataset_root: Path,
    storage_root: Path | None = None,
) -> DatasetSummary:
    # Declared storage resolves against storage_root, the fallback against dataset_root.
    if storage_root is None:
        storage_root = dataset_root.parent
    relative_path = relative_posix(file_path, dataset_root)
    raw_version = resolve(data, "version", as_text)

    declared_storage = resolve(data, "storage", as_text)
    if declared_storage:
        storage_path = declared_storage
        storage_file_available = exists_within(storage_root, declared_storage)
    else:
        storage_path = str(PurePosixPath(relative_path).parent)
        storage_file_available = exists_within(dataset_root, storage_path)

    return DatasetSummary(
        id=resolve(data, "id", as_text, file_path.name),
        name=resolve(data, "name", as_text, "Unnamed dataset"),
        crop=resolve(data, "crop", as_text, "Unknown crop"),
        crop_code=resolve(data, "cropCode", as_text, ""),
        type=resolve(data, "type", as_text, "unknown"),
        version=raw_version or "N/A",
        subtitle=subtitle_for(relative_path, raw_version),
        number_of_data=resolve(data, "numberOfData", as_number),
        number_of_phenotype=resolve(data, "numberOfPhenotype", as_number),
        information_of_genotype_gb=resolve(data, "informationOfGenotypeGb", as_number),
        data_type=resolve(data, "dataType", as_text),
        storage_path=storage_path,
        storage_browse_path=declared_storage,
        storage_file_available=storage_file_available,
        generated_at=resolve(data, "generatedAt", as_text),
        related_genotype=resolve(data, "relatedGenotype", as_reference),
        file_path=relative_path,
    )
