"""Catalog configuration loading and validation."""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path

from pyproj import CRS
from pyproj.exceptions import CRSError

from sheetgeo.common.constants import (
    CATALOG_FILENAME,
    DEFAULT_LATITUDE_FIELD,
    DEFAULT_LONGITUDE_FIELD,
    WGS84_EPSG,
)
from sheetgeo.common.errors import ConfigError
from sheetgeo.common.fs import read_yaml
from sheetgeo.common.models import CatalogConfig, DatasetDescriptor
from sheetgeo.common.schema import validate_catalog_config


def _descriptor(entry: dict) -> DatasetDescriptor:
    try:
        epsg = int(entry.get("epsg", WGS84_EPSG))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid epsg for dataset {entry['name']!r}: {entry.get('epsg')!r}") from exc
    try:
        CRS.from_epsg(epsg)
    except CRSError as exc:
        raise ConfigError(f"Unknown epsg {epsg} for dataset {entry['name']!r}") from exc
    return DatasetDescriptor(
        identifier=str(entry["gid"]),
        name=str(entry["name"]),
        properties=tuple(str(p) for p in entry.get("properties") or ()),
        source_epsg=epsg,
    )


def load_catalog(config_dir: Path, *, allow_unknown: bool = False) -> CatalogConfig:
    path = config_dir / CATALOG_FILENAME
    if not path.exists():
        raise ConfigError(f"Missing catalog config: {path}")
    cfg = validate_catalog_config(read_yaml(path), allow_unknown=allow_unknown)

    fields = cfg.get("fields") or {}
    return CatalogConfig(
        base_url=str(cfg["source"]["base_url"]),
        latitude_field=str(fields.get("latitude", DEFAULT_LATITUDE_FIELD)),
        longitude_field=str(fields.get("longitude", DEFAULT_LONGITUDE_FIELD)),
        datasets=tuple(_descriptor(entry) for entry in cfg["datasets"]),
    )


def find_duplicate_identifiers(datasets: tuple[DatasetDescriptor, ...]) -> dict[str, list[str]]:
    """Map each identifier used by more than one dataset to those datasets' names."""
    names_by_id: dict[str, list[str]] = defaultdict(list)
    for dataset in datasets:
        names_by_id[dataset.identifier].append(dataset.name)
    return {identifier: names for identifier, names in names_by_id.items() if len(names) > 1}


def select_datasets(catalog: CatalogConfig, names: list[str] | None) -> tuple[DatasetDescriptor, ...]:
    if not names:
        return catalog.datasets
    known = {dataset.name for dataset in catalog.datasets}
    unknown = [name for name in names if name not in known]
    if unknown:
        raise ConfigError(f"Unknown datasets: {', '.join(unknown)}")
    wanted = set(names)
    return tuple(dataset for dataset in catalog.datasets if dataset.name in wanted)
