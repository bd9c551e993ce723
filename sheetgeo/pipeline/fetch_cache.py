"""Fetch one published tab and cache its CSV and GeoJSON artifacts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from sheetgeo.common.constants import DEFAULT_LATITUDE_FIELD, DEFAULT_LONGITUDE_FIELD
from sheetgeo.common.errors import CoordinateError
from sheetgeo.common.fs import ensure_dir, write_text
from sheetgeo.common.http import HttpClient
from sheetgeo.common.logging import log_event
from sheetgeo.common.models import DatasetDescriptor
from sheetgeo.pipeline.csv_parse import parse_csv
from sheetgeo.pipeline.geojson import convert_records, count_invalid_coordinates, dumps_min, dumps_pretty


@dataclass(frozen=True)
class CacheArtifacts:
    csv_path: Path
    geojson_path: Path
    min_geojson_path: Path


def artifact_paths(dataset: DatasetDescriptor, cache_dir: Path) -> CacheArtifacts:
    stem = dataset.file_stem
    return CacheArtifacts(
        csv_path=cache_dir / f"{stem}.csv",
        geojson_path=cache_dir / f"{stem}.geojson",
        min_geojson_path=cache_dir / f"{stem}.min.geojson",
    )


def fetch_and_cache(
    dataset: DatasetDescriptor,
    source_url: str,
    cache_dir: Path,
    *,
    client: HttpClient,
    logger: logging.Logger,
    latitude_field: str = DEFAULT_LATITUDE_FIELD,
    longitude_field: str = DEFAULT_LONGITUDE_FIELD,
    strict: bool = False,
) -> CacheArtifacts:
    csv_text = client.get_text(source_url)

    records = parse_csv(csv_text)
    collection = convert_records(
        records,
        latitude_field,
        longitude_field,
        dataset.layer_name,
        dataset.properties,
        source_epsg=dataset.source_epsg,
    )

    invalid = count_invalid_coordinates(collection)
    if invalid:
        message = f"{invalid} of {len(collection.features)} rows in {dataset.name} have non-numeric coordinates"
        if strict:
            raise CoordinateError(message)
        log_event(logger, message, level=logging.WARNING)

    paths = artifact_paths(dataset, cache_dir)
    ensure_dir(cache_dir)
    write_text(paths.csv_path, csv_text)
    write_text(paths.geojson_path, dumps_pretty(collection))
    write_text(paths.min_geojson_path, dumps_min(collection))
    return paths
