"""Sequential fetch, cache and verification over the dataset catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from sheetgeo.common.config_loader import find_duplicate_identifiers
from sheetgeo.common.http import HttpClient, dataset_url
from sheetgeo.common.logging import log_event
from sheetgeo.common.models import CatalogConfig, DatasetDescriptor
from sheetgeo.pipeline.fetch_cache import CacheArtifacts, artifact_paths, fetch_and_cache
from sheetgeo.pipeline.verify import verify_clean_data


@dataclass
class BatchResult:
    artifacts: list[CacheArtifacts] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def run_batch(
    catalog: CatalogConfig,
    cache_dir: Path,
    *,
    client: HttpClient,
    logger: logging.Logger,
    datasets: tuple[DatasetDescriptor, ...] | None = None,
    strict: bool = False,
) -> BatchResult:
    """Fetch every dataset in order, then verify every cached CSV.

    Errors while fetching propagate immediately; nothing after the failing
    dataset is fetched or verified.
    """
    selected = catalog.datasets if datasets is None else datasets
    result = BatchResult()

    for identifier, names in find_duplicate_identifiers(selected).items():
        log_event(
            logger,
            f"Identifier {identifier} is shared by {len(names)} datasets: {', '.join(names)}",
            level=logging.WARNING,
        )

    for dataset in selected:
        artifacts = fetch_and_cache(
            dataset,
            dataset_url(catalog.base_url, dataset.identifier),
            cache_dir,
            client=client,
            logger=logger,
            latitude_field=catalog.latitude_field,
            longitude_field=catalog.longitude_field,
            strict=strict,
        )
        result.artifacts.append(artifacts)
        log_event(logger, f"Finished generating {dataset.name}")
    log_event(logger, "File Caching finished")

    for dataset in selected:
        warning = verify_clean_data(artifact_paths(dataset, cache_dir).csv_path)
        if warning is not None:
            result.warnings.append(warning)
            log_event(logger, warning, level=logging.WARNING)
        log_event(logger, f"Finished checking {dataset.name}")
    log_event(logger, "File Checking finished")

    return result
