"""Data models used across the pipeline."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Union

from sheetgeo.common.constants import CRS84_URN, WGS84_EPSG

CellValue = Union[str, int, float, bool, None]
Record = dict[str, Any]


@dataclass(frozen=True)
class DatasetDescriptor:
    identifier: str
    name: str
    properties: tuple[str, ...] = ()
    source_epsg: int = WGS84_EPSG

    @property
    def file_stem(self) -> str:
        return re.sub(r"\s", "-", self.name)

    @property
    def layer_name(self) -> str:
        # Only the first space is dashed; published layer names depend on it.
        return self.name.lower().replace(" ", "-", 1)


@dataclass(frozen=True)
class CatalogConfig:
    base_url: str
    latitude_field: str
    longitude_field: str
    datasets: tuple[DatasetDescriptor, ...]


@dataclass(frozen=True)
class PointFeature:
    longitude: float
    latitude: float
    properties: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "Feature",
            "geometry": {
                "type": "Point",
                "coordinates": [self.longitude, self.latitude],
            },
            "properties": dict(self.properties),
        }


@dataclass(frozen=True)
class FeatureCollection:
    name: str
    features: tuple[PointFeature, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "FeatureCollection",
            "name": self.name,
            "crs": {"type": "name", "properties": {"name": CRS84_URN}},
            "features": [feature.to_dict() for feature in self.features],
        }
