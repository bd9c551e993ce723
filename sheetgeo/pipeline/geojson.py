"""Record to GeoJSON point conversion and serialisation."""

from __future__ import annotations

import json
import math
import re
from typing import Any, Iterable, Sequence

from pyproj import CRS, Transformer

from sheetgeo.common.constants import EXCLUDED_FIELD_PREFIX, WGS84_EPSG
from sheetgeo.common.models import FeatureCollection, PointFeature, Record

_LEADING_FLOAT_RE = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_coordinate(value: Any) -> float:
    """Parse a coordinate cell, returning NaN for anything non-numeric.

    Strings are read up to the end of their leading number, so ``"20.5 N"``
    gives ``20.5``.
    """
    if isinstance(value, bool) or value is None:
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    match = _LEADING_FLOAT_RE.match(str(value))
    if match is None:
        return math.nan
    return float(match.group(0))


def _select_properties(
    record: Record,
    lat_field: str,
    lng_field: str,
    include_fields: Sequence[str],
) -> dict[str, Any]:
    if include_fields:
        return {key: record[key] for key in include_fields if key in record}
    return {
        key: value
        for key, value in record.items()
        if key not in (lat_field, lng_field) and not key.startswith(EXCLUDED_FIELD_PREFIX)
    }


def _wgs84_transformer(source_epsg: int) -> Transformer | None:
    if source_epsg == WGS84_EPSG:
        return None
    return Transformer.from_crs(CRS.from_epsg(source_epsg), CRS.from_epsg(WGS84_EPSG), always_xy=True)


def _finite_or_nan(value: float) -> float:
    return value if math.isfinite(value) else math.nan


def convert_records(
    records: Iterable[Record | None],
    lat_field: str,
    lng_field: str,
    collection_name: str,
    include_fields: Sequence[str] = (),
    *,
    source_epsg: int = WGS84_EPSG,
) -> FeatureCollection:
    transformer = _wgs84_transformer(source_epsg)
    features: list[PointFeature] = []
    for record in records:
        if record is None:
            continue
        latitude = parse_coordinate(record.get(lat_field))
        longitude = parse_coordinate(record.get(lng_field))
        if transformer is not None and math.isfinite(latitude) and math.isfinite(longitude):
            longitude, latitude = transformer.transform(longitude, latitude)
            longitude, latitude = _finite_or_nan(longitude), _finite_or_nan(latitude)
        features.append(
            PointFeature(
                longitude=longitude,
                latitude=latitude,
                properties=_select_properties(record, lat_field, lng_field, include_fields),
            )
        )
    return FeatureCollection(name=collection_name, features=tuple(features))


def count_invalid_coordinates(collection: FeatureCollection) -> int:
    return sum(
        1
        for feature in collection.features
        if not (math.isfinite(feature.longitude) and math.isfinite(feature.latitude))
    )


def _json_safe(value: Any) -> Any:
    # NaN/inf are not JSON; readers get null instead.
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_json_safe(item) for item in value]
    return value


def dumps_pretty(collection: FeatureCollection) -> str:
    return json.dumps(_json_safe(collection.to_dict()), ensure_ascii=False, indent=2, allow_nan=False)


def dumps_min(collection: FeatureCollection) -> str:
    return json.dumps(
        _json_safe(collection.to_dict()),
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )
