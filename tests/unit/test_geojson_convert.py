import json
import math

from pyproj import Transformer

from sheetgeo.common.constants import CRS84_URN
from sheetgeo.pipeline.csv_parse import parse_csv
from sheetgeo.pipeline.geojson import (
    convert_records,
    count_invalid_coordinates,
    dumps_min,
    dumps_pretty,
    parse_coordinate,
)


def test_convert_end_to_end_example():
    records = parse_csv("Latitude,Longitude,Name\n20.5,85.8,Alpha\n21.0,86.0,Beta\n")

    payload = convert_records(records, "Latitude", "Longitude", "test").to_dict()

    assert payload["type"] == "FeatureCollection"
    assert payload["name"] == "test"
    assert payload["crs"] == {"type": "name", "properties": {"name": CRS84_URN}}
    assert [f["geometry"]["coordinates"] for f in payload["features"]] == [[85.8, 20.5], [86.0, 21.0]]
    assert [f["properties"] for f in payload["features"]] == [{"Name": "Alpha"}, {"Name": "Beta"}]
    assert payload["features"][0]["geometry"]["type"] == "Point"


def test_coordinates_are_longitude_first_without_bounds_checks():
    collection = convert_records([{"lat": 95.0, "lng": -200.0}], "lat", "lng", "x")

    assert collection.to_dict()["features"][0]["geometry"]["coordinates"] == [-200.0, 95.0]


def test_default_properties_exclude_coordinates_and_dash_fields():
    record = {"Latitude": 1, "Longitude": 2, "-internal": "x", "Name": "A", "Notes-ok": "y"}

    props = convert_records([record], "Latitude", "Longitude", "x").features[0].properties

    assert props == {"Name": "A", "Notes-ok": "y"}


def test_include_fields_take_precedence_and_keep_given_order():
    record = {"Latitude": 1, "Longitude": 2, "-internal": "x", "Name": "A", "Count": 3}

    props = convert_records(
        [record], "Latitude", "Longitude", "x", include_fields=["Count", "-internal", "Latitude", "Missing"]
    ).features[0].properties

    assert list(props) == ["Count", "-internal", "Latitude"]
    assert props == {"Count": 3, "-internal": "x", "Latitude": 1}


def test_feature_order_follows_records_and_none_records_are_dropped():
    records = [{"lat": i, "lng": i, "id": i} for i in range(5)]
    records.insert(2, None)

    ids = [f.properties["id"] for f in convert_records(records, "lat", "lng", "x").features]

    assert ids == [0, 1, 2, 3, 4]


def test_parse_coordinate_behaviour():
    assert parse_coordinate(20) == 20.0
    assert parse_coordinate("20.5 N") == 20.5
    assert parse_coordinate(" -3e1") == -30.0
    assert math.isnan(parse_coordinate(None))
    assert math.isnan(parse_coordinate(True))
    assert math.isnan(parse_coordinate("Loading..."))


def test_non_numeric_coordinates_become_nan_and_serialise_as_null():
    collection = convert_records([{"Latitude": "n/a", "Name": "A"}], "Latitude", "Longitude", "x")

    assert count_invalid_coordinates(collection) == 1
    assert math.isnan(collection.features[0].longitude)
    assert json.loads(dumps_min(collection))["features"][0]["geometry"]["coordinates"] == [None, None]


def test_pretty_and_minified_documents_are_equal():
    records = parse_csv("Latitude,Longitude,Name,Open\n20.5,85.8,Ālpha,TRUE\n,x,Beta,\n")
    collection = convert_records(records, "Latitude", "Longitude", "test")

    pretty = dumps_pretty(collection)
    minified = dumps_min(collection)

    assert json.loads(pretty) == json.loads(minified)
    assert "\n  " in pretty
    assert " " not in minified
    assert "Ālpha" in minified


def test_projected_source_is_reprojected_to_lon_lat():
    x, y = Transformer.from_crs("EPSG:4326", "EPSG:3857", always_xy=True).transform(85.8, 20.5)

    feature = convert_records([{"lat": y, "lng": x}], "lat", "lng", "x", source_epsg=3857).features[0]

    assert abs(feature.longitude - 85.8) < 1e-6
    assert abs(feature.latitude - 20.5) < 1e-6
