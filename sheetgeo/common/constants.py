"""Application constants."""

from pathlib import Path

USER_AGENT = "sheetgeo/1.0 (+sheet-geojson-cache)"
REPO_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_DIR = REPO_ROOT / "config"
DEFAULT_CACHE_DIR = REPO_ROOT / "data"
CATALOG_FILENAME = "datasets.yml"
LOG_FILENAME = "debug-log.txt"
DEFAULT_LATITUDE_FIELD = "Latitude"
DEFAULT_LONGITUDE_FIELD = "Longitude"
EXCLUDED_FIELD_PREFIX = "-"
CRS84_URN = "urn:ogc:def:crs:OGC:1.3:CRS84"
WGS84_EPSG = 4326
DIRTY_DATA_MARKERS = (
    ("#REF!", "#REF!"),
    ("Loading", "Loading..."),
)
EXIT_SUCCESS = 0
EXIT_HARD_FAIL = 1
