"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from sheetgeo.common.errors import ConfigError


def _assert_mapping(obj: object, ctx: str) -> dict:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")
    return obj


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def validate_catalog_config(cfg: object, *, allow_unknown: bool = False) -> dict:
    cfg = _assert_mapping(cfg, "catalog config")
    top_required = {"source", "datasets"}
    top_known = top_required | {"fields"}
    _assert_required_keys(cfg, top_required, "catalog config")
    _assert_no_unknown_keys(cfg, top_known, "catalog config", allow_unknown)

    _assert_required_keys(_assert_mapping(cfg["source"], "source"), {"base_url"}, "source")
    if "fields" in cfg:
        fields = _assert_mapping(cfg["fields"], "fields")
        _assert_no_unknown_keys(fields, {"latitude", "longitude"}, "fields", allow_unknown)

    if not isinstance(cfg["datasets"], list) or not cfg["datasets"]:
        raise ConfigError("datasets must be a non-empty list")

    for idx, entry in enumerate(cfg["datasets"]):
        ctx = f"datasets[{idx}]"
        entry = _assert_mapping(entry, ctx)
        _assert_required_keys(entry, {"gid", "name"}, ctx)
        _assert_no_unknown_keys(entry, {"gid", "name", "properties", "epsg"}, ctx, allow_unknown)
        if not str(entry["name"]).strip():
            raise ConfigError(f"{ctx}.name must not be blank")
        if "properties" in entry and not isinstance(entry["properties"], list):
            raise ConfigError(f"{ctx}.properties must be a list")

    return cfg
