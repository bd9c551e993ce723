"""CLI entrypoint for the spreadsheet to GeoJSON cache."""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path

from sheetgeo.common.config_loader import load_catalog, select_datasets
from sheetgeo.common.constants import DEFAULT_CACHE_DIR, DEFAULT_CONFIG_DIR, EXIT_HARD_FAIL, EXIT_SUCCESS
from sheetgeo.common.errors import PipelineError
from sheetgeo.common.http import HttpClient
from sheetgeo.common.logging import build_logger, close_logger, log_event
from sheetgeo.pipeline.batch import run_batch


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config-dir", default=str(DEFAULT_CONFIG_DIR))
    parser.add_argument("--data-dir", default=str(DEFAULT_CACHE_DIR))
    parser.add_argument("--dataset", action="append", default=None, dest="datasets")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--strict", action="store_true")
    return parser.parse_args(argv)


def run_command(args: argparse.Namespace) -> int:
    data_dir = Path(args.data_dir)
    try:
        logger = build_logger(data_dir, level=args.log_level)
    except PipelineError as exc:
        print(f"ERROR: [{exc.error_code}] {exc}", file=sys.stderr)
        traceback.print_exc()
        return EXIT_HARD_FAIL
    try:
        catalog = load_catalog(Path(args.config_dir))
        datasets = select_datasets(catalog, args.datasets)
        with HttpClient() as client:
            run_batch(catalog, data_dir, client=client, logger=logger, datasets=datasets, strict=args.strict)
    except Exception as exc:
        error_code = exc.error_code if isinstance(exc, PipelineError) else "UNEXPECTED_ERROR"
        log_event(logger, f"ERROR: [{error_code}] {exc}", level=logging.ERROR, data=traceback.format_exc())
        return EXIT_HARD_FAIL
    finally:
        close_logger(logger)
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        return run_command(args)
    except PipelineError:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
