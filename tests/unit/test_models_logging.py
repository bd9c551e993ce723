import logging
import re
from pathlib import Path

from sheetgeo.common.logging import build_logger, close_logger, log_event
from sheetgeo.common.models import DatasetDescriptor


def test_dataset_file_stem_and_layer_name():
    dataset = DatasetDescriptor(identifier="396287298", name="Civil Supplies Godowns")

    assert dataset.file_stem == "Civil-Supplies-Godowns"
    assert dataset.layer_name == "civil-supplies godowns"


def test_build_logger_truncates_and_formats(tmp_path: Path):
    log_path = tmp_path / "debug-log.txt"
    log_path.write_text("stale\n", encoding="utf-8")

    logger = build_logger(tmp_path)
    log_event(logger, "Finished generating Hospitals")
    log_event(logger, "ERROR: boom", level=logging.ERROR, data="Traceback line")
    log_event(logger, "details", data={"rows": 2})
    close_logger(logger)

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert "stale" not in lines
    assert re.match(r"^\[\d{4}-\d{2}-\d{2}T[\d:.]+\+00:00\] Debug logging initialized$", lines[0])
    assert lines[1].endswith("] Finished generating Hospitals")
    assert lines[2].endswith("] ERROR: boom")
    assert lines[3] == "Traceback line"
    assert lines[4].endswith("] details")
    assert lines[5:] == ["{", '  "rows": 2', "}"]
