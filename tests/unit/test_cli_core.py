from sheetgeo.cli import parse_args
from sheetgeo.common.constants import DEFAULT_CACHE_DIR, DEFAULT_CONFIG_DIR


def test_parse_args_defaults():
    args = parse_args([])
    assert args.config_dir == str(DEFAULT_CONFIG_DIR)
    assert args.data_dir == str(DEFAULT_CACHE_DIR)
    assert args.datasets is None
    assert args.strict is False


def test_parse_args_repeatable_dataset():
    args = parse_args(["--dataset", "Hospitals", "--dataset", "Schools", "--strict"])
    assert args.datasets == ["Hospitals", "Schools"]
    assert args.strict is True
