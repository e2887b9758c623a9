import argparse
import logging
import struct

import pytest

from imgtogif.log import set_loglevel, setup_custom_logger
from imgtogif.main import build_parser, main


def test_converts_local_file(tmp_path, png_bytes):
    source = tmp_path / "sunset.png"
    source.write_bytes(png_bytes(30, 20))
    out_dir = tmp_path / "out"

    assert main([str(source), "--width", "15", "-o", str(out_dir), "-q"]) == 0

    data = (out_dir / "sunset.gif").read_bytes()
    assert data[:6] == b"GIF89a"
    assert struct.unpack_from("<HH", data, 6) == (15, 10)
    assert data[-1] == 0x3B


def test_failure_returns_non_zero(tmp_path):
    source = tmp_path / "broken.png"
    source.write_bytes(b"not a png")
    assert main([str(source), "-o", str(tmp_path), "-q"]) == 1
    assert not (tmp_path / "broken.gif").exists()


@pytest.mark.parametrize("argv", [
    ["x.png", "--width", "0"],
    ["x.png", "--height", "-3"],
    ["x.png", "--transparent-index", "300"],
    ["x.png", "--resample", "sinc"],
    ["x.png", "-v", "-q"],
])
def test_parser_rejects_invalid_arguments(argv):
    with pytest.raises(SystemExit):
        build_parser().parse_args(argv)


def test_parser_defaults():
    args = build_parser().parse_args(["x.png"])
    assert args.width is None and args.height is None
    assert args.resample == "bilinear"
    assert args.transparent_index is None


def test_logger_setup_is_idempotent():
    logger = setup_custom_logger("imgtogif.tests.setup")
    assert setup_custom_logger("imgtogif.tests.setup") is logger
    assert len(logger.handlers) == 1


@pytest.mark.parametrize("quiet,verbose,level", [
    (True, False, logging.WARNING),
    (False, True, logging.DEBUG),
    (False, False, logging.INFO),
])
def test_set_loglevel(quiet, verbose, level):
    logger = logging.getLogger("imgtogif.tests.level")
    set_loglevel(logger, argparse.Namespace(quiet=quiet, verbose=verbose))
    assert logger.level == level
