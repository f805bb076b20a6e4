"""Tests for CLI argument handling."""

import os
import unittest
from unittest import mock

import imageio.v3 as iio
import numpy as np
import pytest

from puretex import cli
from puretex.convert import ConvertOptions


@pytest.fixture(autouse=True)
def _no_logging_setup():
    with mock.patch("puretex.cli.setup_logging") as setup:
        yield setup


def test_converts_files_and_returns_zero(tmp_path, rgba_image, write_png):
    source = write_png(rgba_image, "face.png")
    assert cli.main([source]) == 0
    assert (tmp_path / "face.tex").exists()


def test_output_dir_and_overwrite_are_passed(tmp_path):
    with mock.patch("puretex.cli.convert_paths", return_value=[]) as convert_paths:
        cli.main([str(tmp_path), "-o", "out", "--overwrite"])
    convert_paths.assert_called_once_with([str(tmp_path)], ConvertOptions(output_dir="out", overwrite=True))


def test_failure_sets_exit_status(tmp_path, make_tex):
    (tmp_path / "short.tex").write_bytes(make_tex(b"", fmt=10, payload_size=64))
    assert cli.main([str(tmp_path)]) == 1


def test_skips_do_not_fail(tmp_path):
    (tmp_path / "readme.txt").write_text("hello")
    (tmp_path / "bad.tex").write_bytes(b"nope")
    assert cli.main([str(tmp_path)]) == 0


def test_verbosity_flags(tmp_path, _no_logging_setup):
    cli.main([str(tmp_path), "-v"])
    _no_logging_setup.assert_called_with("DEBUG")
    cli.main([str(tmp_path), "-q"])
    _no_logging_setup.assert_called_with("ERROR")
    cli.main([str(tmp_path)])
    _no_logging_setup.assert_called_with("INFO")


def test_info_prints_header(tmp_path, make_tex, png_bytes, capsys):
    path = tmp_path / "face.tex"
    path.write_bytes(make_tex(png_bytes, version=1011, width=7, height=5, rects=[(0, 0, 1, 1)]))
    assert cli.main([str(path), "--info"]) == 0

    out = capsys.readouterr().out
    assert "TEX File Information:" in out
    assert "Version: 1011" in out
    assert "Dimensions: 7x5" in out
    assert not (tmp_path / "face.png").exists()


def test_info_reports_bad_files(tmp_path, capsys):
    (tmp_path / "bad.tex").write_bytes(b"nope")
    assert cli.main([str(tmp_path), "--info"]) == 1
    assert "Error parsing" in capsys.readouterr().out


class TestArgumentErrors(unittest.TestCase):
    def test_paths_required(self):
        with self.assertRaises(SystemExit):
            cli.main([])

    def test_verbose_and_quiet_are_exclusive(self):
        with self.assertRaises(SystemExit):
            cli.main(["x", "-v", "-q"])


def test_round_trip_through_cli(tmp_path, rgba_image, write_png):
    source = write_png(rgba_image, "face.png")
    out_dir = str(tmp_path / "out")
    assert cli.main([source, "-o", out_dir]) == 0
    assert cli.main([os.path.join(out_dir, "face.tex"), "-o", out_dir]) == 0
    np.testing.assert_array_equal(iio.imread(os.path.join(out_dir, "face.png")), rgba_image)
