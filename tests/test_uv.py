"""Tests for UV rect metadata."""

import io
import struct
import unittest

import pytest

from puretex.errors import InvalidContainer, TruncatedData
from puretex.uv import (
    Rect,
    embedded_rects_bytes,
    format_sidecar,
    parse_sidecar,
    read_embedded_rects,
    read_sidecar,
    sidecar_path,
)


class TestSidecarParsing(unittest.TestCase):
    def test_basic(self):
        rects = parse_sidecar("0;0;0.5;0.5\n0.5;0;0.5;0.25\n")
        self.assertEqual(rects, [Rect(0, 0, 0.5, 0.5), Rect(0.5, 0, 0.5, 0.25)])

    def test_blank_lines_and_whitespace(self):
        rects = parse_sidecar("\n  0.1; 0.2; 0.3; 0.4  \n\r\n\t\n1;2;3;4")
        self.assertEqual(rects, [Rect(0.1, 0.2, 0.3, 0.4), Rect(1, 2, 3, 4)])

    def test_bad_lines_skipped_individually(self):
        text = "\n".join([
            "1;2;3;4",
            "1;2;3",
            "1;2;3;4;5",
            "a;b;c;d",
            "1;2;3;1e40",
            "5;6;7;8",
        ])
        self.assertEqual(parse_sidecar(text), [Rect(1, 2, 3, 4), Rect(5, 6, 7, 8)])

    def test_empty_fields_ignored(self):
        self.assertEqual(parse_sidecar("1;;2;3;4;"), [Rect(1, 2, 3, 4)])

    def test_comma_decimal_is_not_accepted(self):
        self.assertEqual(parse_sidecar("0,5;0;1;1"), [])

    def test_negative_and_exponent(self):
        self.assertEqual(parse_sidecar("-0.5;1e-3;2E2;+3"), [Rect(-0.5, 0.001, 200, 3)])


class TestSidecarFormatting(unittest.TestCase):
    def test_format(self):
        text = format_sidecar([Rect(0, 0.25, 1, 0.5), Rect(0.1, 2, 3, 4)])
        self.assertEqual(text, "0;0.25;1;0.5\n0.1;2;3;4\n")

    def test_float32_values_print_shortest(self):
        value = struct.unpack("<f", struct.pack("<f", 0.1))[0]
        self.assertEqual(format_sidecar([Rect(value, value, value, value)]), "0.1;0.1;0.1;0.1\n")

    def test_empty(self):
        self.assertEqual(format_sidecar([]), "")

    def test_parse_format_round_trip(self):
        rects = [Rect(0.123, 0.456, 0.25, 0.75), Rect(0, 0, 1, 1), Rect(0.3, 0.6, 0.1, 0.2)]
        parsed = parse_sidecar(format_sidecar(rects))
        self.assertEqual(len(parsed), 3)
        for got, want in zip(parsed, rects):
            self.assertEqual(got.astuple(), pytest.approx(want.astuple(), rel=1e-6))


class TestEmbeddedRects(unittest.TestCase):
    def test_layout(self):
        data = embedded_rects_bytes([Rect(1, 2, 3, 4)])
        self.assertEqual(data, struct.pack("<i4f", 1, 1, 2, 3, 4))

    def test_empty(self):
        self.assertEqual(embedded_rects_bytes([]), b"\x00\x00\x00\x00")
        self.assertEqual(read_embedded_rects(io.BytesIO(b"\x00\x00\x00\x00")), [])

    def test_read_preserves_order(self):
        rects = [Rect(i, i + 0.5, 1, 2) for i in range(5)]
        self.assertEqual(read_embedded_rects(io.BytesIO(embedded_rects_bytes(rects))), rects)

    def test_negative_count(self):
        with self.assertRaises(InvalidContainer):
            read_embedded_rects(io.BytesIO(struct.pack("<i", -3)))

    def test_truncated(self):
        with self.assertRaises(TruncatedData):
            read_embedded_rects(io.BytesIO(struct.pack("<i3f", 1, 1, 2, 3)))


def test_sidecar_path():
    assert sidecar_path("textures/face.png") == "textures/face.png.uv.csv"


def test_read_sidecar_missing(tmp_path):
    assert read_sidecar(str(tmp_path / "face.png")) == []


def test_read_sidecar_with_bom(tmp_path):
    (tmp_path / "face.png.uv.csv").write_bytes(b"\xef\xbb\xbf0;0;1;1\r\n0.5;0.5;0.5;0.5\r\n")
    assert read_sidecar(str(tmp_path / "face.png")) == [Rect(0, 0, 1, 1), Rect(0.5, 0.5, 0.5, 0.5)]


def test_read_sidecar_with_invalid_utf8(tmp_path):
    (tmp_path / "face.png.uv.csv").write_bytes(b"0;0;1;1\n\xff\xfe;0;1;1\n0.5;0.5;0.5;0.5\n")
    assert read_sidecar(str(tmp_path / "face.png")) == [Rect(0, 0, 1, 1), Rect(0.5, 0.5, 0.5, 0.5)]
