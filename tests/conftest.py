"""Shared test fixtures."""

import struct

import imageio.v3 as iio
import numpy as np
import pytest


TAG = b"\x09CM3D2_TEX"

RED_565 = 0xF800
BLUE_565 = 0x001F


def _pack_string(value: bytes) -> bytes:
    assert len(value) < 0x80
    return bytes([len(value)]) + value


def build_tex(payload, version=1010, width=4, height=4, fmt=5, rects=None,
              internal_path=b"", tag=TAG, payload_size=None):
    """Assemble TEX bytes by hand, independently of the library writer."""
    out = bytearray(tag)
    out += struct.pack("<i", version)
    out += _pack_string(internal_path)
    if version >= 1011:
        rects = rects or []
        out += struct.pack("<i", len(rects))
        for rect in rects:
            out += struct.pack("<4f", *rect)
    if version >= 1010:
        out += struct.pack("<iii", width, height, fmt)
    out += struct.pack("<i", len(payload) if payload_size is None else payload_size)
    out += payload
    return bytes(out)


def dxt1_block(color0=RED_565, color1=BLUE_565, indices=0x55555554):
    """One BC1 block; default is red at texel 0 and blue everywhere else."""
    return struct.pack("<HHI", color0, color1, indices)


def dxt5_block(alpha0=255, alpha1=0, alpha_bits=0, color0=RED_565, color1=BLUE_565,
               indices=0x55555554):
    """One BC3 block: alpha endpoints, 48-bit alpha indices, then a BC1 color block."""
    return (bytes([alpha0, alpha1]) + alpha_bits.to_bytes(6, "little")
            + struct.pack("<HHI", color0, color1, indices))


@pytest.fixture
def make_tex():
    return build_tex


@pytest.fixture
def make_dxt1_block():
    return dxt1_block


@pytest.fixture
def make_dxt5_block():
    return dxt5_block


@pytest.fixture
def rgba_image():
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(5, 7, 4), dtype=np.uint8)


@pytest.fixture
def png_bytes(rgba_image):
    return iio.imwrite("<bytes>", rgba_image, extension=".png")


@pytest.fixture
def write_png(tmp_path):
    """Write an RGBA array as a PNG file and return its path as str."""
    def _write(image, name="image.png", directory=None):
        path = (directory or tmp_path) / name
        iio.imwrite(path, image, extension=".png")
        return str(path)
    return _write
