"""UV atlas rectangles, embedded in v1011 containers or kept in a sidecar file"""
import logging
import os
import struct
from dataclasses import dataclass
from typing import BinaryIO, List

import numpy as np

from .binary import pack_int32, read_float32s, read_int32
from .errors import InvalidContainer

logger = logging.getLogger(__name__)

SIDECAR_SUFFIX = '.uv.csv'

_RECT = struct.Struct('<4f')


@dataclass
class Rect:
    """Atlas sub-rectangle in UV space; list order is significant"""
    x: float
    y: float
    width: float
    height: float

    def astuple(self):
        return (self.x, self.y, self.width, self.height)


def read_embedded_rects(stream: BinaryIO) -> List[Rect]:
    """Read an int32 count followed by count x (x, y, width, height) float32"""
    count = read_int32(stream, "rect count")
    if count < 0:
        raise InvalidContainer(f"Negative rect count: {count}")
    values = read_float32s(stream, count * 4, "rects")
    return [Rect(*values[i:i + 4]) for i in range(0, len(values), 4)]


def embedded_rects_bytes(rects: List[Rect]) -> bytes:
    """Inverse of read_embedded_rects"""
    return pack_int32(len(rects)) + b''.join(_RECT.pack(*rect.astuple()) for rect in rects)


def sidecar_path(image_path: str) -> str:
    """Sidecar file for an image: face.png -> face.png.uv.csv"""
    return image_path + SIDECAR_SUFFIX


def parse_sidecar(text: str) -> List[Rect]:
    """
    Parse sidecar text into rects.

    Each non-blank line holds "x;y;width;height". Empty fields are ignored, so
    "1;;2;3;4" is accepted. A line with the wrong number of fields, a value
    that is not a number or a value outside float32 range is skipped on its
    own; the remaining lines are still used.
    """
    rects = []
    for line_no, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if not line:
            continue

        parts = [part.strip() for part in line.split(';') if part.strip()]
        if len(parts) != 4:
            logger.debug("Skipping UV line %d: expected 4 fields, got %d", line_no, len(parts))
            continue

        try:
            values = [float(part) for part in parts]
            # Must fit in the float32 fields of the container
            _RECT.pack(*values)
        except (ValueError, OverflowError) as e:
            logger.debug("Skipping UV line %d: %s", line_no, e)
            continue

        rects.append(Rect(*values))
    return rects


def format_sidecar(rects: List[Rect]) -> str:
    """One "x;y;width;height" line per rect, shortest float32 decimal form"""
    lines = [';'.join(_format_float32(value) for value in rect.astuple()) for rect in rects]
    return ''.join(line + '\n' for line in lines)


def _format_float32(value: float) -> str:
    return np.format_float_positional(np.float32(value), trim='-')


def read_sidecar(image_path: str) -> List[Rect]:
    """Rects from the sidecar next to image_path, or [] when there is none"""
    path = sidecar_path(image_path)
    if not os.path.isfile(path):
        return []
    # Undecodable bytes become U+FFFD and fail that line's number parsing only
    with open(path, 'r', encoding='utf-8-sig', errors='replace') as f:
        rects = parse_sidecar(f.read())
    logger.debug("Read %d UV rect(s) from %s", len(rects), path)
    return rects
