"""Main TEX file handler"""
import io
import struct
from typing import BinaryIO, List, Optional

import numpy as np

from .binary import pack_int32, read_exact, read_int32
from .enums import TextureFormat, TexVersion
from .errors import InvalidContainer, TruncatedData
from .formats import decode_pixels, encode_pixels
from .headers import TEX_HEADER
from .uv import Rect

# v1000 payloads are PNGs; IHDR width and height sit at these offsets
_LEGACY_WIDTH_OFFSET = 16
_LEGACY_HEIGHT_OFFSET = 20
_LEGACY_DIMENSIONS = struct.Struct('>i')


class TEX:
    """CM3D2 texture container"""
    def __init__(self) -> None:
        self.header: TEX_HEADER = TEX_HEADER()
        self.data: bytes = b''  # Payload, interpreted according to header.format

    def __str__(self) -> str:
        """Return debug string representation of TEX file"""
        lines = ["TEX File Information:"]
        lines.append(f"  Tag: {self.header.tag}")
        lines.append(f"  Version: {int(self.header.version)}")
        lines.append(f"  Internal Path: {self.header.internal_path or '(none)'}")
        lines.append(f"  Dimensions: {self.header.width}x{self.header.height}")
        lines.append(f"  Format: {self.header.format.name} ({self.header.format.value})")
        if self.header.uv_rects:
            lines.append(f"  UV Rects: {len(self.header.uv_rects)}")
        lines.append(f"  Data Size: {len(self.data)} bytes")
        return "\n".join(lines)

    @property
    def width(self) -> int:
        return self.header.width

    @property
    def height(self) -> int:
        return self.header.height

    @property
    def format(self) -> TextureFormat:
        return self.header.format

    @property
    def uv_rects(self) -> List[Rect]:
        return self.header.uv_rects

    @classmethod
    def from_stream(cls, stream: BinaryIO) -> 'TEX':
        """
        Read a TEX container from a binary stream.

        Raises:
            InvalidContainer: If the tag does not match or a field is impossible
            UnsupportedFormat: If the header names an unknown pixel format
            TruncatedData: If the stream holds fewer bytes than declared
        """
        tex = cls()
        tex.header = TEX_HEADER.from_stream(stream)

        size = read_int32(stream, "payload size")
        if size < 0:
            raise InvalidContainer(f"Negative payload size: {size}")
        tex.data = read_exact(stream, size, "payload")

        if not tex.header.has_dimensions:
            tex._recover_legacy_dimensions()

        return tex

    @classmethod
    def from_bytes(cls, data: bytes) -> 'TEX':
        """Read TEX from bytes"""
        with io.BytesIO(data) as stream:
            return cls.from_stream(stream)

    @classmethod
    def from_file(cls, path: str) -> 'TEX':
        with open(path, 'rb') as f:
            return cls.from_stream(f)

    @classmethod
    def from_image(cls, image: np.ndarray, uv_rects: Optional[List[Rect]] = None,
                   internal_path: str = '') -> 'TEX':
        """
        Build a container from an RGBA image.

        Args:
            image: numpy array of shape (height, width, 4) with dtype uint8 (RGBA)
            uv_rects: Atlas rects to embed; a non-empty list selects version 1011
            internal_path: Value for the internal path field

        Returns:
            TEX with an ARGB32 (PNG) payload, version 1010 or 1011
        """
        tex = cls()
        tex.header.internal_path = internal_path
        tex.header.uv_rects = list(uv_rects or [])
        tex.header.version = int(TexVersion.V1011 if tex.header.uv_rects else TexVersion.V1010)
        tex.header.height, tex.header.width = image.shape[:2]
        tex.header.format, tex.data = encode_pixels(image)
        return tex

    def to_bytes(self) -> bytes:
        """Serialize the full container: header, payload size, payload"""
        return self.header.to_bytes() + pack_int32(len(self.data)) + self.data

    def to_image(self) -> np.ndarray:
        """
        Decode the payload to an image.

        Returns:
            numpy array of shape (height, width, 4) with dtype uint8 (RGBA),
            row 0 at the top
        """
        return decode_pixels(self.data, self.header.width, self.header.height, self.header.format)

    def _recover_legacy_dimensions(self) -> None:
        """Read width/height out of the PNG payload of a pre-1010 container"""
        end = _LEGACY_HEIGHT_OFFSET + _LEGACY_DIMENSIONS.size
        if len(self.data) < end:
            raise TruncatedData(
                f"Legacy payload too short to hold dimensions: {len(self.data)} bytes",
                expected=end,
                available=len(self.data),
            )
        self.header.width = _LEGACY_DIMENSIONS.unpack_from(self.data, _LEGACY_WIDTH_OFFSET)[0]
        self.header.height = _LEGACY_DIMENSIONS.unpack_from(self.data, _LEGACY_HEIGHT_OFFSET)[0]
        self.header.format = TextureFormat.ARGB32
