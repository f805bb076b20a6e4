"""TEX header structure"""
import io
from typing import BinaryIO, List

from .binary import pack_int32, pack_string, read_int32, read_string
from .enums import TextureFormat, TexVersion
from .errors import InvalidContainer, UnsupportedFormat
from .uv import Rect, embedded_rects_bytes, read_embedded_rects

TEX_TAG = 'CM3D2_TEX'

# The tag as written by BinaryWriter: length byte, then ASCII
_TAG_BYTES = pack_string(TEX_TAG)


class TEX_HEADER:
    """TEX header: everything before the payload size"""
    def __init__(self) -> None:
        self.tag: str = TEX_TAG
        self.version: int = int(TexVersion.V1010)
        self.internal_path: str = ''  # Asset path inside the game archive, often empty
        self.uv_rects: List[Rect] = []  # Stored from v1011
        self.width: int = 0  # Stored from v1010, recovered from the payload before that
        self.height: int = 0
        self.format: TextureFormat = TextureFormat.ARGB32  # Stored from v1010

    @property
    def has_dimensions(self) -> bool:
        """Whether width, height and format are stored in the header itself"""
        return self.version >= TexVersion.V1010

    @classmethod
    def from_stream(cls, stream: BinaryIO) -> 'TEX_HEADER':
        """
        Read a TEX header, leaving the stream positioned at the payload size.

        Raises:
            InvalidContainer: If the tag does not match or a field is impossible
            UnsupportedFormat: If the format code is not a known TextureFormat
            TruncatedData: If the stream ends inside the header
        """
        tag = stream.read(len(_TAG_BYTES))
        if tag != _TAG_BYTES:
            raise InvalidContainer(f"Invalid TEX tag: {tag!r}")

        header = cls()
        header.version = read_int32(stream, "version")
        header.internal_path = read_string(stream, "internal path")

        for min_version, read_group, _ in _FIELD_GROUPS:
            if header.version >= min_version:
                read_group(header, stream)

        return header

    @classmethod
    def from_bytes(cls, data: bytes) -> 'TEX_HEADER':
        """Read a TEX header from the start of data"""
        with io.BytesIO(data) as stream:
            return cls.from_stream(stream)

    def to_bytes(self) -> bytes:
        """Serialize the header: tag, version, internal path, then version-gated fields"""
        parts = [_TAG_BYTES, pack_int32(self.version), pack_string(self.internal_path)]
        for min_version, _, write_group in _FIELD_GROUPS:
            if self.version >= min_version:
                parts.append(write_group(self))
        return b''.join(parts)


def _read_rects(header: TEX_HEADER, stream: BinaryIO) -> None:
    header.uv_rects = read_embedded_rects(stream)


def _write_rects(header: TEX_HEADER) -> bytes:
    return embedded_rects_bytes(header.uv_rects)


def _read_dimensions(header: TEX_HEADER, stream: BinaryIO) -> None:
    header.width = read_int32(stream, "width")
    header.height = read_int32(stream, "height")
    if header.width <= 0 or header.height <= 0:
        raise InvalidContainer(f"Invalid texture dimensions {header.width}x{header.height}")

    code = read_int32(stream, "format")
    try:
        header.format = TextureFormat(code)
    except ValueError:
        raise UnsupportedFormat(code) from None


def _write_dimensions(header: TEX_HEADER) -> bytes:
    return pack_int32(header.width) + pack_int32(header.height) + pack_int32(int(header.format))


# Field groups in on-disk order, each present from its version onward.
# Newer versions only ever add groups.
_FIELD_GROUPS = (
    (TexVersion.V1011, _read_rects, _write_rects),
    (TexVersion.V1010, _read_dimensions, _write_dimensions),
)
