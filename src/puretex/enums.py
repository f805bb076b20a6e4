"""TEX enumerations"""
from enum import IntEnum


class TextureFormat(IntEnum):
    """Pixel format codes stored in the TEX header"""
    RGB24 = 3  # Payload is an encoded image (PNG/JPG)
    ARGB32 = 5  # Payload is an encoded image (PNG)
    DXT1 = 10  # Raw BC1 blocks
    DXT5 = 12  # Raw BC3 blocks


class TexVersion(IntEnum):
    """Known TEX container versions"""
    V1000 = 1000  # Tag, version, path, payload
    V1010 = 1010  # Adds width, height and format
    V1011 = 1011  # Adds UV rects
