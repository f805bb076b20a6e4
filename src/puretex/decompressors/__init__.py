"""Block decompressors for the DXT pixel formats"""
from .base import TextureDecompressor
from .bc1 import BC1Decompressor
from .bc3 import BC3Decompressor

__all__ = [
    'TextureDecompressor',
    'BC1Decompressor',
    'BC3Decompressor',
]
