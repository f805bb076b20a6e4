"""puretex - CM3D2 TEX texture container reader, writer and converter"""

__version__ = "0.1.0"

# Main TEX class
from .tex import TEX

# Header structures
from .headers import TEX_HEADER, TEX_TAG

# Enumerations
from .enums import TextureFormat, TexVersion

# UV atlas rects
from .uv import Rect

# Errors
from .errors import (
    TexError,
    InvalidContainer,
    UnsupportedFormat,
    UnsupportedImage,
    ResourceExhausted,
    TruncatedData,
    IOFailure,
)

# Conversion
from .convert import ConvertOptions, ConversionResult, convert_file, convert_paths

# CLI entry point
from .cli import main

__all__ = [
    '__version__',
    'TEX',
    'TEX_HEADER',
    'TEX_TAG',
    'TextureFormat',
    'TexVersion',
    'Rect',
    'TexError',
    'InvalidContainer',
    'UnsupportedFormat',
    'UnsupportedImage',
    'ResourceExhausted',
    'TruncatedData',
    'IOFailure',
    'ConvertOptions',
    'ConversionResult',
    'convert_file',
    'convert_paths',
    'main',
]
