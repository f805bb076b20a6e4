"""Exceptions raised while reading and writing TEX files"""


class TexError(ValueError):
    """Base class for all puretex errors"""


class InvalidContainer(TexError):
    """Data is not a TEX container (bad tag or impossible header)"""


class UnsupportedFormat(TexError):
    """Pixel format code is not one of the supported formats"""

    def __init__(self, code: int) -> None:
        super().__init__(f"Unsupported texture format: {int(code)}")
        self.code = int(code)


class UnsupportedImage(TexError):
    """Data cannot be recognised as any raster image"""


class ResourceExhausted(TexError):
    """Ran out of memory while decoding or encoding an image"""


class TruncatedData(TexError):
    """Fewer bytes available than the container declares"""

    def __init__(self, message: str, expected: int = 0, available: int = 0) -> None:
        super().__init__(message)
        self.expected = expected
        self.available = available


class IOFailure(OSError, TexError):
    """Filesystem error while reading an input or writing an output"""
