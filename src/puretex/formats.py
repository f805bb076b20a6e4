"""Pixel format dispatch"""
import logging
from typing import Callable, Dict, Tuple

import numpy as np

from .decompressors import BC1Decompressor, BC3Decompressor
from .enums import TextureFormat
from .errors import UnsupportedFormat
from .image_codec import decode_image, encode_png
from .normalize import normalize_dxt_output

logger = logging.getLogger(__name__)

TextureLoader = Callable[[bytes, int, int], np.ndarray]


def _load_encoded_image(data: bytes, width: int, height: int) -> np.ndarray:
    # RGB24 and ARGB32 payloads are complete image files; their own size wins
    return decode_image(data)


def _load_dxt1(data: bytes, width: int, height: int) -> np.ndarray:
    return normalize_dxt_output(BC1Decompressor().decompress(data, width, height))


def _load_dxt5(data: bytes, width: int, height: int) -> np.ndarray:
    return normalize_dxt_output(BC3Decompressor().decompress(data, width, height))


TEXTURE_LOADERS: Dict[TextureFormat, TextureLoader] = {
    TextureFormat.RGB24: _load_encoded_image,
    TextureFormat.ARGB32: _load_encoded_image,
    TextureFormat.DXT1: _load_dxt1,
    TextureFormat.DXT5: _load_dxt5,
}


def decode_pixels(data: bytes, width: int, height: int, format_code: int) -> np.ndarray:
    """
    Decode a TEX payload to an RGBA image.

    Args:
        data: Payload bytes
        width: Texture width from the header
        height: Texture height from the header
        format_code: TextureFormat or raw integer format code

    Returns:
        numpy array of shape (height, width, 4) with dtype uint8 (RGBA)

    Raises:
        UnsupportedFormat: If the code has no registered loader
    """
    try:
        texture_format = TextureFormat(format_code)
    except ValueError:
        raise UnsupportedFormat(format_code) from None

    loader = TEXTURE_LOADERS.get(texture_format)
    if loader is None:
        raise UnsupportedFormat(format_code)

    logger.debug("Decoding %s payload (%d bytes)", texture_format.name, len(data))
    return loader(data, width, height)


def encode_pixels(image: np.ndarray) -> Tuple[TextureFormat, bytes]:
    """Encode an RGBA image as a TEX payload; always PNG labelled ARGB32"""
    return TextureFormat.ARGB32, encode_png(image)
