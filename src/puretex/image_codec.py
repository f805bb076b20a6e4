"""Standard raster image decoding and encoding via imageio"""
import logging

import numpy as np
import imageio.v3 as iio
from PIL import Image

from .errors import ResourceExhausted, UnsupportedImage

logger = logging.getLogger(__name__)


def decode_image(data: bytes) -> np.ndarray:
    """
    Decode an encoded raster image (PNG, JPG, BMP, ...) to RGBA.

    Args:
        data: Complete encoded image file contents

    Returns:
        numpy array of shape (height, width, 4) with dtype uint8 (RGBA),
        row 0 at the top

    Raises:
        UnsupportedImage: If the bytes are not a recognised image
        ResourceExhausted: If decoding runs out of memory or the image exceeds
            Pillow's pixel limit
    """
    try:
        # index=0 keeps animated GIF/APNG inputs to their first frame
        image = iio.imread(data, plugin="pillow", index=0, mode="RGBA")
    except MemoryError as e:
        raise ResourceExhausted("Out of memory while decoding image") from e
    except Image.DecompressionBombError as e:
        raise ResourceExhausted(f"Image exceeds the pixel limit: {e}") from e
    except (OSError, ValueError, SyntaxError, EOFError) as e:
        bomb = _decompression_bomb(e)
        if bomb is not None:
            raise ResourceExhausted(f"Image exceeds the pixel limit: {bomb}") from e
        raise UnsupportedImage(f"Not an image (or format not supported): {e}") from e

    if image.ndim != 3 or image.shape[2] != 4 or image.dtype != np.uint8:
        raise UnsupportedImage(f"Unexpected decoded image layout {image.shape} {image.dtype}")

    logger.debug("Decoded %dx%d image", image.shape[1], image.shape[0])
    return image


def encode_png(image: np.ndarray) -> bytes:
    """
    Encode an RGBA image as PNG bytes.

    Args:
        image: numpy array of shape (height, width, 4) with dtype uint8

    Returns:
        PNG file contents
    """
    try:
        return iio.imwrite("<bytes>", image, extension=".png", plugin="pillow")
    except MemoryError as e:
        raise ResourceExhausted("Out of memory while encoding PNG") from e


def _decompression_bomb(error):
    # imageio may re-raise Pillow's pixel limit error wrapped in an OSError
    seen = set()
    while error is not None and id(error) not in seen:
        if isinstance(error, Image.DecompressionBombError):
            return error
        seen.add(id(error))
        error = error.__cause__ or error.__context__
    return None
