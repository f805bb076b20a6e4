"""Channel and row-order fixes for decompressed DXT output"""
import numpy as np


def swap_red_blue(pixels: np.ndarray) -> np.ndarray:
    """
    Swap byte 0 and byte 2 of every 4-byte pixel.

    Args:
        pixels: numpy array of shape (height, width, 4) with dtype uint8

    Returns:
        New array of the same shape with the first and third channels exchanged
    """
    return pixels[:, :, [2, 1, 0, 3]]


def flip_vertical(pixels: np.ndarray) -> np.ndarray:
    """Reverse the row order (bottom-up to top-down)"""
    return np.ascontiguousarray(pixels[::-1])


def normalize_dxt_output(pixels: np.ndarray) -> np.ndarray:
    """
    Convert decompressor output into a top-down RGBA image.

    DXT payloads in TEX files are stored bottom row first and decompress to
    BGRA, so both the channel swap and the flip are needed, in this order.
    """
    return flip_vertical(swap_red_blue(pixels))
