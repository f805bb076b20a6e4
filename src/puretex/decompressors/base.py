"""Base class for block decompression"""
from abc import ABC, abstractmethod
import numpy as np

from ..errors import TruncatedData


class TextureDecompressor(ABC):
    """Base class for 4x4 block texture decompression"""

    # Bytes per 4x4 block
    block_size: int = 0

    def required_size(self, width: int, height: int) -> int:
        """Number of payload bytes needed for a width x height texture"""
        blocks_x = (width + 3) // 4
        blocks_y = (height + 3) // 4
        return blocks_x * blocks_y * self.block_size

    def check_size(self, data: bytes, width: int, height: int) -> None:
        required = self.required_size(width, height)
        if len(data) < required:
            raise TruncatedData(
                f"{type(self).__name__} needs {required} bytes for {width}x{height}, got {len(data)}",
                expected=required,
                available=len(data),
            )

    @abstractmethod
    def decompress(self, data: bytes, width: int, height: int) -> np.ndarray:
        """
        Decompress texture data to 8-bit BGRA

        Args:
            data: Compressed texture data
            width: Texture width in pixels
            height: Texture height in pixels

        Returns:
            numpy array of shape (height, width, 4) with dtype uint8, bytes in
            B, G, R, A order (the memory layout of a 32-bit ARGB surface)

        Raises:
            TruncatedData: If data holds fewer bytes than the block count needs
        """
        pass
