"""BC1 (DXT1) texture decompressor"""
import numpy as np
from numba import jit
from .base import TextureDecompressor


class BC1Decompressor(TextureDecompressor):
    """BC1 (DXT1) texture decompressor - NumPy vectorization + Numba JIT"""

    block_size = 8

    @staticmethod
    @jit(nopython=True, cache=True)
    def _process_blocks_jit(colors, indices, output, blocks_x, blocks_y, width, height):
        """JIT-compiled block processing for BC1 decompression"""
        num_blocks = blocks_x * blocks_y
        for block_idx in range(num_blocks):
            block_x = block_idx % blocks_x
            block_y = block_idx // blocks_x

            idx_bits = indices[block_idx]

            y_start = block_y * 4
            x_start = block_x * 4

            for pixel_idx in range(16):
                out_y = y_start + pixel_idx // 4
                out_x = x_start + pixel_idx % 4

                # Texels past the texture edge are dropped
                if out_y < height and out_x < width:
                    color_idx = (idx_bits >> (pixel_idx * 2)) & 0x3
                    for channel in range(4):
                        output[out_y, out_x, channel] = colors[block_idx, color_idx, channel]

    def decompress(self, data: bytes, width: int, height: int) -> np.ndarray:
        """
        Decompress BC1 texture data to BGRA8 using vectorized NumPy operations

        BC1 stores 4x4 pixel blocks in 8 bytes each:
        - 2 bytes: color0 (RGB565)
        - 2 bytes: color1 (RGB565)
        - 4 bytes: 16 2-bit indices (one per pixel)
        """
        self.check_size(data, width, height)

        blocks_x = (width + 3) // 4
        blocks_y = (height + 3) // 4
        num_blocks = blocks_x * blocks_y

        blocks = np.frombuffer(data, dtype=np.uint8, count=num_blocks * 8).reshape(-1, 8)

        c0_packed = blocks[:, 0].astype(np.uint16) | (blocks[:, 1].astype(np.uint16) << 8)
        c1_packed = blocks[:, 2].astype(np.uint16) | (blocks[:, 3].astype(np.uint16) << 8)

        c0_b, c0_g, c0_r = _unpack_565(c0_packed)
        c1_b, c1_g, c1_r = _unpack_565(c1_packed)

        # Palettes (num_blocks, 4 colors, BGRA)
        colors = np.zeros((num_blocks, 4, 4), dtype=np.uint8)
        colors[:, 0, 0] = c0_b
        colors[:, 0, 1] = c0_g
        colors[:, 0, 2] = c0_r
        colors[:, 0, 3] = 255

        colors[:, 1, 0] = c1_b
        colors[:, 1, 1] = c1_g
        colors[:, 1, 2] = c1_r
        colors[:, 1, 3] = 255

        # color0 <= color1 selects 3-color mode with transparent black
        four_color_mode = c0_packed > c1_packed

        colors[:, 2, 0] = np.where(four_color_mode, (2 * c0_b + c1_b) // 3, (c0_b + c1_b) // 2)
        colors[:, 2, 1] = np.where(four_color_mode, (2 * c0_g + c1_g) // 3, (c0_g + c1_g) // 2)
        colors[:, 2, 2] = np.where(four_color_mode, (2 * c0_r + c1_r) // 3, (c0_r + c1_r) // 2)
        colors[:, 2, 3] = 255

        colors[:, 3, 0] = np.where(four_color_mode, (c0_b + 2 * c1_b) // 3, 0)
        colors[:, 3, 1] = np.where(four_color_mode, (c0_g + 2 * c1_g) // 3, 0)
        colors[:, 3, 2] = np.where(four_color_mode, (c0_r + 2 * c1_r) // 3, 0)
        colors[:, 3, 3] = np.where(four_color_mode, 255, 0)

        indices = blocks[:, 4].astype(np.uint32) | \
                  (blocks[:, 5].astype(np.uint32) << 8) | \
                  (blocks[:, 6].astype(np.uint32) << 16) | \
                  (blocks[:, 7].astype(np.uint32) << 24)

        output = np.zeros((height, width, 4), dtype=np.uint8)
        self._process_blocks_jit(colors, indices, output, blocks_x, blocks_y, width, height)

        return output


def _unpack_565(packed: np.ndarray):
    """Expand RGB565 endpoints to 8-bit (blue, green, red) arrays"""
    r = ((packed >> 11) & 0x1F) << 3
    r |= r >> 5
    g = ((packed >> 5) & 0x3F) << 2
    g |= g >> 6
    b = (packed & 0x1F) << 3
    b |= b >> 5
    return b, g, r
