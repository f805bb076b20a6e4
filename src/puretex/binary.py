"""Little-endian primitives in the .NET BinaryReader/BinaryWriter encoding"""
import io
import struct
from typing import BinaryIO, Optional, Tuple

from .errors import InvalidContainer, TruncatedData

_INT32 = struct.Struct('<i')

_CHUNK_SIZE = 1 << 20


def remaining_bytes(stream: BinaryIO) -> Optional[int]:
    """Bytes left between the current position and the end, or None if the stream cannot seek"""
    try:
        position = stream.tell()
        end = stream.seek(0, io.SEEK_END)
        stream.seek(position)
    except (AttributeError, OSError):
        return None
    return max(0, end - position)


def read_exact(stream: BinaryIO, size: int, what: str = "data") -> bytes:
    """
    Read exactly size bytes or raise TruncatedData.

    A size larger than what the stream still holds is rejected before any
    buffer is allocated for it.
    """
    available = remaining_bytes(stream)
    if available is not None and size > available:
        raise TruncatedData(
            f"Expected {size} bytes of {what}, only {available} available",
            expected=size,
            available=available,
        )

    if available is not None:
        data = stream.read(size)
    else:
        # Unknown length: grow the buffer only as data actually arrives
        buffer = bytearray()
        while len(buffer) < size:
            chunk = stream.read(min(_CHUNK_SIZE, size - len(buffer)))
            if not chunk:
                break
            buffer += chunk
        data = bytes(buffer)

    if len(data) != size:
        raise TruncatedData(
            f"Expected {size} bytes of {what}, only {len(data)} available",
            expected=size,
            available=len(data),
        )
    return data


def read_int32(stream: BinaryIO, what: str = "int32") -> int:
    return _INT32.unpack(read_exact(stream, 4, what))[0]


def read_float32s(stream: BinaryIO, count: int, what: str = "float32") -> Tuple[float, ...]:
    return struct.unpack(f'<{count}f', read_exact(stream, 4 * count, what))


def read_7bit_int(stream: BinaryIO) -> int:
    """Read a 7-bit encoded (LEB128) unsigned integer of at most 5 bytes"""
    value = 0
    for shift in range(0, 35, 7):
        byte = read_exact(stream, 1, "string length")[0]
        value |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return value
    raise InvalidContainer("Malformed 7-bit encoded string length")


def read_string(stream: BinaryIO, what: str = "string") -> str:
    """Read a length-prefixed UTF-8 string"""
    length = read_7bit_int(stream)
    raw = read_exact(stream, length, what)
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise InvalidContainer(f"{what} is not valid UTF-8") from e


def pack_int32(value: int) -> bytes:
    return _INT32.pack(value)


def pack_7bit_int(value: int) -> bytes:
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def pack_string(value: str) -> bytes:
    """Encode a string with its 7-bit length prefix"""
    raw = value.encode('utf-8')
    return pack_7bit_int(len(raw)) + raw
