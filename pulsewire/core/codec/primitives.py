"""
Fixed-width encode/decode rules for every scalar tag.

Each primitive comes as a pair:

    encode_x(value) -> bytes
    decode_x(source) -> value

`source` is any object with a blocking `read(n)` method (a BytesIO, a
socket file, ...). Decoders always read and check the tag byte before the
payload; a wrong tag raises ProtocolMismatch and a short read raises
Truncated. Nothing is ever substituted for a value that could not be read.
"""
import struct
from typing import BinaryIO

from pulsewire.core.codec.tags import Tag, UINT32_MAX, UINT64_MAX
from pulsewire.core.errors import ProtocolMismatch, Truncated

_U32 = struct.Struct("!I")
_U64 = struct.Struct("!Q")


def read_exact(source: BinaryIO, n: int) -> bytes:
    """Blocking read of exactly n bytes."""
    buf = b""
    while len(buf) < n:
        try:
            chunk = source.read(n - len(buf))
        except OSError as ex:
            raise Truncated(f"Read failed after {len(buf)} of {n} bytes: {ex}") from ex
        if not chunk:
            raise Truncated(f"Source ended after {len(buf)} of {n} bytes")
        buf += chunk
    return buf


def read_tag(source: BinaryIO) -> int:
    return read_exact(source, 1)[0]


def expect_tag(source: BinaryIO, tag: Tag) -> None:
    actual = read_tag(source)
    if actual != tag:
        raise ProtocolMismatch(tag.byte, _describe(actual))


def _describe(value: int) -> str:
    try:
        return repr(Tag(value))
    except ValueError:
        return f"0x{value:02x}"


def _check_range(value: int, limit: int, what: str) -> None:
    if not 0 <= value <= limit:
        raise ValueError(f"{what} out of range: {value}")


# Untagged payload pieces

def decode_byte(source: BinaryIO) -> int:
    return read_exact(source, 1)[0]


def encode_byte(value: int) -> bytes:
    _check_range(value, 0xFF, "byte")
    return bytes((value,))


def decode_raw_u32(source: BinaryIO) -> int:
    return _U32.unpack(read_exact(source, 4))[0]


def encode_raw_u32(value: int) -> bytes:
    _check_range(value, UINT32_MAX, "uint32")
    return _U32.pack(value)


# Tagged scalars

def decode_u32(source: BinaryIO) -> int:
    expect_tag(source, Tag.U32)
    return decode_raw_u32(source)


def encode_u32(value: int) -> bytes:
    return Tag.U32.byte + encode_raw_u32(value)


def decode_u8(source: BinaryIO) -> int:
    expect_tag(source, Tag.U8)
    return decode_byte(source)


def encode_u8(value: int) -> bytes:
    return Tag.U8.byte + encode_byte(value)


def decode_u64(source: BinaryIO) -> int:
    expect_tag(source, Tag.U64)
    return _U64.unpack(read_exact(source, 8))[0]


def encode_u64(value: int) -> bytes:
    _check_range(value, UINT64_MAX, "uint64")
    return Tag.U64.byte + _U64.pack(value)


def decode_usec(source: BinaryIO) -> int:
    expect_tag(source, Tag.USEC)
    return _U64.unpack(read_exact(source, 8))[0]


def encode_usec(value: int) -> bytes:
    _check_range(value, UINT64_MAX, "usec")
    return Tag.USEC.byte + _U64.pack(value)


def decode_volume(source: BinaryIO) -> int:
    expect_tag(source, Tag.VOLUME)
    return decode_raw_u32(source)


def encode_volume(value: int) -> bytes:
    return Tag.VOLUME.byte + encode_raw_u32(value)


def decode_boolean(source: BinaryIO) -> bool:
    actual = read_tag(source)
    if actual == Tag.BOOLEAN_TRUE:
        return True
    if actual == Tag.BOOLEAN_FALSE:
        return False
    raise ProtocolMismatch(Tag.BOOLEAN_TRUE.byte + Tag.BOOLEAN_FALSE.byte, _describe(actual))


def encode_boolean(value: bool) -> bytes:
    return (Tag.BOOLEAN_TRUE if value else Tag.BOOLEAN_FALSE).byte


def _read_cstring(source: BinaryIO) -> str:
    buf = bytearray()
    while True:
        # Truncated propagates when the terminator never arrives
        b = decode_byte(source)
        if b == 0:
            return buf.decode("utf-8", errors="replace")
        buf.append(b)


def decode_string(source: BinaryIO) -> str | None:
    """
    Decode a string value. The null-string tag yields None, which keeps
    "absent" distinct from an empty string.
    """
    actual = read_tag(source)
    if actual == Tag.STRING_NULL:
        return None
    if actual != Tag.STRING:
        raise ProtocolMismatch(Tag.STRING.byte, _describe(actual))
    return _read_cstring(source)


def encode_string(value: str | None) -> bytes:
    if value is None:
        return Tag.STRING_NULL.byte
    data = value.encode("utf-8")
    if b"\x00" in data:
        raise ValueError("string must not contain NUL bytes")
    return Tag.STRING.byte + data + b"\x00"


def decode_null_string(source: BinaryIO) -> None:
    """Consume exactly one null-string marker."""
    expect_tag(source, Tag.STRING_NULL)


def decode_arbitrary(source: BinaryIO) -> bytes:
    expect_tag(source, Tag.ARBITRARY)
    length = decode_raw_u32(source)
    return read_exact(source, length)


def encode_arbitrary(value: bytes) -> bytes:
    return Tag.ARBITRARY.byte + encode_raw_u32(len(value)) + value
