import io

import pytest

from pulsewire.core.codec import primitives
from pulsewire.core.codec.tags import Tag
from pulsewire.core.errors import ProtocolMismatch, Truncated


def source(data: bytes) -> io.BytesIO:
    return io.BytesIO(data)


@pytest.mark.ut
@pytest.mark.parametrize("value", [0, 1, 0x12345678, 0xFFFFFFFF])
def test_u32_round_trip(value):
    data = primitives.encode_u32(value)

    assert len(data) == 5
    assert data[0] == Tag.U32
    assert primitives.decode_u32(source(data)) == value


@pytest.mark.ut
def test_u32_is_big_endian():
    assert primitives.encode_u32(0x01020304) == b"L\x01\x02\x03\x04"


@pytest.mark.ut
@pytest.mark.parametrize("value", ["", "analog-output", "é-ünïcode", "a" * 255])
def test_string_round_trip(value):
    data = primitives.encode_string(value)

    assert data[0] == Tag.STRING
    assert data.endswith(b"\x00")
    assert primitives.decode_string(source(data)) == value


@pytest.mark.ut
def test_null_string_round_trip():
    data = primitives.encode_string(None)

    assert data == b"N"
    assert primitives.decode_string(source(data)) is None


@pytest.mark.ut
def test_empty_string_is_not_null():
    assert primitives.encode_string("") == b"t\x00"
    assert primitives.decode_string(source(b"t\x00")) == ""


@pytest.mark.ut
@pytest.mark.parametrize("value", [0, 25000, 0xFFFFFFFFFFFFFFFF])
def test_usec_round_trip(value):
    data = primitives.encode_usec(value)

    assert len(data) == 9
    assert primitives.decode_usec(source(data)) == value


@pytest.mark.ut
@pytest.mark.parametrize("value", [0, 0x10000, 0xFFFFFFFF])
def test_volume_round_trip(value):
    data = primitives.encode_volume(value)

    assert data[0] == Tag.VOLUME
    assert primitives.decode_volume(source(data)) == value


@pytest.mark.ut
@pytest.mark.parametrize("value, wire", [(True, b"1"), (False, b"0")])
def test_boolean_round_trip(value, wire):
    assert primitives.encode_boolean(value) == wire
    assert primitives.decode_boolean(source(wire)) is value


@pytest.mark.ut
def test_u8_round_trip():
    assert primitives.decode_u8(source(primitives.encode_u8(255))) == 255


@pytest.mark.ut
def test_arbitrary_round_trip():
    data = primitives.encode_arbitrary(b"\x00\x01binary\xff")

    assert data[:5] == b"x\x00\x00\x00\x09"
    assert primitives.decode_arbitrary(source(data)) == b"\x00\x01binary\xff"


@pytest.mark.ut
def test_raw_byte_has_no_tag_check():
    assert primitives.decode_byte(source(b"L")) == ord("L")


@pytest.mark.ut
@pytest.mark.parametrize(
    "decoder, expected",
    [
        (primitives.decode_u32, Tag.U32),
        (primitives.decode_usec, Tag.USEC),
        (primitives.decode_volume, Tag.VOLUME),
        (primitives.decode_u8, Tag.U8),
        (primitives.decode_arbitrary, Tag.ARBITRARY),
        (primitives.decode_null_string, Tag.STRING_NULL),
    ],
)
def test_any_other_tag_is_a_mismatch(decoder, expected):
    for tag in Tag:
        if tag == expected:
            continue
        # valid-looking payload must not rescue a wrong tag
        with pytest.raises(ProtocolMismatch):
            decoder(source(tag.byte + b"\x00" * 8))


@pytest.mark.ut
def test_string_rejects_foreign_tags():
    for tag in Tag:
        if tag in (Tag.STRING, Tag.STRING_NULL):
            continue
        with pytest.raises(ProtocolMismatch):
            primitives.decode_string(source(tag.byte + b"abc\x00"))


@pytest.mark.ut
def test_boolean_rejects_other_bytes():
    with pytest.raises(ProtocolMismatch):
        primitives.decode_boolean(source(b"L"))


@pytest.mark.ut
def test_unknown_tag_byte_is_a_mismatch():
    with pytest.raises(ProtocolMismatch) as exc:
        primitives.decode_u32(source(b"\x07\x00\x00\x00\x00"))

    assert "0x07" in str(exc.value)


@pytest.mark.ut
def test_string_without_terminator_is_truncated():
    with pytest.raises(Truncated):
        primitives.decode_string(source(b"tanalog-out"))


@pytest.mark.ut
@pytest.mark.parametrize(
    "decoder, data",
    [
        (primitives.decode_u32, b"L\x00\x00"),
        (primitives.decode_usec, b"U\x00\x00\x00\x00"),
        (primitives.decode_volume, b"V"),
        (primitives.decode_arbitrary, b"x\x00\x00\x00\x05ab"),
        (primitives.decode_u32, b""),
    ],
)
def test_short_source_is_truncated(decoder, data):
    with pytest.raises(Truncated):
        decoder(source(data))


@pytest.mark.ut
def test_read_failure_is_truncated():
    class Broken:
        def read(self, n):
            raise ConnectionResetError("reset by peer")

    with pytest.raises(Truncated) as exc:
        primitives.decode_u32(Broken())

    assert isinstance(exc.value.__cause__, ConnectionResetError)


@pytest.mark.ut
def test_read_exact_collects_partial_reads():
    class Trickle:
        def __init__(self, data):
            self._data = data

        def read(self, n):
            chunk, self._data = self._data[:1], self._data[1:]
            return chunk

    assert primitives.decode_u32(Trickle(b"L\x00\x00\x01\x00")) == 256


@pytest.mark.ut
@pytest.mark.parametrize(
    "encoder, value",
    [
        (primitives.encode_u32, -1),
        (primitives.encode_u32, 0x100000000),
        (primitives.encode_u8, 256),
        (primitives.encode_usec, 1 << 64),
    ],
)
def test_encoders_reject_out_of_range(encoder, value):
    with pytest.raises(ValueError):
        encoder(value)


@pytest.mark.ut
def test_string_with_nul_is_rejected():
    with pytest.raises(ValueError):
        primitives.encode_string("bad\x00name")
