from collections.abc import Iterable, Mapping

from pulsewire.core.codec import primitives
from pulsewire.core.codec.tags import Tag


class TagWriter:
    """
    Accumulates tagged values into an outbound argument stream.

    Every `put_*` method appends one encoded value and returns the writer,
    so argument sequences read in wire order:

        TagWriter().put_u32(INVALID_INDEX).put_string(sink).getvalue()
    """
    def __init__(self) -> None:
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def put_u32(self, value: int) -> "TagWriter":
        self._buffer += primitives.encode_u32(value)
        return self

    def put_u8(self, value: int) -> "TagWriter":
        self._buffer += primitives.encode_u8(value)
        return self

    def put_u64(self, value: int) -> "TagWriter":
        self._buffer += primitives.encode_u64(value)
        return self

    def put_usec(self, value: int) -> "TagWriter":
        self._buffer += primitives.encode_usec(value)
        return self

    def put_volume(self, value: int) -> "TagWriter":
        self._buffer += primitives.encode_volume(value)
        return self

    def put_boolean(self, value: bool) -> "TagWriter":
        self._buffer += primitives.encode_boolean(value)
        return self

    def put_string(self, value: str | None) -> "TagWriter":
        self._buffer += primitives.encode_string(value)
        return self

    def put_arbitrary(self, value: bytes) -> "TagWriter":
        self._buffer += primitives.encode_arbitrary(value)
        return self

    def put_tag(self, tag: Tag) -> "TagWriter":
        self._buffer += tag.byte
        return self

    def put_byte(self, value: int) -> "TagWriter":
        self._buffer += primitives.encode_byte(value)
        return self

    def put_raw_u32(self, value: int) -> "TagWriter":
        self._buffer += primitives.encode_raw_u32(value)
        return self

    def put_sample_spec(self, format: int, channels: int, rate: int) -> "TagWriter":
        return self.put_tag(Tag.SAMPLE_SPEC).put_byte(format).put_byte(channels).put_raw_u32(rate)

    def put_channel_map(self, positions: Iterable[int]) -> "TagWriter":
        positions = list(positions)
        self.put_tag(Tag.CHANNEL_MAP).put_byte(len(positions))
        for position in positions:
            self.put_byte(position)
        return self

    def put_cvolume(self, values: Iterable[int]) -> "TagWriter":
        values = list(values)
        self.put_tag(Tag.CVOLUME).put_byte(len(values))
        for value in values:
            self.put_raw_u32(value)
        return self

    def put_proplist(self, properties: Mapping[str, str]) -> "TagWriter":
        self.put_tag(Tag.PROPLIST)
        for key, value in properties.items():
            data = value.encode("utf-8") + b"\x00"
            self.put_string(key).put_u32(len(data)).put_arbitrary(data)
        return self.put_string(None)

    def put_format_info(self, encoding: int, properties: Mapping[str, str]) -> "TagWriter":
        return self.put_tag(Tag.FORMAT_INFO).put_u8(encoding).put_proplist(properties)
