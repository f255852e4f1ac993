from typing import Any, BinaryIO, Callable, TypeVar

from pulsewire.core.codec import primitives
from pulsewire.core.codec.tags import Field, Tag
from pulsewire.core.errors import ProtocolMismatch
from pulsewire.core.ports.decodable import Decodable

D = TypeVar("D", bound=Decodable)

LayoutItem = Tag | Field | type[Decodable]


class TagReader:
    """
    Tagged-stream decoder over a blocking byte source.

    `read` consumes an ordered layout of tagged scalars, untagged fields
    and Decodable record classes, strictly in the given order, and returns
    the decoded values as a tuple. The first failure aborts the whole read;
    callers must treat any raised error as "no result".

    Records delegate to their own `decode` classmethod, which receives this
    same reader and applies the same contract, so layouts nest freely:

        index, name, spec = reader.read(Tag.U32, Tag.STRING, SampleSpec)
    """
    def __init__(self, source: BinaryIO) -> None:
        self._source = source
        self._scalars: dict[Tag | Field, Callable[[BinaryIO], Any]] = {
            Tag.U32: primitives.decode_u32,
            Tag.U8: primitives.decode_u8,
            Tag.U64: primitives.decode_u64,
            Tag.USEC: primitives.decode_usec,
            Tag.VOLUME: primitives.decode_volume,
            Tag.STRING: primitives.decode_string,
            Tag.STRING_NULL: primitives.decode_null_string,
            Tag.ARBITRARY: primitives.decode_arbitrary,
            Tag.PROPLIST: lambda _: self.read_proplist(),
            Field.BYTE: primitives.decode_byte,
            Field.UINT32: primitives.decode_raw_u32,
            Field.BOOLEAN: primitives.decode_boolean,
        }

    def read(self, *layout: LayoutItem) -> tuple[Any, ...]:
        return tuple(self.read_one(item) for item in layout)

    def read_one(self, item: LayoutItem) -> Any:
        if isinstance(item, (Tag, Field)):
            try:
                decoder = self._scalars[item]
            except KeyError:
                raise TypeError(f"No scalar decoder for {item!r}") from None
            return decoder(self._source)

        decode = getattr(item, "decode", None)
        if decode is None:
            raise TypeError(f"{item!r} is neither a tag nor a decodable record")
        return decode(self)

    def expect(self, tag: Tag) -> None:
        """Consume one tag byte and check it, with no payload."""
        primitives.expect_tag(self._source, tag)

    def read_list(self, element: type[D], count: int) -> tuple[D, ...]:
        return tuple(element.decode(self) for _ in range(count))

    def read_proplist(self) -> dict[str, str]:
        """
        Decode a property mapping:

            'P' ( 't' key '\\0'  'L' len  'x' len bytes )*  'N'

        Values are NUL-terminated on the wire; the terminator is dropped.
        Duplicate keys overwrite earlier ones.
        """
        self.expect(Tag.PROPLIST)
        properties: dict[str, str] = {}

        while True:
            key = primitives.decode_string(self._source)
            if key is None:
                return properties

            length = primitives.decode_u32(self._source)
            value = primitives.decode_arbitrary(self._source)
            if len(value) != length:
                raise ProtocolMismatch(
                    length, len(value), what=f"length for property {key!r}"
                )

            if value.endswith(b"\x00"):
                value = value[:-1]
            properties[key] = value.decode("utf-8", errors="replace")
