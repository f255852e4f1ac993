from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Self

from pulsewire.core.codec.reader import TagReader
from pulsewire.core.codec.tags import Tag


class Encoding(IntEnum):
    ANY = 0
    PCM = 1
    AC3_IEC61937 = 2
    EAC3_IEC61937 = 3
    MPEG_IEC61937 = 4
    DTS_IEC61937 = 5
    MPEG2_AAC_IEC61937 = 6
    TRUEHD_IEC61937 = 7
    DTSHD_IEC61937 = 8


@dataclass(frozen=True)
class FormatInfo:
    """
    A stream format a sink or sink input can carry: an encoding plus
    free-form properties such as "format.rate" or "format.channels".

    Wire layout:

        'f'  'B' encoding  <proplist>
    """
    encoding: int
    properties: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    @classmethod
    def decode(cls, reader: TagReader) -> Self:
        reader.expect(Tag.FORMAT_INFO)
        encoding, properties = reader.read(Tag.U8, Tag.PROPLIST)
        return cls(encoding=encoding, properties=properties)

    @property
    def encoding_name(self) -> str:
        try:
            return Encoding(self.encoding).name.lower().replace("_", "-")
        except ValueError:
            return "invalid"
