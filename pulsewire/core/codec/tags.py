from enum import Enum, IntEnum


class Tag(IntEnum):
    """
    Type tags of the PulseAudio native protocol ("tagstruct").

    Every tagged value on the wire starts with one of these bytes.
    The values are the ASCII codes used by the server.
    """
    STRING = ord("t")
    STRING_NULL = ord("N")
    U32 = ord("L")
    U8 = ord("B")
    U64 = ord("R")
    SAMPLE_SPEC = ord("a")
    ARBITRARY = ord("x")
    BOOLEAN_TRUE = ord("1")
    BOOLEAN_FALSE = ord("0")
    USEC = ord("U")
    CHANNEL_MAP = ord("m")
    CVOLUME = ord("v")
    PROPLIST = ord("P")
    VOLUME = ord("V")
    FORMAT_INFO = ord("f")

    def __repr__(self) -> str:
        return f"Tag.{self.name}({chr(self.value)!r})"

    @property
    def byte(self) -> bytes:
        return bytes((self.value,))


class Field(Enum):
    """
    Layout items that are not a single tagged scalar.

    BYTE and UINT32 are raw payload reads with no tag check, used inside
    composite values (sample spec, channel map, volume arrays). BOOLEAN is
    a tag byte whose value is itself the payload.
    """
    BYTE = "byte"
    UINT32 = "uint32"
    BOOLEAN = "boolean"


UINT32_MAX = 0xFFFFFFFF
UINT64_MAX = 0xFFFFFFFFFFFFFFFF

INVALID_INDEX = UINT32_MAX
"""
Index sentinel meaning "select by name, not by index".
"""
