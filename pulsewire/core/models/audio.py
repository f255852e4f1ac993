from dataclasses import dataclass
from enum import IntEnum
from typing import Self

from pulsewire.core.codec.reader import TagReader
from pulsewire.core.codec.tags import Field, Tag

VOLUME_MUTED = 0
VOLUME_NORM = 0x10000


class SampleFormat(IntEnum):
    U8 = 0
    ALAW = 1
    ULAW = 2
    S16LE = 3
    S16BE = 4
    FLOAT32LE = 5
    FLOAT32BE = 6
    S32LE = 7
    S32BE = 8
    S24LE = 9
    S24BE = 10
    S24_32LE = 11
    S24_32BE = 12


CHANNEL_POSITION_NAMES: tuple[str, ...] = (
    "mono",
    "front-left",
    "front-right",
    "front-center",
    "rear-center",
    "rear-left",
    "rear-right",
    "lfe",
    "front-left-of-center",
    "front-right-of-center",
    "side-left",
    "side-right",
    *(f"aux{i}" for i in range(32)),
    "top-center",
    "top-front-left",
    "top-front-right",
    "top-front-center",
    "top-rear-left",
    "top-rear-right",
    "top-rear-center",
)


@dataclass(frozen=True)
class SampleSpec:
    format: int
    """
    Raw sample format code, see SampleFormat.
    """

    channels: int
    rate: int
    """
    Sample rate in Hz.
    """

    @classmethod
    def decode(cls, reader: TagReader) -> Self:
        reader.expect(Tag.SAMPLE_SPEC)
        fmt, channels, rate = reader.read(Field.BYTE, Field.BYTE, Field.UINT32)
        return cls(format=fmt, channels=channels, rate=rate)

    @property
    def format_name(self) -> str:
        try:
            return SampleFormat(self.format).name.lower()
        except ValueError:
            return "invalid"


@dataclass(frozen=True)
class ChannelMap:
    positions: tuple[int, ...]

    @classmethod
    def decode(cls, reader: TagReader) -> Self:
        reader.expect(Tag.CHANNEL_MAP)
        (count,) = reader.read(Field.BYTE)
        return cls(positions=reader.read(*[Field.BYTE] * count))

    def names(self) -> list[str]:
        return [
            CHANNEL_POSITION_NAMES[p] if p < len(CHANNEL_POSITION_NAMES) else "invalid"
            for p in self.positions
        ]


@dataclass(frozen=True)
class CVolume:
    """
    Per-channel volume levels. VOLUME_NORM is 100%, VOLUME_MUTED is silence.
    """
    values: tuple[int, ...]

    @classmethod
    def decode(cls, reader: TagReader) -> Self:
        reader.expect(Tag.CVOLUME)
        (count,) = reader.read(Field.BYTE)
        return cls(values=reader.read(*[Field.UINT32] * count))

    def average(self) -> int:
        if not self.values:
            return VOLUME_MUTED
        return sum(self.values) // len(self.values)

    def max(self) -> int:
        return max(self.values, default=VOLUME_MUTED)
