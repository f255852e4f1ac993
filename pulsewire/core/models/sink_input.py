from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Self

from pulsewire.core.codec.reader import TagReader
from pulsewire.core.codec.tags import Field, Tag
from pulsewire.core.models.audio import ChannelMap, CVolume, SampleSpec
from pulsewire.core.models.format import FormatInfo


@dataclass(frozen=True)
class SinkInput:
    """
    Snapshot of one playback stream connected to a sink.

    The server reports exactly one negotiated format per stream; its
    property mapping is kept in `format.properties`.
    """
    index: int
    name: str | None
    owner_module: int
    client: int
    sink: int
    sample_spec: SampleSpec
    channel_map: ChannelMap
    volume: CVolume
    buffer_latency: int
    sink_latency: int
    resample_method: str | None
    driver: str | None
    muted: bool
    properties: Mapping[str, str]
    corked: bool
    has_volume: bool
    volume_writable: bool
    format: FormatInfo

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    @classmethod
    def decode(cls, reader: TagReader) -> Self:
        (
            index, name, owner_module, client, sink,
            sample_spec, channel_map, volume,
            buffer_latency, sink_latency,
            resample_method, driver, muted, properties,
            corked, has_volume, volume_writable,
            fmt,
        ) = reader.read(
            Tag.U32, Tag.STRING, Tag.U32, Tag.U32, Tag.U32,
            SampleSpec, ChannelMap, CVolume,
            Tag.USEC, Tag.USEC,
            Tag.STRING, Tag.STRING, Field.BOOLEAN, Tag.PROPLIST,
            Field.BOOLEAN, Field.BOOLEAN, Field.BOOLEAN,
            FormatInfo,
        )
        return cls(
            index=index,
            name=name,
            owner_module=owner_module,
            client=client,
            sink=sink,
            sample_spec=sample_spec,
            channel_map=channel_map,
            volume=volume,
            buffer_latency=buffer_latency,
            sink_latency=sink_latency,
            resample_method=resample_method,
            driver=driver,
            muted=muted,
            properties=properties,
            corked=corked,
            has_volume=has_volume,
            volume_writable=volume_writable,
            format=fmt,
        )

    @property
    def formats(self) -> tuple[FormatInfo, ...]:
        return (self.format,)
