from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Self

from pulsewire.core.codec.reader import TagReader
from pulsewire.core.codec.tags import Field, Tag
from pulsewire.core.errors import ProtocolMismatch
from pulsewire.core.models.audio import ChannelMap, CVolume, SampleSpec
from pulsewire.core.models.format import FormatInfo


class PortAvailable(IntEnum):
    UNKNOWN = 0
    NO = 1
    YES = 2


@dataclass(frozen=True)
class SinkPort:
    name: str | None
    description: str | None
    priority: int
    available: int
    """
    Jack detection state, see PortAvailable.
    """

    @classmethod
    def decode(cls, reader: TagReader) -> Self:
        name, description, priority, available = reader.read(
            Tag.STRING, Tag.STRING, Tag.U32, Tag.U32
        )
        return cls(name=name, description=description, priority=priority, available=available)

    @property
    def is_available(self) -> bool:
        """Unknown counts as available: not every port has jack detection."""
        return self.available != PortAvailable.NO


def decode_ports(reader: TagReader) -> tuple[tuple[SinkPort, ...], str | None]:
    """
    Decode a sink's port list and the active port name that follows it.

    The two cases consume different bytes and must stay distinct:
    - ports absent: the count is zero and a single null-string marker
      stands where the active port name would be. Returns None.
    - ports present: `count` ports, then the active port name string.
    """
    (count,) = reader.read(Tag.U32)

    if count == 0:
        reader.expect(Tag.STRING_NULL)
        return (), None

    ports = reader.read_list(SinkPort, count)
    (active,) = reader.read(Tag.STRING)
    if active is None:
        raise ProtocolMismatch(Tag.STRING.byte, Tag.STRING_NULL.byte, what="active port name")
    return ports, active


@dataclass(frozen=True)
class Sink:
    """
    Snapshot of one playback device as reported by GET_SINK_INFO(_LIST).

    Latencies are in microseconds. `active_port_name` is None only when
    the sink has no ports at all. `properties` is a read-only view over a
    private copy.
    """
    index: int
    name: str | None
    description: str | None
    sample_spec: SampleSpec
    channel_map: ChannelMap
    module_index: int
    volume: CVolume
    muted: bool
    monitor_source_index: int
    monitor_source_name: str | None
    latency: int
    driver: str | None
    flags: int
    properties: Mapping[str, str]
    requested_latency: int
    base_volume: int
    state: int
    volume_steps: int
    card_index: int
    ports: tuple[SinkPort, ...] = ()
    active_port_name: str | None = None
    formats: tuple[FormatInfo, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    @classmethod
    def decode(cls, reader: TagReader) -> Self:
        (
            index, name, description,
            sample_spec, channel_map,
            module_index, volume, muted,
            monitor_source_index, monitor_source_name,
            latency, driver, flags, properties,
            requested_latency, base_volume,
            state, volume_steps, card_index,
        ) = reader.read(
            Tag.U32, Tag.STRING, Tag.STRING,
            SampleSpec, ChannelMap,
            Tag.U32, CVolume, Field.BOOLEAN,
            Tag.U32, Tag.STRING,
            Tag.USEC, Tag.STRING, Tag.U32, Tag.PROPLIST,
            Tag.USEC, Tag.VOLUME,
            Tag.U32, Tag.U32, Tag.U32,
        )

        ports, active_port_name = decode_ports(reader)

        (format_count,) = reader.read(Tag.U8)
        formats = reader.read_list(FormatInfo, format_count)

        return cls(
            index=index,
            name=name,
            description=description,
            sample_spec=sample_spec,
            channel_map=channel_map,
            module_index=module_index,
            volume=volume,
            muted=muted,
            monitor_source_index=monitor_source_index,
            monitor_source_name=monitor_source_name,
            latency=latency,
            driver=driver,
            flags=flags,
            properties=properties,
            requested_latency=requested_latency,
            base_volume=base_volume,
            state=state,
            volume_steps=volume_steps,
            card_index=card_index,
            ports=ports,
            active_port_name=active_port_name,
            formats=formats,
        )

    @property
    def active_port(self) -> SinkPort | None:
        for port in self.ports:
            if port.name == self.active_port_name:
                return port
        return None
