import struct

from pulsewire.core.codec.tags import Tag
from pulsewire.core.codec.writer import TagWriter

CONTROL_CHANNEL = 0xFFFFFFFF


def encode_sink(
    index: int = 0,
    name: str = "alsa_output.pci-0000_00_1f.3.analog-stereo",
    ports: list[tuple[str, str, int, int]] | None = None,
    active_port: str | None = None,
    formats: list[tuple[int, dict[str, str]]] | None = None,
    properties: dict[str, str] | None = None,
    muted: bool = False,
) -> bytes:
    ports = ports or []
    formats = formats if formats is not None else [(1, {})]
    properties = properties if properties is not None else {"device.class": "sound"}

    w = TagWriter()
    w.put_u32(index).put_string(name).put_string("Built-in Audio Analog Stereo")
    w.put_sample_spec(3, 2, 44100).put_channel_map([1, 2])
    w.put_u32(7).put_cvolume([0x10000, 0x8000]).put_boolean(muted)
    w.put_u32(index + 100).put_string(f"{name}.monitor")
    w.put_usec(25000).put_string("module-alsa-card.c").put_u32(0x3f).put_proplist(properties)
    w.put_usec(40000).put_volume(0x10000).put_u32(1).put_u32(65537).put_u32(2)

    w.put_u32(len(ports))
    for port_name, description, priority, available in ports:
        w.put_string(port_name).put_string(description).put_u32(priority).put_u32(available)
    if ports:
        w.put_string(active_port)
    else:
        w.put_tag(Tag.STRING_NULL)

    w.put_u8(len(formats))
    for encoding, format_properties in formats:
        w.put_format_info(encoding, format_properties)
    return w.getvalue()


def encode_sink_input(
    index: int = 12,
    name: str = "Playback",
    sink: int = 0,
    format_properties: dict[str, str] | None = None,
    corked: bool = False,
) -> bytes:
    w = TagWriter()
    w.put_u32(index).put_string(name).put_u32(0xFFFFFFFF).put_u32(34).put_u32(sink)
    w.put_sample_spec(5, 2, 48000).put_channel_map([1, 2]).put_cvolume([0x10000, 0x10000])
    w.put_usec(1200).put_usec(30000)
    w.put_string("speex-float-1").put_string("protocol-native.c").put_boolean(False)
    w.put_proplist({"application.name": "Firefox", "media.role": "video"})
    w.put_boolean(corked).put_boolean(True).put_boolean(True)
    w.put_format_info(1, format_properties or {})
    return w.getvalue()


def frame(payload: bytes, channel: int = CONTROL_CHANNEL) -> bytes:
    return struct.pack("!IIIII", len(payload), channel, 0, 0, 0) + payload


def reply(tag: int, body: bytes = b"", command: int = 2) -> bytes:
    return frame(TagWriter().put_u32(command).put_u32(tag).getvalue() + body)


def error_reply(tag: int, code: int) -> bytes:
    return frame(TagWriter().put_u32(0).put_u32(tag).put_u32(code).getvalue())
