"""
Command opcodes and their argument encodings.

Builders are pure: they only turn caller arguments into the exact tagged
byte sequence the server expects after the command/tag header. Commands
that address a sink by name pass INVALID_INDEX in the index slot.
"""
from collections.abc import Iterable
from enum import IntEnum

from pulsewire.core.codec.tags import INVALID_INDEX
from pulsewire.core.codec.writer import TagWriter


class Command(IntEnum):
    ERROR = 0
    TIMEOUT = 1
    REPLY = 2
    AUTH = 8
    SET_CLIENT_NAME = 9
    GET_SINK_INFO = 21
    GET_SINK_INFO_LIST = 22
    GET_SINK_INPUT_INFO = 29
    GET_SINK_INPUT_INFO_LIST = 30
    SET_SINK_VOLUME = 36
    SET_SINK_MUTE = 39
    SET_DEFAULT_SINK = 44
    SUBSCRIBE_EVENT = 66
    MOVE_SINK_INPUT = 67
    SET_SINK_PORT = 96


def get_sink_info(name: str) -> bytes:
    return TagWriter().put_u32(INVALID_INDEX).put_string(name).getvalue()


def get_sink_input_info(index: int) -> bytes:
    return TagWriter().put_u32(index).getvalue()


def set_default_sink(name: str) -> bytes:
    return TagWriter().put_string(name).getvalue()


def set_sink_port(sink_name: str, port_name: str) -> bytes:
    return (
        TagWriter()
        .put_u32(INVALID_INDEX)
        .put_string(sink_name)
        .put_string(port_name)
        .getvalue()
    )


def move_sink_input(index: int, sink_name: str) -> bytes:
    return (
        TagWriter()
        .put_u32(index)
        .put_u32(INVALID_INDEX)
        .put_string(sink_name)
        .getvalue()
    )


def set_sink_mute(sink_name: str, muted: bool) -> bytes:
    return (
        TagWriter()
        .put_u32(INVALID_INDEX)
        .put_string(sink_name)
        .put_boolean(muted)
        .getvalue()
    )


def set_sink_volume(sink_name: str, volume: Iterable[int]) -> bytes:
    return (
        TagWriter()
        .put_u32(INVALID_INDEX)
        .put_string(sink_name)
        .put_cvolume(volume)
        .getvalue()
    )
