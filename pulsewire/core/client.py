import io
import logging
from collections.abc import Iterable
from typing import TypeVar

from pulsewire.core import commands
from pulsewire.core.codec.reader import TagReader
from pulsewire.core.commands import Command
from pulsewire.core.models.sink import Sink
from pulsewire.core.models.sink_input import SinkInput
from pulsewire.core.ports.decodable import Decodable
from pulsewire.core.ports.transport import Transport

D = TypeVar("D", bound=Decodable)


class PulseClient:
    """
    Synchronous command client for a PulseAudio server.

    Each call is one transaction on the underlying Transport: the command
    and its encoded arguments go out, the whole reply body comes back and
    is decoded here.

    - List queries decode records back to back until the reply body is
      exhausted. The list itself carries no count.
    - Single queries decode exactly one record.
    - Mutations only care that the round trip succeeded; the reply body
      is not decoded.

    Any transport or decode error propagates unchanged and no partial
    result is returned. Nothing is retried at this layer.
    """
    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._logger = logging.getLogger("core.client")

    def __enter__(self) -> "PulseClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._transport.close()

    def sinks(self) -> list[Sink]:
        return self._request_list(Command.GET_SINK_INFO_LIST, Sink)

    def sink(self, name: str) -> Sink:
        return self._request_one(Command.GET_SINK_INFO, commands.get_sink_info(name), Sink)

    def sink_inputs(self) -> list[SinkInput]:
        return self._request_list(Command.GET_SINK_INPUT_INFO_LIST, SinkInput)

    def sink_input(self, index: int) -> SinkInput:
        return self._request_one(
            Command.GET_SINK_INPUT_INFO, commands.get_sink_input_info(index), SinkInput
        )

    def set_default_sink(self, sink_name: str) -> None:
        self._transport.request(Command.SET_DEFAULT_SINK, commands.set_default_sink(sink_name))

    def set_sink_port(self, sink_name: str, port_name: str) -> None:
        self._transport.request(
            Command.SET_SINK_PORT, commands.set_sink_port(sink_name, port_name)
        )

    def move_sink_input(self, index: int, sink_name: str) -> None:
        self._transport.request(
            Command.MOVE_SINK_INPUT, commands.move_sink_input(index, sink_name)
        )

    def set_sink_mute(self, sink_name: str, muted: bool) -> None:
        self._transport.request(Command.SET_SINK_MUTE, commands.set_sink_mute(sink_name, muted))

    def set_sink_volume(self, sink_name: str, volume: Iterable[int]) -> None:
        self._transport.request(
            Command.SET_SINK_VOLUME, commands.set_sink_volume(sink_name, volume)
        )

    def _request_list(self, command: Command, record: type[D]) -> list[D]:
        body = self._transport.request(command)
        buffer = io.BytesIO(body)
        reader = TagReader(buffer)

        records = []
        while buffer.tell() < len(body):
            records.append(record.decode(reader))

        self._logger.debug(f"{command.name}: decoded {len(records)} {record.__name__} record(s)")
        return records

    def _request_one(self, command: Command, payload: bytes, record: type[D]) -> D:
        body = self._transport.request(command, payload)
        buffer = io.BytesIO(body)
        result = record.decode(TagReader(buffer))

        trailing = len(body) - buffer.tell()
        if trailing:
            self._logger.debug(f"{command.name}: ignoring {trailing} trailing byte(s)")
        return result
