import io
import logging
import socket
import struct
import threading

from pulsewire.core.codec import primitives
from pulsewire.core.codec.reader import TagReader
from pulsewire.core.codec.tags import Tag
from pulsewire.core.commands import Command
from pulsewire.core.errors import CommandError, FrameTooLarge, ProtocolMismatch, Truncated
from pulsewire.core.ports.transport import Transport


class SocketTransport(Transport):
    """
    Blocking packet transport over an already connected stream socket.

    Every packet is framed by a 20-byte descriptor of five big-endian
    uint32 values:

        [length][channel][offset_hi][offset_lo][flags][payload]

    Control packets travel on channel 0xFFFFFFFF. Their payload starts
    with a tagged command and a tagged sequence number:

        request: 'L' command  'L' tag  <arguments>
        reply:   'L' REPLY    'L' tag  <body>
                 'L' ERROR    'L' tag  'L' error-code

    A request and its reply form one atomic unit guarded by a per-connection
    lock, so threads sharing the transport never see each other's replies.
    Packets that do not answer the outstanding request (audio data on other
    channels, subscription events) are logged and dropped.

    Authentication and client naming are the caller's responsibility and
    must be completed before regular commands are issued; they can be sent
    through `request` like any other command.
    """
    CONTROL_CHANNEL = 0xFFFFFFFF
    DESCRIPTOR = struct.Struct("!IIIII")
    DEFAULT_MAX_FRAME_SIZE = 16 * 1024 * 1024  # 16MB

    def __init__(self, sock: socket.socket, max_frame_size: int = DEFAULT_MAX_FRAME_SIZE) -> None:
        self._sock = sock
        self._file = sock.makefile("rb")
        self._max_frame_size = max_frame_size
        self._lock = threading.Lock()
        self._sequence = 0
        self._closed = False
        self._logger = logging.getLogger("infra.socket_transport")

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._file.close()
        finally:
            self._sock.close()

    def request(self, command: int, payload: bytes = b"") -> bytes:
        with self._lock:
            if self._closed:
                raise Truncated("Transport is closed")

            tag = self._next_tag()
            packet = primitives.encode_u32(command) + primitives.encode_u32(tag) + payload
            self._logger.debug(f"-> command={command} tag={tag} size={len(payload)}")

            try:
                self._send_frame(packet)
                return self._recv_reply(command, tag)
            except (Truncated, FrameTooLarge) as ex:
                # Stream position is unknown from here on
                self._logger.warning(f"Closing connection: {ex}")
                self.close()
                raise

    def _recv_reply(self, command: int, tag: int) -> bytes:
        while True:
            frame = self._recv_frame()
            if frame is None:
                continue

            buffer = io.BytesIO(frame)
            reply_command, reply_tag = TagReader(buffer).read(Tag.U32, Tag.U32)

            if reply_tag != tag:
                self._logger.warning(
                    f"Dropping packet command={reply_command} tag={reply_tag} "
                    f"while waiting for tag={tag}"
                )
                continue

            if reply_command == Command.ERROR:
                (code,) = TagReader(buffer).read(Tag.U32)
                raise CommandError(code, command)

            if reply_command != Command.REPLY:
                raise ProtocolMismatch(Command.REPLY, reply_command, what="reply command")

            body = frame[buffer.tell():]
            self._logger.debug(f"<- tag={tag} size={len(body)}")
            return body

    def _next_tag(self) -> int:
        # 0xFFFFFFFF is reserved for packets that answer no request
        tag = self._sequence
        self._sequence = (self._sequence + 1) % self.CONTROL_CHANNEL
        return tag

    def _send_frame(self, packet: bytes) -> None:
        descriptor = self.DESCRIPTOR.pack(len(packet), self.CONTROL_CHANNEL, 0, 0, 0)
        try:
            self._sock.sendall(descriptor + packet)
        except OSError as ex:
            raise Truncated(f"Send failed: {ex}") from ex

    def _recv_frame(self) -> bytes | None:
        header = primitives.read_exact(self._file, self.DESCRIPTOR.size)
        length, channel, _, _, _ = self.DESCRIPTOR.unpack(header)

        if length > self._max_frame_size:
            raise FrameTooLarge(length, self._max_frame_size)

        payload = primitives.read_exact(self._file, length)
        if channel != self.CONTROL_CHANNEL:
            self._logger.debug(f"Dropping {length} byte(s) on channel {channel}")
            return None
        return payload
