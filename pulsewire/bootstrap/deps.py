import json
import logging
import socket
from collections.abc import Callable
from functools import lru_cache

from pydantic import ValidationError

from pulsewire.bootstrap.config.settings import PulseWireConfig
from pulsewire.core.client import PulseClient
from pulsewire.core.helpers.utils import setup_logging
from pulsewire.core.ports.transport import Transport
from pulsewire.infra.socket_transport import SocketTransport

Handshake = Callable[[Transport], None]
"""
Caller-supplied routine that authenticates a fresh connection
(AUTH, SET_CLIENT_NAME) before it is handed to the client.
"""


@lru_cache
def get_config() -> PulseWireConfig:
    try:
        return PulseWireConfig()  # type: ignore[call-arg]
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(p) for p in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))


def connect(config: PulseWireConfig, handshake: Handshake | None = None) -> PulseClient:
    """
    Open the configured socket and return a client bound to it.

    If `handshake` is given it runs on the raw transport first; any error
    it raises closes the connection and propagates.
    """
    logger = logging.getLogger("bootstrap.deps")

    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    sock.settimeout(config.connection.timeout)
    try:
        sock.connect(str(config.connection.server))
    except OSError:
        sock.close()
        raise

    transport = SocketTransport(sock, max_frame_size=config.connection.max_frame_size)
    if handshake is not None:
        try:
            handshake(transport)
        except Exception:
            transport.close()
            raise

    logger.debug(f"Connected to {config.connection.server}")
    return PulseClient(transport)


def get_client(handshake: Handshake | None = None) -> PulseClient:
    config = get_config()
    setup_logging(config.log_level)
    return connect(config, handshake)
