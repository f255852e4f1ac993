from typing import Protocol


class Transport(Protocol):
    """
    Defines the request/response channel the client runs commands over.

    Implementations must:
    - treat one request and its reply as an atomic unit, so that
      concurrent callers sharing a connection never interleave
    - return only the reply body, with any packet framing and
      command/tag header already stripped
    - raise a PulseError (Truncated, CommandError, ...) on failure,
      never return a partial body
    """

    def request(self, command: int, payload: bytes = b"") -> bytes:
        """Send `command` with its encoded arguments and return the reply body."""

    def close(self) -> None:
        """Release the underlying connection. The instance must not be used again."""
