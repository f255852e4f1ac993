class PulseError(Exception):
    """Base class for every error raised by pulsewire."""


class DecodeError(PulseError):
    """
    A value could not be decoded from the byte source.

    Decode errors are terminal for the current request: no partially
    populated record is ever returned alongside one.
    """


class ProtocolMismatch(DecodeError):
    """
    The observed tag byte differs from the one the decoder expects.
    Indicates either a codec bug or a protocol-version skew with the server.
    """
    def __init__(self, expected: object, actual: object, *, what: str = "tag") -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Unexpected {what}: expected {expected!r}, got {actual!r}")


class Truncated(DecodeError):
    """The byte source ended or failed before a complete value was read."""


class CommandError(PulseError):
    """The server answered a request with an ERROR packet."""

    NAMES = {
        0: "ok",
        1: "access denied",
        2: "unknown command",
        3: "invalid argument",
        4: "entity exists",
        5: "no such entity",
        6: "connection refused",
        7: "protocol error",
        8: "timeout",
        9: "no authentication key",
        10: "internal error",
        11: "connection terminated",
        12: "entity killed",
        13: "invalid server",
        14: "module initialization failed",
        15: "bad state",
        16: "no data",
        17: "incompatible protocol version",
        18: "too large",
        19: "not supported",
        20: "unknown error code",
        21: "no such extension",
        22: "obsolete functionality",
        23: "missing implementation",
        24: "client forked",
        25: "input/output error",
        26: "device or resource busy",
    }

    def __init__(self, code: int, command: int | None = None) -> None:
        self.code = code
        self.command = command
        name = self.NAMES.get(code, "unknown error code")
        where = f" (command {command})" if command is not None else ""
        super().__init__(f"Server error {code}: {name}{where}")


class FrameTooLarge(PulseError):
    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(f"Frame of {length} bytes exceeds limit of {limit} bytes")
