from typing import Protocol, Self, TYPE_CHECKING

if TYPE_CHECKING:
    from pulsewire.core.codec.reader import TagReader


class Decodable(Protocol):
    """
    Capability of a record that knows its own wire layout.

    The stream decoder only ever works against this interface: when a
    layout item is a Decodable class, the reader hands itself to
    `decode` and takes back the finished record.

    Implementations must:
    - consume exactly the bytes of one record
    - return a fully populated instance, or raise
    - never swallow a DecodeError raised by the reader
    """

    @classmethod
    def decode(cls, reader: "TagReader") -> Self:
        """Read one record from the reader's source."""
