"""
Message framing for the session protocol.

Every message is one typed value (int, float, str) serialised with pickle,
which makes it self-delimiting on the byte stream. The reading side refuses
every global reference, so nothing but primitive values can be received.
"""

from typing import Any, BinaryIO
import pickle

OK = "OK"

# Command codes sent by the client
SELECT_TABLE = 0
CLUSTER = 1
SAVE_CLUSTERS = 2
LOAD_CLUSTERS = 3

_PROTOCOL = 4


class _PrimitiveUnpickler(pickle.Unpickler):

    def find_class(self, module: str, name: str):
        raise pickle.UnpicklingError(f"Refusing to load global {module}.{name}")


class ObjectStream:
    """Reads and writes protocol values over a pair of binary streams."""

    def __init__(self, rfile: BinaryIO, wfile: BinaryIO):
        self.rfile = rfile
        self.wfile = wfile

    def read(self) -> Any:
        """Next value from the peer.

        Raises:
            EOFError: When the peer closed the stream
            pickle.UnpicklingError: If the value is malformed or not primitive
        """
        return _PrimitiveUnpickler(self.rfile).load()

    def write(self, *values: Any) -> None:
        """Send ``values`` in order and flush."""
        for value in values:
            pickle.dump(value, self.wfile, protocol=_PROTOCOL)
        self.wfile.flush()


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
