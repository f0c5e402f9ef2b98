import socket

from loguru import logger

from ..exceptions import TransportError


class UDPConnection():
    """
    A UDP socket with a default destination.

    ``connect`` only records the peer, nothing is exchanged on the wire.
    Use it as a context manager so the socket is closed after the write,
    whether the write succeeded or not.
    """

    def __init__(self, timeout: float | None = None):
        self.sock = None
        self.timeout = timeout

    def connect(self, host: str, port: int):
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM,
                                 socket.IPPROTO_UDP)
        except OSError as e:
            logger.error(f"failed dial step {e}")
            raise TransportError(f"failed to open UDP socket: {e}") from e
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
            sock.settimeout(self.timeout)
            sock.connect((host, port))
        except OSError as e:
            sock.close()
            logger.error(f"failed dial step {e}")
            raise TransportError(f"failed to connect to {host}:{port}: {e}") from e
        self.sock = sock
        return self

    def write(self, data: bytes) -> int:
        if self.sock is None:
            raise TransportError("not connected")
        try:
            return self.sock.send(bytes(data))
        except OSError as e:
            raise TransportError(f"failed to write packet: {e}") from e

    def close(self):
        if self.sock is None:
            raise TransportError("no connection to close")
        sock, self.sock = self.sock, None
        try:
            sock.close()
        except OSError as e:
            raise TransportError(f"failed to close socket: {e}") from e

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if self.sock is not None:
            self.close()
