from __future__ import annotations

import socket


class DatagramTransport:
    """One connected UDP socket to the statsd daemon."""

    def __init__(self, host: str, port: int):
        self.addr = (host, int(port))
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self._sock.connect(self.addr)
        except Exception:
            self._sock.close()
            raise

    def send(self, payload: bytes) -> None:
        self._sock.send(payload)

    def close(self) -> None:
        self._sock.close()
