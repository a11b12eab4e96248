"""Datagram transport for history snapshots.

Each snapshot travels as one self-contained UDP datagram holding a compact
JSON array of [x, y, z] triples. There is no acknowledgment, ordering or
retry; a lost datagram is a lost animation frame.
"""

import json
import socket

import torch

from . import _utils

DEFAULT_HOST = "gateway"
DEFAULT_PORT = 8000
RECV_BUFSIZE = 1024


def encode_frame(snapshot):
    """Serialize a snapshot to a UTF-8 JSON frame.

    Args:
        snapshot: torch.tensor of shape (n, 3)

    Returns:
        bytes, e.g. b'[[1.0,0.0,0.0],[0.0,1.0,0.0]]'

    Raises:
        ValueError: if a component is NaN or infinite (not representable in JSON)
    """
    return json.dumps(_utils.to_triples(snapshot), separators=(",", ":"), allow_nan=False).encode("utf-8")


def decode_frame(payload, dtype=torch.float32):
    """Parse a JSON frame back into a snapshot.

    Args:
        payload: bytes or str
        dtype: torch.dtype of the returned tensor (default: torch.float32)

    Returns:
        torch.tensor of shape (n, 3)

    Raises:
        ValueError: if the payload is not a JSON array of numeric triples
    """
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8")
    data = json.loads(payload)

    if not isinstance(data, list) or not all(_is_triple(v) for v in data):
        raise ValueError(f"Frame is not a list of {_utils.DIM}-element arrays: {payload!r}")

    return _utils.as_vector_set(data, dtype=dtype)


def _is_triple(v):
    return (
        isinstance(v, list)
        and len(v) == _utils.DIM
        and all(isinstance(c, (int, float)) and not isinstance(c, bool) for c in v)
    )


class UDPSink:
    """Send snapshots to a fixed peer, one datagram per snapshot.

    The socket is bound to an ephemeral local port and connected to the peer
    at construction; failures there raise OSError and are meant to abort
    startup.
    """

    def __init__(self, host=DEFAULT_HOST, port=DEFAULT_PORT, bind_address=("0.0.0.0", 0)):
        """Initialize UDPSink.

        Args:
            host: str, peer host name or address (default: "gateway")
            port: int, peer UDP port (default: 8000)
            bind_address: (host, port) tuple for the local end (default: any, ephemeral)
        """
        self.host = host
        self.port = port
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self.sock.bind(bind_address)
            self.sock.connect((host, port))
        except OSError:
            self.sock.close()
            raise

    def send(self, snapshot):
        """Encode and send one snapshot.

        Args:
            snapshot: torch.tensor of shape (n, 3)

        Returns:
            int, number of bytes sent

        Raises:
            ValueError: if the snapshot holds NaN or infinite components
            OSError: if the datagram cannot be sent
        """
        return self.sock.send(encode_frame(snapshot))

    def close(self):
        self.sock.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self):
        return f"UDPSink(host={self.host!r}, port={self.port})"


class UDPSource:
    """Receive snapshots sent by a UDPSink."""

    def __init__(self, host="0.0.0.0", port=DEFAULT_PORT, bufsize=RECV_BUFSIZE, timeout=None):
        """Initialize UDPSource.

        Args:
            host: str, local address to bind (default: all interfaces)
            port: int, local UDP port, 0 for an ephemeral one (default: 8000)
            bufsize: int, maximum datagram size read (default: 1024)
            timeout: float or None, seconds to wait in receive() (default: block)
        """
        self.bufsize = bufsize
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self.sock.bind((host, port))
        except OSError:
            self.sock.close()
            raise
        self.sock.settimeout(timeout)

    @property
    def address(self):
        """(host, port) the source is bound to."""
        return self.sock.getsockname()

    def receive(self, dtype=torch.float32):
        """Block until one frame arrives and return it decoded.

        Returns:
            torch.tensor of shape (n, 3)
        """
        payload, _ = self.sock.recvfrom(self.bufsize)
        return decode_frame(payload, dtype=dtype)

    def close(self):
        self.sock.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self):
        host, port = self.address
        return f"UDPSource(host={host!r}, port={port})"
