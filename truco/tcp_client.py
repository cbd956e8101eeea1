"""Client side of the game connection: newline-delimited JSON packets over TCP."""

from __future__ import annotations

import logging
import socket
import threading
from typing import Callable, TypeVar

from .errors import NetworkError
from .packets import Packet, PacketType, decode_packet, encode_packet

logger = logging.getLogger(__name__)

_RECV_SIZE = 4096

PacketHandler = Callable[[Packet], None]
_Buffer = TypeVar("_Buffer", str, bytes)


def split_messages(buffer: _Buffer) -> tuple[list[_Buffer], _Buffer]:
    """Split a buffer on newlines into complete messages and the unfinished rest.

    Blank messages are dropped.
    """
    separator = b"\n" if isinstance(buffer, (bytes, bytearray)) else "\n"
    *messages, rest = buffer.split(separator)
    return [message for message in messages if message.strip()], rest


class TcpClient:
    """Connects to the game server and hands every received packet to a handler."""

    def __init__(self) -> None:
        self._socket: socket.socket | None = None
        self._handlers: dict[PacketType, PacketHandler] = {}
        self._buffer = b""
        self._listen_thread: threading.Thread | None = None

    def on(self, packet_type: PacketType, handler: PacketHandler) -> None:
        """Register the handler called for packets of ``packet_type``."""
        self._handlers[PacketType(packet_type)] = handler

    def connect(self, host: str, port: int) -> None:
        """Open a connection to the server; raise NetworkError on failure."""
        try:
            sock = socket.create_connection((host, port))
        except OSError as exc:
            raise NetworkError(f"could not connect to {host}:{port}: {exc}") from exc
        self._socket = sock
        self._buffer = b""
        logger.info("connected to server %s:%d", host, port)

    def _require_socket(self) -> socket.socket:
        if self._socket is None:
            raise NetworkError("client is not connected")
        return self._socket

    def send(self, packet: Packet) -> None:
        """Send one packet to the server."""
        sock = self._require_socket()
        data = (encode_packet(packet) + "\n").encode("utf-8")
        try:
            sock.sendall(data)
        except OSError as exc:
            raise NetworkError(f"error sending data: {exc}") from exc

    def dispatch(self, packet: Packet) -> None:
        """Call the handler registered for the packet's type, if any."""
        handler = self._handlers.get(packet.packet_type)
        if handler is not None:
            handler(packet)

    def feed(self, data: bytes) -> list[Packet]:
        """Take in received bytes and dispatch every complete packet.

        Returns the packets decoded from this call; malformed lines are
        logged and skipped.
        """
        messages, self._buffer = split_messages(self._buffer + data)
        packets: list[Packet] = []
        for message in messages:
            try:
                packet = decode_packet(message)
            except ValueError as exc:
                logger.error("error parsing packet: %s", exc)
                continue
            packets.append(packet)
            self.dispatch(packet)
        return packets

    def start_listening(self) -> threading.Thread:
        """Listen for packets on a background thread."""
        self._require_socket()
        thread = threading.Thread(target=self.listen, name="truco-client", daemon=True)
        thread.start()
        self._listen_thread = thread
        return thread

    def listen(self) -> None:
        """Receive and dispatch packets until the connection closes."""
        sock = self._require_socket()
        while True:
            try:
                data = sock.recv(_RECV_SIZE)
            except OSError:
                break
            if not data:
                break
            self.feed(data)

    def close(self) -> None:
        """Close the connection."""
        if self._socket is not None:
            try:
                self._socket.close()
            finally:
                self._socket = None