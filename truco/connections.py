"""Server side of the game connection: the listening socket and remote players."""

from __future__ import annotations

import logging
import socket
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, Protocol, Sequence

from .errors import NetworkError, ServerInitializationError
from .packets import Packet, decode_packet, encode_packet
from .tcp_client import split_messages

logger = logging.getLogger(__name__)

_RECV_SIZE = 4096


class Seat(Protocol):
    """Anything that sits at the table and exchanges packets with the server."""

    player_id: int

    def send(self, packet: Packet) -> None: ...

    def wait_for_packet(self) -> Packet | None: ...

    def close(self) -> None: ...


class RemotePlayer:
    """A player connected to the server over TCP."""

    def __init__(self, player_id: int, sock: socket.socket) -> None:
        self.player_id = player_id
        self.socket = sock
        self._buffer = b""
        self._pending: deque[bytes] = deque()

    def send(self, packet: Packet) -> None:
        """Send one packet, terminated by a newline."""
        data = (encode_packet(packet) + "\n").encode("utf-8")
        try:
            self.socket.sendall(data)
        except OSError as exc:
            raise NetworkError(f"error sending data to player {self.player_id}: {exc}") from exc

    def wait_for_packet(self) -> Packet | None:
        """Block until the next message arrives and return its packet.

        Returns None when the message is not a valid packet; raises
        NetworkError when the connection is closed or fails.
        """
        while not self._pending:
            try:
                data = self.socket.recv(_RECV_SIZE)
            except OSError as exc:
                raise NetworkError(f"error receiving from player {self.player_id}: {exc}") from exc
            if not data:
                raise NetworkError(f"player {self.player_id} closed the connection")
            messages, self._buffer = split_messages(self._buffer + data)
            self._pending.extend(messages)

        message = self._pending.popleft()
        try:
            return decode_packet(message)
        except ValueError as exc:
            logger.error("error parsing packet from player %d: %s", self.player_id, exc)
            return None

    def close(self) -> None:
        """Close the connection."""
        try:
            self.socket.close()
        except OSError:
            pass


def _next_packet(player: Seat) -> Packet:
    while True:
        packet = player.wait_for_packet()
        if packet is not None:
            return packet


class TcpServer:
    """Listens for players and exchanges packets with them."""

    def __init__(self) -> None:
        self._socket: socket.socket | None = None
        self.players: list[RemotePlayer] = []

    @property
    def address(self) -> tuple[Any, ...]:
        """The address the server is bound to."""
        if self._socket is None:
            raise NetworkError("server is not open")
        return self._socket.getsockname()

    def open(self, port: int, host: str = "") -> None:
        """Create the server socket and bind it to ``host``:``port``."""
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError as exc:
            raise ServerInitializationError(f"could not create socket: {exc}") from exc
        try:
            sock.bind((host, port))
        except OSError as exc:
            sock.close()
            raise ServerInitializationError(f"could not bind to {host!r}:{port}: {exc}") from exc
        self._socket = sock

    def accept_players(self, count: int) -> list[RemotePlayer]:
        """Wait for ``count`` players to connect; ids are given from 0 up.

        Stops early, keeping the players accepted so far, if listening or
        accepting fails.
        """
        if self._socket is None:
            raise NetworkError("server is not open")
        try:
            self._socket.listen(socket.SOMAXCONN)
        except OSError as exc:
            logger.error("could not listen: %s", exc)
            self._close_socket()
            return list(self.players)

        logger.info("waiting for %d clients to connect", count)
        player_id = 0
        while len(self.players) < count:
            try:
                conn, _ = self._socket.accept()
            except OSError as exc:
                logger.error("could not accept a client: %s", exc)
                self._close_socket()
                break
            player = RemotePlayer(player_id, conn)
            player_id += 1
            self.players.append(player)
            logger.info("client %d connected", player.player_id)
        return list(self.players)

    def send_to_clients(self, players: Iterable[Seat], packet: Packet) -> None:
        """Send the same packet to every given player."""
        for player in players:
            player.send(packet)

    def wait_for_team_packet(self, players: Sequence[Seat]) -> tuple[Packet, Packet]:
        """Wait, in parallel, for one valid packet from each of two players."""
        first, second = players[0], players[1]
        with ThreadPoolExecutor(max_workers=2) as pool:
            future_a = pool.submit(_next_packet, first)
            future_b = pool.submit(_next_packet, second)
            return future_a.result(), future_b.result()

    def _close_socket(self) -> None:
        if self._socket is not None:
            try:
                self._socket.close()
            finally:
                self._socket = None

    def close(self) -> None:
        """Close every player connection and the server socket."""
        for player in self.players:
            player.close()
        self.players.clear()
        self._close_socket()

    def __enter__(self) -> TcpServer:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()