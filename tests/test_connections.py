import socket
import threading

import pytest

from truco.cards import Card, Suit
from truco.connections import RemotePlayer, TcpServer
from truco.errors import NetworkError, ServerInitializationError
from truco.packets import (
    CardPacket,
    StartGamePacket,
    TrucoPacket,
    TrucoResult,
    decode_packet,
    encode_packet,
)


@pytest.fixture
def pair():
    server_side, client_side = socket.socketpair()
    client_side.settimeout(5)
    player = RemotePlayer(3, server_side)
    yield player, client_side
    player.close()
    client_side.close()


def _read_line(sock):
    data = b""
    while not data.endswith(b"\n"):
        chunk = sock.recv(4096)
        if not chunk:
            break
        data += chunk
    return data


def test_send_writes_newline_terminated_json(pair):
    player, peer = pair
    player.send(StartGamePacket(1, 1))
    assert _read_line(peer) == b'{"packetType":0,"payload":{"playerId":1,"teamId":1}}\n'


def test_wait_for_packet_reads_several_packets_from_one_chunk(pair):
    player, peer = pair
    first = CardPacket(2, Card(5, Suit.HEARTS), True)
    second = TrucoPacket(2, 1, TrucoResult.RAISE)
    peer.sendall((encode_packet(first) + "\n" + encode_packet(second) + "\n").encode())
    assert player.wait_for_packet() == first
    assert player.wait_for_packet() == second


def test_wait_for_packet_joins_partial_messages(pair):
    player, peer = pair
    packet = StartGamePacket(0, 0)
    text = (encode_packet(packet) + "\n").encode()
    peer.sendall(text[:10])
    peer.sendall(text[10:])
    assert player.wait_for_packet() == packet


def test_malformed_message_gives_none_then_continues(pair):
    player, peer = pair
    packet = StartGamePacket(2, 0)
    peer.sendall(b"not json\n" + (encode_packet(packet) + "\n").encode())
    assert player.wait_for_packet() is None
    assert player.wait_for_packet() == packet


def test_closed_connection_raises(pair):
    player, peer = pair
    peer.close()
    with pytest.raises(NetworkError):
        player.wait_for_packet()


def test_wait_for_team_packet_returns_both_in_order():
    pairs = [socket.socketpair() for _ in range(2)]
    players = [RemotePlayer(i, pairs[i][0]) for i in range(2)]
    try:
        a = TrucoPacket(0, 1, TrucoResult.YES)
        b = TrucoPacket(0, 1, TrucoResult.NO)
        pairs[1][1].sendall((encode_packet(b) + "\n").encode())
        pairs[0][1].sendall(b"garbage\n" + (encode_packet(a) + "\n").encode())
        result = TcpServer().wait_for_team_packet(players)
        assert result == (a, b)
    finally:
        for player in players:
            player.close()
        for _, peer in pairs:
            peer.close()


def test_open_with_invalid_host_raises():
    server = TcpServer()
    with pytest.raises(ServerInitializationError):
        server.open(0, "256.0.0.1")


def test_accept_before_open_raises():
    with pytest.raises(NetworkError):
        TcpServer().accept_players(1)