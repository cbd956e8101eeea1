import json

import pytest

from truco.cards import Card, Suit
from truco.packets import (
    CardPacket,
    ElevenHandPacket,
    ElevenHandResponsePacket,
    EndRoundPacket,
    EndTurnPacket,
    Packet,
    PacketType,
    PlayerPlayPacket,
    StartGamePacket,
    StartRoundPacket,
    TrucoPacket,
    TrucoResult,
    decode_packet,
    encode_packet,
)

HAND = (Card(0, Suit.CLUBS), Card(5, Suit.HEARTS), Card(9, Suit.DIAMONDS))
PARTNER = (Card(3, Suit.SPADES), Card(7, Suit.CLUBS), Card(8, Suit.HEARTS))

ALL_PACKETS = [
    StartGamePacket(2, 0),
    StartRoundPacket(Card(4, Suit.SPADES), HAND),
    EndRoundPacket(1, 3, 4, 9),
    EndTurnPacket(-1, -1),
    PlayerPlayPacket(3, True),
    CardPacket(1, Card(6, Suit.HEARTS), True),
    TrucoPacket(2, 1, TrucoResult.RAISE),
    ElevenHandPacket(Card(2, Suit.DIAMONDS), HAND, PARTNER),
    ElevenHandResponsePacket(1),
]


@pytest.mark.parametrize("packet", ALL_PACKETS, ids=lambda p: type(p).__name__)
def test_text_round_trip(packet):
    assert decode_packet(encode_packet(packet)) == packet


@pytest.mark.parametrize("packet", ALL_PACKETS, ids=lambda p: type(p).__name__)
def test_dict_round_trip_through_base(packet):
    restored = Packet.from_dict(packet.to_dict())
    assert restored == packet
    assert type(restored) is type(packet)


def test_dict_round_trip_through_subclass():
    card_packet = CardPacket(1, Card(6, Suit.HEARTS), True)
    assert CardPacket.from_dict(card_packet.to_dict()) == card_packet
    end_round = EndRoundPacket(1, 3, 4, 9)
    assert EndRoundPacket.from_dict(end_round.to_dict()) == end_round
    eleven = ElevenHandPacket(Card(2, Suit.DIAMONDS), HAND, PARTNER)
    assert ElevenHandPacket.from_dict(eleven.to_dict()) == eleven


@pytest.mark.parametrize("packet", ALL_PACKETS, ids=lambda p: type(p).__name__)
def test_envelope_holds_type(packet):
    data = json.loads(encode_packet(packet))
    assert set(data) == {"packetType", "payload"}
    assert data["packetType"] == int(packet.packet_type)


def test_wire_format_of_start_game():
    assert encode_packet(StartGamePacket(1, 1)) == (
        '{"packetType":0,"payload":{"playerId":1,"teamId":1}}'
    )


def test_packet_type_numbers_follow_declaration_order():
    assert [PacketType(number).name for number in range(9)] == [
        "START_GAME",
        "START_ROUND",
        "END_ROUND",
        "END_TURN",
        "PLAYER_PLAY",
        "PLAYER_CARD",
        "TRUCO",
        "ELEVEN_HAND",
        "ELEVEN_HAND_RESPONSE",
    ]
    assert [TrucoResult(number).name for number in range(3)] == ["YES", "NO", "RAISE"]


def test_card_packet_payload_uses_ints_for_flags():
    payload = CardPacket(1, Card(6, Suit.HEARTS), True).to_dict()["payload"]
    assert payload["isCovered"] == 1
    assert payload["card"] == Card(6, Suit.HEARTS).to_dict()


def test_base_from_dict_picks_concrete_class():
    packet = Packet.from_dict(TrucoPacket(0, 1, TrucoResult.YES).to_dict())
    assert isinstance(packet, TrucoPacket)
    assert packet.result is TrucoResult.YES


def test_hand_lists_become_tuples():
    packet = StartRoundPacket(Card(1, Suit.CLUBS), list(HAND))
    assert packet.hand_cards == HAND


def test_eleven_hand_keeps_card_order():
    decoded = decode_packet(encode_packet(ElevenHandPacket(Card(2, Suit.CLUBS), HAND, PARTNER)))
    assert decoded.hand_cards == HAND
    assert decoded.partner_hand == PARTNER


def test_missing_hand_list_reads_as_empty():
    data = {"packetType": int(PacketType.START_ROUND), "payload": {"tableCard": {"value": 3, "suit": 4}}}
    packet = Packet.from_dict(data)
    assert packet.hand_cards == ()
    assert packet.table_card == Card(3, Suit.CLUBS)


def test_subclass_rejects_other_type():
    with pytest.raises(ValueError):
        StartGamePacket.from_dict(EndTurnPacket(0, 0).to_dict())


def test_unknown_packet_type_rejected():
    with pytest.raises(ValueError):
        decode_packet(json.dumps({"packetType": 99, "payload": {}}))


def test_missing_field_rejected():
    with pytest.raises(ValueError):
        decode_packet(json.dumps({"packetType": int(PacketType.START_GAME), "payload": {"playerId": 1}}))


def test_missing_payload_rejected():
    with pytest.raises(ValueError):
        Packet.from_dict({"packetType": int(PacketType.END_TURN)})


def test_invalid_json_rejected():
    with pytest.raises(ValueError):
        decode_packet("{not json")


def test_non_object_rejected():
    with pytest.raises(ValueError):
        decode_packet("[1, 2, 3]")


def test_bad_truco_result_rejected():
    data = TrucoPacket(0, 1, TrucoResult.NO).to_dict()
    data["payload"]["result"] = 7
    with pytest.raises(ValueError):
        Packet.from_dict(data)