"""Messages exchanged between the game server and its clients.

Every packet travels as a JSON object of the form
``{"packetType": <int>, "payload": {...}}``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, ClassVar, Iterable, Mapping

from .cards import Card


class PacketType(IntEnum):
    """Kinds of packet, numbered as they appear on the wire."""

    START_GAME = 0
    START_ROUND = 1
    END_ROUND = 2
    END_TURN = 3
    PLAYER_PLAY = 4
    PLAYER_CARD = 5
    TRUCO = 6
    ELEVEN_HAND = 7
    ELEVEN_HAND_RESPONSE = 8


class TrucoResult(IntEnum):
    """Answer to a truco request."""

    YES = 0
    NO = 1
    RAISE = 2


class Packet:
    """Base class of all packets; subclasses declare their ``packet_type``."""

    packet_type: ClassVar[PacketType]
    _registry: ClassVar[dict[PacketType, type[Packet]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        packet_type = cls.__dict__.get("packet_type")
        if packet_type is not None:
            Packet._registry[packet_type] = cls

    def _payload(self) -> dict[str, Any]:
        raise NotImplementedError

    @classmethod
    def _from_payload(cls, payload: Mapping[str, Any]) -> Packet:
        raise NotImplementedError

    def to_dict(self) -> dict[str, Any]:
        """Return the packet as a JSON-ready mapping."""
        return {"packetType": int(self.packet_type), "payload": self._payload()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Packet:
        """Build the packet described by ``data``.

        Called on :class:`Packet` itself, the concrete class is chosen from
        ``packetType``; called on a subclass, the type must match it.
        """
        try:
            packet_type = PacketType(int(data["packetType"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"invalid packet type in {data!r}") from exc

        target = Packet._registry.get(packet_type)
        if target is None:
            raise ValueError(f"no packet class for type {packet_type.name}")
        if cls is not Packet and target is not cls:
            raise ValueError(
                f"expected {cls.packet_type.name} packet, got {packet_type.name}"
            )

        try:
            return target._from_payload(data["payload"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"malformed {packet_type.name} packet: {exc}") from exc


def _cards_from(items: Iterable[Mapping[str, Any]] | None) -> tuple[Card, ...]:
    return tuple(Card.from_dict(item) for item in (items or ()))


@dataclass(frozen=True)
class StartGamePacket(Packet):
    """Tells a client its seat and team at the start of a game."""

    packet_type: ClassVar[PacketType] = PacketType.START_GAME

    player_id: int
    team_id: int

    def _payload(self) -> dict[str, Any]:
        return {"playerId": self.player_id, "teamId": self.team_id}

    @classmethod
    def _from_payload(cls, payload: Mapping[str, Any]) -> StartGamePacket:
        return cls(int(payload["playerId"]), int(payload["teamId"]))


@dataclass(frozen=True)
class StartRoundPacket(Packet):
    """Deals a hand and shows the turned-up table card."""

    packet_type: ClassVar[PacketType] = PacketType.START_ROUND

    table_card: Card
    hand_cards: tuple[Card, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "hand_cards", tuple(self.hand_cards))

    def _payload(self) -> dict[str, Any]:
        return {
            "tableCard": self.table_card.to_dict(),
            "handCards": [card.to_dict() for card in self.hand_cards],
        }

    @classmethod
    def _from_payload(cls, payload: Mapping[str, Any]) -> StartRoundPacket:
        return cls(
            Card.from_dict(payload["tableCard"]),
            _cards_from(payload.get("handCards")),
        )


@dataclass(frozen=True)
class EndRoundPacket(Packet):
    """Announces the winner of a round and the new game score."""

    packet_type: ClassVar[PacketType] = PacketType.END_ROUND

    winner_team_id: int
    stakes: int
    team0_score: int
    team1_score: int

    def _payload(self) -> dict[str, Any]:
        return {
            "winnerTeamId": self.winner_team_id,
            "stakes": self.stakes,
            "team0Score": self.team0_score,
            "team1Score": self.team1_score,
        }

    @classmethod
    def _from_payload(cls, payload: Mapping[str, Any]) -> EndRoundPacket:
        return cls(
            int(payload["winnerTeamId"]),
            int(payload["stakes"]),
            int(payload["team0Score"]),
            int(payload["team1Score"]),
        )


@dataclass(frozen=True)
class EndTurnPacket(Packet):
    """Announces who won a turn; -1 ids mean a draw."""

    packet_type: ClassVar[PacketType] = PacketType.END_TURN

    winner_team_id: int
    winner_player_id: int

    def _payload(self) -> dict[str, Any]:
        return {
            "winnerTeamId": self.winner_team_id,
            "winnerPlayerId": self.winner_player_id,
        }

    @classmethod
    def _from_payload(cls, payload: Mapping[str, Any]) -> EndTurnPacket:
        return cls(int(payload["winnerTeamId"]), int(payload["winnerPlayerId"]))


@dataclass(frozen=True)
class PlayerPlayPacket(Packet):
    """Tells a player it is their turn to play."""

    packet_type: ClassVar[PacketType] = PacketType.PLAYER_PLAY

    player_id: int
    can_request_truco: bool

    def _payload(self) -> dict[str, Any]:
        return {
            "playerId": self.player_id,
            "canRequestTruco": int(self.can_request_truco),
        }

    @classmethod
    def _from_payload(cls, payload: Mapping[str, Any]) -> PlayerPlayPacket:
        return cls(int(payload["playerId"]), bool(payload["canRequestTruco"]))


@dataclass(frozen=True)
class CardPacket(Packet):
    """A card played by a player, face up or covered."""

    packet_type: ClassVar[PacketType] = PacketType.PLAYER_CARD

    player_id: int
    card: Card
    is_covered: bool = False

    def _payload(self) -> dict[str, Any]:
        return {
            "playerId": self.player_id,
            "card": self.card.to_dict(),
            "isCovered": int(self.is_covered),
        }

    @classmethod
    def _from_payload(cls, payload: Mapping[str, Any]) -> CardPacket:
        return cls(
            int(payload["playerId"]),
            Card.from_dict(payload["card"]),
            bool(payload["isCovered"]),
        )


@dataclass(frozen=True)
class TrucoPacket(Packet):
    """A truco request or the answer to one."""

    packet_type: ClassVar[PacketType] = PacketType.TRUCO

    requester_id: int
    response_team_id: int
    result: TrucoResult

    def __post_init__(self) -> None:
        object.__setattr__(self, "result", TrucoResult(self.result))

    def _payload(self) -> dict[str, Any]:
        return {
            "requesterId": self.requester_id,
            "responseTeamId": self.response_team_id,
            "result": int(self.result),
        }

    @classmethod
    def _from_payload(cls, payload: Mapping[str, Any]) -> TrucoPacket:
        return cls(
            int(payload["requesterId"]),
            int(payload["responseTeamId"]),
            TrucoResult(int(payload["result"])),
        )


@dataclass(frozen=True)
class ElevenHandPacket(Packet):
    """Deals an eleven-hand round: own hand plus the partner's hand."""

    packet_type: ClassVar[PacketType] = PacketType.ELEVEN_HAND

    table_card: Card
    hand_cards: tuple[Card, ...] = ()
    partner_hand: tuple[Card, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "hand_cards", tuple(self.hand_cards))
        object.__setattr__(self, "partner_hand", tuple(self.partner_hand))

    def _payload(self) -> dict[str, Any]:
        return {
            "tableCard": self.table_card.to_dict(),
            "handCards": [card.to_dict() for card in self.hand_cards],
            "partnerHand": [card.to_dict() for card in self.partner_hand],
        }

    @classmethod
    def _from_payload(cls, payload: Mapping[str, Any]) -> ElevenHandPacket:
        return cls(
            Card.from_dict(payload["tableCard"]),
            _cards_from(payload.get("handCards")),
            _cards_from(payload.get("partnerHand")),
        )


@dataclass(frozen=True)
class ElevenHandResponsePacket(Packet):
    """A player's answer to an eleven hand: 1 to play it, 0 to refuse."""

    packet_type: ClassVar[PacketType] = PacketType.ELEVEN_HAND_RESPONSE

    response: int

    def _payload(self) -> dict[str, Any]:
        return {"response": int(self.response)}

    @classmethod
    def _from_payload(cls, payload: Mapping[str, Any]) -> ElevenHandResponsePacket:
        return cls(int(payload["response"]))


def encode_packet(packet: Packet) -> str:
    """Serialise a packet to compact JSON text with sorted keys."""
    return json.dumps(packet.to_dict(), separators=(",", ":"), sort_keys=True)


def decode_packet(text: str | bytes) -> Packet:
    """Parse JSON text into the packet it describes.

    Raises ValueError for text that is not a valid packet.
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("a packet must be a JSON object")
    return Packet.from_dict(data)