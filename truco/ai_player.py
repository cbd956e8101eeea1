"""A computer-controlled player that answers the server's packets itself."""

from __future__ import annotations

import logging
import random
import time

from .packets import (
    CardPacket,
    ElevenHandPacket,
    ElevenHandResponsePacket,
    Packet,
    PlayerPlayPacket,
    StartRoundPacket,
    TrucoPacket,
    TrucoResult,
)
from .player import Player
from .table import Table

logger = logging.getLogger(__name__)

DEFAULT_DELAY = (2.0, 4.0)


class AIPlayer:
    """Plays the first card of its hand and now and then asks for truco.

    Instead of sending packets over the network, the server hands them to
    :meth:`send`; the reply is prepared there and returned by
    :meth:`wait_for_packet` after a short, human-looking pause.
    """

    chance_of_random_card = 50
    chance_of_requesting_truco = 5

    def __init__(
        self,
        player_id: int,
        table: Table | None = None,
        rng: random.Random | None = None,
        delay: tuple[float, float] = DEFAULT_DELAY,
    ) -> None:
        self.player_id = player_id
        self.table = table
        self.player = Player(player_id, f"AI {player_id}")
        self.delay = delay
        self._rng = rng if rng is not None else random.Random()
        self._next_play: Packet | None = None

    def _play_first_card(self) -> CardPacket:
        return CardPacket(self.player_id, self.player.pop_card(0), False)

    def send(self, packet: Packet) -> None:
        """Receive a packet from the server and prepare the answer to it."""
        if isinstance(packet, StartRoundPacket):
            self.player.set_hand(packet.hand_cards)
        elif isinstance(packet, PlayerPlayPacket):
            roll = self._rng.randint(0, 100)
            if roll < self.chance_of_requesting_truco and packet.can_request_truco:
                self._next_play = TrucoPacket(
                    self.player_id, (self.player_id + 1) % 2, TrucoResult.RAISE
                )
            else:
                self._next_play = self._play_first_card()
        elif isinstance(packet, TrucoPacket):
            if packet.result == TrucoResult.YES:
                if packet.requester_id == self.player_id:
                    self._next_play = self._play_first_card()
            elif packet.response_team_id == self.player_id % 2:
                self._next_play = TrucoPacket(
                    packet.requester_id,
                    int(not packet.response_team_id),
                    TrucoResult.YES,
                )
        elif isinstance(packet, ElevenHandPacket):
            self.player.set_hand(packet.hand_cards)
            self._next_play = ElevenHandResponsePacket(1)
        else:
            logger.debug("AI %d ignored packet %s", self.player_id, packet.packet_type.name)

    def wait_for_packet(self) -> Packet | None:
        """Pause for a moment, then return the prepared answer."""
        low, high = self.delay
        time.sleep(self._rng.uniform(low, high))
        return self._next_play

    def close(self) -> None:
        """Nothing to release: the player has no connection."""