"""Client-side game state: turns server packets into game events."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable

from .errors import NetworkError, TrucoError
from .packets import (
    CardPacket,
    ElevenHandPacket,
    ElevenHandResponsePacket,
    EndRoundPacket,
    EndTurnPacket,
    PacketType,
    PlayerPlayPacket,
    StartGamePacket,
    StartRoundPacket,
    TrucoPacket,
    TrucoResult,
)
from .player import Player
from .score import POINTS_TO_WIN, Score
from .tcp_client import TcpClient

logger = logging.getLogger(__name__)

DEFAULT_PORT = 59821
RETRY_DELAY = 2.0

EventHandler = Callable[..., Any]


def _emit(handler: EventHandler | None, *args: Any) -> None:
    if handler is not None:
        handler(*args)


class ClientGameManager:
    """Keeps the local player's view of the game and raises events for the UI.

    Event attributes are optional callables set by the user interface.
    """

    def __init__(self, client: TcpClient | None = None) -> None:
        self.client = client if client is not None else TcpClient()
        self.score = Score()
        self.player: Player | None = None
        self.host = "127.0.0.1"
        self.port = DEFAULT_PORT
        self.retry_delay = RETRY_DELAY
        self._last_truco_requester_id = -1
        self._last_truco_response_team_id = -1

        self.on_my_turn_started: EventHandler | None = None
        self.on_another_player_played: EventHandler | None = None
        self.on_round_started: EventHandler | None = None
        self.on_eleven_hand_round_started: EventHandler | None = None
        self.on_iron_hand_round_started: EventHandler | None = None
        self.on_round_ended: EventHandler | None = None
        self.on_turn_ended: EventHandler | None = None
        self.on_truco_accepted: EventHandler | None = None
        self.on_truco_refused: EventHandler | None = None
        self.on_truco_requested: EventHandler | None = None
        self.on_game_won: EventHandler | None = None
        self.on_game_lost: EventHandler | None = None

        self.client.on(PacketType.START_GAME, self._on_start_game)
        self.client.on(PacketType.START_ROUND, self._on_start_round)
        self.client.on(PacketType.PLAYER_PLAY, self._on_play)
        self.client.on(PacketType.TRUCO, self._on_truco)
        self.client.on(PacketType.ELEVEN_HAND, self._on_eleven_hand)
        self.client.on(PacketType.PLAYER_CARD, self._on_card)
        self.client.on(PacketType.END_ROUND, self._on_end_round)
        self.client.on(PacketType.END_TURN, self._on_end_turn)

    def start(self, host: str) -> threading.Thread:
        """Connect to ``host`` and listen for packets on a background thread."""
        self.host = host
        thread = threading.Thread(target=self.run, name="truco-client-manager", daemon=True)
        thread.start()
        return thread

    def run(self) -> None:
        """Keep trying to connect until it succeeds, then start listening."""
        logger.info("starting client")
        while True:
            try:
                self.client.connect(self.host, self.port)
            except NetworkError as exc:
                logger.debug("connection failed: %s", exc)
                time.sleep(self.retry_delay)
                continue
            break
        self.client.start_listening()

    def _require_player(self) -> Player:
        if self.player is None:
            raise TrucoError("the game has not started")
        return self.player

    # Packet handlers

    def _on_start_game(self, packet: StartGamePacket) -> None:
        self.player = Player(packet.player_id, f"Player {packet.player_id}")

    def _on_start_round(self, packet: StartRoundPacket) -> None:
        player = self._require_player()
        player.set_hand(packet.hand_cards)
        iron_hand = (
            self.score.team0_game_score + 1 == POINTS_TO_WIN
            and self.score.team1_game_score + 1 == POINTS_TO_WIN
        )
        if iron_hand:
            _emit(self.on_iron_hand_round_started, packet.table_card)
        else:
            _emit(self.on_round_started, packet.table_card, list(packet.hand_cards))

    def _on_play(self, packet: PlayerPlayPacket) -> None:
        if self.player is not None:
            logger.debug("hand: %s", self.player.hand)
        _emit(self.on_my_turn_started, bool(packet.can_request_truco))

    def _on_truco(self, packet: TrucoPacket) -> None:
        player = self._require_player()
        self._last_truco_requester_id = packet.requester_id
        self._last_truco_response_team_id = packet.response_team_id
        if packet.result == TrucoResult.YES:
            _emit(self.on_truco_accepted, self.score.stakes)
            if packet.requester_id == player.player_id:
                _emit(self.on_my_turn_started, False)
        elif packet.result == TrucoResult.RAISE:
            self.score.increase_stakes()
            if packet.response_team_id == player.player_id % 2:
                _emit(self.on_truco_requested, packet.requester_id, self.score.stakes)
        else:
            _emit(self.on_truco_refused)

    def _on_eleven_hand(self, packet: ElevenHandPacket) -> None:
        player = self._require_player()
        player.set_hand(packet.hand_cards)
        _emit(
            self.on_eleven_hand_round_started,
            packet.table_card,
            list(packet.hand_cards),
            list(packet.partner_hand),
        )

    def _on_card(self, packet: CardPacket) -> None:
        _emit(self.on_another_player_played, packet.card, packet.player_id, packet.is_covered)

    def _on_end_turn(self, packet: EndTurnPacket) -> None:
        _emit(self.on_turn_ended, packet.winner_team_id, packet.winner_player_id)

    def _on_end_round(self, packet: EndRoundPacket) -> None:
        self.score.team0_game_score = packet.team0_score
        self.score.team1_game_score = packet.team1_score
        self.score.reset_round()
        _emit(self.on_round_ended, packet.winner_team_id, packet.team0_score, packet.team1_score)

        if self.score.team0_game_score == POINTS_TO_WIN:
            winning_team = 0
        elif self.score.team1_game_score == POINTS_TO_WIN:
            winning_team = 1
        else:
            return
        player = self._require_player()
        if player.player_id % 2 == winning_team:
            _emit(self.on_game_won)
        else:
            _emit(self.on_game_lost)

    # Player actions

    def request_truco(self) -> None:
        """Ask the other team to accept raised stakes."""
        player = self._require_player()
        self.client.send(
            TrucoPacket(player.player_id, (player.player_id + 1) % 2, TrucoResult.RAISE)
        )

    def play_card(self, index: int, is_covered: bool) -> None:
        """Play the card at ``index`` in the hand, face up or covered."""
        player = self._require_player()
        self.client.send(CardPacket(player.player_id, player.hand[index], bool(is_covered)))

    def respond_truco_request(self, truco_result: int) -> None:
        """Answer the last truco request: 0 yes, 1 no, 2 raise."""
        self.client.send(
            TrucoPacket(
                self._last_truco_requester_id,
                int(not self._last_truco_response_team_id),
                TrucoResult(truco_result),
            )
        )

    def respond_eleven_hand(self, accepted: bool) -> None:
        """Say whether to play the eleven-hand round."""
        self.client.send(ElevenHandResponsePacket(int(bool(accepted))))