"""Server-side game flow: dealing, turns, truco requests and scoring."""

from __future__ import annotations

import logging
from typing import Sequence

from .ai_player import AIPlayer
from .cards import Card, Deck
from .connections import Seat, TcpServer
from .errors import TrucoError
from .packets import (
    CardPacket,
    ElevenHandPacket,
    ElevenHandResponsePacket,
    EndRoundPacket,
    EndTurnPacket,
    Packet,
    PlayerPlayPacket,
    StartGamePacket,
    StartRoundPacket,
    TrucoPacket,
    TrucoResult,
)
from .score import NO_WINNER, POINTS_TO_WIN, Score
from .table import Table

logger = logging.getLogger(__name__)

NUM_OF_PLAYERS = 4
CARDS_IN_HAND = 3
TURNS_PER_ROUND = 3
DEFAULT_PORT = 59821


def calculate_truco_result(a: TrucoResult, b: TrucoResult) -> TrucoResult:
    """Combine the answers of two partners: any refusal wins, then any raise."""
    if a == TrucoResult.NO or b == TrucoResult.NO:
        return TrucoResult.NO
    if a == TrucoResult.RAISE or b == TrucoResult.RAISE:
        return TrucoResult.RAISE
    return TrucoResult.YES


def _expect(packet: Packet, kind: type) -> Packet:
    if not isinstance(packet, kind):
        raise TrucoError(
            f"expected {kind.__name__}, got {type(packet).__name__}"
        )
    return packet


class ServerGameManager:
    """Runs a game between four seats, humans over TCP or AI players."""

    def __init__(
        self,
        server: TcpServer | None = None,
        players: Sequence[Seat] | None = None,
        deck: Deck | None = None,
    ) -> None:
        self.server = server if server is not None else TcpServer()
        self.players: list[Seat] = list(players or [])
        self.deck = deck if deck is not None else Deck()
        self.score = Score()
        self.table = Table()
        self.last_to_request_truco = -1
        self.team_refused_truco = -1
        self.next_turn_player = 0
        self.next_round_player = 0

    def wait_for_players_to_connect(
        self, number_of_human_players: int, port: int = DEFAULT_PORT
    ) -> None:
        """Open the server, accept the human players and fill the rest with AI."""
        if not 0 <= number_of_human_players <= NUM_OF_PLAYERS:
            raise ValueError(
                f"number of human players must be between 0 and {NUM_OF_PLAYERS}"
            )
        logger.info("starting server")
        self.server.open(port)
        self.players = list(self.server.accept_players(number_of_human_players))
        for player_id in range(len(self.players), NUM_OF_PLAYERS):
            self.players.append(AIPlayer(player_id, self.table))

    def can_player_request_truco(self, player_id: int) -> bool:
        """Whether the player may ask for truco right now."""
        if self.score.stakes == self.score.max_stakes:
            return False
        team = player_id % 2
        if team == self.last_to_request_truco:
            return False
        if team == 0 and self.score.team0_game_score + 1 == POINTS_TO_WIN:
            return False
        if team == 1 and self.score.team1_game_score + 1 == POINTS_TO_WIN:
            return False
        return True

    def start_game(self) -> None:
        """Tell every seat its id and team."""
        for index, player in enumerate(self.players):
            player.send(StartGamePacket(index, index % 2))

    def start_round(self) -> int:
        """Turn up the table card and deal; return a round winner or -1."""
        table_card = self.deck.pop()
        self.table.set_table_card(table_card)
        self.next_turn_player = self.next_round_player
        logger.info("starting round (%d)", self.next_turn_player)

        hands: list[list[Card]] = [[] for _ in range(NUM_OF_PLAYERS)]
        for player in self.players:
            hands[player.player_id] = [self.deck.pop() for _ in range(CARDS_IN_HAND)]

        if self.score.team0_game_score != self.score.team1_game_score:
            if self.score.team0_game_score + 1 == POINTS_TO_WIN:
                return self.start_eleven_hand_round(0, hands, table_card)
            if self.score.team1_game_score + 1 == POINTS_TO_WIN:
                return self.start_eleven_hand_round(1, hands, table_card)

        for player in self.players:
            player.send(StartRoundPacket(table_card, hands[player.player_id]))
        return NO_WINNER

    def start_eleven_hand_round(
        self, team: int, player_hands: Sequence[Sequence[Card]], table_card: Card
    ) -> int:
        """Deal a round where ``team`` has eleven points and may see both hands.

        Returns the other team if either partner refuses to play, else -1.
        """
        id_a, id_c = team, team + 2
        id_b, id_d = team + 1, (team + 3) % 4
        logger.info("team %d in eleven hand", team)

        self.players[id_a].send(
            ElevenHandPacket(table_card, player_hands[id_a], player_hands[id_c])
        )
        self.players[id_c].send(
            ElevenHandPacket(table_card, player_hands[id_c], player_hands[id_a])
        )
        self.players[id_b].send(StartRoundPacket(table_card, player_hands[id_b]))
        self.players[id_d].send(StartRoundPacket(table_card, player_hands[id_d]))

        reply_a, reply_c = self.server.wait_for_team_packet(
            [self.players[id_a], self.players[id_c]]
        )
        a = _expect(reply_a, ElevenHandResponsePacket)
        c = _expect(reply_c, ElevenHandResponsePacket)
        logger.info("eleven hand responses: %d + %d", a.response, c.response)
        if a.response == 0 or c.response == 0:
            return int(not team)
        self.score.increase_stakes()
        return NO_WINNER

    def start_turn(self) -> None:
        """Let every seat play once, starting with the turn's first player."""
        starting_player = self.next_turn_player
        logger.info("starting turn (%d)", starting_player)
        for offset in range(len(self.players)):
            current = (offset + starting_player) % NUM_OF_PLAYERS
            if self.team_refused_truco == -1:
                self.start_play(current)

    def start_play(self, current_player: int) -> None:
        """Ask one player to play and handle any truco request it makes."""
        seat = self.players[current_player]
        seat.send(
            PlayerPlayPacket(current_player, self.can_player_request_truco(current_player))
        )

        while True:
            packet = seat.wait_for_packet()
            if packet is None:
                continue

            if isinstance(packet, CardPacket):
                logger.info(
                    "%d: [%d %d]", packet.player_id, packet.card.value, int(packet.card.suit)
                )
                for index, player in enumerate(self.players):
                    if index != current_player:
                        player.send(packet)
                self.table.place_card(packet.card, packet.player_id, False)
                return

            if isinstance(packet, TrucoPacket):
                if self._negotiate_truco(packet) == TrucoResult.NO:
                    return
                continue

            logger.warning(
                "unexpected %s packet from player %d",
                packet.packet_type.name,
                current_player,
            )
            return

    def _negotiate_truco(self, truco_packet: TrucoPacket) -> TrucoResult:
        result = TrucoResult.RAISE
        while self.score.stakes < self.score.max_stakes and result == TrucoResult.RAISE:
            self.server.send_to_clients(self.players, truco_packet)
            self.last_to_request_truco = int(not truco_packet.response_team_id)

            team_id = truco_packet.response_team_id
            reply_a, reply_b = self.server.wait_for_team_packet(
                [self.players[team_id], self.players[team_id + 2]]
            )
            a = _expect(reply_a, TrucoPacket)
            b = _expect(reply_b, TrucoPacket)

            result = calculate_truco_result(a.result, b.result)
            if result != TrucoResult.NO:
                self.score.increase_stakes()
            truco_packet = TrucoPacket(truco_packet.requester_id, a.response_team_id, result)

        self.server.send_to_clients(self.players, truco_packet)
        if result == TrucoResult.NO:
            self.team_refused_truco = int(not truco_packet.response_team_id)
        return result

    def end_turn(self) -> int:
        """Score the turn; return the round's winning team or -1."""
        if self.team_refused_truco != -1:
            round_winner = int(not self.team_refused_truco)
            self.team_refused_truco = -1
            self.table.clear()
            return round_winner

        turn_winner = self.table.calculate_winner()
        winner_team = turn_winner % 2 if turn_winner != NO_WINNER else NO_WINNER
        round_winner = self.score.update_turn_won(winner_team)

        for player in self.players:
            player.send(EndTurnPacket(winner_team, turn_winner))

        if turn_winner != NO_WINNER:
            self.next_turn_player = turn_winner
        else:
            self.next_turn_player = (self.next_turn_player + 1) % NUM_OF_PLAYERS

        self.table.clear()
        logger.info(
            "turn ended: %d - %d", self.score.team0_turns_won, self.score.team1_turns_won
        )
        return round_winner

    def end_round(self, round_winner: int) -> int:
        """Credit the round; return the game's winning team or -1."""
        game_winner = self.score.update_round_won(round_winner)

        self.next_round_player = (self.next_round_player + 1) % NUM_OF_PLAYERS
        self.last_to_request_truco = -1
        self.deck.reset()

        packet = EndRoundPacket(
            round_winner,
            self.score.stakes,
            self.score.team0_game_score,
            self.score.team1_game_score,
        )
        for player in self.players:
            player.send(packet)

        self.score.reset_round()
        logger.info(
            "round ended: %d x %d", self.score.team0_game_score, self.score.team1_game_score
        )
        return game_winner

    def end_game(self, game_winner: int) -> None:
        """Announce the end of the game."""
        logger.info("game ended, winner: %d", game_winner)

    def play_game(self) -> int:
        """Play rounds until a team wins; return the winning team."""
        self.start_game()
        game_winner = NO_WINNER
        while game_winner == NO_WINNER:
            round_winner = self.start_round()
            turns_played = 0
            while round_winner == NO_WINNER and turns_played < TURNS_PER_ROUND:
                self.start_turn()
                round_winner = self.end_turn()
                turns_played += 1
            game_winner = self.end_round(round_winner)
        self.end_game(game_winner)
        return game_winner