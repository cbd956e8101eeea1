"""Command line entry point: host a game, join one, or both."""

from __future__ import annotations

import argparse
import logging
import threading
from typing import Callable, Sequence

from .cards import Card
from .client_manager import ClientGameManager
from .server_manager import DEFAULT_PORT, NUM_OF_PLAYERS, ServerGameManager

logger = logging.getLogger(__name__)


def run_server(number_of_human_players: int, port: int = DEFAULT_PORT) -> int:
    """Host a game on ``port``; seats not taken by humans go to AI players.

    Returns the winning team.
    """
    if not 0 <= number_of_human_players <= NUM_OF_PLAYERS:
        raise ValueError(
            f"number of human players must be between 0 and {NUM_OF_PLAYERS}"
        )
    manager = ServerGameManager()
    with manager.server:
        manager.wait_for_players_to_connect(number_of_human_players, port)
        return manager.play_game()


def _describe(card: Card) -> str:
    return f"{card.number()} of {card.suit.name.lower()}"


def _describe_all(cards: Sequence[Card]) -> str:
    return ", ".join(f"{i}) {_describe(card)}" for i, card in enumerate(cards, 1))


class _ConsoleUI:
    """Shows game events as text and asks the user for moves."""

    def __init__(
        self,
        manager: ClientGameManager,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self.manager = manager
        self.read = read
        self.write = write
        self.finished = threading.Event()
        manager.on_round_started = self._on_round_started
        manager.on_iron_hand_round_started = self._on_iron_hand_round_started
        manager.on_eleven_hand_round_started = self._on_eleven_hand_round_started
        manager.on_my_turn_started = self._on_my_turn_started
        manager.on_another_player_played = self._on_another_player_played
        manager.on_turn_ended = self._on_turn_ended
        manager.on_round_ended = self._on_round_ended
        manager.on_truco_accepted = self._on_truco_accepted
        manager.on_truco_refused = self._on_truco_refused
        manager.on_truco_requested = self._on_truco_requested
        manager.on_game_won = self._on_game_won
        manager.on_game_lost = self._on_game_lost

    def _on_round_started(self, table_card: Card, hand: Sequence[Card]) -> None:
        self.write(f"New round. Table card: {_describe(table_card)}")
        self.write(f"Your hand: {_describe_all(hand)}")

    def _on_iron_hand_round_started(self, table_card: Card) -> None:
        self.write(f"Iron hand round, cards are played blind. Table card: {_describe(table_card)}")

    def _on_eleven_hand_round_started(
        self, table_card: Card, hand: Sequence[Card], partner_hand: Sequence[Card]
    ) -> None:
        self.write(f"Eleven hand round. Table card: {_describe(table_card)}")
        self.write(f"Your hand: {_describe_all(hand)}")
        self.write(f"Partner's hand: {_describe_all(partner_hand)}")
        while True:
            answer = self.read("Play this round? [y/n] ").strip().lower()
            if answer in ("y", "n"):
                self.manager.respond_eleven_hand(answer == "y")
                return
            self.write("Invalid choice.")

    def _on_my_turn_started(self, can_request_truco: bool) -> None:
        player = self.manager.player
        if player is None:
            return
        hand = player.hand
        self.write(f"Your turn. Hand: {_describe_all(hand)}")
        prompt = "Card number, add 'c' to play it covered"
        prompt += ", or 't' to ask for truco: " if can_request_truco else ": "
        while True:
            answer = self.read(prompt).strip().lower()
            if answer == "t" and can_request_truco:
                self.manager.request_truco()
                return
            covered = answer.endswith("c")
            if covered:
                answer = answer[:-1]
            if answer.isdigit() and 1 <= int(answer) <= len(hand):
                index = int(answer) - 1
                self.manager.play_card(index, covered)
                player.pop_card(index)
                return
            self.write("Invalid choice.")

    def _on_another_player_played(self, card: Card, player_id: int, is_covered: bool) -> None:
        shown = "a covered card" if is_covered else _describe(card)
        self.write(f"Player {player_id} played {shown}")

    def _on_turn_ended(self, winner_team_id: int, winner_player_id: int) -> None:
        if winner_player_id == -1:
            self.write("The turn was drawn.")
        else:
            self.write(f"Player {winner_player_id} (team {winner_team_id}) won the turn.")

    def _on_round_ended(self, winner_team_id: int, team0_score: int, team1_score: int) -> None:
        self.write(f"Round won by team {winner_team_id}. Score: {team0_score} x {team1_score}")

    def _on_truco_accepted(self, stakes: int) -> None:
        self.write(f"Truco accepted, the round is worth {stakes}.")

    def _on_truco_refused(self) -> None:
        self.write("Truco refused.")

    def _on_truco_requested(self, requester_id: int, stakes: int) -> None:
        self.write(f"Player {requester_id} asks for truco ({stakes}).")
        choices = {"y": 0, "n": 1, "r": 2}
        while True:
            answer = self.read("Accept, refuse or raise? [y/n/r] ").strip().lower()
            if answer in choices:
                self.manager.respond_truco_request(choices[answer])
                return
            self.write("Invalid choice.")

    def _on_game_won(self) -> None:
        self.write("Your team won the game!")
        self.finished.set()

    def _on_game_lost(self) -> None:
        self.write("Your team lost the game.")
        self.finished.set()


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="truco", description="Play a game of truco.")
    parser.add_argument(
        "--serve",
        type=int,
        choices=range(0, NUM_OF_PLAYERS + 1),
        metavar="HUMANS",
        help="host a game for this many human players (0-4)",
    )
    parser.add_argument("--host", default="127.0.0.1", help="server to join")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="server port")
    parser.add_argument(
        "--no-client", action="store_true", help="only host the game, do not join it"
    )
    args = parser.parse_args(argv)
    if args.no_client and args.serve is None:
        parser.error("--no-client needs --serve")
    return args


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line program."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    host = args.host
    if args.serve is not None:
        server_thread = threading.Thread(
            target=run_server, args=(args.serve, args.port), name="truco-server", daemon=True
        )
        server_thread.start()
        if args.no_client:
            server_thread.join()
            return 0
        host = "127.0.0.1"

    manager = ClientGameManager()
    manager.port = args.port
    ui = _ConsoleUI(manager)
    manager.start(host)
    ui.finished.wait()
    return 0