"""Scoring of turns, rounds and the whole game."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

POINTS_TO_WIN = 12
NO_WINNER = -1

_NEXT_STAKES = {1: 3, 3: 6, 6: 9, 9: 12}


class Score:
    """Tracks the stakes, the best-of-three turns and both teams' game scores."""

    max_stakes = 12

    def __init__(self) -> None:
        self.team0_game_score = 0
        self.team1_game_score = 0
        self.stakes = 1
        self.team0_turns_won = 0
        self.team1_turns_won = 0
        self._is_round_drawn = False
        self._first_turn_winner = NO_WINNER
        self.reset_game()
        self.reset_round()

    def increase_stakes(self) -> None:
        """Raise the stakes one step: 1 -> 3 -> 6 -> 9 -> 12."""
        before = self.stakes
        self.stakes = _NEXT_STAKES.get(self.stakes, self.stakes)
        logger.debug("stakes increased from %d to %d", before, self.stakes)

    def update_turn_won(self, winner_team_id: int) -> int:
        """Record a turn won by team 0 or 1, or drawn (-1).

        Returns the team that has won the round, or -1 if nobody has yet.
        """
        if self.team0_turns_won == 0 and self.team1_turns_won == 0:
            self._first_turn_winner = winner_team_id

        if winner_team_id == 0:
            self.team0_turns_won += 1
            if self.team0_turns_won == 2 or self._is_round_drawn:
                return 0
        elif winner_team_id == 1:
            self.team1_turns_won += 1
            if self.team1_turns_won == 2 or self._is_round_drawn:
                return 1
        elif winner_team_id == NO_WINNER:
            if self._first_turn_winner != NO_WINNER:
                return self._first_turn_winner
            self._is_round_drawn = True

        return NO_WINNER

    def update_round_won(self, winner_team_id: int) -> int:
        """Credit the stakes to the round's winning team.

        Returns the team that has won the game, or -1 if nobody has yet.
        """
        if winner_team_id == 0:
            self.team0_game_score += self.stakes
            if self.team0_game_score >= POINTS_TO_WIN:
                return 0
        elif winner_team_id == 1:
            self.team1_game_score += self.stakes
            if self.team1_game_score >= POINTS_TO_WIN:
                return 1
        return NO_WINNER

    def reset_round(self) -> None:
        """Clear the turn counts and return the stakes to 1."""
        self.team0_turns_won = 0
        self.team1_turns_won = 0
        self._is_round_drawn = False
        self._first_turn_winner = NO_WINNER
        self.stakes = 1

    def reset_game(self) -> None:
        """Set both game scores back to zero."""
        self.team0_game_score = 0
        self.team1_game_score = 0