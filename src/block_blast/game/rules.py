from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoreState:
    """Score, streak and high score of one session.

    `streak` is 0 when idle, -1 once armed by a first clearing placement, and
    the accumulated number of cleared lines after that.
    """
    score: int = 0
    streak: int = 0
    streak_lives: int = 0
    high_score: int = 0

    @property
    def displayed_streak(self) -> int:
        return max(self.streak, 0)

    def reset(self, high_score: int = 0) -> None:
        self.score = 0
        self.streak = 0
        self.streak_lives = 0
        self.high_score = high_score


@dataclass
class ScoringRules:
    placement_points: int = 1
    line_clear_points: int = 10
    streak_offset: int = 3
    max_streak_lives: int = 3

    def line_bonus(self, lines_cleared: int, streak: int) -> int:
        return lines_cleared * self.line_clear_points * (streak + self.streak_offset)

    def apply(self, state: ScoreState, cells_placed: int, lines_cleared: int) -> int:
        """Advance `state` by one completed placement and return the points gained."""
        before = state.score
        state.score += cells_placed * self.placement_points

        if lines_cleared > 0:
            if state.streak == 0:
                state.streak = -1
            elif state.streak == -1:
                state.streak = lines_cleared
            else:
                state.streak += lines_cleared
            state.score += self.line_bonus(lines_cleared, state.streak)
            state.streak_lives = self.max_streak_lives
        elif state.streak > 0:
            state.streak_lives -= 1
            if state.streak_lives <= 0:
                state.streak_lives = 0
                state.streak = 0

        if state.score > state.high_score:
            state.high_score = state.score
        return state.score - before
