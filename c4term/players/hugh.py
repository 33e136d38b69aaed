"""
hugh.py - A player that follows a few simple heuristics

The heuristic is designed to:
1. Choose a position that wins outright
2. Avoid a position that lets the opponent win on their next move
3. Prefer positions surrounded by its own pieces
4. If all else fails, choose any valid position
"""

import random
from typing import List

from c4term.errors import InvalidArgument
from c4term.game.state import State
from c4term.players.base import Player
from c4term.utils import WIDTH, HEIGHT, Piece

# Neighbours of a landing cell as (dcol, drow), clockwise from up-right.
# The cell directly above is always empty and is left out.
NEIGHBOUR_OFFSETS = [(1, 1), (1, 0), (1, -1), (0, -1), (-1, -1), (-1, 0), (-1, 1)]


class HughPlayer(Player):
    """Plays with simple heuristics."""

    name = "Hugh"
    description = "Plays with simple heuristics"

    def get_winning_plays(self, state: State) -> List[int]:
        """
        Return the positions that win immediately.

        Args:
            state: The current state

        Returns:
            Columns whose play ends the game with the mover as winner
        """
        return [pos for pos in state.valid_plays()
                if state.play(pos).winner is not None]

    def get_safe_plays(self, state: State) -> List[int]:
        """
        Return the positions that leave the opponent no immediate win.

        Args:
            state: The current state

        Returns:
            Columns after which the opponent has no winning reply
        """
        return [pos for pos in state.valid_plays()
                if not self.get_winning_plays(state.play(pos))]

    def score_play(self, state: State, pos: int) -> int:
        """
        Return a rough score for playing at the given position.

        Looks only at the immediate neighbours of the landing cell:
         - Friendly pieces are worth two
         - Empty spaces, or the floor below the board, are worth one
         - Walls, the ceiling, or enemy pieces are worth zero

        Args:
            state: The current state
            pos: Column to score (1-based)

        Returns:
            Score of the position, higher is better
        """
        if not state.valid_play(pos):
            raise InvalidArgument(f"Column {pos} cannot be played")

        col, row = pos - 1, len(state.board[pos - 1])
        mine = state.next_piece()

        score = 0
        for dc, dr in NEIGHBOUR_OFFSETS:
            c, r = col + dc, row + dr
            if c < 0 or c >= WIDTH or r >= HEIGHT:
                continue
            if r < 0:
                score += 1
                continue
            piece = state.piece_at(c, r)
            if piece == mine:
                score += 2
            elif piece == Piece.EMPTY:
                score += 1
        return score

    async def get_play(self, state: State) -> int:
        valid_plays = self.assert_valid_state(state)
        self.highlight(valid_plays)

        # Does playing a piece in any position win?
        winning_plays = self.get_winning_plays(state)
        self.think(f"Can I play a winning piece? {winning_plays}")
        if winning_plays:
            self.highlight(winning_plays)
            self.think("Found one! (or more)")
            await self.delay()
            return random.choice(winning_plays)
        self.highlight([])
        self.think("No.")

        # Does playing a piece in any position allow the opponent to win?
        self.highlight(valid_plays)
        safe_plays = self.get_safe_plays(state)
        self.think(f"Which places won't give the opponent a win? {safe_plays}")
        self.highlight(safe_plays)
        if not safe_plays:
            self.think("Uh oh. Only losing moves remain...")
            await self.delay()
            return random.choice(valid_plays)

        # Which of the safe places is the best move?
        self.think("Thinking about which safe place is best")
        best_score = -1
        best_plays: List[int] = []
        for pos in safe_plays:
            score = self.score_play(state, pos)
            if score > best_score:
                best_score = score
                best_plays = [pos]
            elif score == best_score:
                best_plays.append(pos)

        self.think(f"Found {len(best_plays)} plays with a max score of {best_score}: {best_plays}")
        self.highlight(best_plays)
        await self.delay()
        return random.choice(best_plays)
