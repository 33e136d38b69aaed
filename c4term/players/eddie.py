"""
eddie.py - A player that phones a friend: an online Connect Four solver

The solver is asked once per turn with the game's move notation and answers
with a JSON object holding one score per column. When the solver cannot be
reached in time, or answers with something unusable, Eddie falls back to a
random valid play instead of failing the turn.
"""

import asyncio
import random
from typing import Any, Dict, List, Sequence

import requests

from c4term.debug import debug
from c4term.errors import StrategyTransportFailure
from c4term.game.state import State
from c4term.players.base import Player
from c4term.utils import WIDTH, SOLVER_URL, SOLVER_TIMEOUT


def choose_best(score: Sequence[Any], columns: List[int]) -> int:
    """
    Pick the column with the largest solver score.

    Args:
        score: Per-column scores, index 0 for column 1
        columns: Candidate columns (1-based); earlier ones win ties

    Returns:
        The best column

    Raises:
        StrategyTransportFailure: If the score vector is malformed
    """
    if not isinstance(score, (list, tuple)) or len(score) < WIDTH:
        raise StrategyTransportFailure(f"Expected {WIDTH} scores, got {score!r}")

    best_column, best_score = None, None
    for column in columns:
        value = score[column - 1]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise StrategyTransportFailure(f"Score for column {column} is not a number: {value!r}")
        if best_score is None or value > best_score:
            best_column, best_score = column, value
    if best_column is None:
        raise StrategyTransportFailure("No candidate columns to score")
    return best_column


class EddiePlayer(Player):
    """Asks an external solver for the best move."""

    name = "Eddie"
    description = "Phones a friend (an online solver) for the best move"

    def __init__(self, solver_url: str = SOLVER_URL, timeout: float = SOLVER_TIMEOUT, **kwargs):
        super().__init__(**kwargs)
        self.solver_url = solver_url
        self.timeout = timeout

    def _request(self, notation: str) -> Dict[str, Any]:
        """Blocking solver query; runs in a worker thread."""
        try:
            response = requests.get(self.solver_url,
                                    params={'pos': notation},
                                    headers={'referer': self.solver_url},
                                    timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise StrategyTransportFailure(f"Solver request failed: {exc}") from exc
        except ValueError as exc:
            raise StrategyTransportFailure(f"Solver sent invalid JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise StrategyTransportFailure(f"Solver sent {type(payload).__name__}, expected an object")
        return payload

    async def phone_a_friend(self, state: State) -> Dict[str, Any]:
        """
        Fetch the solver's analysis of a state.

        Returns:
            The decoded JSON object, expected to hold a 'score' list

        Raises:
            StrategyTransportFailure: On any transport, timeout or decoding error
        """
        try:
            return await asyncio.wait_for(asyncio.to_thread(self._request, state.notation),
                                          timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            raise StrategyTransportFailure(f"No answer within {self.timeout} seconds") from exc

    async def get_play(self, state: State) -> int:
        positions = self.assert_valid_state(state)

        self.think("Phoning a friend...")
        try:
            answer = await self.phone_a_friend(state)
            self.think("Choosing the best move...")
            self.highlight(positions)
            position = choose_best(answer.get('score'), positions)
        except StrategyTransportFailure as exc:
            debug.warning(f"Solver unavailable, playing randomly: {exc}", "player")
            self.think(f"No answer from my friend ({exc}). Guessing instead.")
            position = random.choice(positions)

        await self.delay()
        self.think(f"Chose position {position}.")
        self.highlight([position])
        return position
