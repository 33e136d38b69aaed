"""
base.py - The Player capability shared by every strategy

A player is handed a State each turn and resolves, asynchronously, with one
of that state's valid columns. While deciding it may emit advisory
notifications:

    "thinking"   a human-readable string describing its reasoning
    "highlight"  a list of columns currently under consideration

These never affect the chosen move.
"""

import asyncio
from typing import Iterable, List, Optional

from c4term.errors import Precondition
from c4term.events import EventEmitter
from c4term.game.state import State
from c4term.utils import THINK_DELAY


def assert_valid_state(state) -> List[int]:
    """
    Check that a play can be asked for on `state`.

    Returns:
        The state's valid plays

    Raises:
        Precondition: If state is not a State, is over, or has no valid play
    """
    if not isinstance(state, State):
        raise Precondition(f"Expected a State, got {type(state).__name__}")
    if state.gameover:
        raise Precondition("The game is already over")
    positions = state.valid_plays()
    if not positions:
        raise Precondition("There is no valid play")
    return positions


class Player(EventEmitter):
    """Base class for all player strategies."""

    name = "Player"
    description = "Abstract player"

    def __init__(self, think_delay: float = THINK_DELAY):
        super().__init__()
        self.think_delay = think_delay

    def assert_valid_state(self, state: State) -> List[int]:
        return assert_valid_state(state)

    async def delay(self, seconds: Optional[float] = None) -> None:
        """Pause for UX pacing without blocking the event loop."""
        seconds = self.think_delay if seconds is None else seconds
        if seconds > 0:
            await asyncio.sleep(seconds)

    def think(self, message: str) -> None:
        self.emit('thinking', message)

    def highlight(self, columns: Iterable[int]) -> None:
        self.emit('highlight', list(columns))

    async def get_play(self, state: State) -> int:
        """Choose a column from state.valid_plays()."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
