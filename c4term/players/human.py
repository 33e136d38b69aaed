"""
human.py - A player driven by key events from a person at the keyboard

The player does not know about any terminal library. It reads abstract
KeyEvent values from a source with an awaitable get() method, usually an
asyncio.Queue filled by the interface layer.
"""

from enum import Enum, auto

from c4term.game.state import State
from c4term.players.base import Player
from c4term.utils import WIDTH


class KeyEvent(Enum):
    """Semantic key events understood by HumanPlayer."""
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    CONFIRM = auto()


class HumanPlayer(Player):
    """Meatbag. Plays poorly or well, depending on who has the keyboard."""

    name = "Human"
    description = "Human player - uses keyboard input"

    def __init__(self, keys, **kwargs):
        """
        Args:
            keys: Source of KeyEvent values with an async get() method
        """
        super().__init__(**kwargs)
        self.keys = keys

    async def get_play(self, state: State) -> int:
        positions = self.assert_valid_state(state)

        # The cursor may rest on any column; full ones are refused on confirm
        cursor = positions[0]
        self.highlight([cursor])
        self.think("Use LEFT/RIGHT to choose position, and ENTER to confirm")

        while True:
            key = await self.keys.get()
            if key == KeyEvent.MOVE_LEFT and cursor > 1:
                cursor -= 1
                self.highlight([cursor])
            elif key == KeyEvent.MOVE_RIGHT and cursor < WIDTH:
                cursor += 1
                self.highlight([cursor])
            elif key == KeyEvent.CONFIRM:
                if state.valid_play(cursor):
                    self.think(f"Chosen position {cursor}.")
                    return cursor
                self.think(f"Column {cursor} is full, choose another position")
