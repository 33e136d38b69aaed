"""
rando.py - A player with no idea, who just picks a valid column at random
"""

import random

from c4term.game.state import State
from c4term.players.base import Player


class RandoPlayer(Player):
    """Chooses uniformly among the valid plays. Won't choose invalid moves."""

    name = "Rando"
    description = "Just randomly places pieces"

    async def get_play(self, state: State) -> int:
        positions = self.assert_valid_state(state)

        self.think("Considering options...")
        self.highlight(positions)
        await self.delay()

        position = random.choice(positions)
        self.think("Choosing one at random...")
        self.highlight([position])
        await self.delay()

        self.think(f"Chose position {position}.")
        return position
