"""
c4term.players - Player strategies and the registry used to pick them

Every strategy implements the Player capability from players.base. The
registry maps the short names used on the command line to the classes.
"""

from typing import Dict, List, Tuple, Type

from c4term.errors import InvalidArgument
from c4term.players.base import Player, assert_valid_state
from c4term.players.eddie import EddiePlayer
from c4term.players.hugh import HughPlayer
from c4term.players.human import HumanPlayer, KeyEvent
from c4term.players.rando import RandoPlayer
from c4term.utils import THINK_DELAY, SOLVER_URL, SOLVER_TIMEOUT

PLAYER_TYPES: Dict[str, Type[Player]] = {
    'human': HumanPlayer,
    'rando': RandoPlayer,
    'hugh': HughPlayer,
    'eddie': EddiePlayer,
}


def create_player(kind: str, keys=None,
                  think_delay: float = THINK_DELAY,
                  solver_url: str = SOLVER_URL,
                  solver_timeout: float = SOLVER_TIMEOUT) -> Player:
    """
    Build a player from its registry name.

    Args:
        kind: Registry key, e.g. 'hugh'
        keys: KeyEvent source, required for human players
        think_delay: Pacing delay for computer players
        solver_url: Solver endpoint for 'eddie'
        solver_timeout: Solver timeout in seconds for 'eddie'

    Raises:
        InvalidArgument: For an unknown kind, or a human without keys
    """
    if kind == 'human':
        if keys is None:
            raise InvalidArgument("A human player needs a key source")
        return HumanPlayer(keys)
    if kind == 'eddie':
        return EddiePlayer(solver_url=solver_url, timeout=solver_timeout, think_delay=think_delay)
    if kind in PLAYER_TYPES:
        return PLAYER_TYPES[kind](think_delay=think_delay)
    raise InvalidArgument(f"Unknown player type {kind!r}; choose from {', '.join(PLAYER_TYPES)}")


def describe_players() -> List[Tuple[str, str, str]]:
    """List (kind, name, description) for every registered player."""
    return [(kind, cls.name, cls.description) for kind, cls in PLAYER_TYPES.items()]


__all__ = ['Player', 'assert_valid_state', 'HumanPlayer', 'KeyEvent', 'RandoPlayer',
           'HughPlayer', 'EddiePlayer', 'PLAYER_TYPES', 'create_player', 'describe_players']
