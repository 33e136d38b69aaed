"""
match.py - Turn orchestration between two players and a State

The Game asks the player whose turn it is for a column, applies it to the
current State, and tells observers what happened. Notifications:

    "state"      (State)      after each move is applied
    "highlight"  (List[int])  the active player's highlighted columns
    "thinking"   (str)        one line of the active player's commentary
"""

from typing import Callable, List, Optional, Tuple

from c4term.debug import debug
from c4term.errors import InvalidOperation, Precondition
from c4term.events import EventEmitter
from c4term.game.state import State
from c4term.players.base import Player
from c4term.utils import Piece


class Game(EventEmitter):
    """
    Drives a game between two players.

    Turns are strictly sequential: play_turn() must complete before the
    next one starts. The Game owns the only mutable references: the current
    state and the per-turn highlight/thoughts buffers.
    """

    def __init__(self, state: State, player1: Player, player2: Player):
        """
        Args:
            state: Starting state; must not be over
            player1: Plays Piece.ONE
            player2: Plays Piece.TWO

        Raises:
            Precondition: If the state is over or a player is not a Player
        """
        super().__init__()
        if not isinstance(state, State):
            raise Precondition(f"Expected a State, got {type(state).__name__}")
        if state.gameover:
            raise Precondition("Cannot start a game from a finished state")
        for player in (player1, player2):
            if not isinstance(player, Player):
                raise Precondition(f"Expected a Player, got {type(player).__name__}")

        self.state = state
        self.player1 = player1
        self.player2 = player2
        self.highlight: List[int] = []
        self.thoughts: List[str] = []

        self._subscriptions: List[Tuple[Player, str, Callable]] = []
        players = (player1,) if player1 is player2 else (player1, player2)
        for player in players:
            self._subscribe(player, 'thinking', self._relay_thinking(player))
            self._subscribe(player, 'highlight', self._relay_highlight(player))

        debug.debug(f"New game: {player1.name} vs {player2.name} from {state!r}", "game")

    def _subscribe(self, player: Player, event: str, callback: Callable) -> None:
        player.on(event, callback)
        self._subscriptions.append((player, event, callback))

    def _relay_thinking(self, player: Player) -> Callable[[str], None]:
        def on_thinking(message: str) -> None:
            if player is not self.current_player():
                debug.trace(f"Dropped stale thought from {player.name}: {message}", "game")
                return
            self.thoughts.append(message)
            self.emit('thinking', message)
        return on_thinking

    def _relay_highlight(self, player: Player) -> Callable[[List[int]], None]:
        def on_highlight(columns: List[int]) -> None:
            if player is not self.current_player():
                debug.trace(f"Dropped stale highlight from {player.name}: {columns}", "game")
                return
            self.highlight = list(columns)
            self.emit('highlight', self.highlight)
        return on_highlight

    def current_player(self) -> Player:
        """The player whose piece is next, derived from the state."""
        return self.player1 if self.state.next_piece() == Piece.ONE else self.player2

    def winning_player(self) -> Optional[Player]:
        """The player who won, or None while playing or after a draw."""
        if self.state.winner == Piece.ONE:
            return self.player1
        if self.state.winner == Piece.TWO:
            return self.player2
        return None

    def _reset_turn(self) -> None:
        self.highlight = []
        self.thoughts = []

    async def play_turn(self) -> State:
        """
        Ask the current player for a move and apply it.

        Returns:
            The new current state

        Raises:
            InvalidOperation: If the game is already over, or the player
                answered with a column that cannot be played
        """
        if self.state.gameover:
            raise InvalidOperation("The game is already over")

        player = self.current_player()
        turn = len(self.state.moves) + 1
        self._reset_turn()

        debug.start_timer(f"turn_{turn}")
        column = await player.get_play(self.state)
        debug.end_timer(f"turn_{turn}", "game")
        debug.debug(f"Turn {turn}: {player.name} plays column {column}", "game")

        next_state = self.state.play(column)
        self._reset_turn()
        self.state = next_state
        self.emit('state', next_state)
        return next_state

    async def run(self) -> State:
        """Play turns until the game is over and return the final state."""
        while not self.state.gameover:
            await self.play_turn()

        winner = self.winning_player()
        if winner is None:
            debug.info(f"Game drawn: {self.state.notation}", "game")
        else:
            debug.info(f"{winner.name} wins: {self.state.notation}", "game")
        return self.state

    def close(self) -> None:
        """Detach from both players' notifications."""
        for player, event, callback in self._subscriptions:
            player.off(event, callback)
        self._subscriptions = []
