"""
state.py - Immutable board state and win/draw detection for Connect Four

A State is one point-in-time board configuration. Playing a move never
changes a State; it builds a new child State, so every ancestor stays valid
and can be reused for search or replay.
"""

import string
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from c4term.debug import debug
from c4term.errors import InvalidArgument, InvalidOperation
from c4term.utils import (WIDTH, HEIGHT, CONNECT_N, Piece,
                          check_win_at_position, moves_to_notation,
                          render_state_text)

Column = Tuple[Piece, ...]


def _is_column(column) -> bool:
    """True if `column` is an integer (not a bool) in 1..WIDTH."""
    if isinstance(column, bool) or not isinstance(column, (int, np.integer)):
        return False
    return 1 <= column <= WIDTH


class State:
    """
    Immutable Connect Four state.

    Called in two modes:

        State()
            The start state, with no moves made.

        State(column, previous)
            The state after dropping the next piece into `column` (1-based)
            of `previous`. Prefer `previous.play(column)`.
    """

    width = WIDTH
    height = HEIGHT
    win_length = CONNECT_N

    __slots__ = ('_board', '_grid', '_moves', '_winner', '_gameover', '_last_move')

    def __init__(self, column: Optional[int] = None, previous: Optional['State'] = None):
        if previous is None:
            if column is not None:
                raise InvalidArgument("A column can only be played onto a previous state")
            grid = np.zeros((HEIGHT, WIDTH), dtype=np.int8)
            grid.flags.writeable = False
            self._set('_board', tuple(() for _ in range(WIDTH)))
            self._set('_grid', grid)
            self._set('_moves', ())
            self._set('_winner', None)
            self._set('_gameover', False)
            self._set('_last_move', None)
            return

        if not isinstance(previous, State):
            raise InvalidArgument(f"Previous state must be a State, not {type(previous).__name__}")
        previous._check_playable(column)

        column = int(column)
        col = column - 1
        piece = previous.next_piece()

        # Share every untouched column with the parent
        board = list(previous._board)
        board[col] = board[col] + (piece,)
        row = len(board[col]) - 1

        grid = previous._grid.copy()
        grid[HEIGHT - 1 - row, col] = piece.value
        grid.flags.writeable = False

        moves = previous._moves + (column,)

        # Earlier pieces were checked when they were placed; only the new one can win
        winner = piece if check_win_at_position(grid, HEIGHT - 1 - row, col) else None
        gameover = winner is not None or len(moves) == WIDTH * HEIGHT

        self._set('_board', tuple(board))
        self._set('_grid', grid)
        self._set('_moves', moves)
        self._set('_winner', winner)
        self._set('_gameover', gameover)
        self._set('_last_move', (col, row))

        if gameover:
            if winner is None:
                debug.info(f"Draw after {len(moves)} moves", "state")
            else:
                debug.info(f"Player {winner.name} wins at {self._last_move}", "state")

    def _set(self, name, value):
        object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError("State is immutable")

    def __delattr__(self, name):
        raise AttributeError("State is immutable")

    @classmethod
    def initial(cls) -> 'State':
        """Return the canonical empty state."""
        return _INITIAL

    @classmethod
    def from_moves(cls, sequence: Union[str, Iterable[int]]) -> 'State':
        """
        Build a state by replaying moves from the start state.

        Args:
            sequence: Digit string such as '4452' or a sequence of ints

        Returns:
            The state after every move has been played

        Raises:
            InvalidOperation: At the first illegal move, with its index
        """
        state = cls.initial()
        for index, move in enumerate(sequence):
            column = move
            if isinstance(move, str):
                if len(move) != 1 or move not in string.digits:
                    raise InvalidOperation(f"Move {index} ({move!r}) is not a column digit",
                                           index=index, column=move)
                column = int(move)
            try:
                state = state.play(column)
            except InvalidOperation as exc:
                raise InvalidOperation(f"Move {index} ({move!r}) is invalid: {exc}",
                                       index=index, column=move) from exc
        return state

    # Attributes

    @property
    def board(self) -> Tuple[Column, ...]:
        """Columns left to right, each listing its pieces bottom to top."""
        return self._board

    @property
    def grid(self) -> np.ndarray:
        """Read-only (HEIGHT, WIDTH) array of piece values, row 0 at the top."""
        return self._grid

    @property
    def moves(self) -> Tuple[int, ...]:
        return self._moves

    @property
    def winner(self) -> Optional[Piece]:
        return self._winner

    @property
    def gameover(self) -> bool:
        return self._gameover

    @property
    def last_move(self) -> Optional[Tuple[int, int]]:
        """0-based (col, row) of the most recent piece; row 0 is the bottom."""
        return self._last_move

    @property
    def col(self) -> Optional[int]:
        return None if self._last_move is None else self._last_move[0]

    @property
    def row(self) -> Optional[int]:
        return None if self._last_move is None else self._last_move[1]

    @property
    def notation(self) -> str:
        """The move list as a digit string."""
        return moves_to_notation(self._moves)

    # Queries

    def piece_at(self, col: int, row: int) -> Piece:
        """Piece at 0-based (col, row), row 0 at the bottom; EMPTY above the stack."""
        column = self._board[col]
        return column[row] if row < len(column) else Piece.EMPTY

    def valid_play(self, column: int) -> bool:
        """
        Report whether a piece can be played into `column`.

        Raises:
            InvalidArgument: If column is not an integer 1..WIDTH
        """
        if not _is_column(column):
            raise InvalidArgument(f"Column must be an integer 1..{WIDTH}, got {column!r}")
        return not self._gameover and len(self._board[column - 1]) < HEIGHT

    def valid_plays(self) -> List[int]:
        """All playable columns, in ascending order."""
        return [column for column in range(1, WIDTH + 1) if self.valid_play(column)]

    def next_piece(self) -> Piece:
        """Piece to be played next; player one always moves first."""
        return Piece.ONE if len(self._moves) % 2 == 0 else Piece.TWO

    def full(self) -> bool:
        return len(self._moves) == WIDTH * HEIGHT

    # Transitions

    def _check_playable(self, column) -> None:
        if not _is_column(column):
            raise InvalidOperation(f"Column must be an integer 1..{WIDTH}, got {column!r}")
        if self._gameover:
            raise InvalidOperation("The game is already over")
        if len(self._board[column - 1]) >= HEIGHT:
            raise InvalidOperation(f"Column {column} is full")

    def play(self, column: int) -> 'State':
        """
        Play the next piece into `column`.

        Returns:
            A new state; this one is left untouched

        Raises:
            InvalidOperation: If the column is out of range or full, or the game is over
        """
        debug.trace(f"Playing {self.next_piece().name} into column {column}", "state")
        return State(column, self)

    # Rendering and value semantics

    def to_text(self) -> str:
        return render_state_text(self._moves, self._grid)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"State({self.notation!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, State):
            return NotImplemented
        return (self._moves == other._moves
                and self._board == other._board
                and self._winner == other._winner
                and self._gameover == other._gameover)

    def __hash__(self) -> int:
        return hash(self._moves)


_INITIAL = State()
