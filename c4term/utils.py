"""
utils.py - Constants and helper functions for c4term

This module provides the board constants, piece enumeration, and the numpy
helpers used for win detection and diagnostic rendering.
"""

from enum import Enum, auto
from typing import Iterable, Sequence

import numpy as np

# Game constants (fixed; the board size is not configurable)
ROWS = HEIGHT = 6
COLS = WIDTH = 7
CONNECT_N = 4  # Number of pieces in a row to win

# Runtime defaults, overridable from the command line
THINK_DELAY = 0.5  # Seconds of "thinking" pause for computer players
SOLVER_URL = "https://connect4.gamesolver.org/solve"
SOLVER_TIMEOUT = 2.0  # Seconds


class Piece(Enum):
    """Enumeration representing pieces and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def __str__(self):
        if self == Piece.EMPTY:
            return " "
        elif self == Piece.ONE:
            return "X"
        else:
            return "O"


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    VERTICAL = auto()
    HORIZONTAL = auto()
    DIAGONAL_UP = auto()  # Diagonal from bottom-left to top-right
    DIAGONAL_DOWN = auto()  # Diagonal from top-left to bottom-right


def line_through(grid: np.ndarray, row: int, col: int, direction: Direction) -> np.ndarray:
    """
    Get the maximal line of cells passing through a grid position.

    The line runs edge to edge of the board in the given direction, so any
    run containing (row, col) is a contiguous slice of it.

    Args:
        grid: The game grid, shape (ROWS, COLS), row 0 at the top
        row: Grid row index
        col: Grid column index
        direction: Which of the four axes to follow

    Returns:
        1-D array of cell values along the line
    """
    if direction == Direction.VERTICAL:
        return grid[:, col]
    if direction == Direction.HORIZONTAL:
        return grid[row, :]
    if direction == Direction.DIAGONAL_DOWN:
        return np.diagonal(grid, offset=col - row)
    # Mirror the columns so the up-diagonal becomes a main diagonal
    return np.diagonal(np.fliplr(grid), offset=(grid.shape[1] - 1 - col) - row)


def has_run(line: Sequence[int], value: int, length: int = CONNECT_N) -> bool:
    """
    Check whether a line holds `length` contiguous cells equal to `value`.

    Args:
        line: Sequence of cell values
        value: Cell value to look for
        length: Required run length

    Returns:
        True if such a run exists, False otherwise
    """
    cells = np.asarray(line)
    if cells.size < length:
        return False
    matches = (cells == value).astype(np.int32)
    windows = np.convolve(matches, np.ones(length, dtype=np.int32), mode='valid')
    return bool((windows == length).any())


def check_win_at_position(grid: np.ndarray, row: int, col: int) -> bool:
    """
    Check if the piece at the given grid position is part of a winning run.

    Only lines passing through (row, col) are examined.
    """
    value = grid[row, col]
    if value == Piece.EMPTY.value:
        return False

    return any(has_run(line_through(grid, row, col, direction), value)
               for direction in Direction)


def moves_to_notation(moves: Iterable[int]) -> str:
    """Render a move list as its digit-string notation."""
    return "".join(str(move) for move in moves)


def render_state_text(moves: Iterable[int], grid: np.ndarray) -> str:
    """
    Render moves and board as compact plain text.

    The first line is the move notation, followed by one line per board row,
    top row first, with '.' for empty cells and the piece number otherwise.
    """
    lines = [moves_to_notation(moves)]
    for row in grid:
        lines.append("".join(str(int(cell)) if cell else "." for cell in row))
    return "\n".join(lines)
