"""
view.py - Plain terminal rendering for a game in progress

The view only consumes Game notifications and State attributes. It draws
with ANSI escape codes and box characters, redrawing the whole screen on
every notification.
"""

import sys
from typing import Callable, Sequence, TextIO, Tuple

from c4term.game.match import Game
from c4term.utils import WIDTH, HEIGHT, Piece

# ANSI color codes for terminal output
COLORS = {
    Piece.ONE: "\033[91m",  # Bright red
    Piece.TWO: "\033[94m",  # Bright blue
    "HIGHLIGHT": "\033[93m",  # Bright yellow
    "BOLD": "\033[1m",
    "RESET": "\033[0m",
}
CLEAR_SCREEN = "\033[2J\033[H"

TITLE = "Connect 4\n========="


class TerminalView:
    """Renders a Game to a text stream."""

    def __init__(self, out: TextIO = None, color: bool = True, clear: bool = True):
        self.out = out or sys.stdout
        self.color = color
        self.clear = clear

    def _paint(self, text: str, style) -> str:
        if not self.color:
            return text
        return f"{COLORS[style]}{text}{COLORS['RESET']}"

    def _write(self, text: str) -> None:
        self.out.write(text)
        self.out.flush()

    def show_intro(self) -> None:
        if self.clear:
            self._write(CLEAR_SCREEN)
        self._write(self._paint(TITLE, "BOLD") + "\n")

    def choose_players(self, options: Sequence[Tuple[str, str, str]],
                       ask: Callable[[str], str] = input) -> Tuple[str, str]:
        """
        Prompt for the two players.

        Args:
            options: (kind, name, description) for each available player
            ask: Prompt function, input() by default

        Returns:
            The chosen kinds for player 1 and player 2
        """
        kinds = [kind for kind, _, _ in options]
        self._write("Select your players:\n")
        for kind, name, description in options:
            self._write(f"  {kind}: {name} - {description}\n")

        chosen = []
        for seat in (1, 2):
            while True:
                answer = ask(f"\nSelect Player {seat} [{'/'.join(kinds)}]: ").strip().lower()
                if answer in kinds:
                    chosen.append(answer)
                    break
                self._write(f"Unknown player '{answer}'.\n")
        return chosen[0], chosen[1]

    def attach(self, game: Game) -> None:
        """Redraw on every game notification."""
        game.on('state', lambda state: self.render(game))
        game.on('highlight', lambda columns: self.render(game))
        game.on('thinking', lambda message: self.render(game))

    def format_board(self, game: Game) -> str:
        """Board, column markers and move list as text."""
        state = game.state
        lines = ["╔" + "═" * (WIDTH * 2 + 1) + "╗"]
        for row in range(HEIGHT - 1, -1, -1):
            cells = []
            for col in range(WIDTH):
                piece = state.piece_at(col, row)
                cells.append(" " if piece == Piece.EMPTY else self._paint("■", piece))
            lines.append("║ " + " ".join(cells) + " ║")
        lines.append("╚" + "═" * (WIDTH * 2 + 1) + "╝")

        positions = state.valid_plays()
        markers = []
        for column in range(1, WIDTH + 1):
            if column in game.highlight:
                markers.append(self._paint(str(column), "HIGHLIGHT"))
            elif column in positions:
                markers.append(".")
            else:
                markers.append(" ")
        lines.append("  " + " ".join(markers))

        moves = "".join(self._paint(str(move), Piece.ONE if index % 2 == 0 else Piece.TWO)
                        for index, move in enumerate(state.moves))
        lines.append(f"Moves: {moves}")
        return "\n".join(lines)

    def format_next_player(self, game: Game) -> str:
        if game.state.gameover:
            return ""
        piece = game.state.next_piece()
        player = game.current_player()
        lines = [f"Next: {self._paint(player.name, piece)} ({piece})"]
        lines.extend(f"  {thought}" for thought in game.thoughts)
        return "\n".join(lines)

    def render(self, game: Game) -> None:
        parts = []
        if self.clear:
            parts.append(CLEAR_SCREEN)
        parts.append(self._paint(TITLE, "BOLD"))
        parts.append("(Press Ctrl+C to quit)")
        parts.append(self.format_board(game))
        parts.append(self.format_next_player(game))
        self._write("\n".join(parts) + "\n")

    def format_winner(self, game: Game) -> str:
        winner = game.winning_player()
        if winner is None:
            return "It's a draw!"
        return f"{self._paint(winner.name, game.state.winner)} ({game.state.winner}) wins!"

    def render_winner(self, game: Game) -> None:
        self._write(self.format_winner(game) + "\n")
