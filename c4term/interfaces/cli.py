"""
cli.py - Command-line interface for playing and inspecting Connect Four games

Commands:
    play     Play a full game between two players in the terminal
    replay   Print the state reached by a move sequence
"""

import argparse
import asyncio
import sys
from typing import List, Optional, Sequence, TextIO

from c4term.debug import debug, DebugLevel
from c4term.errors import Connect4Error
from c4term.game.match import Game
from c4term.game.state import State
from c4term.interfaces.keys import StdinKeySource
from c4term.interfaces.view import TerminalView
from c4term.players import PLAYER_TYPES, create_player, describe_players
from c4term.utils import THINK_DELAY, SOLVER_URL, SOLVER_TIMEOUT

DEBUG_COMPONENTS = ('state', 'game', 'player', 'cli', 'debug')


def component_list(value: str) -> List[str]:
    """Parse a comma-separated --debug-components value."""
    names = [name.strip() for name in value.split(',') if name.strip()]
    unknown = [name for name in names if name not in DEBUG_COMPONENTS]
    if unknown:
        raise argparse.ArgumentTypeError(f"unknown component(s): {', '.join(unknown)}")
    return names


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all commands."""
    parser = argparse.ArgumentParser(description='Connect Four in the terminal')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--debug-level', type=str, default='warning',
                        choices=[level.name.lower() for level in DebugLevel],
                        help='Logging level')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Also write log messages to this file')
    parser.add_argument('--debug-components', type=component_list, default=[],
                        metavar='NAME[,NAME...]',
                        help=f'Only log these components, from {", ".join(DEBUG_COMPONENTS)} (default: all)')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play a game interactively')
    play_parser.add_argument('--player1', choices=list(PLAYER_TYPES),
                             help='Player 1 type (prompted if omitted)')
    play_parser.add_argument('--player2', choices=list(PLAYER_TYPES),
                             help='Player 2 type (prompted if omitted)')
    play_parser.add_argument('--start', type=str, default='',
                             help='Move sequence to start from, e.g. 4453')
    play_parser.add_argument('--delay', type=float, default=THINK_DELAY,
                             help='Thinking delay for computer players, in seconds')
    play_parser.add_argument('--solver-url', type=str, default=SOLVER_URL,
                             help='Solver endpoint used by eddie')
    play_parser.add_argument('--solver-timeout', type=float, default=SOLVER_TIMEOUT,
                             help='Solver timeout in seconds')
    play_parser.add_argument('--no-color', action='store_true', help='Disable ANSI colors')

    replay_parser = subparsers.add_parser('replay', help='Show the state after a move sequence')
    replay_parser.add_argument('moves', type=str, help='Move sequence, e.g. 4453')

    return parser


def configure_debug(args: argparse.Namespace) -> None:
    """Configure logging from the global --debug* and --log-file options."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.configure(level=DebugLevel[args.debug_level.upper()])
    if args.log_file:
        debug.configure(log_file=args.log_file)
    debug.configure(components=args.debug_components)


def describe_outcome(state: State) -> str:
    if state.winner is not None:
        return f"Winner: player {state.winner.value}"
    if state.gameover:
        return "Game over: draw"
    return f"In progress, next: player {state.next_piece().value}"


def replay(moves: str, out: TextIO = None) -> int:
    """Print the state reached by `moves`; returns the exit status."""
    out = out or sys.stdout
    try:
        state = State.from_moves(moves)
    except Connect4Error as exc:
        debug.error(f"Replay failed: {exc}", "cli")
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(state.to_text(), file=out)
    print(describe_outcome(state), file=out)
    return 0


async def run_game(view: TerminalView, kinds: Sequence[str], start: State,
                   args: argparse.Namespace) -> State:
    """Set up players and play one game to the end."""
    keys = None
    if 'human' in kinds:
        keys = StdinKeySource()
        keys.start()

    players = [create_player(kind, keys=keys,
                             think_delay=args.delay,
                             solver_url=args.solver_url,
                             solver_timeout=args.solver_timeout)
               for kind in kinds]

    game = Game(start, players[0], players[1])
    view.attach(game)
    view.render(game)
    try:
        final = await game.run()
    finally:
        game.close()
    view.render_winner(game)
    return final


def play(args: argparse.Namespace) -> int:
    """Run the play command; returns the exit status."""
    view = TerminalView(color=not args.no_color)
    try:
        start = State.from_moves(args.start)
        view.show_intro()
        kinds: List[str] = [args.player1, args.player2]
        if None in kinds:
            kinds = list(view.choose_players(describe_players()))
        asyncio.run(run_game(view, kinds, start, args))
    except Connect4Error as exc:
        debug.error(f"Cannot play: {exc}", "cli")
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nQuitting game.")
        return 130
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_debug(args)

    if args.command == 'play':
        return play(args)
    if args.command == 'replay':
        return replay(args.moves)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
