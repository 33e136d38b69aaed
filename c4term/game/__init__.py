"""
c4term.game - Core game mechanics for Connect Four

This package contains the immutable State with its win/draw detection
(game.state) and the Game turn orchestrator (game.match). Only State is
re-exported here; match depends on the players package, which depends on
State.
"""

from c4term.game.state import State

__all__ = ['State']
