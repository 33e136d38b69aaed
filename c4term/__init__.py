"""
c4term - Connect Four in the terminal

This package provides an immutable game state model with win/draw detection,
a turn orchestrator, pluggable player strategies (human, random, heuristic
and remote-solver backed) and a plain terminal interface for playing them
against each other.
"""

# Version number
__version__ = '0.1.0'
