"""
c4term.interfaces - User interfaces for c4term

This package contains the terminal view, the stdin key source for human
players, and the command-line entry point.
"""

# Don't import anything here to avoid circular imports
__all__ = []
