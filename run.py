#!/usr/bin/env python3
"""
run.py - Main entry point for c4term

Examples:
    python run.py play --player1 human --player2 hugh
    python run.py play --player1 hugh --player2 rando --delay 0
    python run.py replay 4152637
"""

import sys

from c4term.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
