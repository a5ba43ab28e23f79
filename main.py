#!/usr/bin/env python3
"""
Pokemon Battle - terminal edition

Thin wrapper around :func:`pokeduel.cli.run`.

To run: python main.py [--seed N] [--fast]
"""
import sys

from pokeduel.cli import run

if __name__ == "__main__":
    sys.exit(run())
