"""
Centralized path helpers.
"""
from __future__ import annotations
from pathlib import Path

# This file lives at pokeduel/core/paths.py
PACKAGE = Path(__file__).resolve().parents[1]
ASSETS = PACKAGE / "assets"
ROSTER = ASSETS / "roster.json"
