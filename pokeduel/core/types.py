"""Global type metadata: the closed type sets, badge colors & abbreviations.

Provides:
  ELEMENT_TYPES: the five types a creature may have
  MOVE_TYPES: element types plus the non-damaging "status" type
  TYPE_COLORS_HEX: mapping type -> hex color string (#RRGGBB)
  TYPE_ABBREVIATIONS: mapping type -> 3-letter abbreviation (upper)
  helpers producing rich style strings for badges.
"""
from __future__ import annotations
from typing import Dict, Tuple

ELEMENT_TYPES: Tuple[str, ...] = ("normal", "fire", "water", "grass", "electric")
STATUS = "status"
MOVE_TYPES: Tuple[str, ...] = ELEMENT_TYPES + (STATUS,)

TYPE_COLORS_HEX: Dict[str, str] = {
    "normal": "#9CA3AF",
    "fire": "#EF4444",
    "water": "#3B82F6",
    "grass": "#22C55E",
    "electric": "#FACC15",
    "status": "#6B7280",
}

TYPE_ABBREVIATIONS: Dict[str, str] = {
    "normal": "NRM",
    "fire": "FIR",
    "water": "WTR",
    "grass": "GRS",
    "electric": "ELE",
    "status": "STS",
}

# Badges with a light background get dark text
_DARK_TEXT = {"electric"}

def is_element_type(type_name: str) -> bool:
    return type_name in ELEMENT_TYPES

def is_move_type(type_name: str) -> bool:
    return type_name in MOVE_TYPES

def type_abbreviation(type_name: str) -> str:
    return TYPE_ABBREVIATIONS.get(type_name.lower(), type_name[:3].upper())

def badge_style(type_name: str) -> str:
    """Rich style for a type badge; unknown types render grey."""
    t = type_name.lower()
    bg = TYPE_COLORS_HEX.get(t, "#6B7280")
    fg = "black" if t in _DARK_TEXT else "white"
    return f"bold {fg} on {bg}"

def text_style(type_name: str) -> str:
    return TYPE_COLORS_HEX.get(type_name.lower(), "white")

__all__ = [
    'ELEMENT_TYPES','MOVE_TYPES','STATUS','TYPE_COLORS_HEX','TYPE_ABBREVIATIONS',
    'is_element_type','is_move_type','type_abbreviation','badge_style','text_style'
]
