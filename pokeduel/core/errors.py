"""
Error classes for clearer exception sources.
"""
from __future__ import annotations

class PokeduelError(Exception):
    pass

class DataLoadError(PokeduelError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail

class ValidationError(PokeduelError):
    pass
