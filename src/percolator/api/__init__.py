from __future__ import annotations

from .percolate import ACCEPTED_QUERYSTRING, SNAKE_CASE, STRUCTURAL_KEYS, build_percolate, prepare_percolate

__all__ = [
    "ACCEPTED_QUERYSTRING",
    "SNAKE_CASE",
    "STRUCTURAL_KEYS",
    "build_percolate",
    "prepare_percolate",
]
