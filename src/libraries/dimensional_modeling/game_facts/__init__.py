"""
Game details fact table modules.
"""

from .game_fact_builder import GameFactBuilder
from .deduplicator import GameDetailDeduplicator
from .parsers import minutes_expr, parse_minutes, status_flag_expr, parse_status_flags

__all__ = [
    "GameFactBuilder",
    "GameDetailDeduplicator",
    "minutes_expr",
    "parse_minutes",
    "status_flag_expr",
    "parse_status_flags"
]
