"""
Actor dimension modules.
"""

from .actor_merger import ActorDimensionMerger
from .history_builder import ActorHistoryBuilder
from .quality import classify_rating, quality_class_expr
from .validators import ActorValidator

__all__ = [
    "ActorDimensionMerger",
    "ActorHistoryBuilder",
    "ActorValidator",
    "classify_rating",
    "quality_class_expr"
]
