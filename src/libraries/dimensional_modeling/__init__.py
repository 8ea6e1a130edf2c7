"""
Dimensional Modeling Library

Batch transforms for an accumulating actor dimension, its year-dated
history, and a deduplicated NBA game details fact table, on Spark with
Delta Lake tables.

Main Components:
- ActorDimensionMerger: Merges each year's film records into the actor snapshot
- ActorHistoryBuilder: Derives year-dated history records from actor snapshots
- GameFactBuilder: Deduplicates and reshapes raw game details into facts

Author: Data Engineering Team
Version: 1.0.0
"""

from .actor_dimension.actor_merger import ActorDimensionMerger
from .actor_dimension.history_builder import ActorHistoryBuilder
from .actor_dimension.quality import classify_rating
from .game_facts.game_fact_builder import GameFactBuilder
from .common.config import ActorMergeConfig, ActorHistoryConfig, GameFactConfig, QualityClass
from .common.exceptions import (
    DimensionalModelingError,
    ActorValidationError,
    ActorMergeError,
    HistoryBuildError,
    GameFactError,
    KeyConstraintError
)

__version__ = "1.0.0"
__author__ = "Data Engineering Team"

__all__ = [
    "ActorDimensionMerger",
    "ActorHistoryBuilder",
    "GameFactBuilder",
    "classify_rating",
    "ActorMergeConfig",
    "ActorHistoryConfig",
    "GameFactConfig",
    "QualityClass",
    "DimensionalModelingError",
    "ActorValidationError",
    "ActorMergeError",
    "HistoryBuildError",
    "GameFactError",
    "KeyConstraintError"
]
