"""
Common utilities and configurations for dimensional modeling library.
"""

from .config import (
    ActorMergeConfig,
    ActorHistoryConfig,
    GameFactConfig,
    ProcessingMetrics,
    ValidationResult,
    QualityClass
)
from .exceptions import (
    DimensionalModelingError,
    ActorValidationError,
    ActorMergeError,
    HistoryBuildError,
    GameFactError,
    KeyConstraintError,
    ConfigurationError
)
from .utils import add_source_ordinal, find_duplicate_keys

__all__ = [
    "ActorMergeConfig",
    "ActorHistoryConfig",
    "GameFactConfig",
    "ProcessingMetrics",
    "ValidationResult",
    "QualityClass",
    "DimensionalModelingError",
    "ActorValidationError",
    "ActorMergeError",
    "HistoryBuildError",
    "GameFactError",
    "KeyConstraintError",
    "ConfigurationError",
    "add_source_ordinal",
    "find_duplicate_keys"
]
