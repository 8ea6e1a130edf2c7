"""
Configuration classes for dimensional modeling library.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any
from enum import Enum


class QualityClass(Enum):
    """Performance tier derived from an actor's rating."""
    STAR = "star"
    GOOD = "good"
    AVERAGE = "average"
    BAD = "bad"


class RatingAggregation(Enum):
    """How several films in the same year are reduced to one rating."""
    LATEST = "latest"
    AVERAGE = "average"


class TableFormat(Enum):
    """Supported storage formats for target tables."""
    DELTA = "delta"
    PARQUET = "parquet"


def _validate_table_format(table_format: str) -> None:
    valid_formats = [fmt.value for fmt in TableFormat]
    if table_format not in valid_formats:
        raise ValueError(f"table_format must be one of {valid_formats}")


@dataclass
class ActorMergeConfig:
    """Configuration for the yearly actor dimension merge."""

    # Tables
    source_table: str = "actor_films"
    target_table: str = "actors"

    # Column roles
    join_columns: List[str] = field(default_factory=lambda: ["actor", "actorid"])
    key_columns: List[str] = field(default_factory=lambda: ["actorid", "year"])
    year_column: str = "year"

    # Behaviour
    rating_aggregation: str = "latest"
    table_format: str = "delta"
    enable_optimization: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.source_table:
            raise ValueError("source_table is required")
        if not self.target_table:
            raise ValueError("target_table is required")
        if "actorid" not in self.join_columns:
            raise ValueError("join_columns must include actorid")
        if not set(self.join_columns) <= {"actor", "actorid"}:
            raise ValueError("join_columns may only contain actor and actorid")
        if not self.key_columns:
            raise ValueError("key_columns cannot be empty")

        valid_aggregations = [agg.value for agg in RatingAggregation]
        if self.rating_aggregation not in valid_aggregations:
            raise ValueError(f"rating_aggregation must be one of {valid_aggregations}")

        _validate_table_format(self.table_format)


@dataclass
class ActorHistoryConfig:
    """Configuration for building the actor history table."""

    source_table: str = "actors"
    target_table: str = "actors_history_scd"
    year_column: str = "year"
    table_format: str = "delta"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.source_table:
            raise ValueError("source_table is required")
        if not self.target_table:
            raise ValueError("target_table is required")
        _validate_table_format(self.table_format)


@dataclass
class GameFactConfig:
    """Configuration for the deduplicated game details fact table."""

    # Tables
    game_details_table: str = "game_details"
    games_table: str = "games"
    target_table: str = "fct_game_details"

    # Deduplication
    partition_columns: List[str] = field(
        default_factory=lambda: ["game_id", "team_id", "player_id"])
    order_column: str = "game_date_est"
    ordinal_column: str = "_source_ordinal"

    # Declared identity of the fact table
    fact_key_columns: List[str] = field(
        default_factory=lambda: ["dim_game_date", "dim_team_id", "dim_player_id"])
    include_game_id: bool = False

    # Comment tokens mapped to the flag columns they set
    status_tokens: Dict[str, str] = field(default_factory=lambda: {
        "dim_did_not_play": "DNP",
        "dim_did_not_dress": "DND",
        "dim_not_with_team": "NWT",
    })

    table_format: str = "delta"
    enable_optimization: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.game_details_table:
            raise ValueError("game_details_table is required")
        if not self.games_table:
            raise ValueError("games_table is required")
        if not self.target_table:
            raise ValueError("target_table is required")
        if not self.partition_columns:
            raise ValueError("partition_columns cannot be empty")
        if not self.fact_key_columns:
            raise ValueError("fact_key_columns cannot be empty")
        if "dim_game_id" in self.fact_key_columns and not self.include_game_id:
            raise ValueError("fact_key_columns references dim_game_id but include_game_id is False")
        if not self.status_tokens:
            raise ValueError("status_tokens cannot be empty")

        # The game id joins the fact key when it is carried
        if self.include_game_id and "dim_game_id" not in self.fact_key_columns:
            self.fact_key_columns = ["dim_game_id"] + list(self.fact_key_columns)

        _validate_table_format(self.table_format)


@dataclass
class ProcessingMetrics:
    """Metrics for processing operations."""

    records_read: int = 0
    records_written: int = 0
    active_records: int = 0
    inactive_records: int = 0
    duplicates_removed: int = 0
    records_dropped: int = 0
    processing_time_seconds: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary."""
        return {
            "records_read": self.records_read,
            "records_written": self.records_written,
            "active_records": self.active_records,
            "inactive_records": self.inactive_records,
            "duplicates_removed": self.duplicates_removed,
            "records_dropped": self.records_dropped,
            "processing_time_seconds": self.processing_time_seconds
        }


@dataclass
class ValidationResult:
    """Result of data validation."""

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, error: str) -> None:
        """Add an error message."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)

    def to_dict(self) -> Dict[str, Any]:
        """Convert validation result to dictionary."""
        return {
            "is_valid": self.is_valid,
            "errors": self.errors,
            "warnings": self.warnings
        }
