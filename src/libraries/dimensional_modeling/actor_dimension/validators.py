"""
Data validation utilities for the actor dimension.
"""

from pyspark.sql import DataFrame
import logging

from ..common.config import ActorMergeConfig, ValidationResult
from ..common.utils import missing_columns, count_nulls

logger = logging.getLogger(__name__)

FILM_RECORD_COLUMNS = ["actor", "actorid", "film", "year", "votes", "rating", "filmid"]
SNAPSHOT_COLUMNS = ["actor", "actorid", "film", "year", "votes", "rating",
                    "films", "quality_class", "is_active"]


class ActorValidator:
    """Validates inputs of the yearly actor merge."""

    def __init__(self, config: ActorMergeConfig):
        """
        Initialize ActorValidator with configuration.

        Args:
            config: Actor merge configuration
        """
        self.config = config

    def validate_merge_inputs(self, prior_snapshot_df: DataFrame, current_films_df: DataFrame,
                              prior_year: int, current_year: int) -> ValidationResult:
        """
        Validate both merge inputs and the year pair.

        Args:
            prior_snapshot_df: Prior year snapshot rows
            current_films_df: Raw film records
            prior_year: Year of the snapshot being extended
            current_year: Year being produced

        Returns:
            ValidationResult with validation status and errors
        """
        result = ValidationResult(is_valid=True)

        self._validate_years(prior_year, current_year, result)
        self._validate_required_columns(prior_snapshot_df, SNAPSHOT_COLUMNS, "prior snapshot", result)
        self._validate_required_columns(current_films_df, FILM_RECORD_COLUMNS, "film records", result)

        if result.is_valid:
            self._validate_actor_ids(current_films_df, "film records", result)
            self._validate_actor_ids(prior_snapshot_df, "prior snapshot", result)

        logger.info(f"Validation completed. Valid: {result.is_valid}, Errors: {len(result.errors)}")
        return result

    def _validate_years(self, prior_year: int, current_year: int, result: ValidationResult) -> None:
        """Validate the (prior, current) year pair."""
        if prior_year is None or current_year is None:
            result.add_error("prior_year and current_year are required")
        elif current_year <= prior_year:
            result.add_error(f"current_year {current_year} must be after prior_year {prior_year}")
        elif current_year - prior_year > 1:
            result.add_warning(f"Skipping {current_year - prior_year - 1} year(s) between {prior_year} and {current_year}")

    def _validate_required_columns(self, df: DataFrame, required_columns: list,
                                   name: str, result: ValidationResult) -> None:
        """Validate that all required columns exist."""
        missing = missing_columns(df, required_columns)
        if missing:
            result.add_error(f"Missing required columns in {name}: {missing}")

    def _validate_actor_ids(self, df: DataFrame, name: str, result: ValidationResult) -> None:
        """Validate that no row lacks an actor identifier."""
        null_count = count_nulls(df, "actorid")
        if null_count > 0:
            result.add_error(f"Found {null_count} null values in actorid of {name}")
