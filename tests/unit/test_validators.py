"""
Unit tests for ActorValidator.
"""

import pytest
from pyspark.sql import SparkSession

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from libraries.dimensional_modeling.actor_dimension.validators import ActorValidator
from libraries.dimensional_modeling.common.config import ActorMergeConfig, ValidationResult
from libraries.dimensional_modeling.common.schemas import ACTOR_FILMS_SCHEMA, ACTOR_SNAPSHOT_SCHEMA


class TestActorValidator:
    """Test cases for ActorValidator."""

    @pytest.fixture(scope="class")
    def spark(self):
        """Create Spark session for testing."""
        return SparkSession.builder.appName("test").master("local[2]").getOrCreate()

    @pytest.fixture
    def validator(self):
        """Create ActorValidator instance for testing."""
        return ActorValidator(ActorMergeConfig())

    @pytest.fixture
    def snapshot(self, spark):
        return spark.createDataFrame([], ACTOR_SNAPSHOT_SCHEMA)

    @pytest.fixture
    def films(self, spark):
        return spark.createDataFrame([
            ("Actor One", "a1", "First Film", 1970, 100, 8.5, "f1"),
        ], ACTOR_FILMS_SCHEMA)

    def test_valid_inputs(self, validator, snapshot, films):
        result = validator.validate_merge_inputs(snapshot, films, 1969, 1970)

        assert isinstance(result, ValidationResult)
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    @pytest.mark.parametrize("prior_year, current_year", [(1970, 1970), (1971, 1970)])
    def test_current_year_must_be_after_prior_year(self, validator, snapshot, films, prior_year, current_year):
        result = validator.validate_merge_inputs(snapshot, films, prior_year, current_year)

        assert not result.is_valid
        assert "must be after" in result.errors[0]

    def test_missing_year(self, validator, snapshot, films):
        result = validator.validate_merge_inputs(snapshot, films, None, 1970)

        assert not result.is_valid

    def test_skipped_years_warn(self, validator, snapshot, films):
        result = validator.validate_merge_inputs(snapshot, films, 1967, 1970)

        assert result.is_valid
        assert "Skipping 2 year(s)" in result.warnings[0]

    def test_missing_snapshot_columns(self, validator, snapshot, films):
        result = validator.validate_merge_inputs(snapshot.drop("films"), films, 1969, 1970)

        assert not result.is_valid
        assert "Missing required columns in prior snapshot: ['films']" in result.errors

    def test_null_actor_ids(self, validator, spark, snapshot):
        films = spark.createDataFrame([
            ("Nobody", None, "Lost Film", 1970, 1, 5.0, "l1"),
            ("Nobody Else", None, "Lost Film", 1970, 1, 5.0, "l2"),
        ], ACTOR_FILMS_SCHEMA)

        result = validator.validate_merge_inputs(snapshot, films, 1969, 1970)

        assert not result.is_valid
        assert "Found 2 null values in actorid of film records" in result.errors
