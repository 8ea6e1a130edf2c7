"""
Unit tests for quality classification.
"""

import pytest
from pyspark.sql import SparkSession
from pyspark.sql.types import StructType, StructField, DoubleType

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from libraries.dimensional_modeling.actor_dimension.quality import classify_rating, quality_class_expr
from libraries.dimensional_modeling.common.config import QualityClass


class TestClassifyRating:
    """Test cases for classify_rating."""

    @pytest.mark.parametrize("rating, expected", [
        (9.5, QualityClass.STAR),
        (8.01, QualityClass.STAR),
        (8.0, QualityClass.GOOD),
        (7.5, QualityClass.GOOD),
        (7.0, QualityClass.AVERAGE),
        (6.5, QualityClass.AVERAGE),
        (6.0, QualityClass.BAD),
        (0.0, QualityClass.BAD),
    ])
    def test_thresholds_are_strict(self, rating, expected):
        """Boundary ratings fall into the lower tier."""
        assert classify_rating(rating) is expected

    def test_none_rating_is_bad(self):
        assert classify_rating(None) is QualityClass.BAD

    def test_reclassifying_is_stable(self):
        for rating in (5.0, 6.0, 6.2, 7.0, 7.7, 8.0, 8.3):
            assert classify_rating(rating) is classify_rating(rating)


class TestQualityClassExpr:
    """Test cases for quality_class_expr."""

    @pytest.fixture(scope="class")
    def spark(self):
        """Create Spark session for testing."""
        return SparkSession.builder.appName("test").master("local[2]").getOrCreate()

    def test_expr_matches_python_rule(self, spark):
        """The Spark expression agrees with classify_rating on every input."""
        ratings = [9.5, 8.01, 8.0, 7.5, 7.0, 6.5, 6.0, 2.0, None]
        schema = StructType([StructField("rating", DoubleType(), True)])
        df = spark.createDataFrame([(r,) for r in ratings], schema)

        rows = df.select("rating", quality_class_expr("rating").alias("quality_class")).collect()

        assert len(rows) == len(ratings)
        for row in rows:
            assert row["quality_class"] == classify_rating(row["rating"]).value

    def test_expr_accepts_column(self, spark):
        df = spark.createDataFrame([(8.5,)], StructType([StructField("rating", DoubleType(), True)]))

        row = df.select(quality_class_expr(df.rating).alias("quality_class")).first()

        assert row["quality_class"] == "star"
