"""
Unit tests for ActorHistoryBuilder.
"""

import datetime

import pytest
from unittest.mock import Mock, patch
from pyspark.sql import SparkSession

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from libraries.dimensional_modeling.actor_dimension.history_builder import ActorHistoryBuilder
from libraries.dimensional_modeling.common.config import ActorHistoryConfig
from libraries.dimensional_modeling.common.exceptions import HistoryBuildError
from libraries.dimensional_modeling.common.schemas import ACTOR_SNAPSHOT_SCHEMA, ACTOR_HISTORY_SCHEMA


class TestActorHistoryBuilder:
    """Test cases for ActorHistoryBuilder."""

    @pytest.fixture(scope="class")
    def spark(self):
        """Create Spark session for testing."""
        return SparkSession.builder.appName("test").master("local[2]").getOrCreate()

    @pytest.fixture
    def builder(self, spark):
        return ActorHistoryBuilder(ActorHistoryConfig(table_format="parquet"), spark)

    @pytest.fixture
    def snapshot(self, spark):
        """Two identical years for one actor plus a single year for another."""
        films = [("First Film", 100, 8.5, "f1")]
        data = [
            ("Actor One", "a1", "First Film", 1970, 100, 8.5, films, "star", True),
            ("Actor One", "a1", "First Film", 1971, 100, 8.5, films, "star", False),
            ("Actor Two", "a2", "Other Film", 1971, 20, 6.1, [("Other Film", 20, 6.1, "f2")], "average", True),
        ]
        return spark.createDataFrame(data, ACTOR_SNAPSHOT_SCHEMA)

    def test_one_record_per_snapshot_row(self, builder, snapshot):
        """Unchanged consecutive years are not collapsed."""
        history = builder.build_history(snapshot)

        assert history.count() == snapshot.count()
        assert history.filter(history.actorid == "a1").count() == 2

    def test_dates_span_the_snapshot_year(self, builder, snapshot):
        rows = builder.build_history(snapshot).collect()

        for row in rows:
            year = row["start_date"].year
            assert row["start_date"] == datetime.date(year, 1, 1)
            assert row["end_date"] == datetime.date(year, 12, 31)

        years = sorted((row["actorid"], row["start_date"].year) for row in rows)
        assert years == [("a1", 1970), ("a1", 1971), ("a2", 1971)]

    def test_state_columns_are_copied(self, builder, snapshot):
        rows = {(r["actorid"], r["start_date"].year): r for r in builder.build_history(snapshot).collect()}

        assert rows[("a1", 1971)]["quality_class"] == "star"
        assert rows[("a1", 1971)]["is_active"] is False
        assert rows[("a2", 1971)]["actor"] == "Actor Two"

    def test_output_schema(self, builder, snapshot):
        history = builder.build_history(snapshot)

        assert history.columns == [f.name for f in ACTOR_HISTORY_SCHEMA.fields]

    def test_missing_year_column(self, builder, snapshot):
        with pytest.raises(HistoryBuildError):
            builder.build_history(snapshot.drop("year"))

    def test_rebuild_history_overwrites_target(self, spark, snapshot):
        with patch('libraries.dimensional_modeling.actor_dimension.history_builder.TableManager') as mock_tm:
            mock_tm.return_value = Mock()
            builder = ActorHistoryBuilder(ActorHistoryConfig(source_table="s.actors", target_table="s.history"), spark)

        builder.table_manager.read_table.return_value = snapshot
        builder.table_manager.overwrite.return_value = 3

        metrics = builder.rebuild_history()

        builder.table_manager.read_table.assert_called_once_with("s.actors")
        target, written_df = builder.table_manager.overwrite.call_args[0]
        assert target == "s.history"
        assert written_df.count() == 3
        assert metrics.records_read == 3
        assert metrics.records_written == 3

    def test_rebuild_history_wraps_unexpected_errors(self, spark):
        with patch('libraries.dimensional_modeling.actor_dimension.history_builder.TableManager') as mock_tm:
            mock_tm.return_value = Mock()
            builder = ActorHistoryBuilder(ActorHistoryConfig(), spark)

        builder.table_manager.read_table.side_effect = Exception("table not found")

        with pytest.raises(HistoryBuildError, match="table not found"):
            builder.rebuild_history()
