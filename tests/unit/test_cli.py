"""
Unit tests for the command line entry point.
"""

import pytest
from unittest.mock import Mock, patch

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from libraries.dimensional_modeling import cli
from libraries.dimensional_modeling.common.config import ProcessingMetrics
from libraries.dimensional_modeling.common.exceptions import ActorMergeError

CLI_MODULE = 'libraries.dimensional_modeling.cli'


class TestBuildParser:
    """Test cases for argument parsing."""

    def test_merge_actors(self):
        args = cli.build_parser().parse_args(["merge-actors", "--current-year", "1971"])

        assert args.command == "merge-actors"
        assert args.current_year == 1971
        assert args.prior_year is None
        assert args.table_format == "delta"
        assert args.rating_aggregation == "latest"

    def test_global_options(self):
        args = cli.build_parser().parse_args([
            "--database", "analytics", "--table-format", "parquet",
            "rebuild-actors", "--start-year", "1970", "--end-year", "1972"
        ])

        assert args.database == "analytics"
        assert args.table_format == "parquet"
        assert (args.start_year, args.end_year) == (1970, 1972)

    def test_build_game_facts_defaults(self):
        args = cli.build_parser().parse_args(["build-game-facts"])

        assert args.include_game_id is False
        assert args.target_table == "fct_game_details"

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])

    def test_invalid_table_format(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["--table-format", "csv", "build-game-facts"])


class TestRun:
    """Test cases for command dispatch."""

    @pytest.fixture
    def mock_spark(self):
        return Mock()

    def _args(self, argv):
        return cli.build_parser().parse_args(argv)

    def test_uses_database(self, mock_spark):
        with patch(f'{CLI_MODULE}.ActorHistoryBuilder'):
            cli.run(self._args(["--database", "analytics", "build-actor-history"]), mock_spark)

        statements = [c[0][0] for c in mock_spark.sql.call_args_list]
        assert statements == ["CREATE DATABASE IF NOT EXISTS analytics", "USE analytics"]

    def test_merge_actors(self, mock_spark):
        with patch(f'{CLI_MODULE}.ActorDimensionMerger') as mock_merger:
            cli.run(self._args(["merge-actors", "--current-year", "1971",
                                "--rating-aggregation", "average"]), mock_spark)

        config = mock_merger.call_args[0][0]
        assert config.rating_aggregation == "average"
        mock_merger.return_value.process_year.assert_called_once_with(1971, None)

    def test_rebuild_actors(self, mock_spark):
        with patch(f'{CLI_MODULE}.ActorDimensionMerger') as mock_merger:
            cli.run(self._args(["rebuild-actors", "--start-year", "1970", "--end-year", "1972"]), mock_spark)

        mock_merger.return_value.rebuild.assert_called_once_with(1970, 1972)

    def test_build_actor_history(self, mock_spark):
        with patch(f'{CLI_MODULE}.ActorHistoryBuilder') as mock_builder:
            cli.run(self._args(["build-actor-history", "--target-table", "history"]), mock_spark)

        assert mock_builder.call_args[0][0].target_table == "history"
        mock_builder.return_value.rebuild_history.assert_called_once()

    def test_build_game_facts(self, mock_spark):
        with patch(f'{CLI_MODULE}.GameFactBuilder') as mock_builder:
            cli.run(self._args(["--table-format", "parquet", "build-game-facts", "--include-game-id"]), mock_spark)

        config = mock_builder.call_args[0][0]
        assert config.include_game_id is True
        assert config.table_format == "parquet"
        assert config.fact_key_columns[0] == "dim_game_id"
        mock_builder.return_value.process.assert_called_once()


class TestMain:
    """Test cases for the main entry point."""

    def test_success(self):
        with patch(f'{CLI_MODULE}.build_spark_session') as mock_session, \
             patch(f'{CLI_MODULE}.run', return_value=ProcessingMetrics(records_written=4)):
            assert cli.main(["build-game-facts"]) == 0

        mock_session.return_value.stop.assert_called_once()

    def test_pipeline_error_returns_nonzero(self):
        with patch(f'{CLI_MODULE}.build_spark_session') as mock_session, \
             patch(f'{CLI_MODULE}.run', side_effect=ActorMergeError("already loaded", current_year=1971)):
            assert cli.main(["merge-actors", "--current-year", "1971"]) == 1

        mock_session.return_value.stop.assert_called_once()

    def test_unexpected_error_propagates(self):
        with patch(f'{CLI_MODULE}.build_spark_session') as mock_session, \
             patch(f'{CLI_MODULE}.run', side_effect=RuntimeError("boom")):
            with pytest.raises(RuntimeError):
                cli.main(["build-game-facts"])

        mock_session.return_value.stop.assert_called_once()
