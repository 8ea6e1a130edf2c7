"""
Command line entry point for running the batch transforms.
"""

import argparse
import logging
import sys
from typing import List, Optional

from pyspark.sql import SparkSession
from delta import configure_spark_with_delta_pip

from .actor_dimension.actor_merger import ActorDimensionMerger
from .actor_dimension.history_builder import ActorHistoryBuilder
from .game_facts.game_fact_builder import GameFactBuilder
from .common.config import ActorMergeConfig, ActorHistoryConfig, GameFactConfig, TableFormat
from .common.exceptions import DimensionalModelingError

logger = logging.getLogger(__name__)


def build_spark_session(app_name: str, table_format: str) -> SparkSession:
    """
    Create a Spark session, Delta-enabled when writing Delta tables.

    Args:
        app_name: Spark application name
        table_format: Table format the job writes

    Returns:
        SparkSession
    """
    builder = SparkSession.builder.appName(app_name)

    if table_format == TableFormat.DELTA.value:
        builder = (builder
                   .config("spark.sql.extensions", "io.delta.sql.DeltaSparkSessionExtension")
                   .config("spark.sql.catalog.spark_catalog",
                           "org.apache.spark.sql.delta.catalog.DeltaCatalog"))
        builder = configure_spark_with_delta_pip(builder)

    return builder.getOrCreate()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dimensional-modeling",
        description="Run the actor dimension and game fact batch transforms."
    )
    parser.add_argument("--database", default="default", help="Database holding all tables")
    parser.add_argument("--table-format", default=TableFormat.DELTA.value,
                        choices=[fmt.value for fmt in TableFormat])
    parser.add_argument("--log-level", default="INFO")

    subparsers = parser.add_subparsers(dest="command", required=True)

    merge = subparsers.add_parser("merge-actors", help="Merge one year into the actor snapshot table")
    merge.add_argument("--current-year", type=int, required=True)
    merge.add_argument("--prior-year", type=int, default=None)
    merge.add_argument("--source-table", default="actor_films")
    merge.add_argument("--target-table", default="actors")
    merge.add_argument("--rating-aggregation", default="latest", choices=["latest", "average"])

    rebuild = subparsers.add_parser("rebuild-actors", help="Rebuild the actor snapshot table year by year")
    rebuild.add_argument("--start-year", type=int, required=True)
    rebuild.add_argument("--end-year", type=int, required=True)
    rebuild.add_argument("--source-table", default="actor_films")
    rebuild.add_argument("--target-table", default="actors")
    rebuild.add_argument("--rating-aggregation", default="latest", choices=["latest", "average"])

    history = subparsers.add_parser("build-actor-history", help="Rebuild the actor history table")
    history.add_argument("--source-table", default="actors")
    history.add_argument("--target-table", default="actors_history_scd")

    facts = subparsers.add_parser("build-game-facts", help="Rebuild the game details fact table")
    facts.add_argument("--game-details-table", default="game_details")
    facts.add_argument("--games-table", default="games")
    facts.add_argument("--target-table", default="fct_game_details")
    facts.add_argument("--include-game-id", action="store_true",
                       help="Carry dim_game_id and add it to the fact key")

    return parser


def run(args: argparse.Namespace, spark: SparkSession):
    """Dispatch a parsed command and return its metrics."""
    spark.sql(f"CREATE DATABASE IF NOT EXISTS {args.database}")
    spark.sql(f"USE {args.database}")

    if args.command in ("merge-actors", "rebuild-actors"):
        config = ActorMergeConfig(
            source_table=args.source_table,
            target_table=args.target_table,
            rating_aggregation=args.rating_aggregation,
            table_format=args.table_format
        )
        merger = ActorDimensionMerger(config, spark)
        if args.command == "merge-actors":
            return merger.process_year(args.current_year, args.prior_year)
        return merger.rebuild(args.start_year, args.end_year)

    if args.command == "build-actor-history":
        config = ActorHistoryConfig(
            source_table=args.source_table,
            target_table=args.target_table,
            table_format=args.table_format
        )
        return ActorHistoryBuilder(config, spark).rebuild_history()

    config = GameFactConfig(
        game_details_table=args.game_details_table,
        games_table=args.games_table,
        target_table=args.target_table,
        include_game_id=args.include_game_id,
        table_format=args.table_format
    )
    return GameFactBuilder(config, spark).process()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s:%(name)s:%(message)s")

    spark = build_spark_session(f"dimensional-modeling {args.command}", args.table_format)
    try:
        metrics = run(args, spark)
    except DimensionalModelingError as e:
        logger.error(f"{args.command} failed [{e.error_code}]: {e.message}")
        return 1
    finally:
        spark.stop()

    logger.info(f"{args.command} finished: {metrics.to_dict()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
