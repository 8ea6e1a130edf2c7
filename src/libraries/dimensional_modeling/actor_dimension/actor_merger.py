"""
Yearly actor dimension merge with accumulating film history.
"""

from typing import Optional
from functools import reduce
from pyspark.sql import DataFrame, SparkSession
from pyspark.sql.functions import (
    col, lit, when, coalesce, concat, struct, collect_list, sort_array,
    element_at, transform, avg, sum as spark_sum
)
import logging
import time

from ..common.config import ActorMergeConfig, ProcessingMetrics, RatingAggregation
from ..common.exceptions import (
    DimensionalModelingError, ActorValidationError, ActorMergeError, ConfigurationError
)
from ..common.schemas import ACTOR_SNAPSHOT_SCHEMA
from ..common.utils import add_source_ordinal, conform_to_schema
from ..storage.table_manager import TableManager
from .quality import quality_class_expr
from .validators import ActorValidator

logger = logging.getLogger(__name__)

ORDINAL_COLUMN = "_source_ordinal"
CARRIED_COLUMNS = ["actor", "actorid", "film", "votes", "rating"]


class ActorDimensionMerger:
    """Builds one actor snapshot generation per year from the previous one."""

    def __init__(self, config: ActorMergeConfig, spark: SparkSession):
        """
        Initialize ActorDimensionMerger with configuration and Spark session.

        Args:
            config: Actor merge configuration
            spark: Spark session
        """
        self.config = config
        self.spark = spark

        self.table_manager = TableManager(spark, config.table_format)
        self.validator = ActorValidator(config)

        logger.info(f"Initialized ActorDimensionMerger for table: {config.target_table}")

    def merge_year(self, prior_snapshot_df: DataFrame, current_films_df: DataFrame,
                   prior_year: int, current_year: int) -> DataFrame:
        """
        Merge a prior year snapshot with the current year's film records.

        Every actor present in either input yields exactly one row for
        current_year. Active actors get their new films appended and their
        quality class recomputed; inactive actors carry both forward.

        Args:
            prior_snapshot_df: Snapshot rows (only prior_year rows are used)
            current_films_df: Raw film records (only current_year rows are used)
            prior_year: Year of the snapshot being extended
            current_year: Year being produced

        Returns:
            DataFrame of snapshot rows for current_year
        """
        logger.info("🚀 ENTER: merge_year")

        validation_result = self.validator.validate_merge_inputs(
            prior_snapshot_df, current_films_df, prior_year, current_year)
        if not validation_result.is_valid:
            logger.error(f"Validation failed: {validation_result.errors}")
            raise ActorValidationError(f"Validation failed: {validation_result.errors}",
                                       validation_result.errors)
        for warning in validation_result.warnings:
            logger.warning(warning)

        year_column = self.config.year_column
        last_year_df = prior_snapshot_df.filter(col(year_column) == prior_year)
        this_year_df = self._collapse_current_year(
            current_films_df.filter(col(year_column) == current_year))

        join_condition = reduce(
            lambda a, b: a & b,
            [col(f"ty.{c}") == col(f"ly.{c}") for c in self.config.join_columns]
        )
        joined_df = this_year_df.alias("ty").join(last_year_df.alias("ly"), join_condition, "full_outer")

        is_active = coalesce(col("ty._has_current"), lit(False))

        # Arrays are rebuilt per generation; the prior row's array is never modified
        films = (when(~is_active, col("ly.films"))
                 .when(col("ly.films").isNull(), col("ty.year_films"))
                 .otherwise(concat(col("ly.films"), col("ty.year_films"))))

        quality_class = when(is_active, quality_class_expr(col("ty.rating"))).otherwise(col("ly.quality_class"))

        merged_df = joined_df.select(
            *[coalesce(col(f"ty.{c}"), col(f"ly.{c}")).alias(c) for c in CARRIED_COLUMNS],
            lit(current_year).alias(year_column),
            films.alias("films"),
            quality_class.alias("quality_class"),
            is_active.alias("is_active")
        )

        logger.info(f"Merged snapshot {prior_year} with film records of {current_year}")
        logger.info("🏁 EXIT: merge_year")
        return conform_to_schema(merged_df, ACTOR_SNAPSHOT_SCHEMA)

    def _collapse_current_year(self, films_df: DataFrame) -> DataFrame:
        """
        Reduce the year's film records to one row per actor.

        Films keep their arrival order; the last one supplies the
        carried film, votes and rating.

        Args:
            films_df: Film records of a single year

        Returns:
            DataFrame keyed by the join columns
        """
        ordered_df = add_source_ordinal(films_df, ORDINAL_COLUMN)

        film_entry = struct(
            col(ORDINAL_COLUMN),
            col("actor"),
            col("actorid"),
            col("film"),
            col("votes").cast("int").alias("votes"),
            col("rating").cast("double").alias("rating"),
            col("filmid")
        )

        grouped_df = ordered_df.groupBy(*self.config.join_columns).agg(
            sort_array(collect_list(film_entry)).alias("_entries"),
            avg(col("rating")).alias("_avg_rating"),
            spark_sum(col("votes")).alias("_sum_votes")
        )

        latest = element_at(col("_entries"), -1)
        year_films = transform(
            col("_entries"),
            lambda entry: struct(
                entry["film"].alias("film"),
                entry["votes"].alias("votes"),
                entry["rating"].alias("rating"),
                entry["filmid"].alias("filmid")
            )
        )

        if self.config.rating_aggregation == RatingAggregation.AVERAGE.value:
            votes, rating = col("_sum_votes"), col("_avg_rating")
        else:
            votes, rating = latest["votes"], latest["rating"]

        identity = [col(c) if c in self.config.join_columns else latest[c].alias(c)
                    for c in ("actor", "actorid")]

        return grouped_df.select(
            *identity,
            latest["film"].alias("film"),
            votes.cast("int").alias("votes"),
            rating.cast("double").alias("rating"),
            year_films.alias("year_films"),
            lit(True).alias("_has_current")
        )

    def process_year(self, current_year: int, prior_year: Optional[int] = None) -> ProcessingMetrics:
        """
        Merge one year into the snapshot table.

        Args:
            current_year: Year to produce
            prior_year: Snapshot year to extend, defaults to current_year - 1

        Returns:
            ProcessingMetrics: Processing metrics and status
        """
        logger.info("🚀 ENTER: process_year")
        start_time = time.time()
        prior_year = current_year - 1 if prior_year is None else prior_year

        try:
            target_table = self.config.target_table
            year_column = self.config.year_column

            self.table_manager.create_table_if_not_exists(target_table, ACTOR_SNAPSHOT_SCHEMA)

            latest_year = self.table_manager.max_value(target_table, year_column)
            if latest_year is not None and latest_year >= current_year:
                raise ActorMergeError(
                    f"{target_table} already holds year {latest_year}; "
                    f"year {current_year} can only be reprocessed by a full rebuild",
                    current_year=current_year
                )

            if latest_year is not None and prior_year != latest_year:
                raise ActorMergeError(
                    f"{target_table} ends at year {latest_year}; extending year {prior_year} "
                    f"would drop actors carried since {latest_year}, run a full rebuild instead",
                    current_year=current_year
                )

            prior_snapshot_df = self.table_manager.read_year(target_table, prior_year, year_column)
            current_films_df = self.table_manager.read_year(self.config.source_table, current_year, year_column)

            merged_df = self.merge_year(prior_snapshot_df, current_films_df, prior_year, current_year)
            merged_df.persist()

            metrics = ProcessingMetrics()
            metrics.records_read = current_films_df.count()
            metrics.active_records = merged_df.filter("is_active").count()
            metrics.inactive_records = merged_df.filter("NOT is_active").count()
            metrics.records_written = self.table_manager.append(
                target_table, merged_df, self.config.key_columns)
            merged_df.unpersist()

            if self.config.enable_optimization:
                self.table_manager.optimize_table(target_table, self.config.key_columns)

            metrics.processing_time_seconds = time.time() - start_time
            logger.info(f"Actor merge for {current_year} completed successfully. Metrics: {metrics.to_dict()}")
            logger.info("🏁 EXIT: process_year")
            return metrics

        except DimensionalModelingError:
            logger.info("🏁 EXIT: process_year (with error)")
            raise
        except Exception as e:
            logger.error(f"Actor merge failed: {str(e)}")
            logger.info("🏁 EXIT: process_year (with error)")
            raise ActorMergeError(f"Actor merge for {current_year} failed: {str(e)}",
                                  current_year=current_year) from e

    def rebuild(self, start_year: int, end_year: int) -> ProcessingMetrics:
        """
        Rebuild the snapshot table from scratch, one year at a time.

        Args:
            start_year: First year to load (seeded from an empty snapshot)
            end_year: Last year to load, inclusive

        Returns:
            ProcessingMetrics summed over all years
        """
        if start_year > end_year:
            raise ConfigurationError(f"start_year {start_year} is after end_year {end_year}", "start_year")

        logger.info(f"Rebuilding {self.config.target_table} for years {start_year}-{end_year}")
        start_time = time.time()

        self.table_manager.create_table_if_not_exists(self.config.target_table, ACTOR_SNAPSHOT_SCHEMA)
        self.table_manager.truncate(self.config.target_table)

        totals = ProcessingMetrics()
        for year in range(start_year, end_year + 1):
            year_metrics = self.process_year(year)
            totals.records_read += year_metrics.records_read
            totals.records_written += year_metrics.records_written
            totals.active_records += year_metrics.active_records
            totals.inactive_records += year_metrics.inactive_records

        totals.processing_time_seconds = time.time() - start_time
        logger.info(f"Rebuild completed. Metrics: {totals.to_dict()}")
        return totals

    def get_table_info(self) -> dict:
        """
        Get information about the target table.

        Returns:
            Dictionary with table information
        """
        return self.table_manager.get_table_info(self.config.target_table)
