"""
Deduplicated game details fact table.
"""

from pyspark.sql import DataFrame, SparkSession
from pyspark.sql.functions import col
import logging
import time

from ..common.config import GameFactConfig, ProcessingMetrics
from ..common.exceptions import DimensionalModelingError, GameFactError
from ..common.schemas import GAME_STAT_COLUMNS, game_fact_schema
from ..common.utils import add_source_ordinal, conform_to_schema, missing_columns
from ..storage.table_manager import TableManager
from .deduplicator import GameDetailDeduplicator
from .parsers import minutes_expr, status_flag_expr

logger = logging.getLogger(__name__)

DETAIL_COLUMNS = ["game_id", "team_id", "player_id", "player_name", "start_position",
                  "comment", "min"] + list(GAME_STAT_COLUMNS)
GAME_COLUMNS = ["game_id", "game_date_est", "season", "home_team_id"]


class GameFactBuilder:
    """Builds the game details fact table from raw details and game headers."""

    def __init__(self, config: GameFactConfig, spark: SparkSession):
        """
        Initialize GameFactBuilder with configuration and Spark session.

        Args:
            config: Game fact configuration
            spark: Spark session
        """
        self.config = config
        self.spark = spark

        self.table_manager = TableManager(spark, config.table_format)
        self.deduplicator = GameDetailDeduplicator(config)

        logger.info(f"Initialized GameFactBuilder for table: {config.target_table}")

    def build_facts(self, game_details_df: DataFrame, games_df: DataFrame) -> DataFrame:
        """
        Join, deduplicate and reshape raw game details into fact rows.

        Args:
            game_details_df: Raw per-player per-game rows
            games_df: Game headers

        Returns:
            DataFrame with one fact row per (game, team, player)
        """
        logger.info("🚀 ENTER: build_facts")

        self._validate_inputs(game_details_df, games_df)

        # Ordinal is taken before the join so it reflects raw input order
        details_df = add_source_ordinal(game_details_df, self.config.ordinal_column)
        headers_df = games_df.select(*GAME_COLUMNS)

        joined_df = details_df.join(headers_df, "game_id", "inner")
        deduplicated_df = self.deduplicator.keep_earliest(joined_df)

        fact_df = self._reshape(deduplicated_df)

        logger.info("🏁 EXIT: build_facts")
        return fact_df

    def _reshape(self, df: DataFrame) -> DataFrame:
        """
        Rename flat columns into dimension and measure columns.

        Args:
            df: Deduplicated joined rows

        Returns:
            DataFrame conforming to the fact schema
        """
        dimensions = [
            col("game_date_est").alias("dim_game_date"),
            col("season").alias("dim_season"),
            col("team_id").alias("dim_team_id"),
            col("player_id").alias("dim_player_id"),
            col("player_name").alias("dim_player_name"),
            col("start_position").alias("dim_start_position"),
            (col("team_id") == col("home_team_id")).alias("dim_is_playing_at_home")
        ]
        if self.config.include_game_id:
            dimensions.insert(0, col("game_id").alias("dim_game_id"))

        flags = [status_flag_expr("comment", token).alias(flag_column)
                 for flag_column, token in self.config.status_tokens.items()]

        measures = [minutes_expr("min").alias("m_minutes")]
        measures.extend(col(source).alias(target) for source, target in GAME_STAT_COLUMNS.items())

        reshaped_df = df.select(*dimensions, *flags, *measures)
        return conform_to_schema(reshaped_df, game_fact_schema(self.config.include_game_id))

    def _validate_inputs(self, game_details_df: DataFrame, games_df: DataFrame) -> None:
        """Validate that both inputs carry the columns the build reads."""
        errors = []

        missing_details = missing_columns(game_details_df, DETAIL_COLUMNS)
        if missing_details:
            errors.append(f"Missing required columns in game details: {missing_details}")

        missing_games = missing_columns(games_df, GAME_COLUMNS)
        if missing_games:
            errors.append(f"Missing required columns in games: {missing_games}")

        if errors:
            logger.error(f"Validation failed: {errors}")
            raise GameFactError(f"Validation failed: {errors}", "validate")

    def process(self) -> ProcessingMetrics:
        """
        Rebuild the fact table from the configured source tables.

        Returns:
            ProcessingMetrics: Processing metrics and status
        """
        logger.info("🚀 ENTER: process")
        start_time = time.time()

        try:
            game_details_df = self.table_manager.read_table(self.config.game_details_table)
            games_df = self.table_manager.read_table(self.config.games_table)

            fact_df = self.build_facts(game_details_df, games_df)
            fact_df.persist()

            metrics = ProcessingMetrics()
            metrics.records_read = game_details_df.count()

            matched_count = game_details_df.join(games_df.select("game_id"), "game_id", "left_semi").count()
            metrics.records_dropped = metrics.records_read - matched_count
            if metrics.records_dropped > 0:
                logger.warning(f"Dropped {metrics.records_dropped} game detail rows without a matching game")

            metrics.records_written = self.table_manager.overwrite(
                self.config.target_table, fact_df, self.config.fact_key_columns)
            metrics.duplicates_removed = matched_count - metrics.records_written
            if metrics.duplicates_removed > 0:
                logger.warning(f"Removed {metrics.duplicates_removed} duplicate game detail rows")
            fact_df.unpersist()

            if self.config.enable_optimization:
                self.table_manager.optimize_table(self.config.target_table, self.config.fact_key_columns)

            metrics.processing_time_seconds = time.time() - start_time
            logger.info(f"Game fact build completed successfully. Metrics: {metrics.to_dict()}")
            logger.info("🏁 EXIT: process")
            return metrics

        except DimensionalModelingError:
            logger.info("🏁 EXIT: process (with error)")
            raise
        except Exception as e:
            logger.error(f"Game fact build failed: {str(e)}")
            logger.info("🏁 EXIT: process (with error)")
            raise GameFactError(f"Game fact build failed: {str(e)}", "process") from e
