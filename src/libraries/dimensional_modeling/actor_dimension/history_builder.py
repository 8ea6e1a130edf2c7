"""
Year-dated history records derived from actor snapshots.
"""

from pyspark.sql import DataFrame, SparkSession
from pyspark.sql.functions import col, expr
import logging
import time

from ..common.config import ActorHistoryConfig, ProcessingMetrics
from ..common.exceptions import DimensionalModelingError, HistoryBuildError
from ..common.schemas import ACTOR_HISTORY_SCHEMA
from ..common.utils import validate_dataframe_schema, conform_to_schema, log_dataframe_info
from ..storage.table_manager import TableManager

logger = logging.getLogger(__name__)

HISTORY_SOURCE_COLUMNS = ["actorid", "actor", "quality_class", "is_active"]


class ActorHistoryBuilder:
    """Derives one history record per actor snapshot row."""

    def __init__(self, config: ActorHistoryConfig, spark: SparkSession):
        """
        Initialize ActorHistoryBuilder with configuration and Spark session.

        Args:
            config: Actor history configuration
            spark: Spark session
        """
        self.config = config
        self.spark = spark
        self.table_manager = TableManager(spark, config.table_format)

        logger.info(f"Initialized ActorHistoryBuilder for table: {config.target_table}")

    def build_history(self, snapshot_df: DataFrame) -> DataFrame:
        """
        Date every snapshot row with the first and last day of its year.

        Consecutive years with identical state stay separate records.

        Args:
            snapshot_df: Actor snapshot rows

        Returns:
            DataFrame of history records
        """
        year_column = self.config.year_column
        if not validate_dataframe_schema(snapshot_df, HISTORY_SOURCE_COLUMNS + [year_column]):
            raise HistoryBuildError(f"Snapshot is missing columns required for history: "
                                    f"{HISTORY_SOURCE_COLUMNS + [year_column]}")

        history_df = snapshot_df.select(
            *[col(c) for c in HISTORY_SOURCE_COLUMNS],
            expr(f"make_date({year_column}, 1, 1)").alias("start_date"),
            expr(f"make_date({year_column}, 12, 31)").alias("end_date")
        )

        return conform_to_schema(history_df, ACTOR_HISTORY_SCHEMA)

    def rebuild_history(self) -> ProcessingMetrics:
        """
        Replace the history table with records derived from the snapshot table.

        Returns:
            ProcessingMetrics: Processing metrics and status
        """
        logger.info("🚀 ENTER: rebuild_history")
        start_time = time.time()

        try:
            snapshot_df = self.table_manager.read_table(self.config.source_table)
            log_dataframe_info(snapshot_df, self.config.source_table)

            history_df = self.build_history(snapshot_df)

            metrics = ProcessingMetrics()
            metrics.records_read = snapshot_df.count()
            metrics.records_written = self.table_manager.overwrite(self.config.target_table, history_df)
            metrics.processing_time_seconds = time.time() - start_time

            logger.info(f"History rebuild completed successfully. Metrics: {metrics.to_dict()}")
            logger.info("🏁 EXIT: rebuild_history")
            return metrics

        except DimensionalModelingError:
            logger.info("🏁 EXIT: rebuild_history (with error)")
            raise
        except Exception as e:
            logger.error(f"History rebuild failed: {str(e)}")
            logger.info("🏁 EXIT: rebuild_history (with error)")
            raise HistoryBuildError(f"History rebuild failed: {str(e)}") from e
