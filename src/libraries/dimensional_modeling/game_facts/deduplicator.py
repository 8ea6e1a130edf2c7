"""
Deduplication of raw game detail rows.
"""

from pyspark.sql import DataFrame
from pyspark.sql.functions import col, row_number
from pyspark.sql.window import Window
import logging

from ..common.config import GameFactConfig
from ..common.exceptions import GameFactError
from ..common.utils import missing_columns

logger = logging.getLogger(__name__)


class GameDetailDeduplicator:
    """Keeps the earliest row per (game, team, player)."""

    def __init__(self, config: GameFactConfig):
        """
        Initialize GameDetailDeduplicator with configuration.

        Args:
            config: Game fact configuration
        """
        self.config = config

    def keep_earliest(self, df: DataFrame) -> DataFrame:
        """
        Keep the earliest record per partition key.

        Rows are ranked by the order column, then by source ordinal so
        rows sharing a date resolve to the one that arrived first.

        Args:
            df: Joined detail rows carrying the order and ordinal columns

        Returns:
            DataFrame with one row per partition key
        """
        required_columns = self.config.partition_columns + [self.config.order_column,
                                                            self.config.ordinal_column]
        missing = missing_columns(df, required_columns)
        if missing:
            raise GameFactError(f"Missing columns for deduplication: {missing}", "deduplicate")

        logger.info("Applying 'earliest' deduplication strategy")

        window_spec = Window.partitionBy(*self.config.partition_columns).orderBy(
            col(self.config.order_column).asc_nulls_last(),
            col(self.config.ordinal_column).asc()
        )

        return (df
                .withColumn("row_num", row_number().over(window_spec))
                .filter(col("row_num") == 1)
                .drop("row_num"))
