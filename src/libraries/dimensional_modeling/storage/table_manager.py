"""
Table lifecycle management for the modeled tables.
"""

from typing import Dict, Any, List, Optional
from pyspark.sql import DataFrame, SparkSession
from pyspark.sql.functions import col, max as spark_max
from pyspark.sql.types import StructType
from delta.tables import DeltaTable
import logging

from ..common.config import TableFormat
from ..common.exceptions import KeyConstraintError
from ..common.utils import find_duplicate_keys

logger = logging.getLogger(__name__)


class TableManager:
    """Reads, creates and writes the tables the pipelines operate on."""

    def __init__(self, spark: SparkSession, table_format: str = "delta"):
        """
        Initialize TableManager with Spark session and storage format.

        Args:
            spark: Spark session
            table_format: Format used when creating or writing tables
        """
        self.spark = spark
        self.table_format = TableFormat(table_format).value

    @property
    def is_delta(self) -> bool:
        return self.table_format == TableFormat.DELTA.value

    def table_exists(self, table: str) -> bool:
        """Check whether a table is registered in the catalog."""
        return self.spark.catalog.tableExists(table)

    def create_table_if_not_exists(self, table: str, schema: StructType,
                                   partition_columns: Optional[List[str]] = None) -> None:
        """
        Create an empty table with the given schema if it doesn't exist.

        Args:
            table: Fully qualified table name
            schema: Table schema
            partition_columns: Optional partition columns
        """
        if self.table_exists(table):
            logger.info(f"Target table already exists: {table}")
            return

        writer = self.spark.createDataFrame([], schema).write.format(self.table_format)
        if partition_columns:
            writer = writer.partitionBy(*partition_columns)
        writer.saveAsTable(table)

        logger.info(f"Created {self.table_format} table: {table}")

    def read_table(self, table: str) -> DataFrame:
        """Read a whole table."""
        return self.spark.table(table)

    def read_year(self, table: str, year: int, year_column: str = "year") -> DataFrame:
        """
        Read the slice of a table belonging to one year.

        Args:
            table: Table name
            year: Year to read
            year_column: Column holding the year

        Returns:
            DataFrame filtered to the year
        """
        year_df = self.spark.table(table).filter(col(year_column) == year)
        logger.info(f"Read year {year} from {table}")
        return year_df

    def max_value(self, table: str, column_name: str):
        """Return the maximum value of a column, or None for an empty table."""
        return self.spark.table(table).agg(spark_max(col(column_name)).alias("max_value")).collect()[0]["max_value"]

    def append(self, table: str, df: DataFrame, key_columns: List[str]) -> int:
        """
        Append rows, failing the whole batch if any key would be duplicated.

        Args:
            table: Target table
            df: Rows to append
            key_columns: Columns forming the table key

        Returns:
            Number of rows appended
        """
        logger.info(f"🚀 ENTER: append to {table}")

        self._check_batch_keys(table, df, key_columns)

        existing_keys = self.spark.table(table).select(*key_columns)
        colliding = (df.select(*key_columns)
                     .join(existing_keys, key_columns, "inner")
                     .limit(10)
                     .collect())
        if colliding:
            colliding_keys = [tuple(row) for row in colliding]
            raise KeyConstraintError(
                f"Rows for keys {colliding_keys} already exist in {table}",
                table=table,
                duplicate_keys=colliding_keys
            )

        record_count = df.count()
        df.write.format(self.table_format).mode("append").saveAsTable(table)

        logger.info(f"✅ Appended {record_count} records to {table}")
        logger.info(f"🏁 EXIT: append to {table}")
        return record_count

    def overwrite(self, table: str, df: DataFrame,
                  key_columns: Optional[List[str]] = None) -> int:
        """
        Replace a table's contents with df.

        Args:
            table: Target table
            df: Replacement rows
            key_columns: Optional key to enforce within df

        Returns:
            Number of rows written
        """
        logger.info(f"🚀 ENTER: overwrite {table}")

        if key_columns:
            self._check_batch_keys(table, df, key_columns)

        record_count = df.count()
        (df.write
         .format(self.table_format)
         .mode("overwrite")
         .option("overwriteSchema", "true")
         .saveAsTable(table))

        logger.info(f"✅ Wrote {record_count} records to {table}")
        logger.info(f"🏁 EXIT: overwrite {table}")
        return record_count

    def truncate(self, table: str) -> None:
        """Remove every row from a table, keeping its definition."""
        if self.is_delta:
            DeltaTable.forName(self.spark, table).delete()
        else:
            self.spark.sql(f"TRUNCATE TABLE {table}")
        logger.info(f"Truncated table {table}")

    def optimize_table(self, table: str, zorder_columns: List[str]) -> None:
        """
        Optimize a Delta table for better performance.

        Args:
            table: Table to optimize
            zorder_columns: Columns to Z-order by
        """
        if not self.is_delta:
            logger.info(f"Skipping optimize for {self.table_format} table {table}")
            return

        try:
            self.spark.sql(f"""
                OPTIMIZE {table}
                ZORDER BY ({', '.join(zorder_columns)})
            """)

            logger.info(f"Optimized table {table} with ZORDER")

        except Exception as e:
            logger.warning(f"Failed to optimize table: {str(e)}")

    def get_table_info(self, table: str) -> Dict[str, Any]:
        """
        Get information about a table.

        Returns:
            Dictionary with table information
        """
        try:
            record_count = self.spark.table(table).count()

            return {
                "table_name": table,
                "table_format": self.table_format,
                "total_records": record_count
            }

        except Exception as e:
            logger.error(f"Failed to get table info: {str(e)}")
            return {"error": str(e)}

    def _check_batch_keys(self, table: str, df: DataFrame, key_columns: List[str]) -> None:
        """Raise KeyConstraintError when df itself repeats a key."""
        duplicate_keys = find_duplicate_keys(df, key_columns)
        if duplicate_keys:
            logger.error(f"Batch for {table} repeats keys {key_columns}: {duplicate_keys}")
            raise KeyConstraintError(
                f"Duplicate {key_columns} keys in batch for {table}: {duplicate_keys}",
                table=table,
                duplicate_keys=duplicate_keys
            )
