"""
Utility functions for dimensional modeling library.
"""

from typing import List
from pyspark.sql import DataFrame
from pyspark.sql.types import StructType
from pyspark.sql.functions import col, count, monotonically_increasing_id
import logging

logger = logging.getLogger(__name__)


def validate_dataframe_schema(df: DataFrame, required_columns: List[str]) -> bool:
    """
    Validate that DataFrame contains all required columns.

    Args:
        df: Input DataFrame
        required_columns: List of required column names

    Returns:
        True if all required columns exist, False otherwise
    """
    existing_columns = set(df.columns)
    missing_columns = set(required_columns) - existing_columns

    if missing_columns:
        logger.error(f"Missing required columns: {missing_columns}")
        return False

    return True


def missing_columns(df: DataFrame, required_columns: List[str]) -> List[str]:
    """Return required columns absent from df, in the order they were requested."""
    existing_columns = set(df.columns)
    return [name for name in required_columns if name not in existing_columns]


def count_nulls(df: DataFrame, column_name: str) -> int:
    """Count null values in a single column."""
    return df.filter(col(column_name).isNull()).count()


def add_source_ordinal(df: DataFrame, ordinal_column: str = "_source_ordinal") -> DataFrame:
    """
    Tag each row with a stable, increasing ordinal reflecting input order.

    Args:
        df: Input DataFrame
        ordinal_column: Name of the ordinal column to add

    Returns:
        DataFrame with ordinal column added
    """
    return df.withColumn(ordinal_column, monotonically_increasing_id())


def find_duplicate_keys(df: DataFrame, key_columns: List[str], limit: int = 10) -> List[tuple]:
    """
    Find key values occurring more than once.

    Args:
        df: Input DataFrame
        key_columns: Columns forming the key
        limit: Maximum number of duplicate keys to return

    Returns:
        List of duplicated key tuples (at most ``limit``)
    """
    duplicates = (df
                  .groupBy(*key_columns)
                  .agg(count("*").alias("_key_count"))
                  .filter(col("_key_count") > 1)
                  .select(*key_columns)
                  .limit(limit)
                  .collect())

    return [tuple(row) for row in duplicates]


def log_dataframe_info(df: DataFrame, name: str) -> None:
    """
    Log DataFrame information for debugging.

    Args:
        df: Input DataFrame
        name: Name for logging
    """
    logger.info(f"{name} - Rows: {df.count()}, Columns: {len(df.columns)}")
    logger.debug(f"{name} - Schema: {df.schema}")


def conform_to_schema(df: DataFrame, schema: StructType) -> DataFrame:
    """
    Select and cast df columns so they line up with a target schema.

    Args:
        df: Input DataFrame
        schema: Target schema

    Returns:
        DataFrame with exactly the schema's columns, in schema order
    """
    return df.select(*[col(f.name).cast(f.dataType).alias(f.name) for f in schema.fields])
