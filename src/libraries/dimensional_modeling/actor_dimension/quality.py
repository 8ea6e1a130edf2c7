"""
Quality classification of actors by rating.
"""

from typing import Optional, Union
from pyspark.sql import Column
from pyspark.sql.functions import col, when, lit

from ..common.config import QualityClass

# Lower bounds, exclusive, checked from the top tier down
QUALITY_THRESHOLDS = (
    (8.0, QualityClass.STAR),
    (7.0, QualityClass.GOOD),
    (6.0, QualityClass.AVERAGE),
)


def classify_rating(rating: Optional[float]) -> QualityClass:
    """
    Classify a rating into a quality tier.

    Args:
        rating: Rating, typically 0-10; None classifies as bad

    Returns:
        QualityClass for the rating
    """
    if rating is None:
        return QualityClass.BAD

    for threshold, quality_class in QUALITY_THRESHOLDS:
        if rating > threshold:
            return quality_class

    return QualityClass.BAD


def quality_class_expr(rating: Union[str, Column]) -> Column:
    """
    Build the Spark expression classifying a rating column.

    Args:
        rating: Rating column or column name

    Returns:
        Column evaluating to the quality class value
    """
    rating_col = col(rating) if isinstance(rating, str) else rating

    (threshold, quality_class), *lower_tiers = QUALITY_THRESHOLDS
    expr = when(rating_col > threshold, lit(quality_class.value))
    for threshold, quality_class in lower_tiers:
        expr = expr.when(rating_col > threshold, lit(quality_class.value))

    return expr.otherwise(lit(QualityClass.BAD.value))
