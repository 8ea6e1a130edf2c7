"""
Parsing of free-text game detail fields into typed values.
"""

import re
from typing import Dict, Optional, Union
from pyspark.sql import Column
from pyspark.sql.functions import col, when, lit, regexp_extract, instr, coalesce

# Whole minutes, a colon, then seconds; anything else counts as zero minutes
MINUTES_PATTERN = r"^(\d+):(\d+)"
_MINUTES_RE = re.compile(MINUTES_PATTERN, re.ASCII)

STATUS_TOKENS = {
    "did_not_play": "DNP",
    "did_not_dress": "DND",
    "not_with_team": "NWT"
}


def _as_column(value: Union[str, Column]) -> Column:
    return col(value) if isinstance(value, str) else value


def minutes_expr(minutes: Union[str, Column]) -> Column:
    """
    Build the Spark expression converting "MM:SS" into fractional minutes.

    Null, colon-less or otherwise unparseable values become 0.0.

    Args:
        minutes: Minutes column or column name

    Returns:
        Double column of minutes played
    """
    minutes_col = _as_column(minutes)

    whole_minutes = regexp_extract(minutes_col, MINUTES_PATTERN, 1).cast("double")
    seconds = regexp_extract(minutes_col, MINUTES_PATTERN, 2).cast("double")

    return (when(minutes_col.rlike(MINUTES_PATTERN), whole_minutes + seconds / 60.0)
            .otherwise(lit(0.0)))


def parse_minutes(minutes: Optional[str]) -> float:
    """
    Convert "MM:SS" into fractional minutes.

    Args:
        minutes: Raw minutes text

    Returns:
        Minutes played, 0.0 when missing or malformed
    """
    if minutes is None:
        return 0.0

    match = _MINUTES_RE.match(minutes)
    if not match:
        return 0.0

    return int(match.group(1)) + int(match.group(2)) / 60.0


def status_flag_expr(comment: Union[str, Column], token: str) -> Column:
    """
    Build the Spark expression testing a comment for a status token.

    Args:
        comment: Comment column or column name
        token: Case-sensitive token to look for anywhere in the comment

    Returns:
        Boolean column, false for null comments
    """
    return coalesce(instr(_as_column(comment), token) > 0, lit(False))


def parse_status_flags(comment: Optional[str],
                       tokens: Optional[Dict[str, str]] = None) -> Dict[str, bool]:
    """
    Extract status flags from a comment.

    Args:
        comment: Free-text comment, may be None
        tokens: Mapping of flag name to token, defaults to STATUS_TOKENS

    Returns:
        Mapping of flag name to whether its token occurs in the comment
    """
    tokens = tokens or STATUS_TOKENS
    text = comment or ""
    return {name: token in text for name, token in tokens.items()}
