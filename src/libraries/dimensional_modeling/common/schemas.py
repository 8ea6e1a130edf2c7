"""
Spark schemas for the raw inputs and the modeled tables.
"""

from pyspark.sql.types import (
    StructType, StructField, StringType, IntegerType, DoubleType,
    BooleanType, DateType, ArrayType
)


FILM_STAT_SCHEMA = StructType([
    StructField("film", StringType(), True),
    StructField("votes", IntegerType(), True),
    StructField("rating", DoubleType(), True),
    StructField("filmid", StringType(), True)
])

FILMS_ARRAY_TYPE = ArrayType(FILM_STAT_SCHEMA, True)

ACTOR_FILMS_SCHEMA = StructType([
    StructField("actor", StringType(), True),
    StructField("actorid", StringType(), True),
    StructField("film", StringType(), True),
    StructField("year", IntegerType(), True),
    StructField("votes", IntegerType(), True),
    StructField("rating", DoubleType(), True),
    StructField("filmid", StringType(), True)
])

ACTOR_SNAPSHOT_SCHEMA = StructType([
    StructField("actor", StringType(), True),
    StructField("actorid", StringType(), True),
    StructField("film", StringType(), True),
    StructField("year", IntegerType(), True),
    StructField("votes", IntegerType(), True),
    StructField("rating", DoubleType(), True),
    StructField("films", FILMS_ARRAY_TYPE, True),
    StructField("quality_class", StringType(), True),
    StructField("is_active", BooleanType(), True)
])

ACTOR_HISTORY_SCHEMA = StructType([
    StructField("actorid", StringType(), True),
    StructField("actor", StringType(), True),
    StructField("quality_class", StringType(), True),
    StructField("is_active", BooleanType(), True),
    StructField("start_date", DateType(), True),
    StructField("end_date", DateType(), True)
])

# Counting statistics carried from the raw rows into the fact measures
GAME_STAT_COLUMNS = {
    "fgm": "m_fgm",
    "fga": "m_fga",
    "fg3m": "m_fg3m",
    "fg3a": "m_fg3a",
    "ftm": "m_ftm",
    "fta": "m_fta",
    "oreb": "m_oreb",
    "dreb": "m_dreb",
    "reb": "m_reb",
    "ast": "m_ast",
    "stl": "m_stl",
    "blk": "m_blk",
    "to": "m_turnovers",
    "pf": "m_pf",
    "pts": "m_pts",
    "plus_minus": "m_plus_minus"
}

GAME_DETAILS_SCHEMA = StructType([
    StructField("game_id", IntegerType(), True),
    StructField("team_id", IntegerType(), True),
    StructField("player_id", IntegerType(), True),
    StructField("player_name", StringType(), True),
    StructField("start_position", StringType(), True),
    StructField("comment", StringType(), True),
    StructField("min", StringType(), True)
] + [StructField(name, IntegerType(), True) for name in GAME_STAT_COLUMNS])

GAMES_SCHEMA = StructType([
    StructField("game_id", IntegerType(), True),
    StructField("game_date_est", DateType(), True),
    StructField("season", IntegerType(), True),
    StructField("home_team_id", IntegerType(), True),
    StructField("visitor_team_id", IntegerType(), True)
])

GAME_FACT_SCHEMA = StructType([
    StructField("dim_game_date", DateType(), True),
    StructField("dim_season", IntegerType(), True),
    StructField("dim_team_id", IntegerType(), True),
    StructField("dim_player_id", IntegerType(), True),
    StructField("dim_player_name", StringType(), True),
    StructField("dim_start_position", StringType(), True),
    StructField("dim_is_playing_at_home", BooleanType(), True),
    StructField("dim_did_not_play", BooleanType(), True),
    StructField("dim_did_not_dress", BooleanType(), True),
    StructField("dim_not_with_team", BooleanType(), True),
    StructField("m_minutes", DoubleType(), True)
] + [StructField(name, IntegerType(), True) for name in GAME_STAT_COLUMNS.values()])


def game_fact_schema(include_game_id: bool = False) -> StructType:
    """
    Get the fact table schema, optionally carrying the game identifier.

    Args:
        include_game_id: Whether to prepend a dim_game_id column

    Returns:
        StructType for the fact table
    """
    if not include_game_id:
        return GAME_FACT_SCHEMA
    return StructType(
        [StructField("dim_game_id", IntegerType(), True)] + GAME_FACT_SCHEMA.fields
    )
