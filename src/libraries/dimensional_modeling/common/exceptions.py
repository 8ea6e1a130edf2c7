"""
Custom exceptions for dimensional modeling library.
"""


class DimensionalModelingError(Exception):
    """Base exception for dimensional modeling library."""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ActorValidationError(DimensionalModelingError):
    """Exception raised when actor input validation fails."""

    def __init__(self, message: str, validation_errors: list = None):
        super().__init__(message, "ACTOR_VALIDATION_ERROR")
        self.validation_errors = validation_errors or []


class ActorMergeError(DimensionalModelingError):
    """Exception raised when the yearly actor merge fails."""

    def __init__(self, message: str, current_year: int = None):
        super().__init__(message, "ACTOR_MERGE_ERROR")
        self.current_year = current_year


class HistoryBuildError(DimensionalModelingError):
    """Exception raised when the actor history rebuild fails."""

    def __init__(self, message: str):
        super().__init__(message, "HISTORY_BUILD_ERROR")


class GameFactError(DimensionalModelingError):
    """Exception raised when building the game fact table fails."""

    def __init__(self, message: str, processing_step: str = None):
        super().__init__(message, "GAME_FACT_ERROR")
        self.processing_step = processing_step


class KeyConstraintError(DimensionalModelingError):
    """Exception raised when a write would duplicate a table key."""

    def __init__(self, message: str, table: str = None, duplicate_keys: list = None):
        super().__init__(message, "KEY_CONSTRAINT_ERROR")
        self.table = table
        self.duplicate_keys = duplicate_keys or []


class ConfigurationError(DimensionalModelingError):
    """Exception raised when configuration is invalid."""

    def __init__(self, message: str, config_field: str = None):
        super().__init__(message, "CONFIGURATION_ERROR")
        self.config_field = config_field
