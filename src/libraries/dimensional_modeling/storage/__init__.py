"""
Table storage for the modeled datasets.
"""

from .table_manager import TableManager

__all__ = [
    "TableManager"
]
