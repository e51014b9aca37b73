"""
Core module: Configuration, logging, and exception handling.
"""

from .config import Config, config
from .exceptions import (
    ClimateAnalyticsError,
    DataValidationError,
    EmptySeriesError,
    InsufficientDataError,
)

__all__ = [
    "Config",
    "config",
    "ClimateAnalyticsError",
    "InsufficientDataError",
    "EmptySeriesError",
    "DataValidationError",
]
