"""
Custom exceptions for the climate analytics engine.

These exceptions provide clear error semantics across the system.
Engine functions never recover internally; callers decide whether to skip
a city or abort the run.
"""


class ClimateAnalyticsError(Exception):
    """Base exception for climate analytics failures."""
    pass


class InsufficientDataError(ClimateAnalyticsError):
    """Raised when a regression has fewer than 3 points or no spread in x."""
    pass


class EmptySeriesError(ClimateAnalyticsError):
    """
    Raised when a whole-city analysis receives no records at all.

    Baseline and aggregation functions never raise this: they return a
    documented zero/empty value instead, so callers must check emptiness.
    """
    pass


class DataValidationError(ClimateAnalyticsError):
    """Raised when input data fails validation or ingestion."""
    pass

