"""
Domain exceptions for analytics app.

This module defines domain-specific exceptions that are raised by the
analytics services layer. These exceptions represent invalid queries
against the aggregation engine, separate from HTTP concerns.

Exception Hierarchy:
    AnalyticsServiceError (base)
    ├── InvalidWindowError
    ├── InvalidMetricError
    ├── InvalidRelationError
    └── InvalidLimitError

    DataUnavailableError (HTTP 503, raised by views only)

Usage:
    from apps.analytics.exceptions import InvalidWindowError

    if end <= start:
        raise InvalidWindowError("Window end must be after its start")
"""
from rest_framework.exceptions import APIException


class AnalyticsServiceError(Exception):
    """
    Base exception for all analytics service errors.

    All domain-specific exceptions in the analytics app inherit from this
    class, making it easy to catch all analytics errors in views:

        try:
            data = compute(Metric.sum('amount'), queryset, window)
        except AnalyticsServiceError as e:
            return Response({'error': str(e)}, status=400)
    """

    pass


class InvalidWindowError(AnalyticsServiceError):
    """
    Raised when a time window has impossible bounds.

    A half-open window needs ``end > start``; a closed window needs
    ``end >= start``. This is a configuration error and is never turned
    into an empty (zero) aggregate.

    Example:
        raise InvalidWindowError("Window end must be after its start")
    """

    pass


class InvalidMetricError(AnalyticsServiceError):
    """
    Raised when a metric is unknown or targets a field that cannot be summed.

    Example:
        raise InvalidMetricError("Cannot sum non-numeric field 'name'")
    """

    pass


class InvalidRelationError(AnalyticsServiceError):
    """
    Raised when a rollup names something other than a to-many relation.

    Example:
        raise InvalidRelationError("'stock' is not a related collection of Product")
    """

    pass


class InvalidLimitError(AnalyticsServiceError):
    """
    Raised when a leaderboard is asked for fewer than one entry.

    Example:
        raise InvalidLimitError("Limit must be at least 1, got 0")
    """

    pass


class DataUnavailableError(APIException):
    """The entity store could not answer an analytics query."""
    status_code = 503
    default_detail = 'Analytics data is temporarily unavailable.'
    default_code = 'data_unavailable'
