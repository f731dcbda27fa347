"""Period-over-period comparison and the trend presentation policy."""

from decimal import Decimal


TREND_UP_ICON = 'heroicon-m-arrow-trending-up'
TREND_DOWN_ICON = 'heroicon-m-arrow-trending-down'

COLOR_SUCCESS = 'success'
COLOR_DANGER = 'danger'
COLOR_INFO = 'info'
COLOR_WARNING = 'warning'


def as_decimal(value):
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def percent_change(current, previous):
    """
    Signed percentage change from ``previous`` to ``current``.

    A zero baseline yields 0 rather than an undefined or infinite change,
    so a first month of activity reads as flat. Results are not clamped.

    Example:
        >>> percent_change(150, 100)
        Decimal('50')
        >>> percent_change(100, 0)
        Decimal('0')
    """
    current = as_decimal(current)
    previous = as_decimal(previous)
    if previous == 0:
        return Decimal('0')
    return (current - previous) * 100 / previous


def trend_icon(change):
    # Zero counts as non-negative
    return TREND_UP_ICON if change >= 0 else TREND_DOWN_ICON


def trend_color(change):
    return COLOR_SUCCESS if change >= 0 else COLOR_DANGER
