"""Number formatting for dashboard cards."""

from decimal import Decimal, ROUND_HALF_UP

from apps.analytics.conf import analytics_setting
from .comparison import as_decimal


def _round(value, places):
    return as_decimal(value).quantize(Decimal(places), rounding=ROUND_HALF_UP)


def format_currency(amount, symbol=None):
    """'₱1,234.50' - symbol prefix, grouped, two decimals."""
    if symbol is None:
        symbol = analytics_setting('CURRENCY_SYMBOL')
    return f"{symbol}{_round(amount, '0.01'):,.2f}"


def format_points(points):
    """'12,345' - grouped whole number."""
    return f"{int(_round(points, '1')):,}"


def round_percent(change):
    """
    Round a percent change to the one decimal shown on cards.

    A change that rounds to zero becomes ``Decimal('0.0')`` (never
    ``-0.0``), so its sign, trend and color agree with what is displayed.
    """
    rounded = _round(change, '0.1')
    return abs(rounded) if rounded == 0 else rounded


def format_percent(change):
    """
    Percent with one decimal, '+' only for strictly positive values.

    Example:
        >>> format_percent(Decimal('20'))
        '+20.0%'
        >>> format_percent(Decimal('-20'))
        '-20.0%'
        >>> format_percent(Decimal('-0.01'))
        '0.0%'
    """
    rounded = round_percent(change)
    sign = '+' if rounded > 0 else ''
    return f"{sign}{rounded:,.1f}%"
