"""Analytics settings with defaults, overridable through ``settings.ANALYTICS``."""

from django.conf import settings


DEFAULTS = {
    'CURRENCY_SYMBOL': '₱',
    'LOW_STOCK_THRESHOLD': 10,
    'TOP_MERCHANTS_LIMIT': 3,
    'CUSTOMER_ROLE': 'customer',
    'COMPARISON_PHRASE': 'from last month',
}


def analytics_setting(name):
    """Read ``name`` from ``settings.ANALYTICS``, falling back to the default."""
    if name not in DEFAULTS:
        raise KeyError(f"Unknown analytics setting: {name}")
    return getattr(settings, 'ANALYTICS', {}).get(name, DEFAULTS[name])
