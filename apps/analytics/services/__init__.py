"""
Analytics services - aggregation and rollup engine.

This package contains the read-only computations behind the back office
dashboard:
- Time windows (today, this month, last month, custom ranges)
- Count/sum metrics over a window
- Period-over-period comparison
- Leaderboards (top merchants)
- Per-parent relation counts and listing predicates
- The transaction statistics report
"""

from .windows import (
    Window,
    today,
    this_period,
    previous_period,
    for_month,
    between_dates,
)

from .metrics import (
    Metric,
    compute,
    compute_many,
)

from .comparison import (
    percent_change,
    trend_color,
    trend_icon,
)

from .formatting import (
    format_currency,
    format_percent,
    format_points,
    round_percent,
)

from .ranking import (
    RankedGroup,
    top_n,
)

from .rollups import (
    with_rollup,
    rollup_count,
    has_related,
    at_or_below,
    low_stock,
    stock_color,
)

from .report import (
    MetricCard,
    Report,
    build_report,
    merchant_leaderboard,
)

__all__ = [
    # Windows
    'Window',
    'today',
    'this_period',
    'previous_period',
    'for_month',
    'between_dates',
    # Metrics
    'Metric',
    'compute',
    'compute_many',
    # Comparison
    'percent_change',
    'trend_color',
    'trend_icon',
    # Formatting
    'format_currency',
    'format_percent',
    'format_points',
    'round_percent',
    # Ranking
    'RankedGroup',
    'top_n',
    # Rollups
    'with_rollup',
    'rollup_count',
    'has_related',
    'at_or_below',
    'low_stock',
    'stock_color',
    # Report
    'MetricCard',
    'Report',
    'build_report',
    'merchant_leaderboard',
]
