"""
Report assembler - the transaction statistics dashboard.

Combines windowed transaction metrics, month-over-month changes, user and
merchant totals and the merchant leaderboard into one ordered report.
Nothing is caught here: if any query fails the whole report fails.
"""

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from apps.accounts.models import User
from apps.merchants.models import Merchant
from apps.transactions.models import Transaction
from apps.analytics.conf import analytics_setting
from apps.analytics.exceptions import InvalidMetricError
from . import windows
from .comparison import (
    COLOR_INFO,
    COLOR_SUCCESS,
    COLOR_WARNING,
    TREND_UP_ICON,
    percent_change,
    trend_color,
    trend_icon,
)
from .formatting import format_currency, format_percent, format_points, round_percent
from .metrics import Metric, compute, compute_many
from .ranking import top_n

logger = logging.getLogger(__name__)


TRANSACTION_METRICS = {
    'count': Metric.count(),
    'amount': Metric.sum('amount'),
    'points': Metric.sum('awarded_points'),
}

LEADERBOARD_METRICS = {
    'amount': Metric.sum('amount'),
    'transactions': Metric.count(),
}

NO_TRANSACTIONS = 'No transactions'
USERS_ICON = 'heroicon-m-users'
MERCHANTS_ICON = 'heroicon-m-building-storefront'


@dataclass
class MetricCard:
    """One dashboard tile."""

    key: str
    label: str
    value: Any
    description: str
    description_icon: str
    color: str


@dataclass
class Report:
    generated_at: datetime
    cards: list = field(default_factory=list)
    top_merchants: list = field(default_factory=list)

    def card(self, key):
        for card in self.cards:
            if card.key == key:
                return card
        raise KeyError(key)

    def to_dict(self):
        return {
            'generated_at': self.generated_at,
            'cards': [asdict(card) for card in self.cards],
            'top_merchants': list(self.top_merchants),
        }


def merchant_leaderboard(transactions=None, *, limit=None, by='amount'):
    """
    Merchants ranked by transaction amount (or count), highest first.

    Args:
        transactions: QuerySet of transactions to rank. Defaults to all.
        limit: Number of merchants. Defaults to ``TOP_MERCHANTS_LIMIT`` (3).
        by: ``'amount'`` or ``'transactions'``.

    Returns:
        list[dict]: ``merchant_id``, ``name``, ``total_amount`` and
        ``transaction_count`` per merchant.

    Raises:
        InvalidMetricError: If ``by`` is not a leaderboard metric.
        InvalidLimitError: If ``limit`` is below 1.
    """
    if by not in LEADERBOARD_METRICS:
        raise InvalidMetricError(
            f"Invalid leaderboard metric: '{by}'. "
            f"Valid options: {', '.join(LEADERBOARD_METRICS)}"
        )
    if transactions is None:
        transactions = Transaction.objects.all()
    if limit is None:
        limit = analytics_setting('TOP_MERCHANTS_LIMIT')

    ranked = top_n(
        transactions,
        'merchant',
        LEADERBOARD_METRICS[by],
        limit,
        extra=LEADERBOARD_METRICS,
    )
    return [
        {
            'merchant_id': group.key,
            'name': group.entity.name if group.entity else None,
            'total_amount': group.extra['amount'],
            'transaction_count': group.extra['transactions'],
        }
        for group in ranked
    ]


def _daily_description(amount):
    return format_currency(amount) if amount > 0 else NO_TRANSACTIONS


def _monthly_card(key, label, value, change):
    change = round_percent(change)
    phrase = analytics_setting('COMPARISON_PHRASE')
    return MetricCard(
        key=key,
        label=label,
        value=value,
        description=f"{format_percent(change)} {phrase}",
        description_icon=trend_icon(change),
        color=trend_color(change),
    )


def build_report(*, now, transactions=None):
    """
    Build the transaction statistics report as of ``now``.

    Cards, in order: today's transactions, amount and points; this month's
    transactions, amount and points with the change against last month;
    total customers; total merchants. ``top_merchants`` holds the
    leaderboard by transaction amount.

    Args:
        now: Aware datetime the windows are computed from.
        transactions: Optional QuerySet restricting the transactions
            considered (e.g. one merchant). Defaults to all.

    Returns:
        Report
    """
    if transactions is None:
        transactions = Transaction.objects.all()

    daily = compute_many(TRANSACTION_METRICS, transactions, windows.today(now))
    current = compute_many(TRANSACTION_METRICS, transactions, windows.this_period(now))
    previous = compute_many(TRANSACTION_METRICS, transactions, windows.previous_period(now))

    customers = compute(
        Metric.count(),
        User.objects.with_role(analytics_setting('CUSTOMER_ROLE')),
    )
    merchants = compute(Metric.count(), Merchant.objects.all())

    daily_description = _daily_description(daily['amount'])
    cards = [
        MetricCard(
            key='today_transactions',
            label="Today's Transactions",
            value=daily['count'],
            description=daily_description,
            description_icon=TREND_UP_ICON,
            color=COLOR_SUCCESS,
        ),
        MetricCard(
            key='today_amount',
            label="Today's Amount",
            value=format_currency(daily['amount']),
            description=daily_description,
            description_icon=TREND_UP_ICON,
            color=COLOR_SUCCESS,
        ),
        MetricCard(
            key='today_points',
            label='Points Awarded Today',
            value=format_points(daily['points']),
            description=daily_description,
            description_icon=TREND_UP_ICON,
            color=COLOR_SUCCESS,
        ),
        _monthly_card(
            'month_transactions',
            "This Month's Transactions",
            current['count'],
            percent_change(current['count'], previous['count']),
        ),
        _monthly_card(
            'month_amount',
            'Total Amount This Month',
            format_currency(current['amount']),
            percent_change(current['amount'], previous['amount']),
        ),
        _monthly_card(
            'month_points',
            'Points Awarded This Month',
            format_points(current['points']),
            percent_change(current['points'], previous['points']),
        ),
        MetricCard(
            key='total_customers',
            label='Total Customers',
            value=customers,
            description='Active customers in the system',
            description_icon=USERS_ICON,
            color=COLOR_INFO,
        ),
        MetricCard(
            key='total_merchants',
            label='Total Merchants',
            value=merchants,
            description='Active merchants in the system',
            description_icon=MERCHANTS_ICON,
            color=COLOR_WARNING,
        ),
    ]

    report = Report(
        generated_at=now,
        cards=cards,
        top_merchants=merchant_leaderboard(transactions),
    )
    logger.info(
        "Built transaction report as of %s: %d transactions this month",
        now.isoformat(),
        current['count'],
    )
    return report
