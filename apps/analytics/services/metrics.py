"""Metric calculator - count and sum aggregates over a time window."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar, Optional

from django.core.exceptions import FieldDoesNotExist
from django.db import models
from django.db.models import Count, Sum

from apps.analytics.exceptions import InvalidMetricError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Metric:
    """
    An aggregate to compute over an entity set.

    Build with ``Metric.count()`` or ``Metric.sum('amount')``.
    """

    COUNT: ClassVar[str] = 'count'
    SUM: ClassVar[str] = 'sum'

    kind: str
    field: Optional[str] = None

    def __post_init__(self):
        if self.kind not in (self.COUNT, self.SUM):
            raise InvalidMetricError(
                f"Invalid metric: '{self.kind}'. Valid options: count, sum"
            )
        if self.kind == self.SUM and not self.field:
            raise InvalidMetricError("A sum metric needs a field to sum")

    @classmethod
    def count(cls):
        return cls(cls.COUNT)

    @classmethod
    def sum(cls, field):
        return cls(cls.SUM, field)

    def expression(self, model):
        """ORM aggregate expression for this metric on ``model``."""
        if self.kind == self.COUNT:
            return Count('pk')
        _numeric_field(model, self.field)
        return Sum(self.field)

    def zero(self, model):
        """Value of this metric over an empty set."""
        if self.kind == self.SUM and isinstance(
            _numeric_field(model, self.field), models.DecimalField
        ):
            return Decimal('0.00')
        return 0

    def __str__(self):
        return self.kind if self.kind == self.COUNT else f'sum({self.field})'


def _numeric_field(model, name):
    try:
        field = model._meta.get_field(name)
    except FieldDoesNotExist:
        raise InvalidMetricError(
            f"{model.__name__} has no field '{name}' to sum"
        )
    if not isinstance(field, (models.IntegerField, models.DecimalField, models.FloatField)):
        raise InvalidMetricError(
            f"Cannot sum non-numeric field '{name}' of {model.__name__}"
        )
    return field


def compute_many(metrics, entity_set, window=None, *, date_field='created_at'):
    """
    Evaluate several metrics over one window with a single aggregate query.

    Args:
        metrics: Mapping of result name to ``Metric``.
        entity_set: QuerySet of the records to aggregate.
        window: ``Window`` to restrict ``date_field`` to. ``None`` means
            the whole entity set.
        date_field: Timestamp field the window applies to.

    Returns:
        dict: Result name to aggregate value. Empty sets give 0 (or
        ``Decimal('0.00')`` for decimal sums), never ``None``.

    Example:
        >>> compute_many(
        ...     {'count': Metric.count(), 'amount': Metric.sum('amount')},
        ...     Transaction.objects.all(),
        ...     windows.today(now),
        ... )
        {'count': 3, 'amount': Decimal('150.00')}
    """
    model = entity_set.model
    queryset = entity_set
    if window is not None:
        queryset = queryset.filter(**window.lookups(date_field))

    aggregates = queryset.aggregate(**{
        name: metric.expression(model) for name, metric in metrics.items()
    })

    results = {}
    for name, metric in metrics.items():
        value = aggregates[name]
        results[name] = metric.zero(model) if value is None else value

    logger.debug(
        "Computed %s over %s in window %s",
        ', '.join(f'{name}={metric}' for name, metric in metrics.items()),
        model.__name__,
        window.label if window is not None else 'all',
    )
    return results


def compute(metric, entity_set, window=None, *, date_field='created_at'):
    """Single-metric form of ``compute_many``."""
    return compute_many({'value': metric}, entity_set, window, date_field=date_field)['value']
