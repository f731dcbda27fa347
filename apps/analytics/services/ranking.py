"""Ranker - grouped aggregates ordered into a top-N leaderboard."""

import logging
from dataclasses import dataclass, field
from typing import Any

from django.core.exceptions import FieldDoesNotExist
from django.db.models import Min

from apps.analytics.exceptions import InvalidLimitError, InvalidMetricError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankedGroup:
    """One leaderboard row: group key, its resolved parent, and the score."""

    key: Any
    entity: Any
    value: Any
    extra: dict = field(default_factory=dict)


def top_n(entity_set, group_by, aggregate, n, *, extra=None):
    """
    Group ``entity_set`` by ``group_by`` and return the ``n`` highest groups.

    Groups are ordered by ``aggregate`` descending. Groups with equal
    values keep input order, taken as the order of each group's earliest
    row (lowest primary key), so the result is deterministic.

    When ``group_by`` is a foreign key, the referenced rows are loaded in
    one query and attached as ``RankedGroup.entity``; soft-deleted parents
    still resolve so historic totals keep their names.

    Args:
        entity_set: QuerySet of rows to rank (e.g. transactions).
        group_by: Field name to group on (e.g. ``'merchant'``).
        aggregate: ``Metric`` to rank by.
        n: Number of groups to return, at least 1.
        extra: Optional mapping of name to ``Metric`` computed per group
            alongside the ranking value.

    Returns:
        list[RankedGroup]

    Raises:
        InvalidLimitError: If ``n`` is below 1.
        InvalidMetricError: If ``group_by`` or a metric field is unknown.
    """
    if n < 1:
        raise InvalidLimitError(f"Limit must be at least 1, got {n}")

    model = entity_set.model
    try:
        group_field = model._meta.get_field(group_by)
    except FieldDoesNotExist:
        raise InvalidMetricError(f"{model.__name__} has no field '{group_by}' to group by")
    if not group_field.concrete:
        raise InvalidMetricError(f"Cannot group {model.__name__} by relation '{group_by}'")

    key_name = group_field.attname
    extra = extra or {}
    annotations = {
        'rank_value': aggregate.expression(model),
        'rank_first_row': Min('pk'),
    }
    for name, metric in extra.items():
        annotations[f'extra_{name}'] = metric.expression(model)

    # order_by() drops the model's default ordering from GROUP BY
    rows = list(
        entity_set.order_by()
        .values(key_name)
        .annotate(**annotations)
        .order_by('-rank_value', 'rank_first_row')[:n]
    )

    entities = {}
    if group_field.many_to_one:
        keys = [row[key_name] for row in rows if row[key_name] is not None]
        entities = group_field.related_model._base_manager.in_bulk(keys)

    zero = aggregate.zero(model)
    ranked = []
    for row in rows:
        key = row[key_name]
        ranked.append(RankedGroup(
            key=key,
            entity=entities.get(key),
            value=zero if row['rank_value'] is None else row['rank_value'],
            extra={
                name: metric.zero(model) if row[f'extra_{name}'] is None else row[f'extra_{name}']
                for name, metric in extra.items()
            },
        ))

    logger.debug("Ranked %d %s groups by %s", len(ranked), group_by, aggregate)
    return ranked
