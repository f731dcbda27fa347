"""
Rollup counter - per-parent counts of related rows and listing predicates.

Counts are correlated subqueries rather than JOIN + GROUP BY, so several
rollups and filters can be stacked on one listing without multiplying
rows, and child rows are never loaded.
"""

from django.core.exceptions import FieldDoesNotExist
from django.db.models import Count, Exists, IntegerField, OuterRef, Subquery, Value
from django.db.models.functions import Coalesce

from apps.analytics.conf import analytics_setting
from apps.analytics.exceptions import InvalidRelationError
from .comparison import COLOR_DANGER, COLOR_SUCCESS


def _related_rows(model, relation):
    """Return (child queryset, child FK name) for a to-many ``relation``."""
    try:
        field = model._meta.get_field(relation)
    except FieldDoesNotExist:
        raise InvalidRelationError(
            f"'{relation}' is not a relation of {model.__name__}"
        )
    if not (field.one_to_many and field.auto_created):
        raise InvalidRelationError(
            f"'{relation}' is not a related collection of {model.__name__}"
        )
    # Default manager: soft-deleted children do not count
    return field.related_model._default_manager.all(), field.field.name


def rollup_expression(model, relation):
    """Expression counting ``relation`` rows per ``model`` row (0 when none)."""
    children, fk_name = _related_rows(model, relation)
    counts = (
        children.filter(**{fk_name: OuterRef('pk')})
        .order_by()
        .values(fk_name)
        .annotate(total=Count('pk'))
        .values('total')
    )
    return Coalesce(Subquery(counts, output_field=IntegerField()), Value(0))


def with_rollup(parent_set, relation, name=None):
    """
    Annotate ``parent_set`` with the count of ``relation`` rows.

    The annotation (``<relation>_count`` by default) behaves like a column:
    it can be ordered and filtered on, and is recomputed by every query.

    Example:
        >>> products = with_rollup(Product.objects.all(), 'points_rules')
        >>> products.order_by('-points_rules_count').first().points_rules_count
        4
    """
    name = name or f'{relation}_count'
    return parent_set.annotate(**{name: rollup_expression(parent_set.model, relation)})


def rollup_count(parent_set, relation):
    """
    Map each parent's primary key to its number of ``relation`` rows.

    Every parent in ``parent_set`` appears in the result; parents without
    related rows map to 0.
    """
    annotated = with_rollup(parent_set, relation, name='_rollup_total')
    return dict(annotated.order_by().values_list('pk', '_rollup_total'))


def has_related(parent_set, relation):
    """Parents with at least one ``relation`` row, regardless of its type."""
    children, fk_name = _related_rows(parent_set.model, relation)
    return parent_set.filter(Exists(children.filter(**{fk_name: OuterRef('pk')})))


def at_or_below(parent_set, field, threshold):
    return parent_set.filter(**{f'{field}__lte': threshold})


def low_stock(products, threshold=None):
    """Products whose stock is at or below the low-stock threshold (default 10)."""
    if threshold is None:
        threshold = analytics_setting('LOW_STOCK_THRESHOLD')
    return at_or_below(products, 'stock', threshold)


def stock_color(stock):
    return COLOR_DANGER if stock <= 0 else COLOR_SUCCESS
