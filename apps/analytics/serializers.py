"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting

Input Serializers:
    ReportQuerySerializer - Validates the report's as-of timestamp
    PeriodQuerySerializer - Validates period and date range parameters
    TopMerchantsQuerySerializer - Validates leaderboard parameters
    ProductRollupQuerySerializer - Validates product listing filters

Response Serializers:
    ReportResponseSerializer - Transaction statistics report
    WindowMetricsSerializer - Metrics over a custom window
    TopMerchantsResponseSerializer - Merchant leaderboard
    ProductRollupResponseSerializer - Products with points rule counts
    ErrorSerializer - 400 body of a rejected analytics request
    UnavailableErrorSerializer - 503 body when the store cannot answer
"""

from rest_framework import serializers
from datetime import datetime, timedelta

from .services.rollups import stock_color


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class ReportQuerySerializer(serializers.Serializer):
    """
    Validate report query parameters.

    Used by: transaction_stats

    Query Parameters:
        as_of (datetime): Moment the report windows are computed from.
            Defaults to now.
    """

    as_of = serializers.DateTimeField(required=False)


class PeriodQuerySerializer(serializers.Serializer):
    """
    Validate period and date range query parameters.

    Used by: transaction_metrics

    Query Parameters:
        period (str): Month period in YYYY-MM format (e.g., '2025-01')
        start_date (date): Start of date range (inclusive)
        end_date (date): End of date range (inclusive)

    Note:
        If 'period' is provided, it takes precedence and is converted
        to start_date and end_date for the full month.
    """

    period = serializers.RegexField(
        regex=r'^\d{4}-(0[1-9]|1[0-2])$',
        required=False,
        allow_blank=True,
        help_text='Month period in YYYY-MM format'
    )
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        """Parse period into date range if provided."""
        period = attrs.get('period')

        if period:
            try:
                year, month = period.split('-')
                year, month = int(year), int(month)
                attrs['start_date'] = datetime(year, month, 1).date()
                # Last day of month
                if month == 12:
                    attrs['end_date'] = datetime(year + 1, 1, 1).date() - timedelta(days=1)
                else:
                    attrs['end_date'] = datetime(year, month + 1, 1).date() - timedelta(days=1)
            except (ValueError, AttributeError):
                raise serializers.ValidationError({
                    'period': 'Invalid period format. Use YYYY-MM'
                })

        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if bool(start) != bool(end):
            raise serializers.ValidationError({
                'start_date': 'Provide both start_date and end_date, or neither'
            })
        if start and end and start > end:
            raise serializers.ValidationError({
                'start_date': 'Start date must be before end date'
            })

        return attrs


class TopMerchantsQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for the merchant leaderboard.

    Used by: top_merchants

    Query Parameters:
        metric (str): Ranking metric - 'amount' or 'transactions'
        limit (int): Number of merchants to return (1-50)
    """

    VALID_METRICS = ('amount', 'transactions')

    metric = serializers.ChoiceField(
        choices=VALID_METRICS,
        default='amount',
        help_text="Ranking metric: 'amount' or 'transactions'"
    )
    limit = serializers.IntegerField(
        min_value=1,
        max_value=50,
        required=False,
        default=3,
        help_text='Number of results (1-50)'
    )


class ProductRollupQuerySerializer(serializers.Serializer):
    """
    Validate product listing filters.

    Used by: product_rollups

    Query Parameters:
        merchant (int): Only this merchant's products
        low_stock (bool): Only products at or below the low-stock threshold
        has_points_rules (bool): Only products with at least one points rule
        ordering (str): Sort key
    """

    VALID_ORDERINGS = (
        'name', '-name',
        'stock', '-stock',
        'points_rules_count', '-points_rules_count',
        'created_at', '-created_at',
    )

    merchant = serializers.IntegerField(required=False, min_value=1)
    low_stock = serializers.BooleanField(required=False, default=False)
    has_points_rules = serializers.BooleanField(required=False, default=False)
    ordering = serializers.ChoiceField(
        choices=VALID_ORDERINGS,
        default='-created_at',
    )


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class MetricCardSerializer(serializers.Serializer):
    """A single dashboard card."""
    key = serializers.CharField()
    label = serializers.CharField()
    value = serializers.JSONField()
    description = serializers.CharField()
    description_icon = serializers.CharField()
    color = serializers.ChoiceField(choices=('success', 'danger', 'info', 'warning'))


class TopMerchantSerializer(serializers.Serializer):
    """Nested serializer for a single leaderboard entry."""
    merchant_id = serializers.IntegerField()
    name = serializers.CharField(allow_null=True)
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    transaction_count = serializers.IntegerField()


class ReportResponseSerializer(serializers.Serializer):
    """Response serializer for the transaction statistics report."""
    generated_at = serializers.DateTimeField()
    cards = MetricCardSerializer(many=True)
    top_merchants = TopMerchantSerializer(many=True)


class WindowMetricsSerializer(serializers.Serializer):
    """Response serializer for metrics over a custom window."""
    start = serializers.DateTimeField()
    end = serializers.DateTimeField()
    count = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    points = serializers.IntegerField()


class TopMerchantsResponseSerializer(serializers.Serializer):
    """Response serializer for the merchant leaderboard."""
    metric = serializers.CharField()
    results = TopMerchantSerializer(many=True)


class ProductRollupSerializer(serializers.Serializer):
    """Product listing row with its points rule badge."""
    id = serializers.IntegerField()
    name = serializers.CharField()
    merchant_id = serializers.IntegerField()
    merchant_name = serializers.CharField(source='merchant.name')
    stock = serializers.IntegerField()
    stock_color = serializers.SerializerMethodField()
    points_rules_count = serializers.IntegerField()

    def get_stock_color(self, obj) -> str:
        return stock_color(obj.stock)


class ProductRollupResponseSerializer(serializers.Serializer):
    """Response serializer for the product rollup listing."""
    count = serializers.IntegerField()
    results = ProductRollupSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()


class UnavailableErrorSerializer(serializers.Serializer):
    """HTTP 503 body raised as an ``APIException`` (DRF's ``detail`` shape)."""
    detail = serializers.CharField()
