"""
Tests for analytics input serializers.
"""
import pytest
from datetime import date, datetime, timezone as dt_timezone
from apps.analytics.serializers import (
    PeriodQuerySerializer,
    ProductRollupQuerySerializer,
    ReportQuerySerializer,
    TopMerchantsQuerySerializer,
)


class TestReportQuerySerializer:
    """Test ReportQuerySerializer validation."""

    def test_as_of_optional(self):
        serializer = ReportQuerySerializer(data={})
        assert serializer.is_valid()
        assert 'as_of' not in serializer.validated_data

    def test_as_of_parsed(self):
        serializer = ReportQuerySerializer(data={'as_of': '2026-03-15T12:00:00Z'})
        assert serializer.is_valid()
        assert serializer.validated_data['as_of'] == datetime(
            2026, 3, 15, 12, 0, tzinfo=dt_timezone.utc
        )

    def test_invalid_as_of(self):
        serializer = ReportQuerySerializer(data={'as_of': 'yesterday'})
        assert not serializer.is_valid()
        assert 'as_of' in serializer.errors


class TestPeriodQuerySerializer:
    """Test PeriodQuerySerializer validation."""

    def test_valid_period_format(self):
        """Test valid period format (YYYY-MM)."""
        serializer = PeriodQuerySerializer(data={'period': '2025-01'})
        assert serializer.is_valid()
        assert serializer.validated_data['start_date'] == date(2025, 1, 1)
        assert serializer.validated_data['end_date'] == date(2025, 1, 31)

    def test_valid_period_december(self):
        """Test period conversion for December (edge case)."""
        serializer = PeriodQuerySerializer(data={'period': '2024-12'})
        assert serializer.is_valid()
        assert serializer.validated_data['start_date'] == date(2024, 12, 1)
        assert serializer.validated_data['end_date'] == date(2024, 12, 31)

    def test_valid_period_february_leap_year(self):
        serializer = PeriodQuerySerializer(data={'period': '2028-02'})
        assert serializer.is_valid()
        assert serializer.validated_data['end_date'] == date(2028, 2, 29)

    def test_invalid_period_format(self):
        """Test invalid period format (missing leading zero)."""
        serializer = PeriodQuerySerializer(data={'period': '2025-1'})
        assert not serializer.is_valid()
        assert 'period' in serializer.errors

    def test_invalid_period_month(self):
        serializer = PeriodQuerySerializer(data={'period': '2025-13'})
        assert not serializer.is_valid()
        assert 'period' in serializer.errors

    def test_date_range_valid(self):
        serializer = PeriodQuerySerializer(data={
            'start_date': '2025-01-01',
            'end_date': '2025-01-31',
        })
        assert serializer.is_valid()
        assert serializer.validated_data['start_date'] == date(2025, 1, 1)
        assert serializer.validated_data['end_date'] == date(2025, 1, 31)

    def test_single_day_range_valid(self):
        serializer = PeriodQuerySerializer(data={
            'start_date': '2025-01-15',
            'end_date': '2025-01-15',
        })
        assert serializer.is_valid()

    def test_reversed_range_fails(self):
        """End date before start date fails validation."""
        serializer = PeriodQuerySerializer(data={
            'start_date': '2025-02-01',
            'end_date': '2025-01-01',
        })
        assert not serializer.is_valid()
        assert 'start_date' in serializer.errors

    @pytest.mark.parametrize('data', [
        {'start_date': '2025-01-01'},
        {'end_date': '2025-01-31'},
    ])
    def test_half_range_fails(self, data):
        serializer = PeriodQuerySerializer(data=data)
        assert not serializer.is_valid()
        assert 'start_date' in serializer.errors

    def test_empty_data(self):
        """Empty data is valid (defaults to the current month)."""
        serializer = PeriodQuerySerializer(data={})
        assert serializer.is_valid()
        assert 'start_date' not in serializer.validated_data
        assert 'end_date' not in serializer.validated_data

    def test_period_overrides_dates(self):
        serializer = PeriodQuerySerializer(data={
            'period': '2025-01',
            'start_date': '2025-06-01',  # Ignored
            'end_date': '2025-06-30',    # Ignored
        })
        assert serializer.is_valid()
        assert serializer.validated_data['start_date'] == date(2025, 1, 1)
        assert serializer.validated_data['end_date'] == date(2025, 1, 31)


class TestTopMerchantsQuerySerializer:
    """Test TopMerchantsQuerySerializer validation."""

    def test_default_values(self):
        serializer = TopMerchantsQuerySerializer(data={})
        assert serializer.is_valid()
        assert serializer.validated_data['metric'] == 'amount'
        assert serializer.validated_data['limit'] == 3

    def test_valid_metric_transactions(self):
        serializer = TopMerchantsQuerySerializer(data={'metric': 'transactions'})
        assert serializer.is_valid()
        assert serializer.validated_data['metric'] == 'transactions'

    def test_invalid_metric(self):
        serializer = TopMerchantsQuerySerializer(data={'metric': 'points'})
        assert not serializer.is_valid()
        assert 'metric' in serializer.errors

    def test_limit_min_bound(self):
        serializer = TopMerchantsQuerySerializer(data={'limit': 0})
        assert not serializer.is_valid()
        assert 'limit' in serializer.errors

    def test_limit_max_bound(self):
        serializer = TopMerchantsQuerySerializer(data={'limit': 51})
        assert not serializer.is_valid()
        assert 'limit' in serializer.errors

    def test_all_params_valid(self):
        serializer = TopMerchantsQuerySerializer(data={'metric': 'transactions', 'limit': 50})
        assert serializer.is_valid()
        assert serializer.validated_data == {'metric': 'transactions', 'limit': 50}


class TestProductRollupQuerySerializer:
    """Test ProductRollupQuerySerializer validation."""

    def test_defaults(self):
        serializer = ProductRollupQuerySerializer(data={})
        assert serializer.is_valid()
        assert serializer.validated_data['low_stock'] is False
        assert serializer.validated_data['has_points_rules'] is False
        assert serializer.validated_data['ordering'] == '-created_at'

    def test_flags_parsed(self):
        serializer = ProductRollupQuerySerializer(data={
            'low_stock': 'true',
            'has_points_rules': '1',
            'ordering': '-points_rules_count',
        })
        assert serializer.is_valid()
        assert serializer.validated_data['low_stock'] is True
        assert serializer.validated_data['has_points_rules'] is True

    def test_invalid_ordering(self):
        serializer = ProductRollupQuerySerializer(data={'ordering': 'price'})
        assert not serializer.is_valid()
        assert 'ordering' in serializer.errors

    def test_invalid_merchant(self):
        serializer = ProductRollupQuerySerializer(data={'merchant': 0})
        assert not serializer.is_valid()
        assert 'merchant' in serializer.errors
