"""
Tests for the transaction queryset helpers.
"""
import pytest
from decimal import Decimal
from datetime import datetime, timezone as dt_timezone

from apps.analytics.services import Window
from apps.merchants.models import Merchant
from apps.transactions.models import Transaction


UTC = dt_timezone.utc


@pytest.fixture
def sales(shop):
    other = Merchant.objects.create(name='Kiosk')
    return [
        Transaction.objects.create(merchant=shop, amount=Decimal('5.00'),
                                   created_at=datetime(2026, 3, 1, tzinfo=UTC)),
        Transaction.objects.create(merchant=shop, amount=Decimal('50.00'),
                                   created_at=datetime(2026, 3, 31, 23, 59, tzinfo=UTC)),
        Transaction.objects.create(merchant=other, amount=Decimal('500.00'),
                                   created_at=datetime(2026, 4, 1, tzinfo=UTC)),
    ]


@pytest.mark.django_db
class TestTransactionQuerySet:

    def test_in_window_excludes_end(self, sales):
        window = Window(datetime(2026, 3, 1, tzinfo=UTC), datetime(2026, 4, 1, tzinfo=UTC))

        assert set(Transaction.objects.in_window(window)) == {sales[0], sales[1]}

    def test_in_closed_window_includes_end(self, sales):
        window = Window(
            datetime(2026, 3, 1, tzinfo=UTC),
            datetime(2026, 4, 1, tzinfo=UTC),
            closed=True,
        )

        assert Transaction.objects.in_window(window).count() == 3

    def test_amount_between(self, sales):
        assert list(Transaction.objects.amount_between(min_amount=10)) == [sales[2], sales[1]]
        assert list(Transaction.objects.amount_between(max_amount=10)) == [sales[0]]
        assert Transaction.objects.amount_between().count() == 3

    def test_for_merchant(self, shop, sales):
        assert Transaction.objects.for_merchant(shop.id).count() == 2

    def test_newest_first(self, sales):
        assert list(Transaction.objects.all()) == list(reversed(sales))

    def test_walk_in_sale_has_no_user(self, sales):
        assert sales[0].user is None
        assert str(sales[0]).startswith(f"#{sales[0].pk} Corner Shop")
