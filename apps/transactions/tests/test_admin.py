"""
Tests for the transaction admin listing filters.
"""
import pytest
from datetime import datetime, timezone as dt_timezone
from django.urls import reverse

from apps.accounts.models import User
from apps.merchants.models import Merchant


UTC = dt_timezone.utc
URL = 'admin:transactions_transaction_changelist'


def _amounts(response):
    return sorted(str(t.amount) for t in response.context['cl'].result_list)


@pytest.mark.django_db
class TestTransactionAdminFilters:

    def test_changelist(self, admin_client, make_transaction):
        make_transaction('10.00')

        response = admin_client.get(reverse(URL))

        assert response.status_code == 200
        assert _amounts(response) == ['10.00']

    @pytest.mark.parametrize('amount_range, expected', [
        ('under_100', ['0.00', '99.99']),
        ('100_499', ['100.00', '499.99']),
        ('500_999', ['500.00']),
        ('1000_up', ['1000.00']),
    ])
    def test_amount_range(self, admin_client, make_transaction, amount_range, expected):
        for amount in ('0.00', '99.99', '100.00', '499.99', '500.00', '1000.00'):
            make_transaction(amount)

        response = admin_client.get(reverse(URL), {'amount_range': amount_range})

        assert _amounts(response) == expected

    def test_date_range_is_inclusive(self, admin_client, make_transaction):
        make_transaction('1.00', at=datetime(2026, 2, 28, 23, 59, tzinfo=UTC))
        make_transaction('2.00', at=datetime(2026, 3, 1, 0, 0, tzinfo=UTC))
        make_transaction('3.00', at=datetime(2026, 3, 10, 23, 59, 59, tzinfo=UTC))
        make_transaction('4.00', at=datetime(2026, 3, 11, tzinfo=UTC))

        response = admin_client.get(reverse(URL), {
            'created_from': '2026-03-01',
            'created_to': '2026-03-10',
        })

        assert _amounts(response) == ['2.00', '3.00']

    def test_date_range_open_end(self, admin_client, make_transaction):
        make_transaction('1.00', at=datetime(2026, 2, 28, tzinfo=UTC))
        make_transaction('2.00', at=datetime(2026, 3, 5, tzinfo=UTC))

        response = admin_client.get(reverse(URL), {'created_from': '2026-03-01'})

        assert _amounts(response) == ['2.00']

    def test_invalid_date_flags_error(self, admin_client, make_transaction):
        make_transaction('1.00')

        response = admin_client.get(reverse(URL), {'created_from': 'yesterday'})

        # Admin redirects bad lookups to ?e=1
        assert response.status_code == 302
        assert response.url.endswith('?e=1')

    def test_customer_filter(self, admin_client, make_transaction, customer):
        make_transaction('5.00', user=customer)
        make_transaction('7.00')

        response = admin_client.get(reverse(URL), {'customer': str(customer.pk)})

        assert _amounts(response) == ['5.00']

    def test_customer_choices_limited_to_customers(self, admin_client, customer):
        User.objects.create_user(email='staffer@example.com', password='x', is_staff=True)

        response = admin_client.get(reverse(URL))

        spec = next(
            f for f in response.context["cl"].filter_specs
            if getattr(f, "parameter_name", None) == "customer"
        )
        assert spec.lookup_choices == [(str(customer.pk), 'Alice')]

    def test_merchant_filter(self, admin_client, make_transaction):
        kiosk = Merchant.objects.create(name='Kiosk')
        make_transaction('5.00')
        make_transaction('8.00', merchant=kiosk)

        response = admin_client.get(reverse(URL), {'merchant': str(kiosk.pk)})

        assert _amounts(response) == ['8.00']

    def test_date_range_open_start(self, admin_client, make_transaction):
        make_transaction('1.00', at=datetime(2026, 2, 28, 23, 59, tzinfo=UTC))
        make_transaction('2.00', at=datetime(2026, 3, 1, tzinfo=UTC))

        response = admin_client.get(reverse(URL), {'created_to': '2026-02-28'})

        assert _amounts(response) == ['1.00']

    def test_reversed_date_range_flags_error(self, admin_client):
        response = admin_client.get(reverse(URL), {
            'created_from': '2026-03-10',
            'created_to': '2026-03-01',
        })

        assert response.status_code == 302
        assert response.url.endswith('?e=1')
