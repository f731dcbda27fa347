import pytest
from decimal import Decimal
from datetime import datetime, timezone as dt_timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import Role, RoleName, User
from apps.merchants.models import Merchant, PointsRule, Product, RuleType
from apps.transactions.models import Transaction


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Clock
# =============================================================================

@pytest.fixture
def now():
    """Fixed 'now' for window computations: mid-March 2026, noon UTC."""
    return datetime(2026, 3, 15, 12, 0, tzinfo=dt_timezone.utc)


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def customer_role(db):
    return Role.objects.create(name=RoleName.CUSTOMER)


@pytest.fixture
def merchant_role(db):
    return Role.objects.create(name=RoleName.MERCHANT)


@pytest.fixture
def staff_user(db):
    """Back office operator allowed to read analytics."""
    return User.objects.create_user(
        email='staff@example.com',
        password='TestPass123!',
        display_name='Back Office',
        is_staff=True,
    )


@pytest.fixture
def customer(db, customer_role):
    user = User.objects.create_user(
        email='customer@example.com',
        password='TestPass123!',
        display_name='Loyal Customer',
    )
    user.roles.add(customer_role)
    return user


@pytest.fixture
def staff_client(api_client, staff_user):
    """Return API client authenticated as staff."""
    refresh = RefreshToken.for_user(staff_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def customer_client(api_client, customer):
    """Return API client authenticated as a non-staff customer."""
    refresh = RefreshToken.for_user(customer)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


# =============================================================================
# Merchants & Products
# =============================================================================

@pytest.fixture
def merchant_alpha(db):
    return Merchant.objects.create(name='Alpha Mart')


@pytest.fixture
def merchant_beta(db):
    return Merchant.objects.create(name='Beta Bakery')


@pytest.fixture
def merchant_gamma(db):
    return Merchant.objects.create(name='Gamma Grocer')


@pytest.fixture
def make_product(db, merchant_alpha):
    """Factory for products; defaults to Alpha Mart with stock 20."""
    def _make(name='Product', merchant=None, stock=20, **kwargs):
        return Product.objects.create(
            merchant=merchant or merchant_alpha,
            name=name,
            price=kwargs.pop('price', Decimal('99.00')),
            stock=stock,
            **kwargs,
        )
    return _make


@pytest.fixture
def make_rule(db):
    def _make(product, rule_type=RuleType.PURCHASE_BASED, **kwargs):
        return PointsRule.objects.create(product=product, rule_type=rule_type, **kwargs)
    return _make


# =============================================================================
# Transactions
# =============================================================================

@pytest.fixture
def make_transaction(db, merchant_alpha):
    """
    Factory for transactions with an explicit creation timestamp.

    Usage:
        make_transaction(amount='100.00', points=10, at=now)
    """
    def _make(amount='0.00', points=0, at=None, merchant=None, user=None):
        kwargs = {}
        if at is not None:
            kwargs['created_at'] = at
        return Transaction.objects.create(
            merchant=merchant or merchant_alpha,
            user=user,
            amount=Decimal(str(amount)),
            awarded_points=points,
            **kwargs,
        )
    return _make
