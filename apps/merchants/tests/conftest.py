import pytest
from decimal import Decimal
from apps.accounts.models import User
from apps.merchants.models import Merchant, PointsRule, Product


@pytest.fixture
def merchant(db):
    return Merchant.objects.create(name='Corner Shop')


@pytest.fixture
def make_product(db, merchant):
    def _make(name='Product', stock=20, **kwargs):
        return Product.objects.create(
            merchant=kwargs.pop('merchant', merchant),
            name=name,
            price=Decimal('49.00'),
            stock=stock,
            **kwargs,
        )
    return _make


@pytest.fixture
def ruled_product(make_product):
    """Low-stock product with two points rules."""
    product = make_product('Ruled', stock=3)
    PointsRule.objects.create(product=product)
    PointsRule.objects.create(product=product, rule_type='bonus', priority=5)
    return product


@pytest.fixture
def admin_client(client, db):
    """Django test client logged into the admin as a superuser."""
    superuser = User.objects.create_superuser(
        email='admin@example.com',
        password='AdminPass123!',
    )
    client.force_login(superuser)
    return client
