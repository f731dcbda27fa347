import pytest
from decimal import Decimal
from apps.accounts.models import Role, RoleName, User
from apps.merchants.models import Merchant
from apps.transactions.models import Transaction


@pytest.fixture
def shop(db):
    return Merchant.objects.create(name='Corner Shop')


@pytest.fixture
def customer(db):
    """User holding the customer role."""
    user = User.objects.create_user(email='alice@example.com', password='x', display_name='Alice')
    user.roles.add(Role.objects.get_or_create(name=RoleName.CUSTOMER)[0])
    return user


@pytest.fixture
def make_transaction(shop):
    def _make(amount, at=None, merchant=None, user=None):
        kwargs = {'created_at': at} if at is not None else {}
        return Transaction.objects.create(
            merchant=merchant or shop,
            user=user,
            amount=Decimal(amount),
            **kwargs,
        )
    return _make


@pytest.fixture
def admin_client(client, db):
    """Django test client logged into the admin as a superuser."""
    superuser = User.objects.create_superuser(
        email='admin@example.com',
        password='AdminPass123!',
    )
    client.force_login(superuser)
    return client
