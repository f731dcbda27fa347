import pytest
from rest_framework.test import APIClient
from apps.accounts.models import Role, RoleName, User


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def roles(db):
    """All three roles, keyed by name."""
    return {
        name: Role.objects.create(name=name)
        for name in RoleName.values
    }


@pytest.fixture
def user(db):
    """Create and return a back office user."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        display_name='Test User',
        is_staff=True,
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        is_active=False,
    )
