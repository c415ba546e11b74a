import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def make_user(db):
    """Factory creating users with unique email/username."""
    counter = {'n': 0}

    def _make_user(username=None, **extra_fields):
        counter['n'] += 1
        username = username or f'hiker{counter["n"]}'
        return User.objects.create_user(
            email=f'{username}@example.com',
            username=username,
            password='TestPass123!',
            **extra_fields,
        )

    return _make_user


@pytest.fixture
def user(make_user):
    """Create and return a test user."""
    return make_user('alice', name='Alice', surname='Walker')


@pytest.fixture
def other_user(make_user):
    """Create and return another test user."""
    return make_user('bob', name='Bob')


@pytest.fixture
def third_user(make_user):
    """Create and return a third test user."""
    return make_user('carol')


@pytest.fixture
def client_for():
    """Return a factory building API clients authenticated as a user."""

    def _client_for(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return client

    return _client_for


@pytest.fixture
def authenticated_client(client_for, user):
    """Return API client authenticated as `user`."""
    return client_for(user)
