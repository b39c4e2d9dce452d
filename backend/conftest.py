"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
import pytest
from django.conf import settings
from django.core.cache import cache


# ============================================================================
# AUTO-USE FIXTURES (Run automatically for every test)
# ============================================================================

@pytest.fixture(autouse=True)
def clear_cache_after_test():
    """
    Clear cache after each test.

    Throttle counters live in the cache; without this, request-heavy tests
    would start tripping rate limits for the tests that follow.
    """
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def eager_celery(settings):
    """Run Celery tasks inline so task tests need no broker."""
    settings.CELERY_TASK_ALWAYS_EAGER = True


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client():
    """
    Provide an unauthenticated DRF API client.

    Usage:
        def test_health(api_client):
            response = api_client.get('/api/health/')
            assert response.status_code == 200
    """
    from rest_framework.test import APIClient
    return APIClient()


def _client_for(user):
    from rest_framework.test import APIClient
    from rest_framework_simplejwt.tokens import RefreshToken

    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def authenticated_client(owner_a):
    """
    API client authenticated as the owner of restaurant A (Authorization header).

    Usage:
        def test_protected_endpoint(authenticated_client, restaurant_a):
            response = authenticated_client.get(f'/api/restaurants/{restaurant_a.id}/menu/')
            assert response.status_code == 200
    """
    return _client_for(owner_a)


@pytest.fixture
def authenticated_client_owner_b(owner_b):
    """API client authenticated as the owner of restaurant B."""
    return _client_for(owner_b)


@pytest.fixture
def cookie_authenticated_client(owner_a):
    """API client carrying the access token in the auth cookie instead of a header."""
    from rest_framework.test import APIClient
    from rest_framework_simplejwt.tokens import RefreshToken

    client = APIClient()
    refresh = RefreshToken.for_user(owner_a)
    client.cookies[settings.SIMPLE_JWT.get('AUTH_COOKIE', 'access_token')] = str(refresh.access_token)
    return client


# ============================================================================
# IMPORT ALL FIXTURES FROM core_backend/tests/fixtures.py
# ============================================================================
from core_backend.tests.fixtures import *
