"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
import pytest


# ============================================================================
# AUTO-USE FIXTURES (Run automatically for every test)
# ============================================================================

@pytest.fixture(autouse=True)
def order_config(settings):
    """
    Pin the order configuration for every test.

    order_settings caches what it read, so it is reloaded after the
    settings change.

    Tests that need another rate or transition table change `settings` and
    call order_settings.reload() themselves.
    """
    from orders.config import order_settings

    settings.ORDER_TAX_RATE = "0.12"
    settings.ORDER_STATUS_TRANSITIONS = "permissive"
    order_settings.reload()
    return order_settings


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client():
    """
    Provide DRF API client for API tests.

    Usage:
        def test_my_api(api_client):
            response = api_client.get('/api/health/')
            assert response.status_code == 200
    """
    from rest_framework.test import APIClient
    return APIClient()


# ============================================================================
# IMPORT ALL FIXTURES FROM core_backend/tests/fixtures.py
# ============================================================================
from core_backend.tests.fixtures import *  # noqa: E402,F401,F403
