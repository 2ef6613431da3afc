"""
Shared test fixtures for all backend tests.

This module provides reusable pytest fixtures for common test objects
like users, products, tables and orders.
"""
import pytest
from decimal import Decimal

from users.models import User
from products.models import Product, Category
from tables.models import DiningTable


# ============================================================================
# USER FIXTURES
# ============================================================================

@pytest.fixture
def admin_user(db):
    """Create admin user"""
    return User.objects.create_user(
        email='admin@bistro.com',
        password='Password123',
        name='Ada Admin',
        role=User.Role.ADMIN,
    )


@pytest.fixture
def manager_user(db):
    """Create manager user"""
    return User.objects.create_user(
        email='manager@bistro.com',
        password='Password123',
        name='Max Manager',
        role=User.Role.MANAGER,
    )


@pytest.fixture
def waiter_user(db):
    """Create waiter user"""
    return User.objects.create_user(
        email='waiter@bistro.com',
        password='Password123',
        name='Wes Waiter',
        role=User.Role.WAITER,
    )


@pytest.fixture
def cashier_user(db):
    """Create cashier user"""
    return User.objects.create_user(
        email='cashier@bistro.com',
        password='Password123',
        name='Cal Cashier',
        role=User.Role.CASHIER,
    )


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

@pytest.fixture
def category(db):
    """Create the Mains category"""
    return Category.objects.create(name='Mains', display_order=1)


@pytest.fixture
def product_a(category):
    """Burger, 9.99"""
    return Product.objects.create(name='Burger', price=Decimal('9.99'), category=category)


@pytest.fixture
def product_b(category):
    """Salad, 5.00"""
    return Product.objects.create(name='Salad', price=Decimal('5.00'), category=category)


@pytest.fixture
def product_c(category):
    """Fries, 3.50"""
    return Product.objects.create(name='Fries', price=Decimal('3.50'), category=category)


@pytest.fixture
def unavailable_product(category):
    """Seasonal special that is switched off"""
    return Product.objects.create(
        name='Pumpkin Soup',
        price=Decimal('6.50'),
        category=category,
        is_available=False,
    )


# ============================================================================
# TABLE FIXTURES
# ============================================================================

@pytest.fixture
def table(db):
    """Available table for four"""
    return DiningTable.objects.create(table_number='T1', capacity=4)


@pytest.fixture
def occupied_table(db):
    """Table that already has guests"""
    return DiningTable.objects.create(
        table_number='T2',
        capacity=2,
        status=DiningTable.Status.OCCUPIED,
    )


# ============================================================================
# ORDER FIXTURES
# ============================================================================

@pytest.fixture
def order_lines(product_a, product_b):
    """Two Burgers and one Salad: subtotal 24.98"""
    return [
        {'product_id': product_a.id, 'quantity': 2},
        {'product_id': product_b.id, 'quantity': 1},
    ]


@pytest.fixture
def order(waiter_user, table, order_lines):
    """Open order on table T1 with the standard two lines"""
    from orders.services import OrderService
    return OrderService.create_order(items=order_lines, user=waiter_user, table_id=table.id)


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client_factory():
    """
    Factory fixture for creating authenticated API clients.

    Usage:
        def test_create_order(api_client_factory, waiter_user):
            client = api_client_factory(waiter_user)
            response = client.post('/api/orders/', {...}, format='json')
    """
    from rest_framework.test import APIClient
    from users.services import UserService

    def _create_client(user=None):
        client = APIClient()
        if user is not None:
            tokens = UserService.generate_tokens_for_user(user)
            client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        return client

    return _create_client


@pytest.fixture
def waiter_client(api_client_factory, waiter_user):
    return api_client_factory(waiter_user)


@pytest.fixture
def manager_client(api_client_factory, manager_user):
    return api_client_factory(manager_user)


@pytest.fixture
def admin_client_api(api_client_factory, admin_user):
    return api_client_factory(admin_user)
