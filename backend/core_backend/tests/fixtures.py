"""
Shared test fixtures for all backend tests.

Two owners, each with one restaurant, so every suite can check that ids from
one restaurant are rejected under the other.
"""
import pytest
from decimal import Decimal

from users.models import User
from restaurants.models import Restaurant, Table, MenuCategory, MenuItem
from orders.models import Order, OrderItem


# ============================================================================
# USER FIXTURES
# ============================================================================

@pytest.fixture
def owner_a(db):
    """Verified owner of restaurant A"""
    return User.objects.create_user(
        email='owner@pizza.com',
        password='password123',
        first_name='Ana',
        last_name='Pizza',
        email_verified=True,
    )


@pytest.fixture
def owner_b(db):
    """Verified owner of restaurant B"""
    return User.objects.create_user(
        email='owner@burger.com',
        password='password123',
        first_name='Bogdan',
        last_name='Burger',
        email_verified=True,
    )


# ============================================================================
# RESTAURANT & TABLE FIXTURES
# ============================================================================

@pytest.fixture
def restaurant_a(owner_a):
    """Restaurant A (Pizza Place) with 4 tables configured, none generated yet"""
    return Restaurant.objects.create(
        owner=owner_a,
        name='Pizza Place',
        description='Wood-fired pizza',
        number_of_tables=4,
        phone='+37360000001',
        address='1 Main Street',
    )


@pytest.fixture
def restaurant_b(owner_b):
    """Restaurant B (Burger Joint) with 2 tables configured"""
    return Restaurant.objects.create(
        owner=owner_b,
        name='Burger Joint',
        number_of_tables=2,
    )


@pytest.fixture
def table_a(restaurant_a):
    """Table 1 of restaurant A"""
    return Table.objects.create(restaurant=restaurant_a, table_number=1)


@pytest.fixture
def table_a2(restaurant_a):
    """Table 2 of restaurant A"""
    return Table.objects.create(restaurant=restaurant_a, table_number=2)


@pytest.fixture
def table_b(restaurant_b):
    """Table 1 of restaurant B"""
    return Table.objects.create(restaurant=restaurant_b, table_number=1)


# ============================================================================
# MENU FIXTURES
# ============================================================================

@pytest.fixture
def category_a(restaurant_a):
    return MenuCategory.objects.create(restaurant=restaurant_a, name='Pizza')


@pytest.fixture
def category_b(restaurant_b):
    return MenuCategory.objects.create(restaurant=restaurant_b, name='Burgers')


@pytest.fixture
def menu_item_a(category_a):
    """Available item of restaurant A at 12.99 USD"""
    return MenuItem.objects.create(
        category=category_a,
        name='Margherita',
        description='Tomato, mozzarella, basil',
        price=Decimal('12.99'),
        currency='USD',
        tags=['vegetarian'],
        allergens=['gluten', 'dairy'],
    )


@pytest.fixture
def menu_item_a2(category_a):
    """Second available item of restaurant A at 8.50 USD"""
    return MenuItem.objects.create(
        category=category_a,
        name='Focaccia',
        price=Decimal('8.50'),
        currency='USD',
    )


@pytest.fixture
def unavailable_item_a(category_a):
    """Item of restaurant A that cannot be ordered"""
    return MenuItem.objects.create(
        category=category_a,
        name='Truffle Pizza',
        price=Decimal('24.00'),
        currency='USD',
        is_available=False,
    )


@pytest.fixture
def menu_item_b(category_b):
    """Available item of restaurant B"""
    return MenuItem.objects.create(
        category=category_b,
        name='Cheeseburger',
        price=Decimal('9.99'),
        currency='USD',
    )


# ============================================================================
# ORDER FIXTURES
# ============================================================================

@pytest.fixture
def order_a(table_a, menu_item_a):
    """PENDING order at table A1: 2 x Margherita (25.98 USD)"""
    order = Order.objects.create(
        table=table_a,
        total=Decimal('25.98'),
        currency='USD',
    )
    OrderItem.objects.create(
        order=order,
        menu_item=menu_item_a,
        name=menu_item_a.name,
        quantity=2,
        price=menu_item_a.price,
    )
    return order


@pytest.fixture
def order_b(table_b, menu_item_b):
    """PENDING order at table B1: 1 x Cheeseburger"""
    order = Order.objects.create(
        table=table_b,
        total=Decimal('9.99'),
        currency='USD',
    )
    OrderItem.objects.create(
        order=order,
        menu_item=menu_item_b,
        name=menu_item_b.name,
        quantity=1,
        price=menu_item_b.price,
    )
    return order
