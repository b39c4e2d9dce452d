"""
Orders services package.

- OwnershipService: restaurant -> table -> order scoping checks
- OrderService: order lifecycle (create, read, add items, status, cancel)
- TableService: table listing with lazy generation
"""

from .ownership_service import OwnershipService
from .order_service import OrderService
from .table_service import TableService

__all__ = [
    'OwnershipService',
    'OrderService',
    'TableService',
]
