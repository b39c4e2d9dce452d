"""
Restaurants services package.

- MenuCatalogService: resolves requested menu items to orderable, priced lines
- MenuImportService: parses and validates menu CSV files, replaces a menu atomically
- MenuService: owner-scoped menu reads and deletion
"""

from .catalog_service import MenuCatalogService, ResolvedLine
from .menu_import_service import MenuImportService
from .menu_service import MenuService

__all__ = [
    'MenuCatalogService',
    'ResolvedLine',
    'MenuImportService',
    'MenuService',
]
