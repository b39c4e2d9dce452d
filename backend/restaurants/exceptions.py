"""
Custom exceptions for the menu catalog.
"""
from core_backend.exceptions import BadRequestError


class MenuItemsUnavailableError(BadRequestError):
    """Raised when requested menu items cannot be ordered from a restaurant."""

    def __init__(self, missing_ids, message=None):
        self.missing_ids = list(missing_ids)
        if message is None:
            missing = ", ".join(str(item_id) for item_id in self.missing_ids)
            message = f"Menu items not found or unavailable in this restaurant: {missing}"
        super().__init__(message)


class MenuValidationError(BadRequestError):
    """Raised when an uploaded menu has invalid rows. Carries every error found."""

    def __init__(self, errors, message=None):
        self.errors = list(errors)
        if message is None:
            message = f"Menu file has {len(self.errors)} invalid value(s)"
        super().__init__(message)
