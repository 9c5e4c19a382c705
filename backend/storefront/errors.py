"""
Domain errors raised by the crud layer when a precondition fails.

The HTTP layer maps each class to a status code (see ``status_code``).
"""


class StoreError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StoreError):
    status_code = 404


class InsufficientStockError(StoreError):
    status_code = 409

    def __init__(self, product_id: int, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for product {product_id}: "
            f"requested {requested}, available {available}"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class DuplicateEntryError(StoreError):
    status_code = 409


class InactiveProductError(StoreError):
    status_code = 409


class NotEligibleError(StoreError):
    status_code = 403


class InvalidTransitionError(StoreError):
    status_code = 409

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot move order from '{current}' to '{requested}'")
        self.current = current
        self.requested = requested
