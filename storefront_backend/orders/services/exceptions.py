# orders/services/exceptions.py

"""
CHECKOUT / ORDER SERVICE ERRORS

Centralized domain errors for checkout materialization and order management.
Each error carries the HTTP status + machine code the API layer responds with.
"""


class CheckoutError(Exception):
    """Base exception for all checkout / order failures."""

    status_code = 400
    code = "CHECKOUT_ERROR"
    retryable = False

    def __init__(self, message: str = "", *, details=None):
        super().__init__(message)
        self.message = message or self.__class__.__doc__ or ""
        self.details = details

    def to_payload(self) -> dict:
        payload = {"error": self.message, "code": self.code}
        if self.details:
            payload["details"] = self.details
        return payload


class CheckoutValidationError(CheckoutError):
    """Raised when the checkout payload is incomplete or inconsistent."""

    status_code = 400
    code = "VALIDATION_ERROR"


class CatalogConfigurationError(CheckoutError):
    """Raised when a product must be synthesized but no category exists."""

    status_code = 500
    code = "CATALOG_NOT_CONFIGURED"


class VariantUnavailableError(CheckoutError):
    """Raised when every variant of a product is archived or out of stock."""

    status_code = 409
    code = "VARIANT_UNAVAILABLE"


class OrderPersistenceError(CheckoutError):
    """Raised when the order graph cannot be written."""

    status_code = 500
    code = "ORDER_PERSISTENCE_FAILED"


class TransientPersistenceError(OrderPersistenceError):
    """Database temporarily unavailable. Safe to retry."""

    status_code = 503
    code = "ORDER_PERSISTENCE_UNAVAILABLE"
    retryable = True


class PermanentPersistenceError(OrderPersistenceError):
    """Integrity / programming error. Retrying will not help."""

    status_code = 500
    code = "ORDER_PERSISTENCE_FAILED"


class InvalidOrderTransitionError(CheckoutError):
    """Raised when an admin status change is not an allowed transition."""

    status_code = 400
    code = "INVALID_STATUS_TRANSITION"
