"""Error taxonomy for the admin panel.

Only ``ValidationError`` (and Shopify ``userErrors``, which are data rather
than exceptions) drive field-level messages. Everything else collapses to a
generic message on the page, with the detail kept in the logs.
"""

from .product import UserError


class ProductAdminError(Exception):
    """Base class for every error raised by the admin panel."""


class AuthError(ProductAdminError):
    """Raised when no authorized Shopify session can be established."""


class ValidationError(ProductAdminError):
    """Raised when submitted form fields are missing or malformed."""

    def __init__(self, errors: list[UserError]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors if e.field]


class IntegrityError(ProductAdminError):
    """Raised when Shopify succeeds but returns a shape the caller cannot use."""


class TransportFault(ProductAdminError):
    """Raised on network, HTTP, or parsing failures talking to Shopify."""
