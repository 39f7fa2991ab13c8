"""Error types raised by the storefront services.

The API layer maps each type to an HTTP status code; see ``app.main``.
"""


class StorefrontError(Exception):
    """Base class for all storefront errors."""
    status_code = 400


class InvalidArgumentError(StorefrontError, ValueError):
    """Malformed input rejected at the call boundary (bad bounds, unknown sort key)."""
    status_code = 400


class NotFoundError(StorefrontError):
    """Referenced product, order, user or record does not exist."""
    status_code = 404


class AuthenticationError(StorefrontError):
    """Login failed or the action needs a logged-in user."""
    status_code = 401


class PermissionDeniedError(StorefrontError):
    """Logged-in user lacks the role required for the action."""
    status_code = 403


class ConflictError(StorefrontError):
    """Action clashes with existing state (duplicate email, protected account)."""
    status_code = 409


class EmptyCartError(StorefrontError):
    """Checkout attempted with nothing in the cart."""
    status_code = 400


class ProviderError(StorefrontError):
    """The external generative-AI provider failed or returned garbage."""
    status_code = 502
