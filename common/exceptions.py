"""Domain errors shared by the cart, orders and accounts services.

Services raise these; views translate them into HTTP responses. None of them
is retried automatically.
"""


class DomainError(Exception):
    """Base class for errors raised by service functions."""

    default_detail = "Unable to complete the request."

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(DomainError):
    """Malformed or empty input, e.g. an order without line items."""

    default_detail = "Invalid input."


class AuthorizationError(DomainError):
    """The actor is authenticated but not allowed to perform the transition."""

    default_detail = "Not authorized."


class InvalidStateError(DomainError):
    """The transition is not allowed from the entity's current state."""

    default_detail = "Invalid state for this operation."


class NotFoundError(DomainError):
    """A referenced order, cart or product does not exist."""

    default_detail = "Not found."


class UpstreamError(DomainError):
    """An external collaborator (identity, email, blob storage) failed."""

    default_detail = "Upstream service unavailable."
