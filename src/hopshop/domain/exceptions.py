"""Domain-level exceptions.

All failures the vendor can see are expressed as subclasses of
DomainException so the CLI layer can catch them uniformly and display
user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class GatewayError(DomainException):
    """The remote API could not be reached or answered with an error."""


class LoadFailure(DomainException):
    """The order or the catalog could not be loaded. Not retried."""


class SaveFailure(DomainException):
    """The order could not be saved. Pending edits are kept for a retry."""


class AuthenticationError(DomainException):
    """Login was rejected or the user is not allowed on the dashboard."""


class SessionNotLoadedError(DomainException):
    """Session identity was read before ``load()`` or after ``clear()``."""
