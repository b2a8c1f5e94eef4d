"""Domain-level exceptions.

The pricing, stock and report functions never raise for business outcomes;
those are returned as result objects.  These exceptions cover the shell around
them: bad input at the boundary, unknown entities and unreadable snapshots.
The CLI layer catches DomainException uniformly and displays the message.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """An input was rejected at the boundary (wrong type, unparsable value)."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class RepositoryError(DomainException):
    """A data snapshot could not be read or contains a malformed record."""
