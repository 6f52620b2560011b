class DomainError(Exception):
    """Base class for errors the API reports back to the caller as-is."""


class ValidationError(DomainError):
    """Malformed month/date, unknown category, negative unit count, ..."""


class AuthenticationError(DomainError):
    pass


class AuthorizationError(DomainError):
    """Wrong role for the action (employee deciding leave, deleting an admin)."""


class NotFoundError(DomainError):
    """Referenced employee or leave request does not exist."""


class ConflictError(DomainError):
    """Duplicate piecework entry, duplicate username, or leave already decided."""
