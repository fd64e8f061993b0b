"""Custom exception classes for the Registry."""


class RegistryException(Exception):
    """
    Base exception class for all caller-facing registry errors.
    """
    pass


class InvalidInputError(RegistryException):
    """
    Raised when a request is malformed (e.g., non-positive size, absent owner).
    """
    pass


class DuplicateEntryError(RegistryException):
    """
    Raised when inserting a descriptor whose key is already registered.
    """
    pass


class NotFoundError(RegistryException):
    """
    Raised when a key or name has no live descriptor.
    """
    pass


class UnauthorizedError(RegistryException):
    """
    Raised when the caller is not the owner of the descriptor being mutated.
    """
    pass


class UnsupportedOperationError(RegistryException):
    """
    Raised on any attempt to transfer value into the registry.
    """
    pass


class InvalidIdentityError(RegistryException):
    """
    Raised when a caller credential is missing or cannot be resolved to an identity.
    """
    pass


class InvariantViolation(Exception):
    """
    Raised when the registry detects that its own internal state broke an invariant.

    Not a RegistryException: this signals a defect in the implementation, not a
    bad request, and must never be handled as an ordinary caller error.
    """
    pass
