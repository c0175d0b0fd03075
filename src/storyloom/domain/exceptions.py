"""Domain exceptions."""


class StoryloomError(Exception):
    """Base exception for Storyloom."""

    pass


class PermissionDenied(StoryloomError):
    """User does not have permission for the requested action."""

    pass


class NotFound(StoryloomError):
    """Requested resource was not found."""

    pass


class ValidationError(StoryloomError):
    """Validation failed for input data."""

    pass


class InvalidInviteState(StoryloomError):
    """Invite is not in a state that allows the requested transition."""

    pass


class TransientWriteFailure(StoryloomError):
    """Write to the content store failed; retrying later may succeed."""

    pass
