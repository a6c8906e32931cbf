"""Errors raised by content services."""


class ContentError(Exception):
    """Base class for content service failures."""
    pass


class NotFoundError(ContentError):
    """Raised when a referenced article, image or user does not exist."""
    pass


class PermissionDeniedError(ContentError):
    """Raised when the current user may not perform an action."""
    pass
