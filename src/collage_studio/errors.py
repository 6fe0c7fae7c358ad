"""Exceptions raised for misuse of a collage session."""


class CollageError(Exception):
    """Base class for collage session programming errors."""


class ScopeReleasedError(CollageError):
    """Raised when registering with a subscription scope after release."""


class NothingToSaveError(CollageError):
    """Raised when saving without a composed preview."""


class CapacityReachedError(CollageError):
    """Raised when starting photo selection with a full collage."""
