class RecipeSyncError(Exception):
    pass


class NetworkError(RecipeSyncError):
    """Transport failure, timeout or non-2xx response."""


class DecodeError(RecipeSyncError):
    """Response body did not have the expected shape."""


class EmptyResultError(RecipeSyncError):
    """A well-formed response held no content where some was expected."""


class PersistenceError(RecipeSyncError):
    """Local storage could not be read or written."""
