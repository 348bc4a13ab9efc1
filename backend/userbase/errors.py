class UserbaseError(Exception):
    """Base class for errors the service reports to its callers."""


class ValidationError(UserbaseError):
    """Malformed or missing input."""


class Conflict(UserbaseError):
    """A uniqueness constraint rejected the write."""


class StoreUnavailable(UserbaseError):
    """The store cannot be reached or has not been migrated."""
