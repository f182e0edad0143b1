"""Domain errors raised by the services."""


class PcfTrackerError(Exception):
    """Base class for application errors."""


class NotFoundError(PcfTrackerError):
    """A referenced food, intake or target does not exist for the user."""


class ValidationError(PcfTrackerError):
    """A request cannot be applied as given."""


class PersistenceError(PcfTrackerError):
    """The storage backend failed to read or write a record."""
