"""
Exception types raised by the pressure-design core.

Fatal lookup and input failures are raised; advisory conditions are never
raised and end up in ``DesignResult.warnings`` instead.
"""


class PressureDesignError(Exception):
    """Base class for all pressure-design failures."""


class NotFoundError(PressureDesignError, LookupError):
    """A reference table has no data for the requested key.

    Attributes:
        lookup: Which lookup failed ("material", "outside_diameter", "schedule")
        key: The key that was looked up
    """

    def __init__(self, lookup: str, key, message: str = None):
        self.lookup = lookup
        self.key = key
        if message is None:
            message = f"No {lookup.replace('_', ' ')} data for '{key}'"
        super().__init__(message)


class InvalidInputError(PressureDesignError, ValueError):
    """Input (or reference data) that cannot be interpreted."""

    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message)
