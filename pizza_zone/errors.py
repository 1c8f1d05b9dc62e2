"""
Zone Errors
===========

Exception types shared by every layer of the delivery zone check.

- ZoneConfigError: configuration is invalid (raised at load/construction time)
- ZoneInputError: a per-query input violates the caller contract
- LocationUnavailableError: a location source has nothing to offer
"""


class ZoneConfigError(ValueError):
    """Raised when polygon, restaurant or time-table configuration is invalid"""
    pass


class ZoneInputError(ValueError):
    """Raised when a query input (point, distance) is out of range or non-finite"""
    pass


class LocationUnavailableError(Exception):
    """Raised by a location source that cannot provide a sample"""
    pass
