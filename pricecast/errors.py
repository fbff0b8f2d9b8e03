"""
Error taxonomy shared by the forecasting pipeline.

Errors raised by torch while building, fitting or predicting are not wrapped;
they reach the caller unchanged.
"""


class PricecastError(Exception):
    """Base class for errors raised by pricecast itself."""


class NetworkError(PricecastError):
    """A price or metadata request failed."""


class DataError(PricecastError, ValueError):
    """Not enough (or unusable) data to build windows or train."""


class ConfigurationError(PricecastError, ValueError):
    """Declared shapes or settings are inconsistent."""
