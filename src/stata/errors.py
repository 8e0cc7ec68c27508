"""
Exceptions raised by the stata adapter.

Unsupported conversions and unknown rates are not errors: they are reported
as "no price" (None). Infra failures surface as BatchError or StorageError
from the layers that own them.
"""


class StataError(Exception):
    """Base exception for the stata adapter."""
    pass


class EncodingError(StataError):
    """Raised when quote data cannot be turned into a call payload."""
    pass
