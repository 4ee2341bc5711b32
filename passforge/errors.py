"""
Exceptions raised by passforge.

The generator and the strength estimator never raise; only the
collaborators around them (the history store) do.
"""


class PassforgeError(Exception):
    """Base class for passforge errors."""


class StoreError(PassforgeError):
    """History / favorites file could not be read, decrypted or written."""
