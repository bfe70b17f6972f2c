# exceptions.py
from typing import Optional


class ApiStorageError(Exception):
    """Base error for every failure raised by the remote storage adapter."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self):
        if self.status_code is None:
            return self.message
        return f"{self.message} (status={self.status_code})"


class TransportError(ApiStorageError):
    """The request never produced a usable envelope (network failure, bad status, malformed body)."""
    pass


class RemoteOperationError(ApiStorageError):
    """The remote store answered, but reported that the operation failed."""
    pass


class UnsupportedOperationError(ApiStorageError):
    """The operation has no counterpart on the remote API."""
    pass


class InvalidContentsError(ApiStorageError):
    """The contents cannot be carried in a JSON body (e.g. bytes that are not UTF-8)."""
    pass
