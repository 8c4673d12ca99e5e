"""Exceptions raised by the repository layer."""


class StoreError(RuntimeError):
    """Base exception for document store failures the repositories recognize."""


class DocumentExistsError(StoreError):
    """Raised when inserting a document whose key is already taken."""


class DocumentNotFoundError(StoreError):
    """Raised when replacing a document that no longer exists."""


class VersionConflictError(StoreError):
    """Raised when a replace is based on a stale read of the document."""


class TableNotFoundError(StoreError):
    """Raised when the backing table does not exist."""
