class DomainError(Exception):
    """Base exception for ledger failures."""


class StorageError(DomainError):
    """Raised when the durable store rejects a read or write."""


class StorageUnavailableError(StorageError):
    """Raised when the durable store cannot be opened or is not initialized."""


class ImportIOError(DomainError):
    """Raised when an import stops early.

    ``imported`` holds the number of rows processed before the failure; those
    rows stay in the ledger.
    """

    def __init__(self, message: str, *, imported: int = 0):
        super().__init__(message)
        self.imported = int(imported)
