"""Exceptions raised by the storage and catalog layers."""


class StorageError(Exception):
    """Base class for durable storage failures."""

    def __init__(self, key: str, message: str):
        super().__init__(f"{key}: {message}")
        self.key = key


class HydrationError(StorageError):
    """The stored document exists but cannot be read or decoded."""


class PersistenceError(StorageError):
    """The document could not be written."""


class CatalogError(Exception):
    """The bundled exercise catalog is missing or malformed."""
