"""Exceptions raised by the classroom runtime."""


class ProgressError(Exception):
    """Base class for progress store errors."""


class InvalidArgument(ProgressError, ValueError):
    """Raised for a malformed quiz result or a module id absent from the catalog."""


class CorruptPersistedState(ProgressError):
    """Raised when a persisted progress document cannot be decoded."""


class MissingCatalogEntry(ProgressError, KeyError):
    """Raised when a module id has no catalog entry."""

    def __init__(self, module_id: str):
        super().__init__(module_id)
        self.module_id = module_id

    def __str__(self) -> str:
        return f"Module not found in catalog: {self.module_id}"


class CatalogError(Exception):
    """Raised when the module catalog file is missing or invalid."""
