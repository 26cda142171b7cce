"""Exceptions for the template store."""


class TemplateStoreError(Exception):
    """Base exception for template store errors."""

    pass


class StorageError(TemplateStoreError):
    """Raised when a persisted blob cannot be read or written."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Storage failure for '{key}': {reason}")


class TemplateImportError(TemplateStoreError):
    """Raised when imported template JSON is rejected.

    The message is the user-visible failure reason.
    """

    reason = "Import failed"

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(self.reason)


class InvalidImportJSONError(TemplateImportError):
    """Raised when the import payload is not valid JSON."""

    reason = "Invalid JSON"


class InvalidImportFormatError(TemplateImportError):
    """Raised when the import payload parses but is not an array of objects."""

    reason = "Invalid format"
