"""Template library: models, demo data and persistence.

Public API:
    - Template, Category: Data models
    - CATEGORIES, DEMO_TEMPLATES: Built-in data
    - TemplateStore: Interface consumed by callers of the matcher
    - TemplateLibrary: Persisted implementation with import/export
    - ImportResult: Outcome of a bulk import
    - KeyValueStore, InMemoryKeyValueStore, JsonFileKeyValueStore: Blob storage
    - TemplateStoreError, StorageError, TemplateImportError,
      InvalidImportJSONError, InvalidImportFormatError: Exceptions
"""

from .demo import CATEGORIES, DEMO_TEMPLATES
from .exceptions import (
    InvalidImportFormatError,
    InvalidImportJSONError,
    StorageError,
    TemplateImportError,
    TemplateStoreError,
)
from .library import (
    ImportResult,
    TemplateLibrary,
    TemplateStore,
    generate_template_id,
    parse_template_import,
)
from .models import DEFAULT_CATEGORY, Category, Template
from .storage import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore

__all__ = [
    "Template",
    "Category",
    "DEFAULT_CATEGORY",
    "CATEGORIES",
    "DEMO_TEMPLATES",
    "TemplateStore",
    "TemplateLibrary",
    "ImportResult",
    "generate_template_id",
    "parse_template_import",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "TemplateStoreError",
    "StorageError",
    "TemplateImportError",
    "InvalidImportJSONError",
    "InvalidImportFormatError",
]
