"""TemplateLibrary - the persisted template collection and its operations."""

import json
import logging
import random
import string
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .demo import CATEGORIES, DEMO_TEMPLATES
from .exceptions import (
    InvalidImportFormatError,
    InvalidImportJSONError,
    TemplateImportError,
)
from .models import DEFAULT_CATEGORY, Category, Template
from .storage import JsonFileKeyValueStore, KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "autoreply-templates"
FAVORITES_KEY = "autoreply-favorites"
RECENT_KEY = "autoreply-recent"
DEMO_LOADED_KEY = "autoreply-demo-loaded"

MAX_RECENT = 5

EXPORT_FILE_NAME = "autoreply-templates.json"

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_template_id() -> str:
    """Generate a unique template id: template-<epoch ms>-<9 base36 chars>."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"template-{int(time.time() * 1000)}-{suffix}"


def parse_template_import(json_string: str) -> list[Template]:
    """Parse an exported template array.

    Missing ids are generated and missing categories default to general.

    Args:
        json_string: JSON text, expected to be an array of template objects.

    Returns:
        The parsed templates.

    Raises:
        InvalidImportJSONError: If the text is not valid JSON.
        InvalidImportFormatError: If the JSON is not an array of objects, or an
            object has a non-string field or triggers that are not a list of strings.
    """
    try:
        imported = json.loads(json_string)
    except (TypeError, ValueError) as e:
        raise InvalidImportJSONError(str(e)) from e

    if not isinstance(imported, list):
        raise InvalidImportFormatError(f"expected an array, got {type(imported).__name__}")

    templates = []
    for index, item in enumerate(imported):
        if not isinstance(item, dict):
            raise InvalidImportFormatError(f"item {index} is not an object")
        try:
            template = Template.from_dict(
                {**item, "id": item.get("id") or generate_template_id()}
            )
        except TypeError as e:
            raise InvalidImportFormatError(f"item {index}: {e}") from e
        templates.append(template)
    return templates


@dataclass
class ImportResult:
    """Outcome of a bulk template import.

    Attributes:
        success: Whether the templates were added
        count: Number of templates added
        error: User-visible failure reason ("Invalid JSON" or "Invalid format")
    """

    success: bool
    count: int = 0
    error: Optional[str] = None


class TemplateStore(ABC):
    """Interface for the template collection the matcher reads from."""

    @property
    @abstractmethod
    def templates(self) -> list[Template]:
        """Current templates, in library order."""
        pass

    @property
    @abstractmethod
    def categories(self) -> list[Category]:
        """Available categories."""
        pass

    @abstractmethod
    def add_template(self, fields: dict[str, Any]) -> Template:
        pass

    @abstractmethod
    def update_template(self, template_id: str, **updates: Any) -> Optional[Template]:
        pass

    @abstractmethod
    def delete_template(self, template_id: str) -> None:
        pass

    @abstractmethod
    def duplicate_template(self, template_id: str) -> Optional[Template]:
        pass

    @abstractmethod
    def toggle_favorite(self, template_id: str) -> None:
        pass

    @abstractmethod
    def add_to_recent(self, template_id: str) -> None:
        pass


class TemplateLibrary(TemplateStore):
    """Template collection persisted to a key-value store.

    Templates, favorite ids and recently used ids are kept as three
    independent JSON blobs. Every mutation is written through immediately.
    On first use (no stored templates, demo never loaded) the library is
    seeded with the demo templates.

    Example usage:
        library = TemplateLibrary()
        result = find_matching_templates(email_text, library.templates)
        library.add_to_recent(result.matches[0].template.id)
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        categories: Optional[list[Category]] = None,
    ):
        """Initialize the library and load persisted state.

        Args:
            store: Blob storage backend. Defaults to JsonFileKeyValueStore.
            categories: Category set. Defaults to the built-in categories.
        """
        self._store = store or JsonFileKeyValueStore()
        self._categories = list(categories or CATEGORIES)
        self._templates: list[Template] = []
        self._favorites: list[str] = []
        self._recent: list[str] = []
        self._load()

    # ==================== Persistence ====================

    def _load_list(self, key: str) -> Optional[list]:
        raw = self._store.get(key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Failed to parse stored '%s', starting empty", key)
            return []
        if not isinstance(data, list):
            logger.warning("Stored '%s' is not a list, starting empty", key)
            return []
        return data

    def _load(self) -> None:
        self._favorites = [str(i) for i in self._load_list(FAVORITES_KEY) or []]
        self._recent = [str(i) for i in self._load_list(RECENT_KEY) or []]

        stored = self._load_list(STORAGE_KEY)
        if stored is not None:
            self._templates = []
            for item in stored:
                try:
                    self._templates.append(Template.from_dict(item))
                except (KeyError, TypeError, AttributeError):
                    logger.warning("Skipping malformed stored template: %r", item)
        elif self._store.get(DEMO_LOADED_KEY) is None:
            self._templates = _demo_copy()
            self._save_templates()
            self._store.set(DEMO_LOADED_KEY, "true")
            logger.info("Seeded library with %d demo templates", len(self._templates))

        logger.debug(
            "Loaded %d templates, %d favorites, %d recent",
            len(self._templates), len(self._favorites), len(self._recent),
        )

    def _save_templates(self) -> None:
        self._store.set(STORAGE_KEY, json.dumps([t.to_dict() for t in self._templates]))

    def _save_favorites(self) -> None:
        self._store.set(FAVORITES_KEY, json.dumps(self._favorites))

    def _save_recent(self) -> None:
        self._store.set(RECENT_KEY, json.dumps(self._recent))

    # ==================== Read access ====================

    @property
    def templates(self) -> list[Template]:
        return self._templates.copy()

    @property
    def categories(self) -> list[Category]:
        return self._categories.copy()

    @property
    def favorites(self) -> list[str]:
        return self._favorites.copy()

    def get_template(self, template_id: str) -> Optional[Template]:
        return next((t for t in self._templates if t.id == template_id), None)

    def get_category(self, category_id: str) -> Category:
        """Look up a category, falling back to General for unknown ids."""
        for category in self._categories:
            if category.id == category_id:
                return category
        return Category(id=DEFAULT_CATEGORY, name="General", color="#8b5cf6")

    def is_favorite(self, template_id: str) -> bool:
        return template_id in self._favorites

    def get_favorites(self) -> list[Template]:
        return [t for t in self._templates if t.id in self._favorites]

    def get_recent(self) -> list[Template]:
        """Recently used templates, most recent first.

        Ids whose template has since been removed are skipped.
        """
        recent = []
        for template_id in self._recent:
            template = self.get_template(template_id)
            if template is not None:
                recent.append(template)
        return recent

    def get_by_category(self, category_id: Optional[str]) -> list[Template]:
        if not category_id or category_id == "all":
            return self.templates
        return [t for t in self._templates if t.category == category_id]

    def search_templates(self, query: str) -> list[Template]:
        """Case-insensitive search over name, triggers and body."""
        if not query.strip():
            return self.templates
        lower = query.lower()
        return [
            t for t in self._templates
            if lower in t.name.lower()
            or any(lower in trigger.lower() for trigger in t.triggers)
            or lower in t.body.lower()
        ]

    # ==================== Mutations ====================

    def add_template(self, fields: dict[str, Any]) -> Template:
        """Add a new template under a freshly generated id.

        Args:
            fields: Template fields (name, category, triggers, body).
                Any id in fields is replaced.

        Returns:
            The stored template.
        """
        template = Template.from_dict({**fields, "id": generate_template_id()})
        self._templates.append(template)
        self._save_templates()
        logger.info("Added template '%s' (%s)", template.name, template.id)
        return template

    def update_template(self, template_id: str, **updates: Any) -> Optional[Template]:
        """Apply field updates to a template.

        Returns:
            The updated template, or None if no template has that id.
        """
        template = self.get_template(template_id)
        if template is None:
            logger.warning("Cannot update unknown template %s", template_id)
            return None

        data = template.to_dict()
        data.update(updates)
        data["id"] = template_id
        updated = Template.from_dict(data)
        index = self._templates.index(template)
        self._templates[index] = updated
        self._save_templates()
        return updated

    def delete_template(self, template_id: str) -> None:
        """Remove a template along with its favorite and recent entries."""
        self._templates = [t for t in self._templates if t.id != template_id]
        self._favorites = [fid for fid in self._favorites if fid != template_id]
        self._recent = [rid for rid in self._recent if rid != template_id]
        self._save_templates()
        self._save_favorites()
        self._save_recent()

    def duplicate_template(self, template_id: str) -> Optional[Template]:
        """Copy a template under a new id with " (Copy)" appended to its name."""
        original = self.get_template(template_id)
        if original is None:
            return None

        data = original.to_dict()
        data["id"] = generate_template_id()
        data["name"] = f"{original.name} (Copy)"
        duplicate = Template.from_dict(data)
        self._templates.append(duplicate)
        self._save_templates()
        return duplicate

    def toggle_favorite(self, template_id: str) -> None:
        if template_id in self._favorites:
            self._favorites = [fid for fid in self._favorites if fid != template_id]
        else:
            self._favorites.append(template_id)
        self._save_favorites()

    def add_to_recent(self, template_id: str) -> None:
        """Record a template as used: moved to the front, capped at MAX_RECENT."""
        filtered = [rid for rid in self._recent if rid != template_id]
        self._recent = [template_id, *filtered][:MAX_RECENT]
        self._save_recent()

    def reset_to_demo(self) -> None:
        """Replace all templates with the demo set and clear favorites and recent."""
        self._templates = _demo_copy()
        self._favorites = []
        self._recent = []
        self._save_templates()
        self._save_favorites()
        self._save_recent()
        logger.info("Library reset to %d demo templates", len(self._templates))

    # ==================== Import / Export ====================

    def export_templates(self) -> str:
        """Serialize all templates as pretty-printed JSON."""
        return json.dumps([t.to_dict() for t in self._templates], indent=2)

    def export_to_file(self, path: Optional[Path] = None) -> Path:
        """Write the export JSON to a file.

        Args:
            path: Target file. Defaults to autoreply-templates.json in the
                current directory.

        Returns:
            The path written.
        """
        target = Path(path) if path else Path(EXPORT_FILE_NAME)
        target.write_text(self.export_templates(), encoding="utf-8")
        logger.info("Exported %d templates to %s", len(self._templates), target)
        return target

    def import_templates(self, json_string: str) -> ImportResult:
        """Append templates from exported JSON.

        Failures are reported in the result and leave the library untouched.
        """
        try:
            imported = parse_template_import(json_string)
        except TemplateImportError as e:
            logger.warning("Template import rejected: %s (%s)", e.reason, e.detail)
            return ImportResult(success=False, error=e.reason)

        self._templates.extend(imported)
        self._save_templates()
        logger.info("Imported %d templates", len(imported))
        return ImportResult(success=True, count=len(imported))


def _demo_copy() -> list[Template]:
    return [Template.from_dict(t.to_dict()) for t in DEMO_TEMPLATES]
