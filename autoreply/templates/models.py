"""Data models for reply templates and their categories."""

from dataclasses import dataclass, field
from typing import Any

DEFAULT_CATEGORY = "general"


@dataclass
class Category:
    """A static grouping for templates.

    Attributes:
        id: Category identifier referenced by Template.category
        name: Display name
        color: Hex color used when rendering the category
    """

    id: str
    name: str
    color: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize category to dictionary."""
        return {"id": self.id, "name": self.name, "color": self.color}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        """Deserialize category from dictionary."""
        return cls(id=data["id"], name=data["name"], color=data["color"])


@dataclass
class Template:
    """A reply template with the trigger phrases that suggest it.

    Attributes:
        id: Unique, stable template identifier
        name: Display name
        category: Category id (see Category)
        triggers: Keywords or short phrases; a template without triggers never matches
        body: Reply text containing zero or more {{variableName}} placeholders
    """

    id: str
    name: str
    category: str = DEFAULT_CATEGORY
    triggers: list[str] = field(default_factory=list)
    body: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize template to the stored JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "triggers": list(self.triggers),
            "body": self.body,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Template":
        """Deserialize template from dictionary.

        Missing optional fields fall back to their defaults; an empty
        category becomes the general category.

        Raises:
            KeyError: If id is missing.
            TypeError: If name, category or body is not a string, or
                triggers is not a list of strings.
        """
        triggers = data.get("triggers") or []
        if not isinstance(triggers, list) or not all(isinstance(t, str) for t in triggers):
            raise TypeError(f"triggers must be a list of strings, got {triggers!r}")

        template = cls(
            id=data["id"],
            name=data.get("name", ""),
            category=data.get("category") or DEFAULT_CATEGORY,
            triggers=list(triggers),
            body=data.get("body", ""),
        )
        for attr in ("id", "name", "category", "body"):
            if not isinstance(getattr(template, attr), str):
                raise TypeError(f"{attr} must be a string")
        return template
