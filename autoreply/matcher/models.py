"""Result models for keyword detection and template matching."""

from dataclasses import dataclass, field
from typing import Any, Optional

from autoreply.templates.models import Template


@dataclass
class MatchEntry:
    """A template scored against the detected keywords.

    Attributes:
        template: The matched template (same object as passed in)
        score: Fraction of the template's triggers that were detected, in (0, 1]
        matched_triggers: The template's triggers that were detected, in template order
    """

    template: Template
    score: float
    matched_triggers: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "template_id": self.template.id,
            "template_name": self.template.name,
            "score": self.score,
            "matched_triggers": list(self.matched_triggers),
        }


@dataclass
class DetectionResult:
    """Outcome of matching one email against a template library.

    Attributes:
        keywords: Detected trigger phrases, in first-discovered order, without duplicates
        matches: Matching templates, highest score first
    """

    keywords: list[str] = field(default_factory=list)
    matches: list[MatchEntry] = field(default_factory=list)

    @property
    def top_match(self) -> Optional[MatchEntry]:
        return self.matches[0] if self.matches else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "keywords": list(self.keywords),
            "matches": [m.to_dict() for m in self.matches],
        }
