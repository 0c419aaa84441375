"""Data models for Agent Skills."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import ValidationError


@dataclass(frozen=True)
class SkillProperties:
    """Properties parsed from SKILL.md frontmatter.

    ``name`` and ``description`` are checked on construction, so an instance
    always carries both as non-blank strings. Instances compare by value but
    are not hashable, since ``metadata`` is a dict.
    """

    __hash__ = None

    name: str
    description: str
    license: Optional[str] = None
    compatibility: Optional[str] = None
    allowed_tools: Optional[str] = None
    metadata: Optional[dict[str, str]] = None

    def __post_init__(self):
        for field_name in ("name", "description"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(
                    f"Field '{field_name}' must be a non-empty string"
                )

    def to_dict(self) -> dict:
        """Convert to dictionary, excluding None values."""
        result = {"name": self.name, "description": self.description}
        if self.license is not None:
            result["license"] = self.license
        if self.compatibility is not None:
            result["compatibility"] = self.compatibility
        if self.allowed_tools is not None:
            result["allowed-tools"] = self.allowed_tools
        if self.metadata is not None:
            result["metadata"] = dict(self.metadata)
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


@dataclass(frozen=True)
class SkillLocation:
    """A skill's properties together with the SKILL.md they were read from."""

    properties: SkillProperties
    location: Path
