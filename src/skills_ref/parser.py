"""YAML frontmatter parsing for SKILL.md files."""

from __future__ import annotations

import datetime
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Optional

import yaml
from loguru import logger

from .errors import ParseError, ValidationError
from .models import SkillProperties

SKILL_MD_NAMES = ("SKILL.md", "skill.md")
FRONTMATTER_DELIMITER = "---"
JSON_TYPES = (dict, list, tuple, int, float, bool, type(None))


@dataclass
class FrontmatterDocument:
    """Decoded YAML header plus the untouched markdown body."""

    header: dict[str, Any] = field(default_factory=dict)
    body: str = ""

    def __iter__(self) -> Iterator[Any]:
        # allows `metadata, body = parse_frontmatter(content)`
        yield self.header
        yield self.body


def find_skill_md(skill_dir: Path) -> Optional[Path]:
    """
    Find the SKILL.md file in a skill directory.

    Prefers SKILL.md (uppercase) but accepts skill.md (lowercase).

    Args:
        skill_dir: Path to the skill directory

    Returns:
        Path to the file, or None if neither name exists.
    """
    skill_dir = Path(skill_dir)
    for name in SKILL_MD_NAMES:
        path = skill_dir / name
        if path.is_file():
            if name != SKILL_MD_NAMES[0]:
                logger.debug(f"Using lowercase {name} in {skill_dir}")
            return path
    logger.debug(f"No SKILL.md found in {skill_dir}")
    return None


def parse_frontmatter(content: str) -> FrontmatterDocument:
    """
    Parse YAML frontmatter from SKILL.md content.

    The document must open with a `---` line; the header ends at the next
    line consisting only of `---`. Everything after that line is the body.

    Raises:
        ParseError: If the frontmatter is missing, unclosed, not valid YAML
            or not a mapping.
    """
    if content.startswith("\ufeff"):
        content = content[1:]

    lines = content.split("\n")
    if lines[0].rstrip("\r") != FRONTMATTER_DELIMITER:
        raise ParseError("SKILL.md must start with YAML frontmatter (---)")

    end = None
    for index in range(1, len(lines)):
        if lines[index].rstrip("\r") == FRONTMATTER_DELIMITER:
            end = index
            break
    if end is None:
        raise ParseError("SKILL.md frontmatter not properly closed with ---")

    header_text = "\n".join(lines[1:end])
    body = "\n".join(lines[end + 1 :])

    try:
        header = yaml.safe_load(header_text)
    except yaml.YAMLError as exc:
        raise ParseError(f"Invalid YAML in frontmatter: {exc}") from exc

    if header is None:
        header = {}
    if not isinstance(header, dict):
        raise ParseError(
            "SKILL.md frontmatter must be a YAML mapping, "
            f"got {type(header).__name__}"
        )

    bad_keys = [key for key in header if not isinstance(key, str)]
    if bad_keys:
        raise ParseError(
            "SKILL.md frontmatter keys must be strings, got: "
            + ", ".join(repr(key) for key in bad_keys)
        )

    logger.debug(f"Parsed frontmatter fields: {sorted(header)}")
    return FrontmatterDocument(header=header, body=body)


def _scalar_text(value: Any) -> str:
    # YAML timestamps load as date/datetime
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value)


def _to_json_value(value: Any) -> Any:
    if isinstance(value, dict):
        return {_stringify(k): _to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json_value(v) for v in value]
    return value


def _stringify(value: Any) -> str:
    """
    Strings pass through, dates become ISO text, numbers, booleans, null
    and collections become compact JSON (`true`, `1.5`, `["a","b"]`).
    """
    if isinstance(value, str):
        return value
    if not isinstance(value, JSON_TYPES):
        return _scalar_text(value)
    return json.dumps(
        _to_json_value(value),
        ensure_ascii=False,
        separators=(",", ":"),
        default=_scalar_text,
    )


def _required_string(metadata: dict, key: str) -> str:
    if key not in metadata:
        raise ValidationError(f"Missing required field in frontmatter: {key}")
    value = metadata[key]
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Field '{key}' must be a non-empty string")
    return value.strip()


def _optional_string(metadata: dict, key: str) -> Optional[str]:
    value = metadata.get(key)
    if value is None:
        return None
    return _stringify(value)


def colliding_metadata_keys(raw: dict) -> list[str]:
    """Keys of a metadata mapping that become the same text (`1` and `"1"`)."""
    seen = set()
    duplicates = []
    for key in raw:
        text_key = _stringify(key)
        if text_key in seen:
            duplicates.append(text_key)
        seen.add(text_key)
    return duplicates


def _extract_metadata(metadata: dict) -> Optional[dict[str, str]]:
    if metadata.get("metadata") is None:
        return None
    raw = metadata["metadata"]
    if not isinstance(raw, dict):
        raise ValidationError("Field 'metadata' must be a mapping")

    duplicates = colliding_metadata_keys(raw)
    if duplicates:
        raise ValidationError(
            "Field 'metadata' has keys that collide once converted to text: "
            + ", ".join(duplicates)
        )
    result = {_stringify(k): _stringify(v) for k, v in raw.items()}
    return result or None


def read_properties(skill_dir: Path) -> SkillProperties:
    """
    Read skill properties from SKILL.md frontmatter.

    Only the required fields are checked; unknown fields are tolerated.
    Use `validate()` for full conformance checks.

    Raises:
        ParseError: If SKILL.md is missing, unreadable or malformed
        ValidationError: If name or description is missing or blank
    """
    skill_dir = Path(skill_dir)
    skill_md = find_skill_md(skill_dir)
    if skill_md is None:
        raise ParseError(f"SKILL.md not found in {skill_dir}")

    try:
        content = skill_md.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseError(f"Failed to read {skill_md}: {exc}") from exc

    metadata, _ = parse_frontmatter(content)

    name = _required_string(metadata, "name")
    description = _required_string(metadata, "description")

    return SkillProperties(
        name=name,
        description=description,
        license=_optional_string(metadata, "license"),
        compatibility=_optional_string(metadata, "compatibility"),
        allowed_tools=_optional_string(metadata, "allowed-tools"),
        metadata=_extract_metadata(metadata),
    )
