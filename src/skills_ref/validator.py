"""Skill validation logic."""

from __future__ import annotations

import os
import unicodedata
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from .errors import ParseError
from .parser import colliding_metadata_keys, find_skill_md, parse_frontmatter

MAX_SKILL_NAME_LENGTH = 64
MAX_DESCRIPTION_LENGTH = 1024
MAX_COMPATIBILITY_LENGTH = 500

ALLOWED_FIELDS = {
    "name",
    "description",
    "license",
    "allowed-tools",
    "metadata",
    "compatibility",
}

NAME_MARK_CATEGORIES = ("Mn", "Mc")


def _length_error(label: str, value: str, limit: int) -> Optional[str]:
    if len(value) <= limit:
        return None
    return f"{label} exceeds {limit} character limit ({len(value)} chars)"


def _non_empty_string(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _invalid_name_chars(name: str) -> list[str]:
    """
    Characters outside letters, digits and hyphens.

    Combining marks (Mn/Mc, e.g. Devanagari vowel signs) count as part of
    the letter they follow, so names in Indic scripts pass.
    """
    invalid = []
    has_base = False
    for char in name:
        if char != "-" and char.isalnum():
            has_base = True
        elif char == "-":
            has_base = False
        elif not (has_base and unicodedata.category(char) in NAME_MARK_CATEGORIES):
            invalid.append(char)
            has_base = False
    return invalid


def _validate_name(name, skill_dir: Union[str, Path, None]) -> list[str]:
    """
    Validate skill name format and, when skill_dir is given, the directory match.

    The name is stripped and NFKC-normalized first; every rule is reported
    independently.
    """
    if not _non_empty_string(name):
        return ["Field 'name' must be a non-empty string"]

    name = unicodedata.normalize("NFKC", name.strip())
    errors = []

    too_long = _length_error(f"Skill name '{name}'", name, MAX_SKILL_NAME_LENGTH)
    if too_long:
        errors.append(too_long)

    if name != name.lower():
        errors.append(f"Skill name '{name}' must be lowercase")

    if name.startswith("-") or name.endswith("-"):
        errors.append("Skill name cannot start or end with a hyphen")

    if "--" in name:
        errors.append("Skill name cannot contain consecutive hyphens")

    if _invalid_name_chars(name):
        errors.append(
            f"Skill name '{name}' contains invalid characters. "
            "Only letters, digits, and hyphens are allowed."
        )

    if skill_dir is not None:
        # only the last path component matters; a bare name works too
        dir_name = Path(skill_dir).name
        if unicodedata.normalize("NFKC", dir_name) != name:
            errors.append(
                f"Directory name '{dir_name}' must match skill name '{name}'"
            )

    return errors


def _validate_description(description) -> list[str]:
    if not _non_empty_string(description):
        return ["Field 'description' must be a non-empty string"]
    too_long = _length_error("Description", description, MAX_DESCRIPTION_LENGTH)
    return [too_long] if too_long else []


def _validate_compatibility(compatibility) -> list[str]:
    if not isinstance(compatibility, str):
        return ["Field 'compatibility' must be a string"]
    too_long = _length_error("Compatibility", compatibility, MAX_COMPATIBILITY_LENGTH)
    return [too_long] if too_long else []


def _unexpected_fields(metadata: dict) -> list[str]:
    extra_fields = sorted({str(key) for key in metadata} - ALLOWED_FIELDS)
    if not extra_fields:
        return []
    return [
        f"Unexpected fields in frontmatter: {', '.join(extra_fields)}. "
        f"Only {sorted(ALLOWED_FIELDS)} are allowed."
    ]


def validate_metadata(
    metadata: dict, skill_dir: Union[str, Path, None] = None
) -> list[str]:
    """
    Validate parsed frontmatter metadata.

    Args:
        metadata: Decoded frontmatter mapping
        skill_dir: Skill directory, or just its name, for the name match
            check. Skipped when None.

    Returns:
        Validation error messages. An empty list means valid.
    """
    errors = []

    for key, check in (
        ("name", lambda value: _validate_name(value, skill_dir)),
        ("description", _validate_description),
    ):
        if key not in metadata:
            errors.append(f"Missing required field in frontmatter: {key}")
        else:
            errors.extend(check(metadata[key]))

    if "compatibility" in metadata:
        errors.extend(_validate_compatibility(metadata["compatibility"]))

    raw_metadata = metadata.get("metadata")
    if raw_metadata is not None:
        if not isinstance(raw_metadata, dict):
            errors.append("Field 'metadata' must be a mapping")
        elif colliding_metadata_keys(raw_metadata):
            errors.append(
                "Field 'metadata' has keys that collide once converted to text: "
                + ", ".join(colliding_metadata_keys(raw_metadata))
            )

    errors.extend(_unexpected_fields(metadata))

    return errors


def validate(skill_dir: Path) -> list[str]:
    """
    Validate a skill directory.

    Directory-level problems (missing path, not a directory, no SKILL.md,
    unreadable or malformed file) are reported alone, since there is no
    content to check past them.
    """
    skill_dir = Path(skill_dir)

    if not skill_dir.exists():
        return [f"Path does not exist: {skill_dir}"]

    if not skill_dir.is_dir():
        return [f"Not a directory: {skill_dir}"]

    skill_md = find_skill_md(skill_dir)
    if skill_md is None:
        return ["Missing required file: SKILL.md"]

    try:
        content = skill_md.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return [f"Failed to read {skill_md}: {exc}"]

    try:
        metadata, _ = parse_frontmatter(content)
    except ParseError as exc:
        return [str(exc)]

    # abspath so "." and ".." still yield a real directory name
    errors = validate_metadata(metadata, os.path.abspath(skill_dir))
    logger.debug(f"Validated {skill_dir}: {len(errors)} error(s)")
    return errors
