"""
skills-ref - reference library for Agent Skills

Agent Skills are directories holding a SKILL.md file: YAML frontmatter
(name, description, ...) followed by markdown instructions.

Example:
    >>> from skills_ref import read_properties, validate, to_prompt
    >>>
    >>> errors = validate("./skills/pdf-reader")
    >>> props = read_properties("./skills/pdf-reader")
    >>> print(to_prompt(["./skills/pdf-reader"]))
"""

__version__ = "0.1.0"

from skills_ref.errors import ParseError, SkillError, ValidationError
from skills_ref.models import SkillLocation, SkillProperties
from skills_ref.parser import (
    FrontmatterDocument,
    find_skill_md,
    parse_frontmatter,
    read_properties,
)
from skills_ref.prompt import html_escape, render, to_prompt
from skills_ref.validator import validate, validate_metadata

__all__ = [
    "SkillError",
    "ParseError",
    "ValidationError",
    "SkillProperties",
    "SkillLocation",
    "FrontmatterDocument",
    "find_skill_md",
    "parse_frontmatter",
    "read_properties",
    "validate",
    "validate_metadata",
    "render",
    "to_prompt",
    "html_escape",
]
