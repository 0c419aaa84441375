"""Generate the <available_skills> XML block for agent system prompts."""

from __future__ import annotations

import html
from pathlib import Path
from typing import Iterable, Sequence

from loguru import logger

from .errors import ParseError
from .models import SkillLocation
from .parser import find_skill_md, read_properties


def html_escape(text: str) -> str:
    """Escape &, <, >, double and single quotes (& first)."""
    return html.escape(str(text), quote=True)


def render(locations: Sequence[SkillLocation]) -> str:
    """
    Render skills as an <available_skills> XML block.

    Each tag and its text sit on their own line; name, description and
    location are all escaped.

    Example output:

        <available_skills>
        <skill>
        <name>
        pdf-reader
        </name>
        <description>
        Read and extract text from PDF files
        </description>
        <location>
        /path/to/pdf-reader/SKILL.md
        </location>
        </skill>
        </available_skills>
    """
    lines = ["<available_skills>"]

    for item in locations:
        props = item.properties
        lines.extend(
            [
                "<skill>",
                "<name>",
                html_escape(props.name),
                "</name>",
                "<description>",
                html_escape(props.description),
                "</description>",
                "<location>",
                html_escape(item.location),
                "</location>",
                "</skill>",
            ]
        )

    lines.append("</available_skills>")
    return "\n".join(lines)


def locate(skill_dir: Path) -> SkillLocation:
    """Read a skill directory and pair its properties with its SKILL.md path."""
    skill_dir = Path(skill_dir).resolve()
    props = read_properties(skill_dir)
    skill_md = find_skill_md(skill_dir)
    if skill_md is None:
        raise ParseError(f"SKILL.md not found in {skill_dir}")
    return SkillLocation(properties=props, location=skill_md.resolve())


def to_prompt(skill_dirs: Iterable[Path]) -> str:
    """
    Generate the <available_skills> block for the given skill directories.

    Raises:
        ParseError / ValidationError from `read_properties`.
    """
    locations = [locate(skill_dir) for skill_dir in skill_dirs]
    logger.debug(f"Rendering {len(locations)} skill(s)")
    return render(locations)
