"""
skills-ref command line

    skills-ref validate <skill_path>
    skills-ref read-properties <skill_path>
    skills-ref to-prompt <skill_path> [<skill_path> ...]

Each sub-command handler returns an ExecResult; `main()` writes it out and
turns it into the process exit code.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from . import __version__
from .config import LOG_LEVELS, SkillsRefConfig, configure_logging
from .errors import SkillError
from .parser import read_properties
from .prompt import to_prompt
from .validator import validate


@dataclass
class ExecResult:
    """Command result"""

    stdout: str = ""
    stderr: str = ""
    return_code: int = 0


def _is_skill_md_file(path: Path) -> bool:
    return path.is_file() and path.name.lower() == "skill.md"


def resolve_skill_path(path: Path) -> Path:
    """A path to SKILL.md itself stands for its parent directory."""
    path = Path(path)
    if _is_skill_md_file(path):
        return path.parent
    return path


def run_validate(skill_path: Path) -> ExecResult:
    skill_path = resolve_skill_path(skill_path)
    errors = validate(skill_path)

    if not errors:
        return ExecResult(stdout=f"Valid skill: {skill_path}")

    details = "\n".join(f"  - {error}" for error in errors)
    return ExecResult(
        stderr=f"Validation failed for {skill_path}:\n{details}",
        return_code=1,
    )


def run_read_properties(skill_path: Path) -> ExecResult:
    skill_path = resolve_skill_path(skill_path)
    try:
        props = read_properties(skill_path)
    except SkillError as exc:
        return ExecResult(stderr=f"Error: {exc}", return_code=1)
    return ExecResult(stdout=props.to_json())


def run_to_prompt(skill_paths: Sequence[Path]) -> ExecResult:
    resolved = [resolve_skill_path(path) for path in skill_paths]
    try:
        output = to_prompt(resolved)
    except SkillError as exc:
        return ExecResult(stderr=f"Error: {exc}", return_code=1)
    return ExecResult(stdout=output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skills-ref",
        description="Reference library for Agent Skills",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default=None,
        help="Log level for diagnostics on stderr (default: $SKILLS_REF_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a skill directory",
        description=(
            "Check that the skill has a valid SKILL.md with proper frontmatter, "
            "correct naming conventions, and required fields."
        ),
    )
    validate_parser.add_argument(
        "skill_path", type=Path, help="Path to the skill directory or SKILL.md file"
    )

    read_parser = subparsers.add_parser(
        "read-properties",
        help="Read and print skill properties as JSON",
        description="Parse the YAML frontmatter from SKILL.md and print it as JSON.",
    )
    read_parser.add_argument(
        "skill_path", type=Path, help="Path to the skill directory or SKILL.md file"
    )

    prompt_parser = subparsers.add_parser(
        "to-prompt",
        help="Generate <available_skills> XML for agent prompts",
        description="Accepts one or more skill directories.",
    )
    prompt_parser.add_argument(
        "skill_paths",
        type=Path,
        nargs="+",
        help="Paths to skill directories or SKILL.md files",
    )

    return parser


COMMANDS = {
    "validate": lambda args: run_validate(args.skill_path),
    "read-properties": lambda args: run_read_properties(args.skill_path),
    "to-prompt": lambda args: run_to_prompt(args.skill_paths),
}


def dispatch(args: argparse.Namespace) -> ExecResult:
    return COMMANDS[args.command](args)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.log_level:
        config = SkillsRefConfig(log_level=args.log_level)
    else:
        config = SkillsRefConfig.from_env()
    configure_logging(config.log_level)

    logger.debug(f"skills-ref {args.command}")
    result = dispatch(args)

    if result.stdout:
        print(result.stdout)
    if result.stderr:
        print(result.stderr, file=sys.stderr)
    return result.return_code


if __name__ == "__main__":
    sys.exit(main())
