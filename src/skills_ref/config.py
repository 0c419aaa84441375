"""
Runtime configuration for the skills-ref command line.

The library itself never touches loguru sinks; only the CLI calls
`configure_logging()`.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from loguru import logger

LOG_LEVEL_ENV = "SKILLS_REF_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SkillsRefConfig:
    """CLI settings"""

    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        self.log_level = self.log_level.strip().upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"Unknown log level: {self.log_level} "
                f"(expected one of {', '.join(LOG_LEVELS)})"
            )

    @classmethod
    def from_env(cls) -> "SkillsRefConfig":
        return cls(log_level=os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL))


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Replace loguru's default sink with a single stderr sink at `level`."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<level>{level: <8}</level> | {name}:{function} - {message}",
    )
