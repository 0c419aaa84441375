"""Skill-related exceptions."""


class SkillError(Exception):
    """Base exception for all skill-related errors."""


class ParseError(SkillError):
    """Raised when SKILL.md is missing or structurally malformed."""


class ValidationError(SkillError):
    """Raised when skill properties are invalid.

    ``errors`` holds every violated rule, not just the first one.
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors if errors is not None else [message]

    def __str__(self) -> str:
        message = super().__str__()
        if self.errors == [message]:
            return message
        details = "\n".join(f"- {error}" for error in self.errors)
        return f"{message}\n{details}"
