"""
Exceptions for Skilo.

Defines the error taxonomy shared by the git layer, the skill commands
and the CLI.
"""


class SkiloError(Exception):
    """Base exception for all Skilo errors."""

    pass


class InvalidSourceError(SkiloError):
    """A skill source could not be understood or resolved."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid source '{source}': {reason}")


class GitError(SkiloError):
    """Generic failure in the git layer."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Git error: {message}")


class AuthenticationFailedError(GitError):
    """Remote rejected or required credentials."""

    def __init__(self, message: str = "authentication failed"):
        super().__init__(message)

    def __str__(self) -> str:
        return (
            "Authentication failed. For private repositories, make sure your "
            "SSH key is loaded or a credential helper is configured."
        )


class NetworkError(SkiloError):
    """Host resolution or connection failure, or a network call while offline."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Network error: {message}")


class RepoNotFoundError(SkiloError):
    """Remote repository does not exist or is not visible."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Repository not found: {url}")


class SkiloIOError(SkiloError):
    """Filesystem failure outside manifest parsing."""

    def __init__(self, message: str, path: object = None):
        self.path = path
        super().__init__(message + (f" (at {path})" if path else ""))


class CancelledError(SkiloError):
    """User declined a confirmation prompt."""

    def __init__(self, message: str = "Operation cancelled"):
        super().__init__(message)


class NoSkillsFoundError(SkiloError):
    """No SKILL.md file could be discovered."""

    def __init__(self, path: object):
        self.path = path
        super().__init__(f"No skills found in {path}")


class SkillExistsError(SkiloError):
    """Target skill directory already exists."""

    def __init__(self, name: str, path: object):
        self.name = name
        self.path = path
        super().__init__(f"Skill '{name}' already exists at {path}")


class InvalidNameError(SkiloError):
    """Skill name does not follow the naming rules."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Invalid skill name '{name}': must be lowercase alphanumeric with single hyphens"
        )


class ConfigurationError(SkiloError):
    """Raised when configuration loading or validation fails."""

    pass
