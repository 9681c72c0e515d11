"""Publish-specific exceptions.

Every per-project failure raised here is caught at the project loop boundary
and turned into a logged, failed outcome.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .process import CommandResult


class PublishError(Exception):
    """Base exception for publish operations."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (file paths, urls, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ProjectFileNotFoundError(PublishError):
    """Project file path is empty or does not exist."""


class VersionFileNotFoundError(PublishError):
    """Version file does not exist."""


class VersionNotFoundError(PublishError):
    """No version could be resolved from configuration or the version file."""


class RegistryError(PublishError):
    """Registry lookup failed (bad status, transport failure or unparseable body)."""


class CommandError(PublishError):
    """External build, pack or push command failed."""

    def __init__(self, message: str, result: "CommandResult", context: dict | None = None):
        super().__init__(message, context)
        self.result = result


class TagError(PublishError):
    """Creating or pushing the git tag failed."""
