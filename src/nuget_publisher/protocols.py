"""Protocols for external command execution.

The publisher and tagger only need this interface; the CLI injects
SubprocessRunner and tests inject a recording fake.
"""

from typing import Protocol

from .process import CommandResult


class CommandRunnerProtocol(Protocol):
    """Protocol for running external commands (dotnet, git)."""

    def run(self, args: list[str], capture: bool = False, error_marker: str | None = None) -> CommandResult:
        """Run a command to completion and return its classified result.

        Args:
            args: Executable and arguments
            capture: Capture output instead of inheriting the parent's streams
            error_marker: Optional stdout substring treated as failure

        Raises:
            CommandError: If the command cannot be started
        """
        ...
