"""External command execution with structured results.

Failure is decided by exit code first. Only a zero exit code is then checked
against an optional error marker in captured stdout (``dotnet nuget push``
reports some failures that way). The marker check is a heuristic: benign
output containing the marker fails the step, and a tool that fails silently
with exit code 0 passes it.
"""

import logging
import re
import subprocess
from dataclasses import dataclass
from enum import Enum

from .exceptions import CommandError

logger = logging.getLogger(__name__)

SECRET_FLAGS = {"-k", "--api-key"}


class CommandOutcome(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED_EXIT_CODE = "failed_exit_code"
    FAILED_ERROR_MARKER = "failed_error_marker"


def classify(returncode: int, stdout: str, error_marker: str | None = None) -> CommandOutcome:
    """Classify a finished command (exit code first, then marker in stdout)."""
    if returncode != 0:
        return CommandOutcome.FAILED_EXIT_CODE
    if error_marker and error_marker in stdout:
        return CommandOutcome.FAILED_ERROR_MARKER
    return CommandOutcome.SUCCEEDED


def mask_secrets(args: list[str]) -> list[str]:
    """Copy of ``args`` with values following secret flags replaced by ``***``."""
    masked = list(args)
    for i, arg in enumerate(masked[:-1]):
        if arg in SECRET_FLAGS:
            masked[i + 1] = "***"
    return masked


@dataclass(frozen=True)
class CommandResult:
    """Finished external command."""

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    outcome: CommandOutcome = CommandOutcome.SUCCEEDED
    error_marker: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is CommandOutcome.SUCCEEDED

    def marker_fragment(self) -> str | None:
        """First line fragment of stdout starting at the error marker, if any."""
        if not self.error_marker:
            return None
        match = re.search(rf"{re.escape(self.error_marker)}.*", self.stdout)
        return match.group(0) if match else None

    def failure_message(self) -> str:
        """Short human-readable reason for a failed command."""
        fragment = self.marker_fragment()
        if self.outcome is CommandOutcome.FAILED_ERROR_MARKER and fragment:
            return fragment
        detail = fragment or self.stderr.strip() or self.stdout.strip()
        message = f"{' '.join(mask_secrets(self.args))} exited with code {self.returncode}"
        return f"{message}: {detail}" if detail else message

    def check(self) -> "CommandResult":
        """Return self, or raise CommandError if the command failed."""
        if not self.ok:
            raise CommandError(
                self.failure_message(),
                result=self,
                context={"command": mask_secrets(self.args), "returncode": self.returncode},
            )
        return self


class SubprocessRunner:
    """Runs commands with :mod:`subprocess`, blocking, without a timeout."""

    def run(self, args: list[str], capture: bool = False, error_marker: str | None = None) -> CommandResult:
        """
        Run a command to completion.

        Args:
            args: Executable and arguments (no shell)
            capture: Capture stdout/stderr as text instead of inheriting this process's streams
            error_marker: Substring in captured stdout that marks failure despite exit code 0

        Returns:
            CommandResult with classified outcome

        Raises:
            CommandError: If the executable cannot be started
        """
        logger.info(f"executing: [{' '.join(mask_secrets(args))}]")

        try:
            completed = subprocess.run(args, check=False, text=True, capture_output=capture)
        except OSError as e:
            result = CommandResult(args=args, returncode=-1, stderr=str(e), outcome=CommandOutcome.FAILED_EXIT_CODE)
            raise CommandError(f"Unable to start {args[0]}: {e}", result=result) from e

        stdout = completed.stdout or ""
        return CommandResult(
            args=args,
            returncode=completed.returncode,
            stdout=stdout,
            stderr=completed.stderr or "",
            outcome=classify(completed.returncode, stdout, error_marker),
            error_marker=error_marker,
        )
