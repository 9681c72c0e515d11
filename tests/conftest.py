"""Shared fixtures: environment isolation and a recording command runner."""

from pathlib import Path

import pytest
from nuget_publisher.process import CommandResult
from nuget_publisher.process import classify

CONFIG_NAMES = [
    "PROJECT_FILE_PATH",
    "VERSION_FILE",
    "VERSION_STATIC",
    "VERSION_REGEX",
    "TAG_COMMIT",
    "TAG_FORMAT",
    "NUGET_KEY",
    "NUGET_SOURCE",
    "INCLUDE_SYMBOLS",
    "NO_BUILD",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep CI variables of the machine running the tests out of settings."""
    for name in CONFIG_NAMES:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(f"INPUT_{name}", raising=False)
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)


class RecordingRunner:
    """Fake command runner.

    Records every command. ``results`` maps a command prefix (e.g. "dotnet nuget push")
    to ``(returncode, stdout)``. ``dotnet pack`` drops a package named after the
    project into its ``-o`` directory, like the real tool.
    """

    def __init__(self, results: dict[str, tuple[int, str]] | None = None):
        self.results = results or {}
        self.calls: list[list[str]] = []

    def run(self, args: list[str], capture: bool = False, error_marker: str | None = None) -> CommandResult:
        self.calls.append(args)

        returncode, stdout = 0, ""
        command = " ".join(args)
        for prefix, value in self.results.items():
            if command.startswith(prefix):
                returncode, stdout = value

        if args[:2] == ["dotnet", "pack"] and returncode == 0:
            out_dir = Path(args[args.index("-o") + 1])
            project = Path(args[args.index("-o") - 1])
            (out_dir / f"{project.stem}.1.0.0.nupkg").write_text("package")
            if "--include-symbols" in args:
                (out_dir / f"{project.stem}.1.0.0.snupkg").write_text("symbols")

        return CommandResult(
            args=args,
            returncode=returncode,
            stdout=stdout,
            outcome=classify(returncode, stdout, error_marker),
            error_marker=error_marker,
        )

    def commands(self, prefix: str) -> list[list[str]]:
        return [c for c in self.calls if " ".join(c).startswith(prefix)]


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()
