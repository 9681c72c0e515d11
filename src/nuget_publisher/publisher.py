"""Build, pack and push a project with the dotnet CLI.

All steps share ``work_dir`` for artifacts, which is why projects are
published one at a time and stale packages are removed before each pack.
"""

import logging
from pathlib import Path

from .config import PublishSettings
from .protocols import CommandRunnerProtocol
from .registry import push_source_url

logger = logging.getLogger(__name__)

PUSH_ERROR_MARKER = "error"
ARTIFACT_PATTERNS = ("*.nupkg", "*.snupkg")


def clean_artifacts(work_dir: Path) -> None:
    """Remove package and symbol package files left over in ``work_dir``."""
    for pattern in ARTIFACT_PATTERNS:
        for artifact in work_dir.glob(pattern):
            logger.debug(f"Removing stale artifact {artifact}")
            artifact.unlink()


def list_artifacts(work_dir: Path) -> list[Path]:
    return sorted(p for p in work_dir.iterdir() if p.is_file() and p.name.endswith("nupkg"))


def build_command(project_file: Path) -> list[str]:
    return ["dotnet", "build", "-c", "Release", str(project_file)]


def pack_command(project_file: Path, work_dir: Path, include_symbols: bool) -> list[str]:
    symbols = ["--include-symbols", "-p:SymbolPackageFormat=snupkg"] if include_symbols else []
    return ["dotnet", "pack", *symbols, "-c", "Release", str(project_file), "-o", str(work_dir)]


def push_command(settings: PublishSettings, work_dir: Path) -> list[str]:
    # dotnet expands the wildcard itself and picks up matching .snupkg files
    args = [
        "dotnet",
        "nuget",
        "push",
        str(work_dir / "*.nupkg"),
        "-s",
        push_source_url(settings.nuget_source),
        "-k",
        settings.nuget_key or "",
        "--skip-duplicate",
    ]
    if not settings.include_symbols:
        args.append("-n")
    return args


def publish_package(
    project_file: Path,
    version: str,
    package_name: str,
    settings: PublishSettings,
    runner: CommandRunnerProtocol,
    work_dir: Path = Path("."),
) -> list[Path]:
    """
    Build, pack and push one project.

    Process:
    1. Remove stale ``.nupkg``/``.snupkg`` files from work_dir
    2. ``dotnet build`` in Release (skipped with ``no_build``)
    3. ``dotnet pack`` into work_dir (with snupkg symbols if ``include_symbols``)
    4. ``dotnet nuget push`` with ``--skip-duplicate``
    5. Fail if the push exits non-zero or prints "error"

    Args:
        project_file: Project to publish
        version: Version being published (for logging)
        package_name: Package id (for logging)
        settings: Run configuration
        runner: Command runner
        work_dir: Directory receiving the packed artifacts

    Returns:
        Paths of the packed artifacts

    Raises:
        CommandError: If build, pack or push fails
    """
    logger.info(f"✨ Found new version ({version}) of {package_name}")
    logger.info(f"NuGet Source: {settings.nuget_source}")

    clean_artifacts(work_dir)

    if not settings.no_build:
        runner.run(build_command(project_file)).check()

    runner.run(pack_command(project_file, work_dir, settings.include_symbols)).check()

    artifacts = list_artifacts(work_dir)
    logger.info(f"Generated Package(s): {', '.join(a.name for a in artifacts)}")

    result = runner.run(push_command(settings, work_dir), capture=True, error_marker=PUSH_ERROR_MARKER)
    logger.info(result.stdout)
    result.check()

    return artifacts
