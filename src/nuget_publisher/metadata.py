"""Package name and version extraction from project files."""

import logging
import re
from pathlib import Path

from .config import PublishSettings
from .exceptions import VersionFileNotFoundError
from .exceptions import VersionNotFoundError

logger = logging.getLogger(__name__)

PACKAGE_ID_PATTERN = re.compile(r"^\s*<PackageId>(.*)</PackageId>\s*$", re.MULTILINE)
ASSEMBLY_NAME_PATTERN = re.compile(r"^\s*<AssemblyName>(.*)</AssemblyName>\s*$", re.MULTILINE)


def derive_package_name(project_file: Path) -> str:
    """Derive the package name for a project file.

    Lookup order:
    1. ``<PackageId>`` element
    2. ``<AssemblyName>`` element
    3. File name without its last extension segment (``Foo.Bar.csproj`` -> ``Foo.Bar``)

    Args:
        project_file: Path to the project file (may not exist)

    Returns:
        Package name. Never raises.
    """
    if project_file.is_file():
        try:
            content = project_file.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug(f"Could not read {project_file}: {e}")
            content = ""

        for pattern in (PACKAGE_ID_PATTERN, ASSEMBLY_NAME_PATTERN):
            match = pattern.search(content)
            if match:
                return match.group(1)

    return ".".join(project_file.name.split(".")[:-1])


def derive_version(content: str, pattern: str) -> str | None:
    """Return the first capture group of the first multiline match, or None.

    Raises:
        VersionNotFoundError: If the pattern does not compile or has no capture group
    """
    try:
        regex = re.compile(pattern, re.MULTILINE)
    except re.error as e:
        raise VersionNotFoundError(f"Invalid version regex {pattern!r}: {e}", context={"pattern": pattern}) from e

    if regex.groups < 1:
        raise VersionNotFoundError(
            f"Version regex {pattern!r} has no capture group", context={"pattern": pattern}
        )

    match = regex.search(content)
    if match is None:
        return None
    return match.group(1)


def resolve_version(project_file: Path, settings: PublishSettings) -> str:
    """Resolve the version to publish for a project.

    A static version wins and the version file is never read. Otherwise the
    version file (explicit override, or the project file itself) is searched
    with the configured regex.

    Args:
        project_file: Path to the project file
        settings: Run configuration

    Returns:
        Non-empty version string

    Raises:
        VersionFileNotFoundError: If the version file does not exist
        VersionNotFoundError: If no version could be resolved
    """
    version_file = Path(settings.version_file) if settings.version_file else project_file

    if not version_file.exists():
        raise VersionFileNotFoundError("Version file not found", context={"version_file": str(version_file)})

    logger.info(f"Version Filepath: {version_file}")

    if settings.version_static:
        version = settings.version_static
    else:
        logger.info(f"Version Regex: {settings.version_regex}")
        version = derive_version(version_file.read_text(encoding="utf-8", errors="replace"), settings.version_regex)

    if not version:
        raise VersionNotFoundError("Version not found", context={"version_file": str(version_file)})

    logger.info(f"Version: {version}")
    return version
