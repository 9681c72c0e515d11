"""nuget-publisher - Publish NuGet packages when their version changes.

For each configured project: resolve package id and version, skip it if the
registry already lists that version, otherwise build, pack and push it. When
every successful project agrees on one version, tag the commit.
"""

from .config import PublishSettings
from .config import load_settings
from .exceptions import CommandError
from .exceptions import ProjectFileNotFoundError
from .exceptions import PublishError
from .exceptions import RegistryError
from .exceptions import TagError
from .exceptions import VersionFileNotFoundError
from .exceptions import VersionNotFoundError
from .metadata import derive_package_name
from .metadata import derive_version
from .metadata import resolve_version
from .orchestrator import ProjectOutcome
from .orchestrator import ProjectStage
from .orchestrator import ProjectStatus
from .orchestrator import RunReport
from .orchestrator import publish_all
from .orchestrator import publish_project
from .output import OutputRecord
from .process import CommandOutcome
from .process import CommandResult
from .process import SubprocessRunner
from .protocols import CommandRunnerProtocol
from .publisher import publish_package
from .registry import is_new_version
from .tagger import create_tag
from .tagger import format_tag

__all__ = [
    # Configuration
    "PublishSettings",
    "load_settings",
    # Metadata
    "derive_package_name",
    "derive_version",
    "resolve_version",
    # Registry
    "is_new_version",
    # Commands
    "CommandOutcome",
    "CommandResult",
    "CommandRunnerProtocol",
    "SubprocessRunner",
    # Publishing
    "publish_package",
    "create_tag",
    "format_tag",
    "OutputRecord",
    # Orchestration
    "ProjectOutcome",
    "ProjectStage",
    "ProjectStatus",
    "RunReport",
    "publish_all",
    "publish_project",
    # Exceptions
    "PublishError",
    "CommandError",
    "ProjectFileNotFoundError",
    "RegistryError",
    "TagError",
    "VersionFileNotFoundError",
    "VersionNotFoundError",
]

__version__ = "0.1.0"
