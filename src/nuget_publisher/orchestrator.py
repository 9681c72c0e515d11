"""Publish every configured project, then tag the commit.

Projects are processed strictly one after another. A failing project becomes
a FAILED outcome and never stops the run. Tagging happens once, after the
loop, and only if all successful projects agree on a single version.
"""

import logging
from enum import Enum
from pathlib import Path

import httpx
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from .config import PublishSettings
from .exceptions import ProjectFileNotFoundError
from .exceptions import PublishError
from .metadata import derive_package_name
from .metadata import resolve_version
from .output import OutputRecord
from .process import SubprocessRunner
from .protocols import CommandRunnerProtocol
from .publisher import publish_package
from .registry import create_registry_client
from .registry import is_new_version
from .tagger import create_tag

logger = logging.getLogger(__name__)

ERROR_PREFIX = "##[error]😭"


class ProjectStage(str, Enum):
    """Last step a project reached."""

    NOT_STARTED = "not_started"
    DESCRIPTOR_VALIDATED = "descriptor_validated"
    VERSION_RESOLVED = "version_resolved"
    NOVELTY_CHECKED = "novelty_checked"
    PUBLISHED = "published"
    SKIPPED_UP_TO_DATE = "skipped_up_to_date"


class ProjectStatus(str, Enum):
    DONE = "done"
    FAILED = "failed"


class ProjectOutcome(BaseModel):
    """Result of processing one project file."""

    model_config = ConfigDict(frozen=True)

    project_file: str
    status: ProjectStatus
    stage: ProjectStage
    package_name: str | None = None
    version: str | None = None
    reason: str | None = None


class RunReport(BaseModel):
    """All project outcomes of a run plus the tag created, if any."""

    outcomes: list[ProjectOutcome] = Field(default_factory=list)
    tag: str | None = None

    @property
    def distinct_versions(self) -> list[str]:
        """Distinct versions of successful projects, in first-seen order."""
        versions: list[str] = []
        for outcome in self.outcomes:
            if outcome.status is ProjectStatus.DONE and outcome.version and outcome.version not in versions:
                versions.append(outcome.version)
        return versions

    @property
    def failed(self) -> list[ProjectOutcome]:
        return [o for o in self.outcomes if o.status is ProjectStatus.FAILED]


async def publish_project(
    project_file: str,
    settings: PublishSettings,
    client: httpx.AsyncClient,
    runner: CommandRunnerProtocol,
    work_dir: Path = Path("."),
) -> ProjectOutcome:
    """
    Resolve, check and (if new) publish a single project.

    Args:
        project_file: Project file path as configured
        settings: Run configuration
        client: HTTP client for the registry lookup
        runner: Command runner for dotnet
        work_dir: Artifact directory

    Returns:
        DONE outcome (published or already up to date) or FAILED outcome with a reason.
        Publish errors are logged and never raised.
    """
    stage = ProjectStage.NOT_STARTED
    package_name = None
    version = None

    try:
        path = Path(project_file)
        if not project_file or not path.exists():
            raise ProjectFileNotFoundError("Project file not found", context={"project_file": project_file})

        logger.info(f"Project Filepath: {project_file}")
        stage = ProjectStage.DESCRIPTOR_VALIDATED

        package_name = derive_package_name(path)
        version = resolve_version(path, settings)
        stage = ProjectStage.VERSION_RESOLVED

        is_new = await is_new_version(client, settings.nuget_source, package_name, version)
        stage = ProjectStage.NOVELTY_CHECKED

        if is_new:
            publish_package(path, version, package_name, settings, runner, work_dir)
            stage = ProjectStage.PUBLISHED
        else:
            logger.info(f"{package_name} {version} is already published")
            stage = ProjectStage.SKIPPED_UP_TO_DATE

    except (PublishError, OSError) as e:
        logger.error(f"{ERROR_PREFIX} {e}")
        return ProjectOutcome(
            project_file=project_file,
            status=ProjectStatus.FAILED,
            stage=stage,
            package_name=package_name,
            version=version,
            reason=str(e),
        )

    return ProjectOutcome(
        project_file=project_file,
        status=ProjectStatus.DONE,
        stage=stage,
        package_name=package_name,
        version=version,
    )


async def publish_all(
    settings: PublishSettings,
    client: httpx.AsyncClient | None = None,
    runner: CommandRunnerProtocol | None = None,
    output: OutputRecord | None = None,
    work_dir: Path = Path("."),
) -> RunReport:
    """
    Publish all configured projects and tag the commit when unambiguous.

    Tagging rule on the distinct versions of successful projects:
    - more than one: log an error, do not tag
    - exactly one and ``tag_commit``: create and push the tag once
    - none: do nothing

    The output record is flushed to ``settings.output_file`` at the end.

    Args:
        settings: Run configuration
        client: HTTP client (a fresh one is created and closed if omitted)
        runner: Command runner (SubprocessRunner if omitted)
        output: Output record (a fresh one if omitted)
        work_dir: Artifact directory

    Returns:
        RunReport with every project outcome and the created tag
    """
    runner = runner or SubprocessRunner()
    output = output if output is not None else OutputRecord()
    report = RunReport()

    owns_client = client is None
    client = client or create_registry_client()

    try:
        for project_file in settings.project_files:
            logger.info(f"📦 Processing {project_file}")
            report.outcomes.append(await publish_project(project_file, settings, client, runner, work_dir))
            logger.info("")
    finally:
        if owns_client:
            await client.aclose()

    versions = report.distinct_versions

    if len(versions) > 1:
        logger.error(f"{ERROR_PREFIX} Multiple versions detected ({', '.join(versions)}), unable to tag")
    elif settings.tag_commit and len(versions) == 1:
        try:
            report.tag = create_tag(versions[0], settings, runner, output)
        except PublishError as e:
            logger.error(f"{ERROR_PREFIX} Unable to create a new tag {e}")

    output.flush(settings.output_file)
    return report
