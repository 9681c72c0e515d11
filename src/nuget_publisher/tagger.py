"""Git tagging of the released commit."""

import logging

from .config import PublishSettings
from .exceptions import TagError
from .output import OutputRecord
from .protocols import CommandRunnerProtocol

logger = logging.getLogger(__name__)

TAG_PLACEHOLDER = "*"
DEFAULT_REMOTE = "origin"


def format_tag(tag_format: str, version: str) -> str:
    """Substitute ``version`` for the first ``*`` in ``tag_format`` (``v*`` -> ``v2.3.0``)."""
    return tag_format.replace(TAG_PLACEHOLDER, version, 1)


def create_tag(
    version: str,
    settings: PublishSettings,
    runner: CommandRunnerProtocol,
    output: OutputRecord,
) -> str:
    """
    Create a tag for ``version`` and push it to the default remote.

    There is no rollback: if the push fails the local tag stays.

    Args:
        version: Released version
        settings: Run configuration (tag format)
        runner: Command runner
        output: Output record; ``VERSION`` is set to the tag once pushed

    Returns:
        The tag name

    Raises:
        TagError: If either git command fails
    """
    tag = format_tag(settings.tag_format, version)

    logger.info(f"✨ Creating new tag {tag}")

    for args in (["git", "tag", tag], ["git", "push", DEFAULT_REMOTE, tag]):
        result = runner.run(args, capture=True)
        if not result.ok:
            raise TagError(result.failure_message(), context={"tag": tag, "command": args})

    output.set_output("VERSION", tag)
    return tag
