"""Result output for the hosting CI system (``$GITHUB_OUTPUT``)."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class OutputRecord:
    """Append-only ``KEY=VALUE`` lines, flushed once at the end of a run."""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def set_output(self, name: str, value: str) -> None:
        self._lines.append(f"{name}={value}")

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def flush(self, output_file: str | Path | None) -> None:
        """Append recorded lines to ``output_file``.

        Does nothing when no output file is configured or nothing was recorded.
        """
        if not output_file or not self._lines:
            return

        with open(output_file, "a", encoding="utf-8") as f:
            f.write(os.linesep.join(self._lines))
        logger.debug(f"Wrote {len(self._lines)} output(s) to {output_file}")
