"""Locate the bundled CFR decompiler jar."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from jar_viewer.core import config
from jar_viewer.exceptions import ToolNotFoundError

logger = logging.getLogger(__name__)

_PACKAGE_DIR = Path(__file__).resolve().parent.parent


class DecompilerLocator:
    """Find the CFR jar on disk.

    Search order:
      1. ``JAR_VIEWER_CFR_JAR`` environment variable
      2. ``lib/`` inside the installed package
      3. ``lib/`` at the repository root (editable installs)
      4. ``lib/`` under the current working directory
    """

    def __init__(self, filename: str = config.CFR_FILENAME) -> None:
        self.filename = filename

    def candidates(self) -> list[Path]:
        paths: list[Path] = []
        override = config.cfr_jar_override()
        if override:
            paths.append(Path(override).expanduser())
        paths.append(_PACKAGE_DIR / "lib" / self.filename)
        paths.append(_PACKAGE_DIR.parent / "lib" / self.filename)
        paths.append(Path(os.getcwd()) / "lib" / self.filename)
        return paths

    def locate(self) -> str:
        for candidate in self.candidates():
            if candidate.is_file():
                logger.debug("Using decompiler jar: %s", candidate)
                return str(candidate)
        raise ToolNotFoundError(
            self.filename,
            hint="Place it in ./lib or set JAR_VIEWER_CFR_JAR.",
        )
