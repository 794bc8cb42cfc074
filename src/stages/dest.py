from __future__ import annotations

from pathlib import Path
from typing import List

from ..taskrunner.logging import get_logger
from .base import StyleFile


logger = get_logger("stages.dest")


class Dest:
    """Write files below `destination`, keeping their path relative to the glob base."""

    name = "dest"

    def __init__(self, destination: Path | str):
        self.destination = Path(destination)

    def _write(self, file: StyleFile) -> Path:
        out = self.destination / file.relative
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(file.contents, encoding="utf-8")
        return out

    def __call__(self, file: StyleFile) -> List[Path]:
        written = [self._write(file)]
        for companion in file.companions:
            written.append(self._write(companion))
        logger.info("Wrote %s", written[0])
        return written
