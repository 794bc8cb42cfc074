from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional

import sass

from ..taskrunner.logging import get_logger
from ..taskrunner.stream import StageError
from .base import StyleFile
from .sourcemaps import split_map_comment


logger = get_logger("stages.compiler")

OUTPUT_STYLES = ("nested", "expanded", "compact", "compressed")


class SassCompiler:
    """Compile one Sass file to CSS with libsass.

    Partials and empty files are dropped from the stream, the same way they
    never produce output of their own.
    """

    name = "sass"

    def __init__(
        self,
        include_paths: Iterable[str | Path] = (),
        output_style: str = "expanded",
        log_to_console: bool = True,
        precision: int = 5,
    ):
        if output_style not in OUTPUT_STYLES:
            raise ValueError(
                f"Unknown output style: {output_style!r} (expected one of {OUTPUT_STYLES})"
            )
        self.include_paths = [str(p) for p in include_paths]
        self.output_style = output_style
        self.log_to_console = log_to_console
        self.precision = precision

    def _fix_sources(self, smap: dict, file: StyleFile) -> dict:
        sources = []
        for s in smap.get("sources", []):
            if Path(s).name == "stdin":
                sources.append(file.relative.as_posix())
                continue
            p = Path(os.path.abspath(s))
            try:
                sources.append(p.relative_to(file.base).as_posix())
            except ValueError:
                sources.append(str(s).replace("\\", "/"))
        return dict(smap, sources=sources)

    def __call__(self, file: StyleFile) -> Optional[StyleFile]:
        if file.is_partial or not file.contents.strip():
            return None
        try:
            css = sass.compile(
                string=file.contents,
                include_paths=[str(file.path.parent), *self.include_paths],
                output_style=self.output_style,
                precision=self.precision,
                indented=file.path.suffix == ".sass",
                source_map_embed=file.source_map is not None,
                source_map_contents=True,
            )
        except sass.CompileError as e:
            message = str(e).strip()
            if self.log_to_console:
                logger.error("Failed to compile %s:\n%s", file.path, message)
            raise StageError(file.path, message, stage=self.name) from e

        css, smap = split_map_comment(css)
        if file.source_map is not None and smap is not None:
            file.source_map = self._fix_sources(smap, file)
        file.contents = css
        file.path = file.path.with_suffix(".css")
        logger.debug("Compiled %s", file.relative)
        return file
