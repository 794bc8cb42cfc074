"""Glob-style `@import` resolution.

Rewrites::

    @import "components/**/*";

into one ``@import`` per matching stylesheet, so the compiler only ever
sees plain imports.
"""

from __future__ import annotations

import glob
import os
import re
from pathlib import Path
from typing import Iterable, List

from ..taskrunner.logging import get_logger
from .base import StyleFile


logger = get_logger("stages.sass_glob")

EXTENSIONS = (".scss", ".sass")

IMPORT_RE = re.compile(
    r"""^(?P<indent>[ \t]*)@import\s+(?P<quote>["'])(?P<pattern>[^"']*[*?\[][^"']*)(?P=quote)[ \t]*;?[ \t]*$""",
    re.MULTILINE,
)


class SassGlob:
    name = "sass_glob"

    def __init__(self, include_paths: Iterable[str | Path] = ()):
        self.include_paths = [Path(p) for p in include_paths]

    def _matches(self, pattern: str, base_dir: Path, exclude: Path) -> List[str]:
        for root in [base_dir, *self.include_paths]:
            found = []
            for match in glob.glob(str(root / pattern), recursive=True):
                p = Path(os.path.abspath(match))
                if not p.is_file() or p.suffix not in EXTENSIONS or p == exclude:
                    continue
                found.append(os.path.relpath(p, root).replace("\\", "/"))
            if found:
                return sorted(found)
        return []

    def expand(self, contents: str, path: Path) -> str:
        path = Path(os.path.abspath(path))

        def _sub(m: re.Match) -> str:
            pattern = m.group("pattern")
            imports = self._matches(pattern, path.parent, path)
            if not imports:
                logger.debug("Glob import matched nothing: %s (%s)", pattern, path)
                return ""
            q = m.group("quote")
            return "\n".join(f"{m.group('indent')}@import {q}{i}{q};" for i in imports)

        return IMPORT_RE.sub(_sub, contents)

    def __call__(self, file: StyleFile) -> StyleFile:
        file.contents = self.expand(file.contents, file.path)
        return file
