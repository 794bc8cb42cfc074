"""Source map tracking: attach a map before compiling, emit it at the end."""

from __future__ import annotations

import base64
import json
import re
from dataclasses import replace
from typing import Callable, Optional

from ..taskrunner.logging import get_logger
from .base import StyleFile


logger = get_logger("stages.sourcemaps")

MODES = ("inline", "external")

_URL_COMMENT = re.compile(r"\n?/\*# sourceMappingURL=(?P<url>[^\s*]+)\s*\*/\s*$")
_DATA_PREFIX = "data:application/json;"


def _posix(path) -> str:
    return str(path).replace("\\", "/")


def split_map_comment(css: str) -> tuple[str, Optional[dict]]:
    """Strip a trailing sourceMappingURL comment and decode it when inline."""
    m = _URL_COMMENT.search(css)
    if not m:
        return css, None
    stripped = css[: m.start()].rstrip("\n") + "\n"
    url = m.group("url")
    if not url.startswith(_DATA_PREFIX):
        return stripped, None
    payload = url.split(",", 1)[1] if "," in url else ""
    try:
        if ";base64" in url.split(",", 1)[0]:
            payload = base64.b64decode(payload).decode("utf-8")
        return stripped, json.loads(payload)
    except ValueError:
        logger.warning("Ignoring undecodable inline source map")
        return stripped, None


def init(enabled: bool = True) -> Callable[[StyleFile], StyleFile]:
    def sourcemaps_init(file: StyleFile) -> StyleFile:
        if not enabled:
            return file
        rel = _posix(file.relative)
        file.source_map = {
            "version": 3,
            "file": rel,
            "names": [],
            "mappings": "",
            "sources": [rel],
            "sourcesContent": [file.contents],
        }
        return file

    return sourcemaps_init


def write(mode: str | None = "inline") -> Callable[[StyleFile], StyleFile]:
    """Emit the tracked map, inline (base64 data URI) or as a `.map` companion."""
    if mode is not None and mode not in MODES:
        raise ValueError(f"Unknown sourcemaps mode: {mode!r} (expected one of {MODES})")

    def sourcemaps_write(file: StyleFile) -> StyleFile:
        smap, file.source_map = file.source_map, None
        if mode is None or smap is None:
            return file
        smap = dict(smap, file=_posix(file.relative))
        body = json.dumps(smap)
        css = file.contents.rstrip("\n") + "\n"
        if mode == "inline":
            encoded = base64.b64encode(body.encode("utf-8")).decode("ascii")
            file.contents = (
                f"{css}\n/*# sourceMappingURL={_DATA_PREFIX}charset=utf8;base64,{encoded} */\n"
            )
            return file
        map_path = file.path.with_name(file.path.name + ".map")
        file.contents = f"{css}\n/*# sourceMappingURL={map_path.name} */\n"
        file.companions.append(
            replace(file, path=map_path, contents=body, source_map=None, companions=[])
        )
        return file

    return sourcemaps_write
