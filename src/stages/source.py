"""Source enumeration: glob patterns to a list of `StyleFile`s."""

from __future__ import annotations

import glob
import os
from pathlib import Path
from typing import Callable, Iterable, List

from ..taskrunner.logging import get_logger
from ..taskrunner.stream import StageError
from .base import StyleFile


logger = get_logger("stages.source")

_MAGIC = "*?["


def _has_magic(part: str) -> bool:
    return any(ch in part for ch in _MAGIC)


def glob_base(pattern: str) -> Path:
    """Leading directory of `pattern` that holds no glob characters."""
    parts = Path(pattern).parts
    base: list[str] = []
    for part in parts:
        if _has_magic(part):
            break
        base.append(part)
    if len(base) == len(parts):
        # Plain file path: its base is the containing directory
        base = base[:-1]
    return Path(*base) if base else Path(".")


def _expand_globs(pattern: str, cwd: Path) -> List[Path]:
    full = pattern if os.path.isabs(pattern) else str(cwd / pattern)
    out: list[Path] = []
    for match in glob.glob(full, recursive=True):
        p = Path(os.path.abspath(match))
        if p.is_file():
            out.append(p)
    return out


def src(patterns: Iterable[str] | str, cwd: Path | str | None = None) -> List[StyleFile]:
    """List every file matched by `patterns`; contents are loaded by `read`.

    Patterns starting with ``!`` exclude matches. A pattern list that
    matches nothing is not an error; the result is simply empty.
    """
    if isinstance(patterns, str):
        patterns = [patterns]
    root = Path(cwd) if cwd is not None else Path.cwd()

    include: list[str] = []
    excluded: set[Path] = set()
    for pat in patterns:
        if pat.startswith("!"):
            excluded.update(_expand_globs(pat[1:], root))
        else:
            include.append(pat)

    seen: dict[Path, Path] = {}
    for pat in include:
        base = glob_base(pat)
        base = base if base.is_absolute() else root / base
        base = Path(os.path.abspath(base))
        for path in _expand_globs(pat, root):
            if path in excluded or path in seen:
                continue
            seen[path] = base

    if not seen:
        logger.warning("No files matched: %s", ", ".join(include) or "(none)")
        return []

    files = [StyleFile(path=path, base=base) for path, base in sorted(seen.items())]
    logger.info("Matched %d file(s)", len(files))
    return files


def read() -> Callable[[StyleFile], StyleFile]:
    """Load file contents inside the stream so one bad file fails alone."""

    def read_file(file: StyleFile) -> StyleFile:
        if file.contents is not None:
            return file
        try:
            file.contents = file.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise StageError(
                file.path,
                f"not valid UTF-8 ({e.reason} at byte {e.start}); save the file as UTF-8",
                stage="read",
            ) from e
        return file

    return read_file
