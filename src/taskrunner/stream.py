"""Per-file stream runner.

Each input flows through the same ordered list of stages. A stage takes one
item and returns the transformed item, or ``None`` to drop it from the
stream. Files are independent: a `StageError` ends only the file that
raised it, every other failure propagates to the caller.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence

from .logging import get_logger


Stage = Callable[[Any], Any]
ErrorHandler = Callable[["StageError"], None]


class StageError(Exception):
    """Recoverable failure of a single file inside a stage."""

    def __init__(self, path: Path | str, message: str, stage: str = ""):
        super().__init__(message)
        self.path = Path(path)
        self.message = message
        self.stage = stage

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class FileResult:
    source: Path
    status: str  # "ok" | "skipped" | "error"
    outputs: List[Path] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


def _stage_name(stage: Stage) -> str:
    return getattr(stage, "name", None) or getattr(
        stage, "__name__", type(stage).__name__
    )


class FilePipeline:
    def __init__(
        self,
        stages: Sequence[Stage],
        on_error: ErrorHandler | None = None,
        name: str = "stream",
        max_workers: int | None = None,
    ):
        self.name = name
        self.stages = list(stages)
        self.on_error = on_error
        self.max_workers = max_workers
        self.logger = get_logger(f"taskrunner.stream.{self.name}")

    def process(self, item: Any) -> FileResult:
        source = Path(item.path)
        current = item
        for stage in self.stages:
            try:
                current = stage(current)
            except StageError as e:
                if not e.stage:
                    e.stage = _stage_name(stage)
                self.logger.debug("Stage %s failed for %s", e.stage, source)
                if self.on_error is not None:
                    self.on_error(e)
                return FileResult(source=source, status="error", error=e.message)
            if current is None:
                self.logger.debug("Dropped by %s: %s", _stage_name(stage), source)
                return FileResult(source=source, status="skipped")
        # The last stage reports what it wrote
        outputs = current if isinstance(current, list) else [Path(current.path)]
        return FileResult(source=source, status="ok", outputs=[Path(p) for p in outputs])

    def run(self, items: Iterable[Any]) -> Iterator[FileResult]:
        items = list(items)
        if not items:
            self.logger.info("Nothing to process")
            return
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(self.process, it) for it in items]
            for fut in as_completed(futures):
                yield fut.result()
