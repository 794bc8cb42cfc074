from __future__ import annotations

import time
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from .logging import get_logger


@dataclass
class TaskSpec:
    name: str
    fn: Callable[[], Any]
    description: str = ""


class TaskRegistry:
    """Named zero-argument task handlers.

    A handler may return a plain value or an iterator (a stream of
    per-item results); `run` drains streams before the task counts as done.
    """

    def __init__(self, name: str = "registry"):
        self.name = name
        self.tasks: Dict[str, TaskSpec] = {}
        self.logger = get_logger(f"taskrunner.{self.name}")

    def task(
        self,
        name: str,
        fn: Callable[[], Any] | None = None,
        description: str = "",
    ):
        """Register `fn` under `name`, or return a decorator when `fn` is omitted."""

        def deco(handler: Callable[[], Any]):
            if name in self.tasks:
                raise ValueError(f"Task already registered: {name}")
            self.tasks[name] = TaskSpec(name=name, fn=handler, description=description)
            return handler

        if fn is None:
            return deco
        return deco(fn)

    def get(self, name: str) -> TaskSpec:
        if name not in self.tasks:
            raise KeyError(f"Unknown task: {name}")
        return self.tasks[name]

    def names(self) -> List[str]:
        return sorted(self.tasks.keys())

    def __contains__(self, name: object) -> bool:
        return name in self.tasks

    def run(self, name: str) -> Any:
        spec = self.get(name)
        task_logger = get_logger(f"taskrunner.{self.name}.{name}")
        started = time.perf_counter()
        task_logger.info("Run: %s", name)
        try:
            result = spec.fn()
            if isinstance(result, Iterator):
                result = list(result)
        except Exception:
            task_logger.exception("Task failed: %s", name)
            raise
        task_logger.info(
            "Finished: %s (%.2fs)", name, time.perf_counter() - started
        )
        return result
