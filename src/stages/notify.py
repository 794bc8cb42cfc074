"""Non-fatal error notifications."""

from __future__ import annotations

from typing import Callable

import typer

from ..taskrunner.logging import get_logger
from ..taskrunner.stream import StageError


Formatter = Callable[[StageError], str]


class ConsoleNotifier:
    """Report messages on stderr and in the log without stopping the build."""

    def __init__(self, title: str = "stylepipe", color: bool | None = None):
        self.title = title
        self.color = color
        self.logger = get_logger("stages.notify")

    def notify(self, message: str) -> None:
        self.logger.error("%s", message)
        typer.secho(
            f"[{self.title}] {message}", fg=typer.colors.RED, err=True, color=self.color
        )

    def on_error(self, formatter: Formatter) -> Callable[[StageError], None]:
        def handler(error: StageError) -> None:
            self.notify(formatter(error))

        return handler
