from __future__ import annotations

import importlib
import pkgutil
from collections import Counter
from pathlib import Path

import typer
import yaml

from ..stages import Collaborators, default_collaborators
from .core import TaskRegistry
from .logging import get_logger


app = typer.Typer(add_completion=False, help="Stylesheet build task runner")
log = get_logger("taskrunner.cli")


def load_config(path: str | Path) -> dict:
    p = Path(path)
    with open(p, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def discover_tasks(
    params: dict, stages: Collaborators | None = None
) -> TaskRegistry:
    """Import all modules in `tasks` package and let each register its tasks."""
    tasks_pkg = "src.tasks"
    registry = TaskRegistry(name="cli")
    stages = stages or default_collaborators()
    try:
        pkg = importlib.import_module(tasks_pkg)
    except ModuleNotFoundError:
        log.warning("No tasks package found.")
        return registry
    for m in pkgutil.iter_modules(pkg.__path__, prefix=f"{tasks_pkg}."):
        mod = importlib.import_module(m.name)
        register = getattr(mod, "register", None)
        if callable(register):
            register(registry, stages, params)
    return registry


def _load_registry(config: str) -> TaskRegistry:
    try:
        params = load_config(config)
    except FileNotFoundError:
        typer.echo(f"Config not found: {config}", err=True)
        raise typer.Exit(code=1)
    try:
        return discover_tasks(params)
    except ValueError as e:
        typer.echo(f"Invalid config {config}: {e}", err=True)
        raise typer.Exit(code=1)


@app.command("list")
def list_tasks(
    config: str = typer.Option("configs/base.yaml", help="Path to YAML config"),
):
    """List registered tasks."""
    registry = _load_registry(config)
    if not registry.names():
        typer.echo("No tasks registered. Add a module with register() under `tasks/`.")
        raise typer.Exit(code=0)
    typer.echo("Registered tasks:")
    for name in registry.names():
        desc = registry.get(name).description
        typer.echo(f"- {name}" + (f": {desc}" if desc else ""))


@app.command()
def run_task(
    name: str = typer.Argument(..., help="Task name to run"),
    config: str = typer.Option("configs/base.yaml", help="Path to YAML config"),
):
    """Run a single task by name."""
    registry = _load_registry(config)
    if name not in registry:
        typer.echo(f"Task not found: {name}")
        raise typer.Exit(code=1)
    results = registry.run(name)
    if isinstance(results, list):
        counts = Counter(getattr(r, "status", "ok") for r in results)
        typer.echo(
            f"{name}: {counts['ok']} compiled, "
            f"{counts['skipped']} skipped, {counts['error']} failed"
        )


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
