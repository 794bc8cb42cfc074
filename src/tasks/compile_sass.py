"""Compile: Sass.

Registers ``compile:sass``: sources matched by ``sass.files`` go through
source maps, glob imports, libsass, autoprefixer and land in
``sass.destination``. Compile errors are reported and the rest of the
batch carries on.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple

from ..stages import Collaborators
from ..stages.compiler import OUTPUT_STYLES
from ..stages.sourcemaps import MODES as SOURCEMAP_MODES
from ..taskrunner import FilePipeline, FileResult, TaskRegistry
from ..taskrunner.logging import get_logger
from ..taskrunner.utils import (
    autoprefixer_browsers,
    autoprefixer_cascade,
    node_binary,
    sass_destination,
    sass_files,
    sass_include_paths,
    sass_log_to_console,
    sass_output_style,
    sourcemaps_mode,
)


TASK_NAME = "compile:sass"

logger = get_logger("tasks.compile_sass")


@dataclass(frozen=True)
class SassOptions:
    files: Tuple[str, ...]
    destination: Path
    include_paths: Tuple[str, ...]
    output_style: str = "expanded"
    log_to_console: bool = True
    sourcemaps: Optional[str] = "inline"

    @classmethod
    def from_params(cls, params: Dict) -> "SassOptions":
        files = sass_files(params)
        if not files:
            raise ValueError("sass.files must name at least one glob pattern")
        destination = sass_destination(params)
        if not destination:
            raise ValueError("sass.destination is required")
        output_style = sass_output_style(params)
        if output_style not in OUTPUT_STYLES:
            raise ValueError(f"sass.output_style must be one of {OUTPUT_STYLES}")
        mode = sourcemaps_mode(params)
        if mode is not None and mode not in SOURCEMAP_MODES:
            raise ValueError(f"sass.sourcemaps must be one of {SOURCEMAP_MODES} or false")
        return cls(
            files=tuple(files),
            destination=Path(destination),
            include_paths=tuple(sass_include_paths(params)),
            output_style=output_style,
            log_to_console=sass_log_to_console(params),
            sourcemaps=mode,
        )


@dataclass(frozen=True)
class AutoprefixerOptions:
    browsers: Tuple[str, ...]
    cascade: bool = False
    node: str = "node"

    @classmethod
    def from_params(cls, params: Dict) -> "AutoprefixerOptions":
        return cls(
            browsers=tuple(autoprefixer_browsers(params)),
            cascade=autoprefixer_cascade(params),
            node=node_binary(params),
        )


def format_error(error) -> str:
    return "Error: " + error.message


def build_pipeline(
    stages: Collaborators, options: SassOptions, prefix: AutoprefixerOptions
) -> FilePipeline:
    return FilePipeline(
        stages=[
            stages.read(),
            stages.sourcemaps_init(enabled=options.sourcemaps is not None),
            stages.sass_glob(include_paths=options.include_paths),
            stages.sass(
                include_paths=options.include_paths,
                output_style=options.output_style,
                log_to_console=options.log_to_console,
            ),
            stages.autoprefixer(
                browsers=prefix.browsers, cascade=prefix.cascade, node=prefix.node
            ),
            stages.sourcemaps_write(options.sourcemaps),
            stages.dest(options.destination),
        ],
        on_error=stages.notifier.on_error(format_error),
        name=TASK_NAME,
    )


def register(registry: TaskRegistry, stages: Collaborators, params: Dict) -> None:
    options = SassOptions.from_params(params)
    prefix = AutoprefixerOptions.from_params(params)

    def compile_sass() -> Iterator[FileResult]:
        pipeline = build_pipeline(stages, options, prefix)
        files = stages.src(list(options.files))
        logger.info("Compiling %d file(s) into %s", len(files), options.destination)
        return pipeline.run(files)

    registry.task(TASK_NAME, compile_sass, description="Compile Sass sources to CSS")
