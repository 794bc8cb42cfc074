"""Transformation stages used by the stylesheet tasks.

Tasks never look stages up by name at run time; they receive one
`Collaborators` object and call its attributes.
"""

from dataclasses import dataclass
from typing import Any, Callable

from . import sourcemaps
from .autoprefixer import Autoprefixer
from .base import StyleFile
from .compiler import SassCompiler
from .dest import Dest
from .notify import ConsoleNotifier
from .sass_glob import SassGlob
from .source import read, src


@dataclass(frozen=True)
class Collaborators:
    src: Callable[..., Any]
    read: Callable[..., Any]
    sourcemaps_init: Callable[..., Any]
    sass_glob: Callable[..., Any]
    sass: Callable[..., Any]
    notifier: Any
    autoprefixer: Callable[..., Any]
    sourcemaps_write: Callable[..., Any]
    dest: Callable[..., Any]


def default_collaborators() -> Collaborators:
    return Collaborators(
        src=src,
        read=read,
        sourcemaps_init=sourcemaps.init,
        sass_glob=SassGlob,
        sass=SassCompiler,
        notifier=ConsoleNotifier(),
        autoprefixer=Autoprefixer,
        sourcemaps_write=sourcemaps.write,
        dest=Dest,
    )


__all__ = [
    "Collaborators",
    "StyleFile",
    "default_collaborators",
]
