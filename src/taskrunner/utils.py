from __future__ import annotations

"""Small helpers for reading build options from config params."""

from typing import Dict, List


DEFAULT_INCLUDE_PATHS = ["./node_modules/foundation-sites/scss"]
DEFAULT_BROWSERS = ["last 2 versions", "ie >= 9", "and_chr >= 2.3"]


def _get(d: Dict, *keys, default=None):
    cur = d
    for k in keys:
        if not isinstance(cur, dict):
            return default
        cur = cur.get(k)
        if cur is None:
            return default
    return cur


def _as_list(value) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)):
        return [str(value)]
    return [str(v) for v in value]


def sass_files(p: Dict) -> List[str]:
    return [f for f in _as_list(_get(p, "sass", "files")) if f.strip()]


def sass_destination(p: Dict) -> str | None:
    return _get(p, "sass", "destination")


def sass_include_paths(p: Dict) -> List[str]:
    return _as_list(_get(p, "sass", "include_paths", default=DEFAULT_INCLUDE_PATHS))


def sass_output_style(p: Dict) -> str:
    return str(_get(p, "sass", "output_style", default="expanded"))


def sass_log_to_console(p: Dict) -> bool:
    return bool(_get(p, "sass", "log_to_console", default=True))


def sourcemaps_mode(p: Dict) -> str | None:
    mode = _get(p, "sass", "sourcemaps", default="inline")
    if mode is False:
        return None
    mode = str(mode).strip().lower()
    if mode in ("", "none", "false", "off"):
        return None
    return mode


def autoprefixer_browsers(p: Dict) -> List[str]:
    return _as_list(_get(p, "autoprefixer", "browsers", default=DEFAULT_BROWSERS))


def autoprefixer_cascade(p: Dict) -> bool:
    return bool(_get(p, "autoprefixer", "cascade", default=False))


def node_binary(p: Dict) -> str:
    return str(_get(p, "autoprefixer", "node", default="node"))
