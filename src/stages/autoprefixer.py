"""Vendor prefixing through postcss + autoprefixer running under node.

The prefixing rules live in the npm packages; this stage only ships CSS
and its source map across and reads the result back.
"""

from __future__ import annotations

import json
import re
import subprocess
from pathlib import Path
from typing import Iterable, Optional

from ..taskrunner.logging import get_logger
from ..taskrunner.stream import StageError
from .base import StyleFile


logger = get_logger("stages.autoprefixer")

_ERROR_LINE = re.compile(r"^\w*Error\b")

# Reads one JSON request on stdin, writes one JSON response on stdout.
NODE_SCRIPT = r"""
const postcss = require('postcss');
const autoprefixer = require('autoprefixer');
let input = '';
process.stdin.setEncoding('utf8');
process.stdin.on('data', (chunk) => { input += chunk; });
process.stdin.on('end', () => {
  const req = JSON.parse(input);
  const plugin = autoprefixer({ overrideBrowserslist: req.browsers, cascade: req.cascade });
  const map = req.map ? { prev: req.map, inline: false, annotation: false, sourcesContent: true } : false;
  postcss([plugin])
    .process(req.css, { from: req.from, to: req.to, map })
    .then((result) => {
      process.stdout.write(JSON.stringify({
        css: result.css,
        map: result.map ? result.map.toJSON() : null,
        warnings: result.warnings().map((w) => w.toString()),
      }));
    })
    .catch((err) => {
      process.stderr.write(String((err && err.message) || err));
      process.exit(1);
    });
});
"""


def summarize_stderr(stderr: str | None) -> str:
    """First error line of node output, without the stack trace."""
    lines = [line.strip() for line in (stderr or "").splitlines() if line.strip()]
    for line in lines:
        if line.startswith("Error: "):
            return line[len("Error: "):]
        if _ERROR_LINE.match(line):
            return line
    return lines[0] if lines else ""


class Autoprefixer:
    name = "autoprefixer"

    def __init__(
        self,
        browsers: Iterable[str],
        cascade: bool = False,
        node: str = "node",
        cwd: Path | str | None = None,
        timeout: float | None = 120,
    ):
        self.browsers = list(browsers)
        self.cascade = cascade
        self.node = node
        self.cwd = str(cwd) if cwd is not None else None
        self.timeout = timeout

    def request(self, file: StyleFile) -> dict:
        return {
            "css": file.contents,
            "map": file.source_map,
            "from": file.relative.as_posix(),
            "to": file.relative.as_posix(),
            "browsers": self.browsers,
            "cascade": self.cascade,
        }

    def __call__(self, file: StyleFile) -> Optional[StyleFile]:
        try:
            proc = subprocess.run(
                [self.node, "-e", NODE_SCRIPT],
                input=json.dumps(self.request(file)),
                capture_output=True,
                text=True,
                encoding="utf-8",
                cwd=self.cwd,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise StageError(file.path, f"node executable not found: {self.node}", stage=self.name) from e
        except subprocess.TimeoutExpired as e:
            raise StageError(file.path, f"autoprefixer timed out after {self.timeout}s", stage=self.name) from e

        if proc.returncode != 0:
            message = summarize_stderr(proc.stderr) or f"autoprefixer exited with {proc.returncode}"
            logger.debug("node stderr for %s:\n%s", file.relative, proc.stderr)
            raise StageError(file.path, message, stage=self.name)
        try:
            payload = json.loads(proc.stdout)
        except ValueError as e:
            raise StageError(file.path, "autoprefixer returned invalid output", stage=self.name) from e

        for warning in payload.get("warnings") or []:
            logger.warning("%s: %s", file.relative, warning)
        file.contents = payload["css"]
        if file.source_map is not None and payload.get("map"):
            file.source_map = payload["map"]
        return file
