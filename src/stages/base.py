from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class StyleFile:
    """A stylesheet travelling through the build stream.

    `base` is the glob base the file was found under; `relative` (the path
    below it) decides where the file lands in the destination directory.
    """

    path: Path
    base: Path
    contents: Optional[str] = None
    source_map: Optional[dict] = None
    companions: List["StyleFile"] = field(default_factory=list)

    @property
    def relative(self) -> Path:
        try:
            return self.path.relative_to(self.base)
        except ValueError:
            return Path(self.path.name)

    @property
    def is_partial(self) -> bool:
        return self.path.name.startswith("_")

    @classmethod
    def read(cls, path: Path, base: Path) -> "StyleFile":
        return cls(path=path, base=base, contents=path.read_text(encoding="utf-8"))
