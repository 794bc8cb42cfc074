"""Tests for source map tracking and emission."""
import base64
import json
from pathlib import Path

import pytest

from src.stages import StyleFile
from src.stages.sourcemaps import init, split_map_comment, write


def _css_file():
    f = StyleFile(path=Path("/p/scss/pages/about.scss"), base=Path("/p/scss"), contents=".a{}")
    f = init()(f)
    f.path = f.path.with_suffix(".css")
    return f


class TestSourceMaps:
    def test_init_tracks_original_source(self):
        f = StyleFile(path=Path("/p/scss/main.scss"), base=Path("/p/scss"), contents=".a{}")
        smap = init()(f).source_map
        assert smap["sources"] == ["main.scss"]
        assert smap["sourcesContent"] == [".a{}"]

    def test_init_disabled(self):
        f = StyleFile(path=Path("/p/main.scss"), base=Path("/p"), contents="")
        assert init(enabled=False)(f).source_map is None

    def test_inline(self):
        out = write("inline")(_css_file())
        css, smap = split_map_comment(out.contents)
        assert css == ".a{}\n"
        assert smap["file"] == "pages/about.css"
        assert out.companions == []
        assert out.source_map is None

    def test_inline_comment_format(self):
        out = write("inline")(_css_file())
        last = out.contents.strip().splitlines()[-1]
        prefix = "/*# sourceMappingURL=data:application/json;charset=utf8;base64,"
        assert last.startswith(prefix)
        payload = last[len(prefix):-len(" */")]
        assert json.loads(base64.b64decode(payload))["version"] == 3

    def test_external(self):
        out = write("external")(_css_file())
        assert out.contents.rstrip().endswith("/*# sourceMappingURL=about.css.map */")
        [companion] = out.companions
        assert companion.relative == Path("pages/about.css.map")
        assert json.loads(companion.contents)["file"] == "pages/about.css"

    def test_disabled_strips_map(self):
        out = write(None)(_css_file())
        assert out.contents == ".a{}"
        assert out.source_map is None

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            write("sideways")

    def test_split_ignores_external_urls(self):
        css, smap = split_map_comment(".a{}\n\n/*# sourceMappingURL=a.css.map */\n")
        assert css == ".a{}\n"
        assert smap is None
