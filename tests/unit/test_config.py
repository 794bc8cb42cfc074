"""Tests for reading build options from config params."""
from pathlib import Path

import pytest

from src.tasks.compile_sass import AutoprefixerOptions, SassOptions
from src.taskrunner.utils import DEFAULT_BROWSERS, DEFAULT_INCLUDE_PATHS


class TestSassOptions:
    def test_minimal_config_gets_defaults(self):
        opts = SassOptions.from_params({"sass": {"files": "scss/**/*.scss", "destination": "css"}})
        assert opts.files == ("scss/**/*.scss",)
        assert opts.destination == Path("css")
        assert list(opts.include_paths) == DEFAULT_INCLUDE_PATHS
        assert opts.output_style == "expanded"
        assert opts.log_to_console is True
        assert opts.sourcemaps == "inline"

    def test_multiple_patterns(self):
        opts = SassOptions.from_params(
            {"sass": {"files": ["a/*.scss", "!a/_*.scss"], "destination": "css"}}
        )
        assert opts.files == ("a/*.scss", "!a/_*.scss")

    @pytest.mark.parametrize(
        "sass",
        [
            {"destination": "css"},
            {"files": [], "destination": "css"},
            {"files": "scss/*.scss"},
            {"files": "scss/*.scss", "destination": "css", "output_style": "fancy"},
            {"files": "scss/*.scss", "destination": "css", "sourcemaps": "sideways"},
        ],
    )
    def test_invalid(self, sass):
        with pytest.raises(ValueError):
            SassOptions.from_params({"sass": sass})

    def test_sourcemaps_can_be_disabled(self):
        opts = SassOptions.from_params(
            {"sass": {"files": "x.scss", "destination": "css", "sourcemaps": False}}
        )
        assert opts.sourcemaps is None

    def test_options_are_frozen(self):
        opts = SassOptions.from_params({"sass": {"files": "x.scss", "destination": "css"}})
        with pytest.raises(AttributeError):
            opts.destination = Path("elsewhere")


class TestAutoprefixerOptions:
    def test_defaults(self):
        opts = AutoprefixerOptions.from_params({})
        assert list(opts.browsers) == DEFAULT_BROWSERS
        assert opts.cascade is False
        assert opts.node == "node"

    def test_overrides(self):
        opts = AutoprefixerOptions.from_params(
            {"autoprefixer": {"browsers": "> 1%", "cascade": True, "node": "/usr/bin/node"}}
        )
        assert opts.browsers == ("> 1%",)
        assert opts.cascade is True
