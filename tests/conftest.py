import dataclasses

import pytest

from src.stages import default_collaborators
from src.stages.notify import ConsoleNotifier


class RecordingNotifier(ConsoleNotifier):
    def __init__(self):
        super().__init__(color=False)
        self.messages = []

    def notify(self, message):
        self.messages.append(message)


class FakePrefixer:
    """Stands in for the node autoprefixer; records its options and passes CSS through."""

    instances = []

    def __init__(self, browsers, cascade=False, node="node"):
        self.browsers = list(browsers)
        self.cascade = cascade
        self.node = node
        self.seen = []
        FakePrefixer.instances.append(self)

    def __call__(self, file):
        self.seen.append(file.relative.as_posix())
        return file


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def fake_prefixer():
    """The FakePrefixer class, with a fresh record of instances."""
    FakePrefixer.instances = []
    return FakePrefixer


@pytest.fixture
def stages(notifier, fake_prefixer):
    return dataclasses.replace(
        default_collaborators(), notifier=notifier, autoprefixer=fake_prefixer
    )


@pytest.fixture
def scss_tree(tmp_path):
    root = tmp_path / "scss"
    (root / "pages").mkdir(parents=True)
    (root / "_variables.scss").write_text("$brand: #336699;\n", encoding="utf-8")
    (root / "main.scss").write_text(
        '@import "variables";\n\n.header {\n  color: $brand;\n  .title { font-weight: bold; }\n}\n',
        encoding="utf-8",
    )
    (root / "pages" / "about.scss").write_text(
        ".about {\n  margin: 0 auto;\n}\n", encoding="utf-8"
    )
    return root


@pytest.fixture
def params(tmp_path, scss_tree):
    return {
        "sass": {
            "files": str(scss_tree / "**" / "*.scss"),
            "destination": str(tmp_path / "css"),
            "include_paths": [],
        }
    }
