"""Fixtures for live session tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from jspec_server.models.config import ServerConfig
from jspec_server.testing.factories import ServerConfigFactory


@pytest.fixture
def site(tmp_path: Path) -> tuple[Path, Path]:
    """Create project and library roots with a spec page."""
    project = tmp_path / "project"
    (project / "spec").mkdir(parents=True)
    (project / "index.html").write_text(
        "<html><script src='/jspec/jspec.js'></script></html>"
    )
    (project / "spec" / "app.spec.js").write_text("describe('app', function(){})\n")
    library = tmp_path / "lib"
    library.mkdir()
    (library / "jspec.js").write_text("var JSpec = {};\n")
    return project, library


@pytest.fixture
def make_config(site: tuple[Path, Path]) -> Callable[..., ServerConfig]:
    """Return a function building a config bound to a free local port."""
    project, library = site

    def _make(**overrides: object) -> ServerConfig:
        values: dict[str, object] = {
            "spec_file": project / "index.html",
            "root": project,
            "library_root": library,
            "host": "127.0.0.1",
            "port": 0,
            "server_only": False,
        }
        values.update(overrides)
        return ServerConfigFactory.build(**values)

    return _make
