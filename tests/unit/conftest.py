"""Shared fixtures for unit tests."""

from pathlib import Path

import pytest

from jspec_server.models.config import ServerConfig
from jspec_server.testing.factories import ServerConfigFactory


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Create a project root with a spec page and a script."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "index.html").write_text("<html><body>specs</body></html>")
    (root / "app.js").write_text("var app = 'project';\n")
    (root / "spec").mkdir()
    (root / "spec" / "app.spec.js").write_text("describe('app', function(){})\n")
    return root


@pytest.fixture
def library_root(tmp_path: Path) -> Path:
    """Create a library root holding the in-browser assertion library."""
    root = tmp_path / "lib"
    root.mkdir()
    (root / "foo.js").write_text("var foo = 'library';\n")
    (root / "app.js").write_text("var app = 'library';\n")
    return root


@pytest.fixture
def config(project_root: Path, library_root: Path) -> ServerConfig:
    """Create a server-only configuration expecting two browsers."""
    return ServerConfigFactory.build(
        spec_file=project_root / "index.html",
        root=project_root,
        library_root=library_root,
        browsers=("Firefox", "Safari"),
    )
