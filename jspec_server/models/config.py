"""Configuration for a coordination session."""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator

from jspec_server.browsers import LaunchableBrowser, normalize_browser_name
from jspec_server.models.base import Model

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 4444
DEFAULT_LIBRARY_ROOT = Path("lib")


class ServerConfig(Model):
    """Options recognised by the coordination server."""

    spec_file: Path = Field(..., description="Page opened in each browser")
    browsers: Sequence[LaunchableBrowser] = Field(
        default=(), description="Browsers to launch, in launch order"
    )
    root: Path = Field(..., description="Filesystem base for project assets")
    library_root: Path = Field(
        default=DEFAULT_LIBRARY_ROOT,
        description="Filesystem base for assets served under /jspec/",
    )
    server_only: bool = Field(default=False, description="Do not launch browsers")
    host: str = Field(default=DEFAULT_HOST, description="Listener bind host")
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    deadline: float | None = Field(
        default=None,
        gt=0,
        description="Seconds to wait for all browsers (None waits forever)",
    )
    startup_delay: float = Field(
        default=0.0, ge=0, description="Seconds to wait after binding before launch"
    )
    notify: bool = Field(default=True, description="Send desktop notifications")

    @model_validator(mode="before")
    @classmethod
    def default_root_to_spec_dir(cls, data: Any) -> Any:
        """Serve project assets from the spec file's directory unless told otherwise."""
        if (
            isinstance(data, dict)
            and data.get("root") is None
            and data.get("spec_file")
        ):
            return {**data, "root": Path(data["spec_file"]).parent}
        return data

    @field_validator("browsers", mode="before")
    @classmethod
    def normalize_browsers(cls, value: Any) -> Any:
        """Accept comma-separated strings and case-insensitive aliases."""
        if isinstance(value, str):
            value = [name for name in value.split(",") if name.strip()]
        if isinstance(value, (list, tuple)):
            return tuple(normalize_browser_name(str(name)) for name in value)
        return value

    @property
    def spec_path(self) -> str:
        """URL path of the spec page, relative to the project root."""
        try:
            relative = self.spec_file.resolve().relative_to(self.root.resolve())
        except ValueError:
            relative = Path(self.spec_file.name)
        return "/" + relative.as_posix()
