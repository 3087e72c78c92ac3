"""Resolution and loading of static test assets."""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

type AssetKind = Literal["script", "markup"]

LIBRARY_PREFIX = "/jspec/"
SCRIPT_SUFFIX = ".js"

CONTENT_TYPES: dict[AssetKind, str] = {
    "script": "application/javascript",
    "markup": "text/html",
}


class AssetNotFoundError(Exception):
    """Raised when a requested asset does not resolve to a file under its root."""


@dataclass(frozen=True, kw_only=True)
class AssetRequest:
    """A single asset lookup: where to read from and how to label it."""

    root: Path
    path: str
    kind: AssetKind

    @property
    def content_type(self) -> str:
        return CONTENT_TYPES[self.kind]

    def resolve(self) -> Path:
        """Resolve the request to a file, refusing paths that escape the root.

        Raises:
            AssetNotFoundError: If the path escapes the root or is not a file

        """
        root = self.root.resolve()
        candidate = (root / self.path.lstrip("/")).resolve()

        if not candidate.is_relative_to(root):
            raise AssetNotFoundError(f"Asset '{self.path}' is outside of {root}")
        if not candidate.is_file():
            raise AssetNotFoundError(f"Asset '{self.path}' not found in {root}")

        return candidate

    async def read(self) -> bytes:
        """Read the asset's bytes without blocking the event loop."""
        path = self.resolve()
        try:
            return await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError as exc:
            raise AssetNotFoundError(
                f"Asset '{self.path}' not found in {self.root}"
            ) from exc


def classify_asset(path: str, root: Path, library_root: Path) -> AssetRequest:
    """Map a request path to the asset it refers to.

    Paths under the library prefix are served from ``library_root`` regardless
    of the project root; everything else comes from ``root``, as a script when
    it has the script suffix and as markup otherwise.
    """
    if path.startswith(LIBRARY_PREFIX):
        return AssetRequest(
            root=library_root, path=path.removeprefix(LIBRARY_PREFIX), kind="script"
        )
    if path.endswith(SCRIPT_SUFFIX):
        return AssetRequest(root=root, path=path, kind="script")
    return AssetRequest(root=root, path=path, kind="markup")
