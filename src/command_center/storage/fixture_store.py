"""Read-only access to the JSON fixture tree."""

from __future__ import annotations

import json
from pathlib import Path

from charset_normalizer import from_path

from command_center.exceptions import FixtureError
from command_center.observability.logger import get_logger

logger = get_logger("fixture_store")


class FixtureStore:
    """Resolves logical fixture paths under a root directory.

    Nothing is cached and nothing is written, so a single instance can be
    shared by any number of concurrent requests.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, relpath: str) -> Path:
        path = (self._root / relpath).resolve()
        if not path.is_relative_to(self._root):
            raise FixtureError(f"Fixture path escapes data root: {relpath}")
        return path

    def exists(self, relpath: str) -> bool:
        try:
            return self.resolve(relpath).is_file()
        except FixtureError:
            return False

    def read_json(self, relpath: str):
        path = self.resolve(relpath)
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise FixtureError(f"Failed to read fixture {relpath}: {e}") from e

    def read_json_safe(self, relpath: str):
        try:
            return self.read_json(relpath)
        except FixtureError as e:
            logger.debug("fixture_unavailable", path=relpath, error=str(e))
            return None

    def read_text(self, relpath: str) -> str:
        path = self.resolve(relpath)
        if not path.is_file():
            raise FixtureError(f"Fixture not found: {relpath}")
        try:
            best = from_path(path).best()
            return str(best) if best else path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FixtureError(f"Failed to read document {relpath}: {e}") from e
