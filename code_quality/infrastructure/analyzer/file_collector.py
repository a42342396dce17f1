"""File Collector - best-effort filesystem access rooted at a project directory.

All paths in and out are POSIX-style and relative to the root. Missing or
unreadable entries degrade to empty results; nothing here raises on I/O.
Enumeration is sorted so results are deterministic.
"""

import fnmatch
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class FileCollector:
    """Read-only view of a project tree honoring an ignore list."""

    def __init__(self, root: Path | str, ignore_dirs: tuple[str, ...] = ()) -> None:
        self.root = Path(root).resolve()
        self._ignore_dirs = tuple(ignore_dirs)
        self._walk_cache: list[str] | None = None

    def _abs(self, rel: str) -> Path:
        return self.root / rel if rel else self.root

    def _is_ignored_dir(self, name: str) -> bool:
        return any(fnmatch.fnmatch(name, pattern) for pattern in self._ignore_dirs)

    def exists(self, rel: str) -> bool:
        return self._abs(rel).exists()

    def is_dir(self, rel: str) -> bool:
        return self._abs(rel).is_dir()

    def read_text(self, rel: str) -> str:
        """File content, or "" when missing or unreadable."""
        try:
            return self._abs(rel).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug("Cannot read %s: %s", rel, e)
            return ""

    def read_json(self, rel: str) -> dict | None:
        """Parsed JSON object, or None when missing, malformed or not an object."""
        path = self._abs(rel)
        if not path.is_file():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8", errors="replace"))
        except (OSError, json.JSONDecodeError) as e:
            logger.debug("Ignoring unreadable manifest %s: %s", rel, e)
            return None
        return data if isinstance(data, dict) else None

    def list_dirs(self, rel: str = "") -> list[str]:
        """Sorted names of immediate subdirectories (ignored names skipped)."""
        try:
            entries = sorted(os.scandir(self._abs(rel)), key=lambda e: e.name)
        except OSError:
            return []
        return [e.name for e in entries if e.is_dir() and not self._is_ignored_dir(e.name)]

    def list_files(self, rel: str = "") -> list[str]:
        """Sorted names of immediate regular files."""
        try:
            entries = sorted(os.scandir(self._abs(rel)), key=lambda e: e.name)
        except OSError:
            return []
        return [e.name for e in entries if e.is_file()]

    def all_files(self) -> list[str]:
        """Every file under the root outside ignored directories, sorted."""
        if self._walk_cache is None:
            found: list[str] = []
            for dirpath, dirnames, filenames in os.walk(self.root):
                dirnames[:] = sorted(d for d in dirnames if not self._is_ignored_dir(d))
                base = Path(dirpath).relative_to(self.root)
                for name in filenames:
                    found.append((base / name).as_posix())
            self._walk_cache = sorted(found)
        return list(self._walk_cache)

    def files_with_extensions(self, extensions: tuple[str, ...], under: str = "") -> list[str]:
        """Files with one of the extensions, optionally below a directory."""
        prefix = f"{under.rstrip('/')}/" if under else ""
        return [
            f for f in self.all_files()
            if f.startswith(prefix) and f.endswith(extensions)
        ]

    def glob(self, pattern: str) -> list[str]:
        """Files matching a glob over relative paths (``**`` spans directories)."""
        return [f for f in self.all_files() if _glob_match(f, pattern)]


def _glob_match(path: str, pattern: str) -> bool:
    """fnmatch where ``**/`` also matches zero directories."""
    if fnmatch.fnmatch(path, pattern):
        return True
    if "**/" in pattern:
        return fnmatch.fnmatch(path, pattern.replace("**/", ""))
    return False
