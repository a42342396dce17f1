"""Snapshot store - last report per project path, one JSON file each.

Key: first 8 hex chars of md5(projectPath). Writes go to a temp file and are
atomically renamed over the slot. Concurrent runs on one path are not
coordinated: last write wins.
"""

import hashlib
import json
import logging
import threading
from pathlib import Path

from pydantic import ValidationError

from code_quality.domain.entities.quality import QualityReport, Snapshot, Trend
from code_quality.domain.services.trends import compute_trend, utc_now

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path(".code-quality-cache")


def snapshot_key(project_path: str) -> str:
    return hashlib.md5(project_path.encode("utf-8")).hexdigest()[:8]


class SnapshotStore:
    """File-based store of the latest QualityReport per project."""

    def __init__(self, cache_dir: Path | str | None = None) -> None:
        self._dir = Path(cache_dir) if cache_dir else DEFAULT_CACHE_DIR
        self._lock = threading.Lock()

    def path_for(self, project_path: str) -> Path:
        return self._dir / f"analysis_{snapshot_key(project_path)}.json"

    def save(self, project_path: str, report: QualityReport) -> Snapshot:
        """Overwrite the slot for project_path."""
        snapshot = Snapshot(project_path=project_path, timestamp=utc_now(), report=report)
        target = self.path_for(project_path)
        with self._lock:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp_file = target.with_suffix(".tmp")
            try:
                tmp_file.write_text(
                    json.dumps(snapshot.model_dump(by_alias=True, mode="json"), indent=2),
                    encoding="utf-8",
                )
                tmp_file.replace(target)
            except OSError:
                logger.warning("Failed to save snapshot to %s", target, exc_info=True)
                tmp_file.unlink(missing_ok=True)
                raise
        logger.debug("Saved snapshot for %s to %s", project_path, target)
        return snapshot

    def load(self, project_path: str) -> Snapshot | None:
        target = self.path_for(project_path)
        if not target.exists():
            return None
        try:
            return Snapshot.model_validate_json(target.read_text(encoding="utf-8"))
        except ValidationError as e:
            logger.warning("Corrupted snapshot file %s: %s", target, e)
        except OSError as e:
            logger.warning("Cannot read snapshot file %s: %s", target, e)
        return None

    def latest(self, project_path: str) -> QualityReport | None:
        """Previously saved report, or None."""
        snapshot = self.load(project_path)
        return snapshot.report if snapshot else None

    def trend(self, project_path: str, current: QualityReport) -> Trend:
        """Trend of current against the stored report (no write)."""
        return compute_trend(self.latest(project_path), current)
