"""JSON file implementation of TrackerStore."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from sx.assets.types import AssetType
from sx.tracker.models import InstalledAsset
from sx.tracker.store.abc import TrackerStore
from sx.tracker.tracker import TRACKER_FORMAT_VERSION, Tracker

logger = logging.getLogger(__name__)

TRACKER_FILE_NAME = "installed.json"


def get_tracker_path(cache_dir: Path) -> Path:
    """Location of the tracker file inside the sx cache directory."""
    return cache_dir / TRACKER_FILE_NAME


class JsonTrackerStore(TrackerStore):
    """Stores the tracker as JSON.

    File layout:

        {
          "version": "1",
          "assets": [
            {"name": "...", "version": "1.0.0", "repository": "", "path": "",
             "clients": ["claude-code"]}
          ]
        }
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Tracker:
        if not self._path.exists():
            logger.debug("No tracker file at %s, starting empty", self._path)
            return Tracker()

        # ValueError covers invalid JSON and invalid UTF-8
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return _tracker_from_dict(data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable tracker file %s: %s", self._path, e)
            return Tracker()

    def save(self, tracker: Tracker) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps(_tracker_to_dict(tracker), indent=2)

        # Write beside the target so os.replace stays on one filesystem
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=".installed-", suffix=".json.tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, self._path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Saved %d tracker entries to %s", len(tracker.assets), self._path)


def _tracker_from_dict(data: dict[str, Any]) -> Tracker:
    assets = [
        InstalledAsset(
            name=entry["name"],
            version=entry["version"],
            repository=entry.get("repository", ""),
            path=entry.get("path", ""),
            clients=tuple(entry.get("clients", [])),
            type=_parse_type(entry.get("type")),
        )
        for entry in data.get("assets", [])
    ]
    return Tracker(version=str(data.get("version", TRACKER_FORMAT_VERSION)), assets=assets)


def _tracker_to_dict(tracker: Tracker) -> dict[str, Any]:
    return {
        "version": tracker.version,
        "assets": [
            {
                "name": asset.name,
                "version": asset.version,
                "repository": asset.repository,
                "path": asset.path,
                "clients": list(asset.clients),
                "type": asset.type.value if asset.type is not None else None,
            }
            for asset in tracker.assets
        ],
    }


def _parse_type(value: object) -> AssetType | None:
    if not isinstance(value, str):
        return None
    try:
        return AssetType.parse(value)
    except ValueError:
        logger.warning("Ignoring unknown asset type in tracker: %s", value)
        return None
