"""Fake TrackerStore for testing."""

from sx.tracker.models import InstalledAsset
from sx.tracker.store.abc import TrackerStore
from sx.tracker.tracker import Tracker


class FakeTrackerStore(TrackerStore):
    """Keeps tracker state in memory.

    load() returns a fresh Tracker built from the last saved entries, so
    tests observe exactly what a real store would persist.
    """

    def __init__(
        self,
        assets: list[InstalledAsset] | None = None,
        *,
        save_error: OSError | None = None,
    ) -> None:
        self._assets = list(assets or [])
        self._save_error = save_error
        self._save_count = 0

    def load(self) -> Tracker:
        return Tracker(assets=self._assets)

    def save(self, tracker: Tracker) -> None:
        if self._save_error is not None:
            raise self._save_error
        self._assets = tracker.assets
        self._save_count += 1

    @property
    def saved_assets(self) -> list[InstalledAsset]:
        return list(self._assets)

    @property
    def save_count(self) -> int:
        return self._save_count
