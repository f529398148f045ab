"""Abstract interface for tracker persistence."""

from abc import ABC, abstractmethod

from sx.tracker.tracker import Tracker


class TrackerStore(ABC):
    """Loads and saves the installation tracker."""

    @abstractmethod
    def load(self) -> Tracker:
        """Load the tracker.

        Returns:
            The persisted tracker, or an empty one if nothing usable is stored
        """
        ...

    @abstractmethod
    def save(self, tracker: Tracker) -> None:
        """Persist the full tracker, replacing previous state atomically.

        Raises:
            OSError: If the state cannot be written
        """
        ...
