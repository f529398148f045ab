"""Dependency resolution for lock file assets.

Produces a deterministic install order in which every asset comes after all
of its dependencies. Dependencies are looked up in the full lock file, not
just in the requested subset.
"""

import logging
from collections.abc import Iterator
from enum import Enum

from sx.core.errors import CycleError, MissingDependencyError
from sx.lockfile.models import Asset, Dependency, LockFile

logger = logging.getLogger(__name__)


class _VisitState(Enum):
    IN_PROGRESS = "in-progress"
    DONE = "done"


class DependencyResolver:
    """Resolves requested assets plus their transitive dependencies.

    Uses depth-first search with in-progress/done marking. Ordering is
    stable: requested assets are visited in the order given and
    dependencies in the order they are declared.
    """

    def __init__(self, lock_file: LockFile) -> None:
        self._lock_file = lock_file
        self._by_name: dict[str, Asset] = {}
        for asset in lock_file.assets:
            # First occurrence wins; duplicates are rejected by validation
            if asset.name not in self._by_name:
                self._by_name[asset.name] = asset

    def resolve(self, requested: list[Asset] | tuple[Asset, ...]) -> tuple[Asset, ...]:
        """Return requested assets and their dependencies in install order.

        Raises:
            CycleError: If following dependency edges revisits an asset
                that is still being expanded
            MissingDependencyError: If a dependency name is not in the lock file
        """
        state: dict[str, _VisitState] = {}
        ordered: list[Asset] = []

        for asset in requested:
            self._visit(asset, state, ordered)

        logger.debug(
            "Resolved %d requested assets to %d assets", len(requested), len(ordered)
        )
        return tuple(ordered)

    def _visit(self, root: Asset, state: dict[str, _VisitState], ordered: list[Asset]) -> None:
        """Depth-first walk from root with an explicit stack.

        Each stack frame holds an asset and an iterator over its remaining
        dependencies, so the stack doubles as the path for cycle reporting.
        """
        if state.get(root.name) is _VisitState.DONE:
            return

        state[root.name] = _VisitState.IN_PROGRESS
        stack: list[tuple[Asset, Iterator[Dependency]]] = [(root, iter(root.dependencies))]
        while stack:
            asset, pending = stack[-1]
            dependency = next(pending, None)
            if dependency is None:
                stack.pop()
                state[asset.name] = _VisitState.DONE
                ordered.append(asset)
                continue

            dep_asset = self._by_name.get(dependency.name)
            if dep_asset is None:
                raise MissingDependencyError(asset.name, dependency.name)

            current = state.get(dep_asset.name)
            if current is _VisitState.DONE:
                continue
            if current is _VisitState.IN_PROGRESS:
                path = [frame_asset.name for frame_asset, _ in stack]
                start = path.index(dep_asset.name)
                raise CycleError([*path[start:], dep_asset.name])

            state[dep_asset.name] = _VisitState.IN_PROGRESS
            stack.append((dep_asset, iter(dep_asset.dependencies)))


def check_lock_file_dependencies(lock_file: LockFile) -> None:
    """Verify every dependency exists and no cycles exist in the lock file.

    Raises:
        CycleError: If any dependency cycle exists
        MissingDependencyError: If any dependency is dangling
    """
    DependencyResolver(lock_file).resolve(lock_file.assets)
