"""Tests for dependency resolution."""

import pytest

from sx.core.errors import CycleError, MissingDependencyError
from sx.resolver.resolver import DependencyResolver, check_lock_file_dependencies
from tests.fakes.archives import make_asset, make_lock_file


def _names(assets) -> list[str]:
    return [asset.name for asset in assets]


def test_resolve_orders_dependencies_first() -> None:
    """Test that a chain A -> B -> C resolves to [C, B, A]."""
    a = make_asset("a", dependencies=("b",))
    b = make_asset("b", dependencies=("c",))
    c = make_asset("c")
    lock_file = make_lock_file(a, b, c)

    resolved = DependencyResolver(lock_file).resolve([a])

    assert _names(resolved) == ["c", "b", "a"]


def test_resolve_pulls_dependencies_from_full_lock_file() -> None:
    """Test that dependencies outside the requested subset are included."""
    a = make_asset("a", dependencies=("helper",))
    helper = make_asset("helper")
    unrelated = make_asset("unrelated")
    lock_file = make_lock_file(a, helper, unrelated)

    resolved = DependencyResolver(lock_file).resolve([a])

    assert _names(resolved) == ["helper", "a"]


def test_resolve_includes_shared_dependency_once() -> None:
    """Test that a diamond dependency appears exactly once, before both dependents."""
    top = make_asset("top", dependencies=("left", "right"))
    left = make_asset("left", dependencies=("base",))
    right = make_asset("right", dependencies=("base",))
    base = make_asset("base")
    lock_file = make_lock_file(top, left, right, base)

    resolved = _names(DependencyResolver(lock_file).resolve([top]))

    assert resolved == ["base", "left", "right", "top"]


def test_resolve_output_is_topological_for_every_asset() -> None:
    """Test that every asset's dependencies appear before it."""
    assets = (
        make_asset("app", dependencies=("ui", "api")),
        make_asset("ui", dependencies=("core",)),
        make_asset("api", dependencies=("core", "db")),
        make_asset("db"),
        make_asset("core"),
    )
    lock_file = make_lock_file(*assets)

    resolved = DependencyResolver(lock_file).resolve(list(assets))
    position = {asset.name: index for index, asset in enumerate(resolved)}

    assert len(resolved) == len(assets)
    for asset in resolved:
        for dependency in asset.dependencies:
            assert position[dependency.name] < position[asset.name]


def test_resolve_handles_long_chains() -> None:
    """Test that a chain deeper than the interpreter recursion limit resolves."""
    depth = 5000
    assets = [
        make_asset(f"a{i}", dependencies=(f"a{i + 1}",) if i + 1 < depth else ())
        for i in range(depth)
    ]

    resolved = DependencyResolver(make_lock_file(*assets)).resolve([assets[0]])

    assert _names(resolved) == [f"a{i}" for i in reversed(range(depth))]


def test_resolve_detects_cycle_at_the_end_of_a_long_chain() -> None:
    depth = 3000
    assets = [make_asset(f"a{i}", dependencies=(f"a{i + 1}",)) for i in range(depth - 1)]
    assets.append(make_asset(f"a{depth - 1}", dependencies=(f"a{depth - 2}",)))

    with pytest.raises(CycleError) as exc_info:
        DependencyResolver(make_lock_file(*assets)).resolve([assets[0]])

    assert exc_info.value.cycle == [f"a{depth - 2}", f"a{depth - 1}", f"a{depth - 2}"]


def test_resolve_is_deterministic() -> None:
    """Test that the same input always produces the same order."""
    assets = (
        make_asset("x", dependencies=("z",)),
        make_asset("y", dependencies=("z",)),
        make_asset("z"),
    )
    lock_file = make_lock_file(*assets)

    first = _names(DependencyResolver(lock_file).resolve(list(assets)))
    second = _names(DependencyResolver(lock_file).resolve(list(assets)))

    assert first == second == ["z", "x", "y"]


def test_resolve_empty_request_returns_empty() -> None:
    """Test that resolving nothing yields nothing."""
    lock_file = make_lock_file(make_asset("a"))

    assert DependencyResolver(lock_file).resolve([]) == ()


# =============================================================================
# Error cases
# =============================================================================


def test_resolve_detects_cycle() -> None:
    """Test that A -> B -> A raises CycleError naming the cycle."""
    a = make_asset("a", dependencies=("b",))
    b = make_asset("b", dependencies=("a",))
    lock_file = make_lock_file(a, b)

    with pytest.raises(CycleError) as exc_info:
        DependencyResolver(lock_file).resolve([a])

    assert exc_info.value.cycle == ["a", "b", "a"]
    assert "a -> b -> a" in str(exc_info.value)


def test_resolve_detects_self_dependency() -> None:
    """Test that an asset depending on itself is a cycle."""
    a = make_asset("a", dependencies=("a",))

    with pytest.raises(CycleError) as exc_info:
        DependencyResolver(make_lock_file(a)).resolve([a])

    assert exc_info.value.cycle == ["a", "a"]


def test_resolve_cycle_path_excludes_acyclic_prefix() -> None:
    """Test that the reported cycle starts at the repeated asset."""
    root = make_asset("root", dependencies=("b",))
    b = make_asset("b", dependencies=("c",))
    c = make_asset("c", dependencies=("b",))
    lock_file = make_lock_file(root, b, c)

    with pytest.raises(CycleError) as exc_info:
        DependencyResolver(lock_file).resolve([root])

    assert exc_info.value.cycle == ["b", "c", "b"]


def test_resolve_reports_missing_dependency() -> None:
    """Test that a dangling dependency names both assets."""
    a = make_asset("a", dependencies=("ghost",))

    with pytest.raises(MissingDependencyError) as exc_info:
        DependencyResolver(make_lock_file(a)).resolve([a])

    assert exc_info.value.asset_name == "a"
    assert exc_info.value.dependency_name == "ghost"


def test_check_lock_file_dependencies_covers_unrequested_assets() -> None:
    """Test that the lock-wide check finds cycles anywhere in the file."""
    lock_file = make_lock_file(
        make_asset("fine"),
        make_asset("p", dependencies=("q",)),
        make_asset("q", dependencies=("p",)),
    )

    with pytest.raises(CycleError):
        check_lock_file_dependencies(lock_file)
