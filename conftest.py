"""Shared pytest fixtures and test factories for detekt-tasks.

Provides:
- Fake port implementations (PathChecker, VariantSource)
- Factory functions for variants, including the flavored variant matrix
- Pytest fixtures wrapping the most commonly used factories
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from adapters.task_graph import InMemoryTaskGraph
from domain.models import DetektExtension, Variant, VariantKind
from modules.registrar.core import TaskRegistrar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

REPORTS_DIR = "/project/build/reports/detekt"


# ── Fake Port Implementations ─────────────────────────────────────────────


class InMemoryPaths:
    """Stateful in-memory PathCheckerPort.

    Only the paths passed in (or added later) exist.
    """

    def __init__(self, existing: Iterable[str] = ()) -> None:
        self.existing: set[str] = set(existing)
        self.checked: list[str] = []

    def path_exists(self, path: str) -> bool:
        """Record the check and report whether the path was registered."""
        self.checked.append(path)
        return path in self.existing

    def add(self, *paths: str) -> None:
        """Make more paths exist."""
        self.existing.update(paths)


class EverythingExists:
    """PathCheckerPort stub for which every path exists."""

    def path_exists(self, path: str) -> bool:
        """Always return True."""
        return True


class FakeVariantSource:
    """VariantSource over a fixed list; counts enumerations."""

    def __init__(self, variants: Sequence[Variant], boot_classpath: Sequence[str] = ()) -> None:
        self._variants = tuple(variants)
        self._boot_classpath = tuple(boot_classpath)
        self.list_calls = 0

    def list_variants(self) -> Sequence[Variant]:
        """Return the configured variants."""
        self.list_calls += 1
        return self._variants

    def boot_classpath(self) -> Sequence[str]:
        """Return the configured boot classpath."""
        return self._boot_classpath


# ── Variant Factories ─────────────────────────────────────────────────────


def make_variant(
    name: str = "debug",
    build_type: str = "debug",
    flavor: str = "",
    *,
    secondary_variants: tuple[Variant, ...] = (),
    kind: VariantKind = VariantKind.PRODUCTION,
    source_locations: tuple[str, ...] | None = None,
    compile_classpath: tuple[str, ...] | None = None,
) -> Variant:
    """Create a Variant with sensible defaults."""
    if source_locations is None:
        source_locations = (f"/project/src/{name}/kotlin",)
    if compile_classpath is None:
        compile_classpath = (f"/project/build/tmp/kotlin-classes/{name}",)
    return Variant(
        name=name,
        build_type_name=build_type,
        flavor_name=flavor,
        source_locations=source_locations,
        compile_classpath=compile_classpath,
        secondary_variants=secondary_variants,
        kind=kind,
    )


def make_tested_variant(
    name: str,
    build_type: str,
    flavor: str = "",
    *,
    android_test: bool | None = None,
) -> Variant:
    """Create a primary variant with a unit-test and (for debug) an android-test secondary."""
    if android_test is None:
        android_test = build_type == "debug"
    secondaries = []
    if android_test:
        secondaries.append(
            make_variant(f"{name}AndroidTest", build_type, flavor, kind=VariantKind.ANDROID_TEST)
        )
    secondaries.append(make_variant(f"{name}UnitTest", build_type, flavor, kind=VariantKind.UNIT_TEST))
    return make_variant(name, build_type, flavor, secondary_variants=tuple(secondaries))


def make_flavor_matrix() -> list[Variant]:
    """The {young, old} x {harry, sally} x {debug, release} matrix (8 variants)."""
    variants: list[Variant] = []
    for age in ("young", "old"):
        for person in ("Harry", "Sally"):
            flavor = age + person
            for build_type in ("debug", "release"):
                variants.append(
                    make_tested_variant(flavor + build_type.capitalize(), build_type, flavor)
                )
    return variants


def make_registrar(
    container: InMemoryTaskGraph | None = None,
    fs: object | None = None,
    extension: DetektExtension | None = None,
) -> TaskRegistrar:
    """Create a TaskRegistrar over an in-memory graph where every path exists."""
    if container is None:
        container = InMemoryTaskGraph()
    if fs is None:
        fs = EverythingExists()
    if extension is None:
        extension = DetektExtension(reports_dir=REPORTS_DIR)
    return TaskRegistrar(container, fs, extension)  # type: ignore[arg-type]


# ── Pytest Fixtures ──────────────────────────────────────────────────────


@pytest.fixture
def task_graph() -> InMemoryTaskGraph:
    """Provide an empty in-memory task graph."""
    return InMemoryTaskGraph()


@pytest.fixture
def registrar(task_graph: InMemoryTaskGraph) -> TaskRegistrar:
    """Provide a TaskRegistrar writing into ``task_graph``."""
    return make_registrar(task_graph)


@pytest.fixture
def flavor_matrix() -> list[Variant]:
    """Provide the eight flavored variants."""
    return make_flavor_matrix()


@pytest.fixture
def variant_factory() -> Callable[..., Variant]:
    """Provide the make_variant factory function."""
    return make_variant


@pytest.fixture
def tested_variant_factory() -> Callable[..., Variant]:
    """Provide the make_tested_variant factory function."""
    return make_tested_variant


@pytest.fixture
def registrar_factory() -> Callable[..., TaskRegistrar]:
    """Provide the make_registrar factory function."""
    return make_registrar


@pytest.fixture
def source_factory() -> Callable[..., FakeVariantSource]:
    """Provide the FakeVariantSource constructor."""
    return FakeVariantSource


@pytest.fixture
def paths_factory() -> Callable[..., InMemoryPaths]:
    """Provide the InMemoryPaths constructor."""
    return InMemoryPaths
