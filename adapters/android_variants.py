"""Android build-variant providers implementing VariantSource.

There is not a single Android plugin: application, library and test
projects each expose their variants through a differently shaped
extension. One adapter per shape turns an ``AndroidExtension`` into the
variant enumeration the resolver consumes; ``variant_source_for`` picks
the adapter.

Variant naming follows the Android conventions: flavor combinations are
the cross product over the flavor dimensions in declaration order, the
flavor name is the first flavor followed by the others capitalised
(``youngHarry``), and the variant name appends the capitalised build type
(``youngHarryDebug``).
"""

from __future__ import annotations

import itertools
import logging
import posixpath
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from domain.models import ConfigurationError, Variant, VariantKind
from modules.registrar.core import capitalize

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from domain.ports import VariantSource

logger = logging.getLogger("detekt_tasks.android_variants")

UNIT_TEST_SUFFIX = "UnitTest"
ANDROID_TEST_SUFFIX = "AndroidTest"


class AndroidPluginKind(Enum):
    """Which Android plugin registered the extension."""

    APPLICATION = "com.android.application"
    LIBRARY = "com.android.library"
    TEST = "com.android.test"
    OTHER = "other"

    @classmethod
    def from_plugin_ids(cls, plugin_ids: Iterable[str]) -> AndroidPluginKind | None:
        """Return the kind of the first Android plugin among ``plugin_ids``."""
        known = {kind.value: kind for kind in cls if kind is not cls.OTHER}
        for plugin_id in plugin_ids:
            if plugin_id in known:
                return known[plugin_id]
        return None


@dataclass(frozen=True)
class ProductFlavor:
    """A product flavor and the dimension it belongs to."""

    name: str
    dimension: str


@dataclass(frozen=True)
class AndroidExtension:
    """The variant-relevant part of an Android extension.

    ``build_types`` of None means the plugin defaults: ``debug`` and
    ``release``, or ``debug`` alone for test projects.
    """

    kind: AndroidPluginKind
    compile_sdk_version: int = 29
    build_types: tuple[str, ...] | None = None
    flavor_dimensions: tuple[str, ...] = ()
    product_flavors: tuple[ProductFlavor, ...] = ()
    test_build_type: str = "debug"
    sdk_dir: str = ""
    compile_classpath: tuple[str, ...] = ()

    def effective_build_types(self) -> tuple[str, ...]:
        if self.build_types is not None:
            return self.build_types
        if self.kind is AndroidPluginKind.TEST:
            return ("debug",)
        return ("debug", "release")


# ---------------------------------------------------------------------------
# Variant generation (pure)
# ---------------------------------------------------------------------------


def flavor_combinations(extension: AndroidExtension) -> list[tuple[ProductFlavor, ...]]:
    """Return every flavor combination, one flavor per dimension.

    Raises:
        ConfigurationError: If a flavor names an undeclared dimension or a
            declared dimension has no flavor.
    """
    if not extension.product_flavors:
        return [()]

    dimensions = extension.flavor_dimensions
    by_dimension: dict[str, list[ProductFlavor]] = {d: [] for d in dimensions}
    for flavor in extension.product_flavors:
        if flavor.dimension not in by_dimension:
            msg = (
                f"Flavor '{flavor.name}' is associated with flavor dimension "
                f"'{flavor.dimension}' but it was not declared"
            )
            raise ConfigurationError(msg)
        by_dimension[flavor.dimension].append(flavor)

    empty = [d for d in dimensions if not by_dimension[d]]
    if empty:
        msg = f"No flavor is associated with flavor dimension '{empty[0]}'"
        raise ConfigurationError(msg)

    return list(itertools.product(*(by_dimension[d] for d in dimensions)))


def combined_flavor_name(combination: Sequence[ProductFlavor]) -> str:
    if not combination:
        return ""
    first, *rest = combination
    return first.name + "".join(capitalize(f.name) for f in rest)


def source_set_names(prefix: str, combination: Sequence[ProductFlavor], build_type: str) -> list[str]:
    """Android source sets contributing to a variant, lowest priority first.

    ``prefix`` is "" for production code, "test" or "androidTest" otherwise.
    """
    flavor_name = combined_flavor_name(combination)
    parts = [f.name for f in combination]
    if len(combination) > 1:
        parts.append(flavor_name)
    parts.append(build_type)
    if combination:
        parts.append(flavor_name + capitalize(build_type))

    if not prefix:
        return ["main", *parts]
    return [prefix, *(prefix + capitalize(p) for p in parts)]


def _source_dirs(project_dir: str, names: Iterable[str]) -> tuple[str, ...]:
    dirs: list[str] = []
    for name in names:
        dirs.append(posixpath.join(project_dir, "src", name, "java"))
        dirs.append(posixpath.join(project_dir, "src", name, "kotlin"))
    return tuple(dirs)


def _class_dirs(build_dir: str, variant_name: str) -> tuple[str, ...]:
    return (
        posixpath.join(build_dir, "tmp", "kotlin-classes", variant_name),
        posixpath.join(build_dir, "intermediates", "javac", variant_name, "classes"),
    )


def build_variants(
    extension: AndroidExtension,
    project_dir: str,
    build_dir: str,
    *,
    tested: bool,
) -> tuple[Variant, ...]:
    """Enumerate the primary variants of ``extension``.

    Tested shapes get a unit-test secondary for every build type and an
    instrumentation (android test) secondary for ``test_build_type`` only.
    """
    variants: list[Variant] = []
    for combination in flavor_combinations(extension):
        flavor_name = combined_flavor_name(combination)
        for build_type in extension.effective_build_types():
            name = flavor_name + capitalize(build_type) if flavor_name else build_type
            classpath = _class_dirs(build_dir, name) + extension.compile_classpath

            secondaries: list[Variant] = []
            if tested:
                if build_type == extension.test_build_type:
                    secondaries.append(
                        _secondary(
                            name + ANDROID_TEST_SUFFIX,
                            VariantKind.ANDROID_TEST,
                            "androidTest",
                            combination,
                            build_type,
                            project_dir,
                            build_dir,
                            classpath,
                        )
                    )
                secondaries.append(
                    _secondary(
                        name + UNIT_TEST_SUFFIX,
                        VariantKind.UNIT_TEST,
                        "test",
                        combination,
                        build_type,
                        project_dir,
                        build_dir,
                        classpath,
                    )
                )

            variants.append(
                Variant(
                    name=name,
                    build_type_name=build_type,
                    flavor_name=flavor_name,
                    source_locations=_source_dirs(
                        project_dir, source_set_names("", combination, build_type)
                    ),
                    compile_classpath=classpath,
                    secondary_variants=tuple(secondaries),
                )
            )

    logger.debug("Enumerated %d %s variants", len(variants), extension.kind.value)
    return tuple(variants)


def _secondary(
    name: str,
    kind: VariantKind,
    prefix: str,
    combination: Sequence[ProductFlavor],
    build_type: str,
    project_dir: str,
    build_dir: str,
    tested_classpath: tuple[str, ...],
) -> Variant:
    return Variant(
        name=name,
        build_type_name=build_type,
        flavor_name=combined_flavor_name(combination),
        source_locations=_source_dirs(project_dir, source_set_names(prefix, combination, build_type)),
        compile_classpath=_class_dirs(build_dir, name) + tested_classpath,
        kind=kind,
    )


# ---------------------------------------------------------------------------
# Adapters, one per extension shape
# ---------------------------------------------------------------------------


class _AndroidVariants:
    """Shared VariantSource behaviour of the Android extension shapes."""

    tested: ClassVar[bool] = True

    def __init__(self, extension: AndroidExtension, project_dir: str, build_dir: str) -> None:
        self._extension = extension
        self._project_dir = project_dir
        self._build_dir = build_dir

    def list_variants(self) -> Sequence[Variant]:
        return build_variants(
            self._extension, self._project_dir, self._build_dir, tested=self.tested
        )

    def boot_classpath(self) -> Sequence[str]:
        if not self._extension.sdk_dir:
            return ()
        platform = f"android-{self._extension.compile_sdk_version}"
        return (posixpath.join(self._extension.sdk_dir, "platforms", platform, "android.jar"),)


class ApplicationVariants(_AndroidVariants):
    """Variants of an application project (``applicationVariants``)."""


class LibraryVariants(_AndroidVariants):
    """Variants of a library project (``libraryVariants``)."""


class TestVariants(_AndroidVariants):
    """Variants of a test-only project; there is no test code for test code."""

    tested = False


_ADAPTERS: dict[AndroidPluginKind, type[_AndroidVariants]] = {
    AndroidPluginKind.APPLICATION: ApplicationVariants,
    AndroidPluginKind.LIBRARY: LibraryVariants,
    AndroidPluginKind.TEST: TestVariants,
}


def variant_source_for(
    extension: AndroidExtension,
    project_dir: str,
    build_dir: str,
) -> VariantSource | None:
    """Return the adapter for the extension's shape, or None if unrecognised."""
    adapter = _ADAPTERS.get(extension.kind)
    if adapter is None:
        return None
    return adapter(extension, project_dir, build_dir)
