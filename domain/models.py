"""Core data types for the detekt task planner.

All value types are frozen dataclasses with complete type annotations.
This module has ZERO imports from outside the Python standard library.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class ConfigurationError(Exception):
    """Fatal configuration-time failure; aborts the build before execution."""


class VariantKind(Enum):
    """Role of a build variant within its enumeration."""

    PRODUCTION = "production"
    UNIT_TEST = "unit_test"
    ANDROID_TEST = "android_test"


class TaskKind(Enum):
    """Kind of work a registered task performs."""

    ANALYSIS = "analysis"
    BASELINE = "baseline"
    GENERATE_CONFIG = "generate_config"
    LIFECYCLE = "lifecycle"


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Variant:
    """Immutable snapshot of one buildable unit (build type x flavor combination).

    Secondary ("test") variants hang off their primary variant; they carry the
    same build type and flavor names but their own variant name.
    """

    name: str
    build_type_name: str
    flavor_name: str = ""
    source_locations: tuple[str, ...] = ()
    compile_classpath: tuple[str, ...] = ()
    secondary_variants: tuple[Variant, ...] = ()
    kind: VariantKind = VariantKind.PRODUCTION


@dataclass(frozen=True)
class IgnoreRules:
    """Name-based exclusion sets, by exact variant, build type, or flavor."""

    variants: frozenset[str] = frozenset()
    build_types: frozenset[str] = frozenset()
    flavors: frozenset[str] = frozenset()

    def union(self, other: IgnoreRules) -> IgnoreRules:
        """Return rules ignoring everything either side ignores."""
        return IgnoreRules(
            variants=self.variants | other.variants,
            build_types=self.build_types | other.build_types,
            flavors=self.flavors | other.flavors,
        )


@dataclass(frozen=True)
class SourceSet:
    """A JVM source set as exposed by the Kotlin JVM plugin.

    ``kotlin_sources`` is None when the Kotlin convention was never attached.
    """

    name: str
    kotlin_sources: tuple[str, ...] | None
    compile_classpath: tuple[str, ...] = ()
    classes_dirs: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReportPaths:
    """Report destinations of one analysis task."""

    xml: str
    html: str
    txt: str


@dataclass(frozen=True)
class AnalysisSettings:
    """Extension flags copied into every analysis task at registration."""

    debug: bool = False
    parallel: bool = False
    disable_default_rule_sets: bool = False
    build_upon_default_config: bool = False
    fail_fast: bool = False
    auto_correct: bool = False
    ignore_failures: bool = False
    config_files: tuple[str, ...] = ()
    baseline: str | None = None


@dataclass(frozen=True)
class TaskDescriptor:
    """A registered, deferred unit of work. Never mutated after creation."""

    name: str
    kind: TaskKind
    group: str = ""
    description: str = ""
    sources: tuple[str, ...] = ()
    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    classpath: tuple[str, ...] = ()
    reports: ReportPaths | None = None
    settings: AnalysisSettings | None = None
    tool_configurations: tuple[str, ...] = ()


@dataclass(frozen=True)
class ResolutionResult:
    """Tasks produced by one variant resolution pass."""

    main_tasks: frozenset[TaskDescriptor] = frozenset()
    test_tasks: frozenset[TaskDescriptor] = frozenset()

    @property
    def main_task_names(self) -> frozenset[str]:
        return frozenset(t.name for t in self.main_tasks)

    @property
    def test_task_names(self) -> frozenset[str]:
        return frozenset(t.name for t in self.test_tasks)


# ---------------------------------------------------------------------------
# Configuration surface
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DetektExtension:
    """User-facing configuration of the detekt plugins.

    The Android options (``ignored_*``) live on the same extension so that a
    project configures a single block.
    """

    tool_version: str | None = None
    input: tuple[str, ...] = (
        "src/main/java",
        "src/test/java",
        "src/main/kotlin",
        "src/test/kotlin",
    )
    config: tuple[str, ...] = ()
    baseline: str | None = None
    reports_dir: str = ""
    custom_reports_dir: str | None = None
    debug: bool = False
    parallel: bool = False
    disable_default_rule_sets: bool = False
    build_upon_default_config: bool = False
    fail_fast: bool = False
    auto_correct: bool = False
    ignore_failures: bool = False
    ignored_variants: tuple[str, ...] = ()
    ignored_build_types: tuple[str, ...] = ()
    ignored_flavors: tuple[str, ...] = ()

    def ignore_rules(self) -> IgnoreRules:
        """Return the ignore sets as an IgnoreRules value."""
        return IgnoreRules(
            variants=frozenset(self.ignored_variants),
            build_types=frozenset(self.ignored_build_types),
            flavors=frozenset(self.ignored_flavors),
        )


@dataclass(frozen=True)
class DependencyConfiguration:
    """A named, resolvable set of dependency coordinates.

    ``default_dependencies`` is evaluated lazily, and only when nothing was
    declared explicitly.
    """

    name: str
    description: str = ""
    visible: bool = False
    transitive: bool = True
    dependencies: tuple[str, ...] = ()
    default_dependencies: Callable[[], tuple[str, ...]] | None = field(
        default=None, compare=False
    )

    def resolved(self) -> tuple[str, ...]:
        """Return declared coordinates, or the defaults when none are declared."""
        if self.dependencies:
            return self.dependencies
        if self.default_dependencies is not None:
            return self.default_dependencies()
        return ()
