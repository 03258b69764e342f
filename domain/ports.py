"""Port interfaces for the detekt task planner.

All ports are defined as typing.Protocol; with structural subtyping any class
with matching method signatures satisfies the Protocol without inheritance.

This module has ZERO external imports, only stdlib and typing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from domain.models import (
        DependencyConfiguration,
        DetektExtension,
        SourceSet,
        TaskDescriptor,
        Variant,
    )


class VariantSource(Protocol):
    """A host build-variant provider (one adapter per provider shape)."""

    def list_variants(self) -> Sequence[Variant]:
        """Return the primary variants, each carrying its secondary variants."""
        ...

    def boot_classpath(self) -> Sequence[str]:
        """Return the platform classpath merged into every variant task."""
        ...


class TaskContainerPort(Protocol):
    """Abstraction over the build substrate's task container."""

    def register(self, task: TaskDescriptor) -> None:
        """Add a task. Raises ConfigurationError if the name is taken."""
        ...

    def add_dependency(self, task_name: str, dependency_name: str) -> None:
        """Make ``task_name`` depend on ``dependency_name``."""
        ...

    def has_task(self, name: str) -> bool:
        """Return True if a task with this name is registered."""
        ...

    def get(self, name: str) -> TaskDescriptor:
        """Return the task registered under ``name`` (KeyError if absent)."""
        ...

    def dependencies(self, name: str) -> tuple[str, ...]:
        """Return the names ``name`` depends on, sorted, without duplicates."""
        ...

    def names(self) -> tuple[str, ...]:
        """Return all task names in registration order."""
        ...


class PathCheckerPort(Protocol):
    """Abstraction over file existence checks."""

    def path_exists(self, path: str) -> bool:
        """Return True if the file or directory currently exists."""
        ...


class ProjectPort(Protocol):
    """What the plugins need from the host build project."""

    name: str
    project_dir: str
    build_dir: str
    tasks: TaskContainerPort
    fs: PathCheckerPort
    detekt_extension: DetektExtension

    def has_plugin(self, plugin_id: str) -> bool:
        """Return True if the plugin with this id has been applied."""
        ...

    def apply_plugin(self, plugin: BuildPlugin | str) -> None:
        """Apply a plugin object or mark a plugin id as applied."""
        ...

    def create_configuration(self, configuration: DependencyConfiguration) -> None:
        """Register a dependency configuration. Duplicate names are an error."""
        ...

    def configuration(self, name: str) -> DependencyConfiguration:
        """Return the configuration registered under ``name``."""
        ...

    def variant_source(self) -> VariantSource | None:
        """Return the Android variant provider, or None if none is registered."""
        ...

    def source_sets(self) -> Sequence[SourceSet]:
        """Return the JVM source sets."""
        ...


class BuildPlugin(Protocol):
    """A plugin with an explicit configuration phase and settle phase."""

    plugin_id: str

    def apply(self, project: ProjectPort) -> None:
        """Configuration phase: register extensions, configurations, base tasks."""
        ...

    def finalize(self, project: ProjectPort) -> None:
        """Run once after every plugin has been applied and configured."""
        ...
