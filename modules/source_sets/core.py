"""JVM source-set tasks: one detekt task per Kotlin JVM source set.

Used when the Kotlin JVM plugin is applied. Source-set tasks are not wired
under any umbrella task.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from domain.models import ConfigurationError, SourceSet, TaskDescriptor

if TYPE_CHECKING:
    from collections.abc import Iterable

    from modules.registrar.core import TaskRegistrar

logger = logging.getLogger("detekt_tasks.source_sets")


def register_source_set_task(registrar: TaskRegistrar, source_set: SourceSet) -> TaskDescriptor:
    """Register ``detekt<SourceSet>`` for a single source set.

    The compile classpath comes first, taken as declared; the classes
    directories follow and only count when they exist.

    Raises:
        ConfigurationError: If the source set has no Kotlin convention.
    """
    if source_set.kotlin_sources is None:
        msg = (
            f"Kotlin source set not found for source set '{source_set.name}'. "
            "Please report on detekt's issue tracker"
        )
        raise ConfigurationError(msg)

    return registrar.register(
        source_set.name,
        source_set.kotlin_sources,
        source_set.classes_dirs,
        leading_classpath=source_set.compile_classpath,
    )


def register_source_set_tasks(
    registrar: TaskRegistrar,
    source_sets: Iterable[SourceSet],
) -> tuple[TaskDescriptor, ...]:
    """Register a task for every source set, in enumeration order."""
    tasks = tuple(register_source_set_task(registrar, s) for s in source_sets)
    logger.info("Registered %d source-set tasks", len(tasks))
    return tasks
