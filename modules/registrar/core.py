"""Task registrar: turn one analysis target into a registered detekt task.

Given a unit name (a build variant or a JVM source set), its source
locations and its compile classpath, produce the task descriptor with a
deterministic name, the default include/exclude globs, the extension
settings, and per-unit report destinations; then add it to the task
container. Nothing is analysed at registration time.
"""

from __future__ import annotations

import logging
import posixpath
from typing import TYPE_CHECKING

from domain.models import (
    AnalysisSettings,
    ConfigurationError,
    DetektExtension,
    ReportPaths,
    TaskDescriptor,
    TaskKind,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from domain.ports import PathCheckerPort, TaskContainerPort

logger = logging.getLogger("detekt_tasks.registrar")

DETEKT_TASK_NAME = "detekt"
VERIFICATION_GROUP = "verification"
CONFIGURATION_DETEKT = "detekt"
CONFIGURATION_DETEKT_PLUGINS = "detektPlugins"
DEFAULT_INCLUDES = ("**/*.kt", "**/*.kts")
DEFAULT_EXCLUDES = ("build/",)


# ---------------------------------------------------------------------------
# Naming (pure)
# ---------------------------------------------------------------------------


def capitalize(name: str) -> str:
    """Upper-case the first character only; the rest is left untouched."""
    return name[:1].upper() + name[1:]


def task_name_for(unit_name: str) -> str:
    """Return ``detekt<UnitName>`` for a variant or source-set name."""
    if not unit_name:
        msg = "Cannot derive a detekt task name from an empty variant or source set name"
        raise ConfigurationError(msg)
    return DETEKT_TASK_NAME + capitalize(unit_name)


def report_paths(reports_dir: str, unit_name: str) -> ReportPaths:
    """Return the xml/html/txt destinations, named after the unit (not the task)."""
    return ReportPaths(
        xml=posixpath.join(reports_dir, f"{unit_name}.xml"),
        html=posixpath.join(reports_dir, f"{unit_name}.html"),
        txt=posixpath.join(reports_dir, f"{unit_name}.txt"),
    )


def variant_description(unit_name: str) -> str:
    return f"EXPERIMENTAL & SLOW: Run detekt analysis for {unit_name} classes with type resolution"


def analysis_settings(extension: DetektExtension) -> AnalysisSettings:
    """Snapshot the extension flags that every analysis task carries."""
    return AnalysisSettings(
        debug=extension.debug,
        parallel=extension.parallel,
        disable_default_rule_sets=extension.disable_default_rule_sets,
        build_upon_default_config=extension.build_upon_default_config,
        fail_fast=extension.fail_fast,
        auto_correct=extension.auto_correct,
        ignore_failures=extension.ignore_failures,
        config_files=tuple(extension.config),
        baseline=extension.baseline,
    )


def existing_paths(fs: PathCheckerPort, paths: Iterable[str]) -> tuple[str, ...]:
    """Keep the entries that exist now, in order, without duplicates."""
    kept: list[str] = []
    for path in paths:
        if path in kept:
            continue
        if fs.path_exists(path):
            kept.append(path)
        else:
            logger.debug("Dropping missing classpath entry %s", path)
    return tuple(kept)


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class TaskRegistrar:
    """Registers one analysis task per unit into a task container.

    Parameters
    ----------
    container:
        Task container of the build substrate.
    fs:
        Used to drop classpath entries that do not exist yet (generated
        class directories of modules that have not been built).
    extension:
        The configured detekt extension; its reports directory and flags
        are applied to every task.

    """

    def __init__(
        self,
        container: TaskContainerPort,
        fs: PathCheckerPort,
        extension: DetektExtension,
    ) -> None:
        self._container = container
        self._fs = fs
        self._extension = extension

    @property
    def container(self) -> TaskContainerPort:
        return self._container

    def register(
        self,
        unit_name: str,
        sources: Iterable[str],
        classpath: Iterable[str],
        *,
        extra_classpath: Iterable[str] = (),
        leading_classpath: Iterable[str] = (),
    ) -> TaskDescriptor:
        """Register ``detekt<UnitName>`` and return its descriptor.

        ``classpath`` entries are filtered to those that exist;
        ``extra_classpath`` (boot or platform classpath) is appended as is,
        ``leading_classpath`` (a declared compile classpath) is prepended as is.

        Raises:
            ConfigurationError: If the name is empty or already registered.
        """
        name = task_name_for(unit_name)
        leading = tuple(leading_classpath)
        filtered = tuple(p for p in existing_paths(self._fs, classpath) if p not in leading)
        extra = tuple(p for p in extra_classpath if p not in leading + filtered)

        task = TaskDescriptor(
            name=name,
            kind=TaskKind.ANALYSIS,
            group=VERIFICATION_GROUP,
            description=variant_description(unit_name),
            sources=tuple(sources),
            includes=DEFAULT_INCLUDES,
            excludes=DEFAULT_EXCLUDES,
            classpath=leading + filtered + extra,
            reports=report_paths(self._extension.reports_dir, unit_name),
            settings=analysis_settings(self._extension),
            tool_configurations=(CONFIGURATION_DETEKT, CONFIGURATION_DETEKT_PLUGINS),
        )
        self._container.register(task)
        logger.debug("Registered %s (%d sources)", name, len(task.sources))
        return task
