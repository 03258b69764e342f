"""In-memory build project implementing ProjectPort.

Stands in for the build tool's project object: applied plugin ids,
the detekt and Android extensions, dependency configurations, JVM source
sets, and the task graph. Configuration and evaluation are two explicit
phases: ``apply_plugin`` (and direct attribute edits) happen first, then
``evaluate`` settles the project by calling every applied plugin's
``finalize`` exactly once, in application order.
"""

from __future__ import annotations

import dataclasses
import logging
import posixpath
from typing import TYPE_CHECKING

from adapters.android_variants import AndroidExtension, AndroidPluginKind, variant_source_for
from adapters.local_fs import LocalFileSystem
from adapters.task_graph import InMemoryTaskGraph
from domain.models import ConfigurationError, DependencyConfiguration, DetektExtension, SourceSet
from modules.plugin.core import CHECK_TASK_NAME

if TYPE_CHECKING:
    from collections.abc import Sequence

    from domain.ports import BuildPlugin, PathCheckerPort, VariantSource

logger = logging.getLogger("detekt_tasks.build_project")

LIFECYCLE_BASE_PLUGIN_ID = "lifecycle-base"


class BuildProject:
    """Concrete ProjectPort holding one project's configuration in memory.

    Parameters
    ----------
    name:
        Project name, used in error messages.
    project_dir:
        Project directory; relative paths are resolved against it.
    build_dir:
        Build output directory. Defaults to ``<project_dir>/build``.
    fs:
        Path checker. Defaults to a LocalFileSystem rooted at ``project_dir``.

    """

    def __init__(
        self,
        name: str,
        project_dir: str,
        *,
        build_dir: str | None = None,
        fs: PathCheckerPort | None = None,
    ) -> None:
        self.name = name
        self.project_dir = project_dir
        self.build_dir = build_dir or posixpath.join(project_dir, "build")
        self.fs: PathCheckerPort = fs if fs is not None else LocalFileSystem(project_dir)
        self.tasks = InMemoryTaskGraph()
        self.detekt_extension = DetektExtension()
        self.android_extension: AndroidExtension | None = None
        self.jvm_source_sets: tuple[SourceSet, ...] = ()
        self._plugin_ids: list[str] = []
        self._plugins: list[BuildPlugin] = []
        self._configurations: dict[str, DependencyConfiguration] = {}
        self._evaluated = False

    # -- Configuration phase -----------------------------------------------

    def apply_plugin(self, plugin: BuildPlugin | str) -> None:
        """Apply a plugin object, or mark a plugin id as applied.

        Marking an id that is already applied is a no-op, and so is applying
        a second object with the id of an applied object. An object whose id
        was only marked so far is still applied and finalized.
        """
        if self._evaluated:
            msg = f"Cannot apply plugins to project '{self.name}' after it was evaluated"
            raise ConfigurationError(msg)

        plugin_id = plugin if isinstance(plugin, str) else plugin.plugin_id
        if plugin_id not in self._plugin_ids:
            self._plugin_ids.append(plugin_id)
            logger.debug("Applied plugin %s to %s", plugin_id, self.name)

            if plugin_id == LIFECYCLE_BASE_PLUGIN_ID:
                self.tasks.register_lifecycle(
                    CHECK_TASK_NAME,
                    description="Runs all checks.",
                    group="verification",
                )

        if isinstance(plugin, str):
            return
        if any(applied.plugin_id == plugin_id for applied in self._plugins):
            return
        self._plugins.append(plugin)
        plugin.apply(self)

    def has_plugin(self, plugin_id: str) -> bool:
        return plugin_id in self._plugin_ids

    @property
    def plugin_ids(self) -> tuple[str, ...]:
        return tuple(self._plugin_ids)

    def create_configuration(self, configuration: DependencyConfiguration) -> None:
        if configuration.name in self._configurations:
            msg = (
                f"Cannot add a configuration with name '{configuration.name}' as a "
                "configuration with that name already exists."
            )
            raise ConfigurationError(msg)
        self._configurations[configuration.name] = configuration

    def configuration(self, name: str) -> DependencyConfiguration:
        try:
            return self._configurations[name]
        except KeyError:
            msg = f"Configuration with name '{name}' not found."
            raise ConfigurationError(msg) from None

    def declare_dependencies(self, name: str, coordinates: Sequence[str]) -> None:
        """Add dependency coordinates to an existing configuration."""
        current = self.configuration(name)
        self._configurations[name] = dataclasses.replace(
            current, dependencies=current.dependencies + tuple(coordinates)
        )

    def configuration_names(self) -> tuple[str, ...]:
        return tuple(self._configurations)

    # -- Queries used by the plugins -----------------------------------------

    def variant_source(self) -> VariantSource | None:
        """Return the variant provider of the Android extension, if any.

        Raises:
            ConfigurationError: If an Android extension of unrecognised shape
                is registered.
        """
        if self.android_extension is None:
            return None
        source = variant_source_for(self.android_extension, self.project_dir, self.build_dir)
        if source is None:
            msg = (
                f"Android extension of project '{self.name}' is of unsupported kind "
                f"'{self.android_extension.kind.value}'; expected one of "
                f"{', '.join(k.value for k in AndroidPluginKind if k is not AndroidPluginKind.OTHER)}"
            )
            raise ConfigurationError(msg)
        return source

    def source_sets(self) -> Sequence[SourceSet]:
        return self.jvm_source_sets

    # -- Evaluation ------------------------------------------------------------

    def evaluate(self) -> None:
        """Settle the configuration: finalize every applied plugin once."""
        if self._evaluated:
            msg = f"Project '{self.name}' has already been evaluated"
            raise ConfigurationError(msg)
        self._evaluated = True
        for plugin in self._plugins:
            logger.debug("Finalizing plugin %s", plugin.plugin_id)
            plugin.finalize(self)
        logger.info("Evaluated project %s: %d tasks", self.name, len(self.tasks))

    @property
    def evaluated(self) -> bool:
        return self._evaluated
