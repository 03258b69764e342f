"""Plugin application: wire detekt into a build project.

Two plugins, each with an explicit configuration phase (``apply``) and an
explicit settle phase (``finalize``) that the host calls once after every
plugin has been applied and the project is fully configured:

- ``DetektPlugin``: extension defaults, the ``detekt`` / ``detektPlugins``
  dependency configurations, the plain ``detekt``, ``detektBaseline`` and
  ``detektGenerateConfig`` tasks, ``check`` wiring, and one task per Kotlin
  JVM source set.
- ``DetektAndroidPlugin``: applies ``DetektPlugin`` and, when
  ``kotlin-android`` is present, resolves the Android build variants into
  per-variant tasks under ``detektMain`` / ``detektTest``.
"""

from __future__ import annotations

import dataclasses
import logging
import posixpath
from typing import TYPE_CHECKING

from domain.models import (
    ConfigurationError,
    DependencyConfiguration,
    ResolutionResult,
    TaskDescriptor,
    TaskKind,
)
from modules.ignore_filter.core import ignore_rules_from
from modules.registrar.core import (
    CONFIGURATION_DETEKT,
    CONFIGURATION_DETEKT_PLUGINS,
    DEFAULT_EXCLUDES,
    DEFAULT_INCLUDES,
    DETEKT_TASK_NAME,
    VERIFICATION_GROUP,
    TaskRegistrar,
    analysis_settings,
    report_paths,
)
from modules.source_sets.core import register_source_set_tasks
from modules.variant_resolver.core import VariantResolver

if TYPE_CHECKING:
    from domain.ports import ProjectPort

logger = logging.getLogger("detekt_tasks.plugin")

DETEKT_PLUGIN_ID = "io.gitlab.arturbosch.detekt"
DETEKT_ANDROID_PLUGIN_ID = "io.gitlab.arturbosch.detekt.android"
KOTLIN_JVM_PLUGIN_ID = "org.jetbrains.kotlin.jvm"
KOTLIN_ANDROID_PLUGIN_ID = "kotlin-android"

BASELINE_TASK_NAME = "detektBaseline"
GENERATE_CONFIG_TASK_NAME = "detektGenerateConfig"
CHECK_TASK_NAME = "check"

DETEKT_CLI_COORDINATE = "io.gitlab.arturbosch.detekt:detekt-cli"
DEFAULT_DETEKT_VERSION = "1.10.0"
CONFIG_DIR_NAME = "config/detekt"
CONFIG_FILE = "detekt.yml"
REPORTS_SUBDIR = "reports/detekt"


# ---------------------------------------------------------------------------
# Base plugin
# ---------------------------------------------------------------------------


class DetektPlugin:
    """The plain detekt plugin: base tasks plus Kotlin JVM source-set tasks."""

    plugin_id = DETEKT_PLUGIN_ID

    def apply(self, project: ProjectPort) -> None:
        _apply_extension_defaults(project)
        _create_configurations(project)

    def finalize(self, project: ProjectPort) -> None:
        _register_base_tasks(project)

        if project.tasks.has_task(CHECK_TASK_NAME):
            project.tasks.add_dependency(CHECK_TASK_NAME, DETEKT_TASK_NAME)

        if project.has_plugin(KOTLIN_JVM_PLUGIN_ID):
            registrar = TaskRegistrar(project.tasks, project.fs, project.detekt_extension)
            register_source_set_tasks(registrar, project.source_sets())


def _apply_extension_defaults(project: ProjectPort) -> None:
    """Fill in the reports directory and the conventional config file."""
    extension = project.detekt_extension
    changes: dict[str, object] = {}

    if not extension.reports_dir:
        changes["reports_dir"] = posixpath.join(project.build_dir, REPORTS_SUBDIR)

    default_config = posixpath.join(project.project_dir, CONFIG_DIR_NAME, CONFIG_FILE)
    if not extension.config and project.fs.path_exists(default_config):
        logger.info("Using default config file %s", default_config)
        changes["config"] = (default_config,)

    if changes:
        project.detekt_extension = dataclasses.replace(extension, **changes)  # type: ignore[arg-type]


def _create_configurations(project: ProjectPort) -> None:
    project.create_configuration(
        DependencyConfiguration(
            name=CONFIGURATION_DETEKT_PLUGINS,
            description=f"The {CONFIGURATION_DETEKT_PLUGINS} libraries to be used for this project.",
        )
    )

    def default_cli() -> tuple[str, ...]:
        # Read at resolution time so a later tool_version setting wins.
        version = project.detekt_extension.tool_version or DEFAULT_DETEKT_VERSION
        return (f"{DETEKT_CLI_COORDINATE}:{version}",)

    project.create_configuration(
        DependencyConfiguration(
            name=CONFIGURATION_DETEKT,
            description=f"The {CONFIGURATION_DETEKT} dependencies to be used for this project.",
            default_dependencies=default_cli,
        )
    )


def _register_base_tasks(project: ProjectPort) -> None:
    extension = project.detekt_extension
    settings = analysis_settings(extension)
    inputs = tuple(p for p in extension.input if project.fs.path_exists(p))
    tool_configurations = (CONFIGURATION_DETEKT, CONFIGURATION_DETEKT_PLUGINS)

    project.tasks.register(
        TaskDescriptor(
            name=DETEKT_TASK_NAME,
            kind=TaskKind.ANALYSIS,
            group=VERIFICATION_GROUP,
            description="Analyze your source code with detekt.",
            sources=inputs,
            includes=DEFAULT_INCLUDES,
            excludes=DEFAULT_EXCLUDES,
            reports=report_paths(
                extension.custom_reports_dir or extension.reports_dir, DETEKT_TASK_NAME
            ),
            settings=settings,
            tool_configurations=tool_configurations,
        )
    )
    project.tasks.register(
        TaskDescriptor(
            name=BASELINE_TASK_NAME,
            kind=TaskKind.BASELINE,
            group=VERIFICATION_GROUP,
            description="Creates a detekt baseline on the given --baseline path.",
            sources=inputs,
            includes=DEFAULT_INCLUDES,
            excludes=DEFAULT_EXCLUDES,
            settings=settings,
            tool_configurations=tool_configurations,
        )
    )
    project.tasks.register(
        TaskDescriptor(
            name=GENERATE_CONFIG_TASK_NAME,
            kind=TaskKind.GENERATE_CONFIG,
            group=VERIFICATION_GROUP,
            description="Generate a detekt configuration file inside your project.",
            tool_configurations=(CONFIGURATION_DETEKT,),
        )
    )


# ---------------------------------------------------------------------------
# Android plugin
# ---------------------------------------------------------------------------


class DetektAndroidPlugin:
    """Variant-aware detekt tasks for Kotlin Android projects.

    ``last_result`` holds the outcome of the resolution pass, or None when
    ``kotlin-android`` was not applied and nothing was enumerated.
    """

    plugin_id = DETEKT_ANDROID_PLUGIN_ID

    def __init__(self) -> None:
        self.last_result: ResolutionResult | None = None

    def apply(self, project: ProjectPort) -> None:
        project.apply_plugin(DetektPlugin())

    def finalize(self, project: ProjectPort) -> None:
        if not project.has_plugin(KOTLIN_ANDROID_PLUGIN_ID):
            logger.info("%s not applied; no variant tasks registered", KOTLIN_ANDROID_PLUGIN_ID)
            return

        source = project.variant_source()
        if source is None:
            msg = (
                f"Project '{project.name}' applies {KOTLIN_ANDROID_PLUGIN_ID} but has no "
                "Android application, library or test extension to read variants from"
            )
            raise ConfigurationError(msg)

        extension = project.detekt_extension
        registrar = TaskRegistrar(project.tasks, project.fs, extension)
        resolver = VariantResolver(registrar, ignore_rules_from(extension))
        resolver.add_source(source)
        self.last_result = resolver.resolve()


def apply_detekt(project: ProjectPort) -> DetektAndroidPlugin:
    """Apply the Android-aware detekt plugin (which brings the base one)."""
    plugin = DetektAndroidPlugin()
    project.apply_plugin(plugin)
    return plugin
