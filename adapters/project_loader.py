"""Load a JSON project description into a configured BuildProject.

The description uses the vocabulary of the build DSL::

    {
      "name": "app",
      "plugins": ["com.android.library", "kotlin-android", "lifecycle-base"],
      "android": {
        "compileSdkVersion": 29,
        "flavorDimensions": ["age", "name"],
        "productFlavors": [{"name": "young", "dimension": "age"}, ...]
      },
      "detekt": {"ignoredBuildTypes": ["release"], "toolVersion": "1.10.0"},
      "dependencies": {"detektPlugins": ["io.gitlab.arturbosch.detekt:detekt-formatting:1.10.0"]}
    }

Loading covers the configuration phase only (detekt is applied, nothing is
evaluated), so callers can still adjust the extension before ``evaluate``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from adapters.android_variants import AndroidExtension, AndroidPluginKind, ProductFlavor
from adapters.build_project import BuildProject
from domain.models import ConfigurationError, DetektExtension, SourceSet
from modules.plugin.core import DetektAndroidPlugin, apply_detekt

logger = logging.getLogger("detekt_tasks.project_loader")

# DSL name -> (DetektExtension field, expected type)
_DETEKT_KEYS: dict[str, tuple[str, type]] = {
    "toolVersion": ("tool_version", str),
    "input": ("input", list),
    "config": ("config", list),
    "baseline": ("baseline", str),
    "reportsDir": ("reports_dir", str),
    "customReportsDir": ("custom_reports_dir", str),
    "debug": ("debug", bool),
    "parallel": ("parallel", bool),
    "disableDefaultRuleSets": ("disable_default_rule_sets", bool),
    "buildUponDefaultConfig": ("build_upon_default_config", bool),
    "failFast": ("fail_fast", bool),
    "autoCorrect": ("auto_correct", bool),
    "ignoreFailures": ("ignore_failures", bool),
    "ignoredVariants": ("ignored_variants", list),
    "ignoredBuildTypes": ("ignored_build_types", list),
    "ignoredFlavors": ("ignored_flavors", list),
}


def load_project(path: str | Path) -> tuple[BuildProject, DetektAndroidPlugin]:
    """Read ``path`` and return the configured, not yet evaluated project.

    Raises:
        FileNotFoundError: If the description file does not exist.
        ConfigurationError: If the description cannot be read or is malformed.
    """
    file = Path(path)
    try:
        data = json.loads(file.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise
    except OSError as exc:
        msg = f"{file}: cannot read the project description ({exc.strerror or exc})"
        raise ConfigurationError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"{file}: not valid UTF-8 ({exc.reason} at byte {exc.start})"
        raise ConfigurationError(msg) from exc
    except json.JSONDecodeError as exc:
        msg = f"{file}: invalid JSON ({exc})"
        raise ConfigurationError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{file}: the project description must be a JSON object"
        raise ConfigurationError(msg)

    return build_project(data, base_dir=file.resolve().parent)


def build_project(data: dict[str, Any], base_dir: Path) -> tuple[BuildProject, DetektAndroidPlugin]:
    """Turn an already parsed description into a configured project."""
    project_dir = (base_dir / _get(data, "projectDir", str, ".")).resolve()
    build_dir = _get(data, "buildDir", str, None)
    project = BuildProject(
        _get(data, "name", str, project_dir.name),
        project_dir.as_posix(),
        build_dir=(project_dir / build_dir).as_posix() if build_dir else None,
    )

    plugin_ids = [_as_str(p, "plugins") for p in _get(data, "plugins", list, [])]
    project.detekt_extension = parse_detekt_extension(_get(data, "detekt", dict, {}))
    project.android_extension = parse_android_extension(data.get("android"), plugin_ids)
    project.jvm_source_sets = tuple(
        parse_source_set(s) for s in _get(data, "sourceSets", list, [])
    )

    for plugin_id in plugin_ids:
        project.apply_plugin(plugin_id)
    plugin = apply_detekt(project)

    for configuration, coordinates in _get(data, "dependencies", dict, {}).items():
        if not isinstance(coordinates, list):
            msg = f"dependencies.{configuration}: expected a list of coordinates"
            raise ConfigurationError(msg)
        project.declare_dependencies(
            configuration, [_as_str(c, f"dependencies.{configuration}") for c in coordinates]
        )

    logger.info("Loaded project %s from %s", project.name, project_dir)
    return project, plugin


def parse_detekt_extension(block: dict[str, Any]) -> DetektExtension:
    """Map a ``detekt`` block onto a DetektExtension."""
    values: dict[str, Any] = {}
    for key, value in block.items():
        if key not in _DETEKT_KEYS:
            msg = f"detekt.{key}: unknown option"
            raise ConfigurationError(msg)
        field_name, expected = _DETEKT_KEYS[key]
        if not isinstance(value, expected):
            msg = f"detekt.{key}: expected {expected.__name__}, got {type(value).__name__}"
            raise ConfigurationError(msg)
        if expected is list:
            value = tuple(_as_str(v, f"detekt.{key}") for v in value)
        values[field_name] = value
    return DetektExtension(**values)


def parse_android_extension(block: Any, plugin_ids: list[str]) -> AndroidExtension | None:
    """Build the Android extension registered by the applied Android plugin."""
    kind = AndroidPluginKind.from_plugin_ids(plugin_ids)
    if kind is None:
        if block is not None:
            msg = "android: block present but no Android plugin is applied"
            raise ConfigurationError(msg)
        return None

    block = block or {}
    if not isinstance(block, dict):
        msg = "android: expected an object"
        raise ConfigurationError(msg)

    build_types = _get(block, "buildTypes", list, None)
    flavors: list[ProductFlavor] = []
    for entry in _get(block, "productFlavors", list, []):
        if not isinstance(entry, dict):
            msg = "android.productFlavors: expected objects with name and dimension"
            raise ConfigurationError(msg)
        flavors.append(
            ProductFlavor(
                name=_get(entry, "name", str, None, required=True),
                dimension=_get(entry, "dimension", str, None, required=True),
            )
        )

    return AndroidExtension(
        kind=kind,
        compile_sdk_version=_get(block, "compileSdkVersion", int, 29),
        build_types=tuple(_as_str(b, "android.buildTypes") for b in build_types)
        if build_types is not None
        else None,
        flavor_dimensions=tuple(
            _as_str(d, "android.flavorDimensions") for d in _get(block, "flavorDimensions", list, [])
        ),
        product_flavors=tuple(flavors),
        test_build_type=_get(block, "testBuildType", str, "debug"),
        sdk_dir=_get(block, "sdkDir", str, ""),
        compile_classpath=tuple(
            _as_str(c, "android.compileClasspath") for c in _get(block, "compileClasspath", list, [])
        ),
    )


def parse_source_set(entry: Any) -> SourceSet:
    """Map one ``sourceSets`` entry; a missing ``kotlin`` key means no Kotlin convention."""
    if not isinstance(entry, dict):
        msg = "sourceSets: expected objects"
        raise ConfigurationError(msg)
    kotlin = _get(entry, "kotlin", list, None)
    return SourceSet(
        name=_get(entry, "name", str, None, required=True),
        kotlin_sources=tuple(_as_str(k, "sourceSets.kotlin") for k in kotlin)
        if kotlin is not None
        else None,
        compile_classpath=tuple(
            _as_str(c, "sourceSets.compileClasspath") for c in _get(entry, "compileClasspath", list, [])
        ),
        classes_dirs=tuple(
            _as_str(c, "sourceSets.classesDirs") for c in _get(entry, "classesDirs", list, [])
        ),
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get(block: dict[str, Any], key: str, expected: type, default: Any, *, required: bool = False) -> Any:
    if key not in block:
        if required:
            msg = f"{key}: required option is missing"
            raise ConfigurationError(msg)
        return default
    value = block[key]
    # bool is an int subclass; never accept it where a number is expected
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        msg = f"{key}: expected {expected.__name__}, got {type(value).__name__}"
        raise ConfigurationError(msg)
    return value


def _as_str(value: Any, where: str) -> str:
    if not isinstance(value, str):
        msg = f"{where}: expected strings, got {type(value).__name__}"
        raise ConfigurationError(msg)
    return value
