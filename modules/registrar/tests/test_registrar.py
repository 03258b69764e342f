"""Tests for modules/registrar: task naming, report paths, classpath filtering."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from domain.models import ConfigurationError, DetektExtension, TaskKind
from modules.registrar.core import (
    DEFAULT_EXCLUDES,
    DEFAULT_INCLUDES,
    analysis_settings,
    capitalize,
    existing_paths,
    report_paths,
    task_name_for,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from adapters.task_graph import InMemoryTaskGraph
    from modules.registrar.core import TaskRegistrar


# ---------------------------------------------------------------------------
# Naming (pure)
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("unit", "expected"),
    [
        ("debug", "detektDebug"),
        ("youngHarryDebug", "detektYoungHarryDebug"),
        ("debugUnitTest", "detektDebugUnitTest"),
        ("main", "detektMain"),
        ("Release", "detektRelease"),
        ("x", "detektX"),
    ],
)
def test_task_name_for(unit: str, expected: str) -> None:
    assert task_name_for(unit) == expected


def test_capitalize_only_touches_first_character() -> None:
    assert capitalize("youngHarryDebug") == "YoungHarryDebug"
    assert capitalize("aBC") == "ABC"
    assert capitalize("") == ""


def test_empty_unit_name_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="empty"):
        task_name_for("")


def test_report_paths_use_unit_name_not_task_name() -> None:
    paths = report_paths("/out/reports/detekt", "youngHarryDebug")
    assert paths.xml == "/out/reports/detekt/youngHarryDebug.xml"
    assert paths.html == "/out/reports/detekt/youngHarryDebug.html"
    assert paths.txt == "/out/reports/detekt/youngHarryDebug.txt"


def test_analysis_settings_copies_extension_flags() -> None:
    extension = DetektExtension(
        debug=True,
        parallel=True,
        fail_fast=True,
        auto_correct=True,
        ignore_failures=True,
        config=("config/detekt/detekt.yml",),
        baseline="baseline.xml",
    )
    settings = analysis_settings(extension)
    assert settings.debug and settings.parallel and settings.fail_fast
    assert settings.auto_correct and settings.ignore_failures
    assert not settings.disable_default_rule_sets
    assert not settings.build_upon_default_config
    assert settings.config_files == ("config/detekt/detekt.yml",)
    assert settings.baseline == "baseline.xml"


def test_existing_paths_drops_missing_and_duplicates(paths_factory: Callable[..., object]) -> None:
    fs = paths_factory({"/a", "/c"})
    assert existing_paths(fs, ["/a", "/b", "/c", "/a"]) == ("/a", "/c")  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# TaskRegistrar.register
# ---------------------------------------------------------------------------


def test_register_adds_task_to_container(registrar: TaskRegistrar, task_graph: InMemoryTaskGraph) -> None:
    task = registrar.register("debug", ["/src/main/kotlin"], ["/classes/debug"])

    assert task_graph.has_task("detektDebug")
    assert task_graph.get("detektDebug") is task
    assert task.kind is TaskKind.ANALYSIS
    assert task.group == "verification"
    assert task.sources == ("/src/main/kotlin",)
    assert task.includes == DEFAULT_INCLUDES
    assert task.excludes == DEFAULT_EXCLUDES
    assert task.tool_configurations == ("detekt", "detektPlugins")


def test_register_uses_extension_reports_dir(registrar: TaskRegistrar) -> None:
    task = registrar.register("debug", [], [])
    assert task.reports is not None
    assert task.reports.xml == "/project/build/reports/detekt/debug.xml"


def test_description_flags_slow_type_resolution(registrar: TaskRegistrar) -> None:
    task = registrar.register("youngHarryDebug", [], [])
    assert task.description == (
        "EXPERIMENTAL & SLOW: Run detekt analysis for youngHarryDebug classes with type resolution"
    )


def test_empty_sources_are_legal(registrar: TaskRegistrar) -> None:
    task = registrar.register("debug", [], [])
    assert task.sources == ()


def test_missing_classpath_entries_are_dropped(
    registrar_factory: Callable[..., TaskRegistrar],
    paths_factory: Callable[..., object],
) -> None:
    fs = paths_factory({"/classes/debug"})
    registrar = registrar_factory(fs=fs)

    task = registrar.register(
        "debug",
        [],
        ["/classes/debug", "/not/built/yet"],
        extra_classpath=["/sdk/android.jar"],
    )

    assert task.classpath == ("/classes/debug", "/sdk/android.jar")


def test_extra_classpath_is_not_filtered(
    registrar_factory: Callable[..., TaskRegistrar],
    paths_factory: Callable[..., object],
) -> None:
    fs = paths_factory()
    registrar = registrar_factory(fs=fs)

    task = registrar.register("debug", [], ["/missing"], extra_classpath=["/sdk/android.jar"])

    assert task.classpath == ("/sdk/android.jar",)
    assert "/sdk/android.jar" not in fs.checked  # type: ignore[attr-defined]


def test_leading_classpath_comes_first_unfiltered(
    registrar_factory: Callable[..., TaskRegistrar],
    paths_factory: Callable[..., object],
) -> None:
    fs = paths_factory({"/classes/main"})
    registrar = registrar_factory(fs=fs)

    task = registrar.register(
        "main",
        [],
        ["/classes/main", "/classes/missing"],
        leading_classpath=["/cache/kotlin-stdlib.jar", "/classes/main"],
    )

    assert task.classpath == ("/cache/kotlin-stdlib.jar", "/classes/main")
    assert "/cache/kotlin-stdlib.jar" not in fs.checked  # type: ignore[attr-defined]


def test_duplicate_registration_fails_immediately(registrar: TaskRegistrar) -> None:
    registrar.register("debug", [], [])
    with pytest.raises(ConfigurationError, match="detektDebug"):
        registrar.register("debug", [], [])


def test_settings_snapshot_comes_from_extension(
    registrar_factory: Callable[..., TaskRegistrar],
) -> None:
    extension = DetektExtension(reports_dir="/r", parallel=True, baseline="b.xml")
    task = registrar_factory(extension=extension).register("debug", [], [])
    assert task.settings is not None
    assert task.settings.parallel is True
    assert task.settings.baseline == "b.xml"
