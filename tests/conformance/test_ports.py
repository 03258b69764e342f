"""Conformance test: verify each adapter matches the port it stands in for.

Ports are typing.Protocol classes without runtime checks, so this compares
the public methods of every port with the adapter implementing it: same
names, same parameter names.

Usage:
    pytest tests/conformance/test_ports.py
"""

from __future__ import annotations

import inspect

import pytest

from adapters.android_variants import ApplicationVariants, LibraryVariants
from adapters.android_variants import TestVariants as AndroidTestVariants
from adapters.build_project import BuildProject
from adapters.local_fs import LocalFileSystem
from adapters.task_graph import InMemoryTaskGraph
from domain import ports
from modules.plugin.core import DetektAndroidPlugin, DetektPlugin

PAIRS = [
    (ports.TaskContainerPort, InMemoryTaskGraph),
    (ports.PathCheckerPort, LocalFileSystem),
    (ports.VariantSource, ApplicationVariants),
    (ports.VariantSource, LibraryVariants),
    (ports.VariantSource, AndroidTestVariants),
    (ports.ProjectPort, BuildProject),
    (ports.BuildPlugin, DetektPlugin),
    (ports.BuildPlugin, DetektAndroidPlugin),
]


def _port_methods(port: type) -> dict[str, inspect.Signature]:
    return {
        name: inspect.signature(member)
        for name, member in vars(port).items()
        if inspect.isfunction(member) and not name.startswith("_")
    }


@pytest.mark.parametrize(
    ("port", "adapter"),
    PAIRS,
    ids=[f"{p.__name__}-{a.__name__}" for p, a in PAIRS],
)
def test_adapter_implements_port_methods(port: type, adapter: type) -> None:
    """Every port method exists on the adapter with the same parameter names."""
    for name, expected in _port_methods(port).items():
        member = getattr(adapter, name, None)
        assert callable(member), f"{adapter.__name__} lacks {name}()"
        actual = inspect.signature(member)
        assert list(actual.parameters) == list(expected.parameters), (
            f"{adapter.__name__}.{name}{actual} does not match {port.__name__}.{name}{expected}"
        )


def test_plugins_declare_their_ids() -> None:
    assert DetektPlugin.plugin_id == "io.gitlab.arturbosch.detekt"
    assert DetektAndroidPlugin.plugin_id == "io.gitlab.arturbosch.detekt.android"


def test_project_exposes_port_attributes() -> None:
    project = BuildProject("app", "/project")
    for attribute in ("name", "project_dir", "build_dir", "tasks", "fs", "detekt_extension"):
        assert hasattr(project, attribute), attribute
