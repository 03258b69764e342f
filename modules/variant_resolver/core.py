"""Variant resolver: derive the detekt task graph from build variants.

Enumerates the variants of every registered variant source, drops the ones
matched by the ignore rules, registers one task per surviving primary
variant (wired under ``detektMain``) and one per surviving secondary variant
(wired under ``detektTest``).

Resolution is explicitly two-phase: sources are collected with
``add_source`` while the build is still being configured, and ``resolve``
runs exactly once after configuration has settled. An umbrella task only
exists if at least one task was wired under it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from domain.models import (
    ConfigurationError,
    IgnoreRules,
    ResolutionResult,
    TaskDescriptor,
    TaskKind,
    Variant,
)
from modules.ignore_filter.core import is_ignored, partition
from modules.registrar.core import DETEKT_TASK_NAME, VERIFICATION_GROUP, task_name_for

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from domain.ports import VariantSource
    from modules.registrar.core import TaskRegistrar

logger = logging.getLogger("detekt_tasks.variant_resolver")

MAIN_UMBRELLA_TASK_NAME = f"{DETEKT_TASK_NAME}Main"
TEST_UMBRELLA_TASK_NAME = f"{DETEKT_TASK_NAME}Test"

_UMBRELLA_DESCRIPTIONS = {
    MAIN_UMBRELLA_TASK_NAME: (
        "EXPERIMENTAL & SLOW: Run detekt analysis for production classes across "
        "all variants with type resolution"
    ),
    TEST_UMBRELLA_TASK_NAME: (
        "EXPERIMENTAL & SLOW: Run detekt analysis for test classes across "
        "all variants with type resolution"
    ),
}


class VariantResolver:
    """Two-phase variant-to-task resolution for one configuration pass."""

    def __init__(self, registrar: TaskRegistrar, rules: IgnoreRules) -> None:
        self._registrar = registrar
        self._rules = rules
        self._sources: list[VariantSource] = []
        self._resolved = False
        # casefolded task name -> variant name that claimed it
        self._claimed: dict[str, str] = {}
        self._umbrellas: set[str] = set()

    # -- Phase 1: collection -------------------------------------------------

    def add_source(self, source: VariantSource) -> None:
        """Register a variant provider; its variants are read in ``resolve``."""
        if self._resolved:
            msg = "Variant sources cannot be added after resolution has run"
            raise ConfigurationError(msg)
        self._sources.append(source)

    # -- Phase 2: resolution -------------------------------------------------

    def resolve(self) -> ResolutionResult:
        """Enumerate, filter and register. Must be called exactly once.

        Raises:
            ConfigurationError: On a second call, on a duplicate task name,
                or when two variant names only differ by case.
        """
        if self._resolved:
            msg = "Variant resolution already ran for this configuration pass"
            raise ConfigurationError(msg)
        self._resolved = True

        main_tasks: set[TaskDescriptor] = set()
        test_tasks: set[TaskDescriptor] = set()
        for source in self._sources:
            boot_classpath = tuple(source.boot_classpath())
            main, test = self._resolve_variants(source.list_variants(), boot_classpath)
            main_tasks.update(main)
            test_tasks.update(test)

        logger.info(
            "Variant resolution complete: %d main tasks, %d test tasks",
            len(main_tasks),
            len(test_tasks),
        )
        return ResolutionResult(main_tasks=frozenset(main_tasks), test_tasks=frozenset(test_tasks))

    def _resolve_variants(
        self,
        variants: Iterable[Variant],
        boot_classpath: Sequence[str],
    ) -> tuple[list[TaskDescriptor], list[TaskDescriptor]]:
        main: list[TaskDescriptor] = []
        test: list[TaskDescriptor] = []
        kept, ignored = partition(self._rules, variants)
        for variant in ignored:
            logger.debug(
                "Skipping variant %s and its %d secondary variants",
                variant.name,
                len(variant.secondary_variants),
            )

        for variant in kept:
            main.append(self._register(variant, boot_classpath, MAIN_UMBRELLA_TASK_NAME))

            for secondary in variant.secondary_variants:
                if is_ignored(self._rules, secondary):
                    logger.debug("Skipping secondary variant %s", secondary.name)
                    continue
                test.append(self._register(secondary, boot_classpath, TEST_UMBRELLA_TASK_NAME))
        return main, test

    def _register(
        self,
        variant: Variant,
        boot_classpath: Sequence[str],
        umbrella: str,
    ) -> TaskDescriptor:
        self._claim(variant.name)
        task = self._registrar.register(
            variant.name,
            variant.source_locations,
            variant.compile_classpath,
            extra_classpath=boot_classpath,
        )
        self._wire(umbrella, task.name)
        return task

    def _claim(self, variant_name: str) -> None:
        """Reject variant names whose task names only differ by case."""
        key = task_name_for(variant_name).casefold()
        previous = self._claimed.get(key)
        if previous is not None and previous != variant_name:
            msg = (
                f"Variants '{previous}' and '{variant_name}' map to detekt task "
                f"names that differ only by case"
            )
            raise ConfigurationError(msg)
        self._claimed[key] = variant_name

    def _wire(self, umbrella: str, task_name: str) -> None:
        """Create the umbrella on first use, then add the dependency edge."""
        container = self._registrar.container
        if umbrella not in self._umbrellas:
            container.register(
                TaskDescriptor(
                    name=umbrella,
                    kind=TaskKind.LIFECYCLE,
                    group=VERIFICATION_GROUP,
                    description=_UMBRELLA_DESCRIPTIONS[umbrella],
                )
            )
            self._umbrellas.add(umbrella)
            logger.debug("Created umbrella task %s", umbrella)
        container.add_dependency(umbrella, task_name)


def resolve_variants(
    variants: Sequence[Variant],
    rules: IgnoreRules,
    registrar: TaskRegistrar,
    boot_classpath: Sequence[str] = (),
) -> ResolutionResult:
    """One-shot resolution of an already enumerated variant sequence."""
    resolver = VariantResolver(registrar, rules)
    resolver.add_source(_StaticVariants(tuple(variants), tuple(boot_classpath)))
    return resolver.resolve()


class _StaticVariants:
    """VariantSource over a fixed, already enumerated sequence."""

    def __init__(self, variants: tuple[Variant, ...], boot_classpath: tuple[str, ...]) -> None:
        self._variants = variants
        self._boot_classpath = boot_classpath

    def list_variants(self) -> Sequence[Variant]:
        return self._variants

    def boot_classpath(self) -> Sequence[str]:
        return self._boot_classpath
