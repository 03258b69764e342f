"""Ignore filter: decide which build variants get no detekt task.

A variant is ignored when its exact name, its build type, or its flavor
appears in the respective ignore set. The three checks are OR-ed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from domain.models import DetektExtension, IgnoreRules, Variant

if TYPE_CHECKING:
    from collections.abc import Iterable


def ignore_rules_from(extension: DetektExtension) -> IgnoreRules:
    """Build the ignore sets configured on the extension."""
    return extension.ignore_rules()


def is_ignored(rules: IgnoreRules, variant: Variant) -> bool:
    """Return True if any of the three ignore sets matches the variant."""
    return (
        variant.name in rules.variants
        or variant.build_type_name in rules.build_types
        or variant.flavor_name in rules.flavors
    )


def partition(rules: IgnoreRules, variants: Iterable[Variant]) -> tuple[list[Variant], list[Variant]]:
    """Split variants into (kept, ignored), preserving enumeration order."""
    kept: list[Variant] = []
    ignored: list[Variant] = []
    for variant in variants:
        if is_ignored(rules, variant):
            ignored.append(variant)
        else:
            kept.append(variant)
    return kept, ignored
