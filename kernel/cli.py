#!/usr/bin/env python3
"""
detekt-tasks CLI -- plan the detekt task graph of a project description.

Loads a JSON project description, applies the detekt plugins, evaluates the
project once, and shows which detekt tasks exist and how the umbrella tasks
are wired.

Usage:
  detekt-tasks plan [PROJECT] [--ignore-variant NAME] [--ignore-build-type NAME]
                    [--ignore-flavor NAME] [--json]
  detekt-tasks describe [PROJECT] TASK
  detekt-tasks configurations [PROJECT]
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from typing import TYPE_CHECKING, Any

from domain.models import ConfigurationError, TaskDescriptor, TaskKind
from kernel.config import CONSOLE_BACKEND, DEFAULT_PROJECT_FILE, LOG_FORMAT, LOGGER_NAME
from kernel.console import configure, console

if TYPE_CHECKING:
    from adapters.build_project import BuildProject

logger = logging.getLogger(LOGGER_NAME)

# ---------------------------------------------------------------------------
# Project loading
# ---------------------------------------------------------------------------


def _load_and_evaluate(args: argparse.Namespace, *, show_steps: bool = True) -> BuildProject:
    """Configuration phase, CLI overrides, then the single evaluation."""
    from adapters.project_loader import load_project

    if show_steps:
        console.step(1, 2, f"Configuring project from {args.project}")
    project, _ = load_project(args.project)

    extension = project.detekt_extension
    overrides = {
        "ignored_variants": extension.ignored_variants + tuple(args.ignore_variant or ()),
        "ignored_build_types": extension.ignored_build_types + tuple(args.ignore_build_type or ()),
        "ignored_flavors": extension.ignored_flavors + tuple(args.ignore_flavor or ()),
    }
    project.detekt_extension = dataclasses.replace(extension, **overrides)

    if show_steps:
        console.step_detail(f"plugins: {', '.join(project.plugin_ids)}")
        console.step(2, 2, "Evaluating project")
    project.evaluate()
    if show_steps:
        console.step_detail(f"{len(project.tasks)} tasks registered")
    return project


def _umbrella_names() -> tuple[str, str]:
    from modules.variant_resolver.core import MAIN_UMBRELLA_TASK_NAME, TEST_UMBRELLA_TASK_NAME

    return MAIN_UMBRELLA_TASK_NAME, TEST_UMBRELLA_TASK_NAME


def _task_to_dict(task: TaskDescriptor) -> dict[str, Any]:
    data = dataclasses.asdict(task)
    data["kind"] = task.kind.value
    return data


# ---------------------------------------------------------------------------
# CLI commands
# ---------------------------------------------------------------------------


def cmd_plan(args: argparse.Namespace) -> None:
    """Show every analysis task and the umbrella wiring."""
    project = _load_and_evaluate(args, show_steps=not args.json)
    tasks = project.tasks.tasks()
    umbrellas = {
        name: list(project.tasks.dependencies(name))
        for name in _umbrella_names()
        if project.tasks.has_task(name)
    }

    if args.json:
        console.raw(
            json.dumps(
                {
                    "project": project.name,
                    "tasks": [_task_to_dict(t) for t in tasks],
                    "umbrellas": umbrellas,
                },
                indent=2,
            )
        )
        return

    rows = [
        [t.name, t.kind.value, str(len(t.sources)), str(len(t.classpath)), t.reports.xml if t.reports else "--"]
        for t in tasks
        if t.kind is not TaskKind.LIFECYCLE
    ]
    console.table(["Task", "Kind", "Sources", "Classpath", "XML report"], rows, title="detekt tasks")

    for name in _umbrella_names():
        if name in umbrellas:
            console.umbrella(name, umbrellas[name])
        else:
            console.warning(f"{name}: not created (no surviving variants)")

    analysis = sum(1 for t in tasks if t.kind is TaskKind.ANALYSIS)
    console.success(f"{analysis} analysis tasks planned for {project.name}")


def cmd_describe(args: argparse.Namespace) -> None:
    """Show a single task in detail."""
    project = _load_and_evaluate(args, show_steps=False)
    if not project.tasks.has_task(args.task):
        console.error(f"No task named '{args.task}' in project {project.name}")
        similar = [n for n in project.tasks.names() if args.task.lower() in n.lower()]
        if similar:
            console.info(f"Did you mean: {', '.join(similar)}")
        sys.exit(1)

    task = project.tasks.get(args.task)
    data = {
        "Kind": task.kind.value,
        "Group": task.group or "--",
        "Description": task.description or "--",
        "Sources": str(len(task.sources)),
        "Classpath": str(len(task.classpath)),
        "Includes": ", ".join(task.includes) or "--",
        "Excludes": ", ".join(task.excludes) or "--",
        "Tool classpath": ", ".join(task.tool_configurations) or "--",
        "Depends on": ", ".join(project.tasks.dependencies(task.name)) or "--",
    }
    if task.reports is not None:
        data["XML report"] = task.reports.xml
        data["HTML report"] = task.reports.html
        data["TXT report"] = task.reports.txt
    console.kv(data, title=task.name)

    if task.sources:
        console.table(["Source location"], [[s] for s in task.sources])
    if task.classpath:
        console.table(["Classpath entry"], [[c] for c in task.classpath])


def cmd_configurations(args: argparse.Namespace) -> None:
    """Show the resolved dependency configurations."""
    project = _load_and_evaluate(args, show_steps=False)
    rows: list[list[str]] = []
    for name in project.configuration_names():
        configuration = project.configuration(name)
        resolved = configuration.resolved()
        source = "declared" if configuration.dependencies else "default"
        rows.append([name, source, ", ".join(resolved) or "--"])
    console.table(["Configuration", "Source", "Dependencies"], rows, title=project.name)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def _add_project_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "project",
        nargs="?",
        default=DEFAULT_PROJECT_FILE,
        help=f"Project description (default: {DEFAULT_PROJECT_FILE})",
    )


def _add_ignore_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--ignore-variant", action="append", help="Variant to skip (repeatable)")
    parser.add_argument("--ignore-build-type", action="append", help="Build type to skip (repeatable)")
    parser.add_argument("--ignore-flavor", action="append", help="Flavor to skip (repeatable)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="detekt-tasks",
        description="detekt-tasks -- variant-aware detekt task planner",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--quiet", action="store_true", help="Only show errors")
    parser.add_argument("--log-file", default=None, help="Write the log to this file")
    sub = parser.add_subparsers(dest="command")

    # detekt-tasks plan
    plan_p = sub.add_parser("plan", help="Show the planned detekt tasks")
    _add_project_argument(plan_p)
    _add_ignore_arguments(plan_p)
    plan_p.add_argument("--json", action="store_true", help="Print the plan as JSON")

    # detekt-tasks describe
    describe_p = sub.add_parser("describe", help="Show one task in detail")
    _add_project_argument(describe_p)
    describe_p.add_argument("task", help="Task name, e.g. detektDebug")
    _add_ignore_arguments(describe_p)

    # detekt-tasks configurations
    conf_p = sub.add_parser("configurations", help="Show resolved dependency configurations")
    _add_project_argument(conf_p)
    _add_ignore_arguments(conf_p)

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    elif args.log_file:
        level = logging.INFO
    else:
        level = logging.WARNING

    if args.log_file:
        logging.basicConfig(filename=args.log_file, format=LOG_FORMAT, level=level)
    else:
        logging.basicConfig(stream=sys.stderr, format=LOG_FORMAT, level=level)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    # -- Console configuration (TUI output) ---------------------------------
    configure(backend=CONSOLE_BACKEND)

    # -- Logging configuration ----------------------------------------------
    _configure_logging(args)

    commands = {
        "plan": cmd_plan,
        "describe": cmd_describe,
        "configurations": cmd_configurations,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    try:
        command(args)
    except FileNotFoundError as exc:
        console.error(f"Project description not found: {exc.filename}")
        sys.exit(1)
    except ConfigurationError as exc:
        logger.error("Configuration failed: %s", exc)
        console.error(str(exc))
        sys.exit(1)


if __name__ == "__main__":
    main()
