"""In-memory task graph implementing TaskContainerPort.

Stores task descriptors in registration order and dependency edges as
sets, so asking a task for its dependencies never yields duplicates and
never depends on the order edges were added in.
"""

from __future__ import annotations

from domain.models import ConfigurationError, TaskDescriptor, TaskKind


class InMemoryTaskGraph:
    """Concrete TaskContainerPort backed by plain dictionaries."""

    def __init__(self) -> None:
        self._tasks: dict[str, TaskDescriptor] = {}
        self._edges: dict[str, set[str]] = {}

    def register(self, task: TaskDescriptor) -> None:
        """Add a task. Raises ConfigurationError if the name is taken."""
        if task.name in self._tasks:
            msg = f"Cannot add task '{task.name}' as a task with that name already exists."
            raise ConfigurationError(msg)
        self._tasks[task.name] = task
        self._edges[task.name] = set()

    def register_lifecycle(self, name: str, description: str = "", group: str = "") -> TaskDescriptor:
        """Register a dependency-only task and return it."""
        task = TaskDescriptor(name=name, kind=TaskKind.LIFECYCLE, group=group, description=description)
        self.register(task)
        return task

    def add_dependency(self, task_name: str, dependency_name: str) -> None:
        """Make ``task_name`` depend on ``dependency_name``; both must exist."""
        for name in (task_name, dependency_name):
            if name not in self._tasks:
                msg = f"Task with name '{name}' not found."
                raise ConfigurationError(msg)
        self._edges[task_name].add(dependency_name)

    def has_task(self, name: str) -> bool:
        """Return True if a task with this name is registered."""
        return name in self._tasks

    def get(self, name: str) -> TaskDescriptor:
        """Return the task registered under ``name``."""
        return self._tasks[name]

    def dependencies(self, name: str) -> tuple[str, ...]:
        """Return the names ``name`` depends on, sorted."""
        return tuple(sorted(self._edges[name]))

    def names(self) -> tuple[str, ...]:
        """Return all task names in registration order."""
        return tuple(self._tasks)

    def tasks(self) -> tuple[TaskDescriptor, ...]:
        """Return all task descriptors in registration order."""
        return tuple(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)
