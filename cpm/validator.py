"""Checks a task set before it is scheduled.

The checks are run in three rounds:

1. shape: ids, names, durations and predecessor containers
2. references: predecessors have to exist and must not be the task itself
3. cycles: the predecessor relation has to be acyclic

The first two rounds are reported together, the cycle search only runs on a set which passed them. Within a round
every problem is collected, so the caller sees everything which is wrong at once.
"""
from __future__ import annotations

import logging
from typing import Iterator, List, Sequence

from more_itertools import duplicates_everseen, unique_everseen

from cpm.exceptions import CycleError, ErrorKind, Problem, ValidationError
from cpm.graph import TaskGraph
from cpm.task import Task

logger = logging.getLogger(__name__)


def validate(tasks: Sequence[Task]) -> None:
    """Raises a ValidationError listing all problems of the task set, returns silently for a schedulable set."""
    problems = find_problems(tasks)
    if not problems:
        return
    logger.debug(f"{len(problems)} problems found")
    if all(problem.kind == ErrorKind.CYCLE for problem in problems):
        raise CycleError(problems)
    raise ValidationError(problems)


def find_problems(tasks: Sequence[Task]) -> List[Problem]:
    if not tasks:
        return [Problem(ErrorKind.EMPTY, "At least one task is required")]

    problems = shape_problems(tasks) + reference_problems(tasks)
    if problems:
        return problems

    return cycle_problems(TaskGraph(tasks))


def has_valid_id(task: Task) -> bool:
    return isinstance(task.id, str) and bool(task.id.strip())


def label(task: Task, index: int) -> str:
    return f"Task {task.id}" if has_valid_id(task) else f"Task #{index}"


def shape_problems(tasks: Sequence[Task]) -> List[Problem]:
    problems = []
    for index, task in enumerate(tasks, start=1):
        task_id = task.id if has_valid_id(task) else None
        prefix = label(task, index)

        def problem(message: str) -> None:
            problems.append(Problem(ErrorKind.SHAPE, f"{prefix}: {message}", task_id))

        if task_id is None:
            problem("missing or invalid ID")

        if not isinstance(task.name, str) or not task.name.strip():
            problem("missing or invalid name")

        # bool is an int subclass
        if isinstance(task.duration, bool) or not isinstance(task.duration, int):
            problem(f"invalid duration {task.duration!r} (must be a whole number of days)")
        elif task.duration < 0:
            problem(f"invalid duration {task.duration} (must not be negative)")

        if not isinstance(task.predecessors, tuple):
            problem("predecessors must be a list of task IDs")
        else:
            for predecessor in task.predecessors:
                if not isinstance(predecessor, str):
                    problem(f"predecessor {predecessor!r} is not a task ID")

    valid_ids = [task.id for task in tasks if has_valid_id(task)]
    for duplicate in unique_everseen(duplicates_everseen(valid_ids)):
        problems.append(Problem(ErrorKind.SHAPE, f"Task {duplicate}: duplicated ID", duplicate))

    return problems


def reference_problems(tasks: Sequence[Task]) -> List[Problem]:
    problems = []
    known_ids = {task.id for task in tasks if has_valid_id(task)}
    for task in tasks:
        if not has_valid_id(task) or not isinstance(task.predecessors, tuple):
            continue
        for predecessor in task.predecessors:
            if not isinstance(predecessor, str):
                continue
            if predecessor == task.id:
                problems.append(
                    Problem(ErrorKind.REFERENCE, f"Task {task.id}: can't be its own predecessor", task.id)
                )
            elif predecessor not in known_ids:
                problems.append(
                    Problem(ErrorKind.REFERENCE, f'Task {task.id}: unknown predecessor "{predecessor}"', task.id)
                )
    return problems


def cycle_problems(graph: TaskGraph) -> List[Problem]:
    return [
        Problem(ErrorKind.CYCLE, f"Cycle detected in task dependencies: {' -> '.join(cycle)}", cycle[0])
        for cycle in find_cycles(graph)
    ]


def find_cycles(graph: TaskGraph) -> List[List[str]]:
    """Depth first walk over the predecessor relation.

    A task is ``on_path`` while its predecessors are explored and ``done`` afterwards. Reaching a task which is still
    on the path closes a cycle. The walk uses an explicit stack, so long chains don't hit the recursion limit.

    Returns:
        List[List[str]]: one entry per cycle found, the first id repeated at the end

    Example:
        A depends on B, B depends on A gives ``[["A", "B", "A"]]``
    """
    cycles = []
    done = set()

    for root in graph.ids:
        if root in done:
            continue

        path: List[str] = [root]
        on_path = {root}
        stack: List[Iterator[str]] = [iter(graph.predecessors(root))]

        while stack:
            predecessor = next(stack[-1], None)
            if predecessor is None:
                stack.pop()
                finished = path.pop()
                on_path.discard(finished)
                done.add(finished)
            elif predecessor in on_path:
                cycles.append(path[path.index(predecessor) :] + [predecessor])
            elif predecessor not in done:
                path.append(predecessor)
                on_path.add(predecessor)
                stack.append(iter(graph.predecessors(predecessor)))

    return cycles
