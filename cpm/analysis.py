from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Sequence

from more_itertools import bucket

from cpm.engine import ProjectResult
from cpm.task import ScheduledTask, Task

FINISH_TO_START = "finish-to-start"


@dataclass(frozen=True)
class ProjectStats:
    total_tasks: int
    critical_tasks: int
    project_duration: int
    total_work_days: int
    avg_task_duration: float
    critical_path_percentage: int


@dataclass(frozen=True)
class Link:
    source: str
    target: str
    type: str = FINISH_TO_START


def round_half_up(value: float, digits: int = 0) -> float:
    """Halves round up (12.5 to 13), where the builtin round goes to the even neighbour"""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def project_stats(result: ProjectResult) -> ProjectStats:
    total_tasks = len(result.tasks)
    critical_tasks = sum(1 for task in result.tasks if task.is_critical)
    total_work_days = sum(task.duration for task in result.tasks)
    return ProjectStats(
        total_tasks=total_tasks,
        critical_tasks=critical_tasks,
        project_duration=result.project_duration,
        total_work_days=total_work_days,
        avg_task_duration=round_half_up(total_work_days / total_tasks, 1),
        critical_path_percentage=int(round_half_up(100 * critical_tasks / total_tasks)),
    )


def parallel_groups(result: ProjectResult) -> List[List[ScheduledTask]]:
    """Groups of two or more tasks which start at the same time, ordered by their start"""
    by_start = bucket(result.tasks, key=lambda task: task.start)
    groups = [list(by_start[start]) for start in sorted(by_start)]
    return [group for group in groups if len(group) > 1]


def dependency_links(tasks: Sequence[Task]) -> List[Link]:
    """One link per dependency, from the predecessor to the dependent task"""
    return [Link(source=predecessor, target=task.id) for task in tasks for predecessor in task.predecessors]


def task_levels(result: ProjectResult) -> Dict[str, int]:
    """The number of links on the longest chain of predecessors leading to each task.

    Tasks without predecessors are on level 0. The tasks of a result are in topological order, so the level of all
    predecessors is known when a task is reached.
    """
    levels: Dict[str, int] = dict()
    for task in result.tasks:
        levels[task.id] = max((levels[p] + 1 for p in task.predecessors), default=0)
    return levels
