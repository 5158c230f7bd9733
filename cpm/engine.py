#!/usr/bin/env python3
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Sequence, Tuple

from cpm.critical_path import check_slack, order_critical_path
from cpm.graph import TaskGraph
from cpm.passes import backward_pass, forward_pass, project_duration
from cpm.sorter import topological_order
from cpm.task import ScheduledTask, Task
from cpm.validator import validate

logger = logging.getLogger(__name__)


class DiagramType(Enum):
    GANTT = "gantt"
    PERT = "pert"
    BOTH = "both"


@dataclass(frozen=True)
class ProjectResult:
    """The outcome of a schedule computation.

    Args:
        tasks: all tasks with their computed times, in topological order
        critical_path: the ids of the critical tasks in dependency order
        project_duration: the earliest moment at which all tasks are finished
    """

    tasks: Tuple[ScheduledTask, ...]
    critical_path: Tuple[str, ...]
    project_duration: int
    diagram_type: DiagramType = field(default=DiagramType.BOTH, compare=False)

    def task(self, task_id: str) -> ScheduledTask:
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise KeyError(task_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tasks": [task.to_dict() for task in self.tasks],
            "critical_path": list(self.critical_path),
            "project_duration": self.project_duration,
        }


def compute_schedule(tasks: Sequence[Task], diagram_type: DiagramType = DiagramType.BOTH) -> ProjectResult:
    """Computes start and finish times, slack and the critical path of a project.

    The given tasks are not modified, the result holds new records.

    Arguments:
        tasks (Sequence[Task]): the tasks of the project
        diagram_type (DiagramType): the view the result is produced for

    Returns:
        ProjectResult: the annotated tasks, the critical path and the project duration

    Raises:
        ValidationError: if the tasks can't be scheduled, listing every problem found
    """
    tasks = list(tasks)
    validate(tasks)

    graph = TaskGraph(tasks)
    order = topological_order(graph)

    earliest_start = forward_pass(graph, order)
    duration = project_duration(graph, earliest_start)
    latest_finish = backward_pass(graph, order, duration)

    scheduled = {
        task_id: ScheduledTask.from_task(graph.task(task_id), earliest_start[task_id], latest_finish[task_id])
        for task_id in order
    }
    check_slack(scheduled)

    result = ProjectResult(
        tasks=tuple(scheduled.values()),
        critical_path=tuple(order_critical_path(graph, scheduled)),
        project_duration=duration,
        diagram_type=diagram_type,
    )
    logger.info(f"scheduled {len(result.tasks)} tasks, project duration {result.project_duration}")
    return result


def calculate_gantt_data(tasks: Sequence[Task]) -> ProjectResult:
    """Schedule for a bar chart, consumers read ``start`` and ``end`` of each task."""
    return compute_schedule(tasks, DiagramType.GANTT)


def calculate_pert_data(tasks: Sequence[Task]) -> ProjectResult:
    """Schedule for a network diagram, consumers read the earliest and latest times of each task."""
    return compute_schedule(tasks, DiagramType.PERT)
