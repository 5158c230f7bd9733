from __future__ import annotations

import heapq
import logging
from typing import Dict, List, Mapping, Tuple

from cpm.exceptions import ScheduleError
from cpm.graph import TaskGraph
from cpm.task import ScheduledTask

logger = logging.getLogger(__name__)


def check_slack(scheduled: Mapping[str, ScheduledTask]) -> None:
    """Negative slack means the passes disagree, which must never happen for a valid task graph."""
    negative = [task for task in scheduled.values() if task.slack < 0]
    if negative:
        raise ScheduleError(f"Negative slack for tasks {', '.join(task.id for task in negative)}")


def order_critical_path(graph: TaskGraph, scheduled: Mapping[str, ScheduledTask]) -> List[str]:
    """Orders all critical tasks along their dependencies.

    The result is a topological order of the critical tasks. Whenever several critical tasks are ready, the one with
    the smallest earliest start goes first, ties are broken by the task id. A single chain of critical tasks therefore
    comes out as that chain, parallel critical branches are interleaved by their start.

    Arguments:
        graph (TaskGraph): the task graph
        scheduled (Mapping[str, ScheduledTask]): the computed tasks by id

    Returns:
        List[str]: every critical task id exactly once

    Example:
        A(5) -> B(7) -> D(3) and A -> C(7) -> D with both B and C critical gives ``["A", "B", "C", "D"]``
    """
    critical = {task_id for task_id, task in scheduled.items() if task.is_critical}
    blocking: Dict[str, int] = {
        task_id: sum(1 for p in graph.predecessors(task_id) if p in critical) for task_id in critical
    }
    ready: List[Tuple[int, str]] = [
        (scheduled[task_id].earliest_start, task_id) for task_id, n in blocking.items() if n == 0
    ]
    heapq.heapify(ready)

    path = []
    while ready:
        _, task_id = heapq.heappop(ready)
        path.append(task_id)
        for successor in graph.successors(task_id):
            if successor not in critical:
                continue
            blocking[successor] -= 1
            if blocking[successor] == 0:
                heapq.heappush(ready, (scheduled[successor].earliest_start, successor))

    logger.debug(f"critical path: {path}")
    return path


def critical_chain(graph: TaskGraph, scheduled: Mapping[str, ScheduledTask]) -> List[str]:
    """Follows one unbroken chain of critical tasks from the project start to the project end.

    Each step goes to a critical successor which starts exactly when the current task finishes. Such a successor
    exists for every critical task which has successors, so the chain always ends with the project. The durations
    along the chain add up to the project duration.

    Returns:
        List[str]: the task ids of the chain, smallest ``(earliest_start, id)`` taken at every branch
    """
    sources = sorted(
        (task.earliest_start, task.id)
        for task in scheduled.values()
        if task.is_critical and not any(scheduled[p].is_critical for p in graph.predecessors(task.id))
    )
    if not sources:
        return []

    chain = [sources[0][1]]
    while True:
        current = scheduled[chain[-1]]
        tight = sorted(
            (scheduled[s].earliest_start, s)
            for s in graph.successors(current.id)
            if scheduled[s].is_critical and scheduled[s].earliest_start == current.earliest_finish
        )
        if not tight:
            return chain
        chain.append(tight[0][1])
