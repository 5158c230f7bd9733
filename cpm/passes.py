"""The two passes of the critical path method.

The forward pass pushes the earliest start of every task as far as its predecessors demand (maximum over the
predecessors), the backward pass pulls the latest finish back as far as its successors allow (minimum over the
successors).
"""
from __future__ import annotations

import logging
from typing import Dict, Mapping, Sequence

from cpm.graph import TaskGraph

logger = logging.getLogger(__name__)


def forward_pass(graph: TaskGraph, order: Sequence[str]) -> Dict[str, int]:
    """Computes the earliest start of every task.

    Arguments:
        graph (TaskGraph): the task graph
        order (Sequence[str]): the task ids in topological order

    Returns:
        Dict[str, int]: earliest start per task id
    """
    earliest_start: Dict[str, int] = dict()
    for task_id in order:
        earliest_start[task_id] = max(
            (earliest_start[p] + graph.task(p).duration for p in graph.predecessors(task_id)),
            default=0,
        )
    logger.debug(f"earliest start: {earliest_start}")
    return earliest_start


def project_duration(graph: TaskGraph, earliest_start: Mapping[str, int]) -> int:
    """The largest earliest finish of all tasks"""
    return max(start + graph.task(task_id).duration for task_id, start in earliest_start.items())


def backward_pass(graph: TaskGraph, order: Sequence[str], duration: int) -> Dict[str, int]:
    """Computes the latest finish of every task.

    Tasks without successors have to be finished at the end of the project, every other task before the earliest of
    the latest starts of its successors.

    Arguments:
        graph (TaskGraph): the task graph
        order (Sequence[str]): the task ids in topological order, they are processed in reverse
        duration (int): the project duration as found by the forward pass

    Returns:
        Dict[str, int]: latest finish per task id
    """
    latest_finish: Dict[str, int] = dict()
    for task_id in reversed(order):
        latest_finish[task_id] = min(
            (latest_finish[s] - graph.task(s).duration for s in graph.successors(task_id)),
            default=duration,
        )
    logger.debug(f"latest finish: {latest_finish}")
    return latest_finish
