from __future__ import annotations

import heapq
import logging
from typing import Dict, List, Tuple

from cpm.exceptions import CycleError, ErrorKind, Problem
from cpm.graph import TaskGraph

logger = logging.getLogger(__name__)


def topological_order(graph: TaskGraph) -> List[str]:
    """Orders the tasks so that every task comes after all of its predecessors (Kahn's algorithm).

    Whenever several tasks are ready at the same time, the one given first in the input is taken first, so the order
    is reproducible.

    Arguments:
        graph (TaskGraph): the validated task graph

    Returns:
        List[str]: The task ids in an order in which they can be scheduled

    Raises:
        CycleError: if some tasks can't be ordered because they depend on each other
    """
    in_degree: Dict[str, int] = {task_id: graph.in_degree(task_id) for task_id in graph.ids}
    ready: List[Tuple[int, str]] = [(graph.position(task_id), task_id) for task_id, n in in_degree.items() if n == 0]
    heapq.heapify(ready)

    order = []
    while ready:
        _, task_id = heapq.heappop(ready)
        order.append(task_id)
        for successor in graph.successors(task_id):
            in_degree[successor] -= 1
            if in_degree[successor] == 0:
                heapq.heappush(ready, (graph.position(successor), successor))

    if len(order) != len(graph):
        unresolved = [task_id for task_id in graph.ids if in_degree[task_id] > 0]
        raise CycleError(
            [
                Problem(
                    ErrorKind.CYCLE,
                    f"Tasks {', '.join(unresolved)} can't be ordered as their dependencies form a cycle",
                    unresolved[0],
                )
            ]
        )

    logger.debug(f"topological order: {order}")
    return order
