from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

import networkx as nx
from cpm.exceptions import ErrorKind, Problem, ValidationError
from cpm.task import Task

logger = logging.getLogger(__name__)


class TaskGraph:
    """The predecessor relation of a task set.

    Every task is a node keyed by its id, every dependency is an edge from the predecessor to the dependent task.
    The graph keeps the input order of the tasks, which is used to break ties wherever a traversal has to choose.
    """

    def __init__(self, tasks: Sequence[Task]) -> None:
        self.graph = nx.DiGraph()
        self._position: Dict[str, int] = dict()

        for position, task in enumerate(tasks):
            if task.id in self._position:
                raise ValidationError([Problem(ErrorKind.SHAPE, f"Task {task.id}: duplicated ID", task.id)])
            self._position[task.id] = position
            self.graph.add_node(task.id, data=task)

        for task in tasks:
            for predecessor in task.predecessors:
                if predecessor not in self._position:
                    raise ValidationError(
                        [Problem(ErrorKind.REFERENCE, f'Task {task.id}: unknown predecessor "{predecessor}"', task.id)]
                    )
                self.graph.add_edge(predecessor, task.id)

        logger.debug(f"graph with {self.graph.number_of_nodes()} tasks and {self.graph.number_of_edges()} links")

    @property
    def graph(self) -> nx.DiGraph:
        return self._graph

    @graph.setter
    def graph(self, value: nx.DiGraph):
        self._graph = value

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    @property
    def ids(self) -> List[str]:
        """All task ids in input order."""
        return list(self._position)

    def position(self, task_id: str) -> int:
        return self._position[task_id]

    def task(self, task_id: str) -> Task:
        return self.graph.nodes[task_id]["data"]

    def predecessors(self, task_id: str) -> Tuple[str, ...]:
        return self.task(task_id).predecessors

    def successors(self, task_id: str) -> Tuple[str, ...]:
        return tuple(sorted(self.graph.successors(task_id), key=self.position))

    def in_degree(self, task_id: str) -> int:
        return self.graph.in_degree(task_id)
