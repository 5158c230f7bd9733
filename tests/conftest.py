from typing import List

import pytest

from cpm.task import Task


@pytest.fixture
def linear_chain() -> List[Task]:
    return [
        Task(id="A", name="Dig", duration=5),
        Task(id="B", name="Pour", duration=3, predecessors=["A"]),
    ]


@pytest.fixture
def diamond() -> List[Task]:
    return [
        Task(id="A", name="Specify", duration=5),
        Task(id="B", name="Build frontend", duration=7, predecessors=["A"]),
        Task(id="D", name="Build backend", duration=12, predecessors=["A"]),
        Task(id="E", name="Integrate", duration=6, predecessors=["B", "D"]),
    ]


@pytest.fixture
def software_project() -> List[Task]:
    return [
        Task(id="A", name="Requirements analysis", duration=5),
        Task(id="B", name="Design", duration=7, predecessors=["A"]),
        Task(id="C", name="Frontend development", duration=10, predecessors=["B"]),
        Task(id="D", name="Backend development", duration=12, predecessors=["B"]),
        Task(id="E", name="Integration", duration=6, predecessors=["C", "D"]),
        Task(id="F", name="Testing", duration=8, predecessors=["E"]),
        Task(id="G", name="Deployment", duration=3, predecessors=["F"]),
    ]


@pytest.fixture
def parallel_critical() -> List[Task]:
    """Two equally long branches between a common start and end"""
    return [
        Task(id="S", name="Start", duration=2),
        Task(id="X", name="Branch one", duration=4, predecessors=["S"]),
        Task(id="Y", name="Branch two", duration=4, predecessors=["S"]),
        Task(id="Z", name="Finish", duration=1, predecessors=["X", "Y"]),
        Task(id="Q", name="Side task", duration=1, predecessors=["S"]),
    ]
