from __future__ import annotations

from dataclasses import dataclass, field
from itertools import product
from string import ascii_uppercase
from typing import Any, Dict, Iterable, Tuple

from more_itertools import unique_everseen


@dataclass(frozen=True)
class Task:
    """A unit of schedulable work.

    Args:
        id: unique ID of the task
        name: the label of the task, not used for computation
        duration: the amount of days required to accomplish the task (zero for milestones)
        predecessors: ids of the tasks which have to finish before this task may start

    Duplicated predecessors collapse into a single dependency and a missing list becomes empty. Anything which is
    not a list, tuple or set is kept untouched so the validator can complain about it.
    """

    id: str = field(compare=True)
    name: str = field(compare=False)
    duration: int = field(compare=False)
    predecessors: Tuple[str, ...] = field(default=(), compare=False)

    def __post_init__(self):
        predecessors = self.predecessors
        if predecessors is None:
            predecessors = ()
        elif isinstance(predecessors, (list, tuple, set, frozenset)):
            predecessors = tuple(unique_everseen(predecessors))
        object.__setattr__(self, "predecessors", predecessors)

    def __repr__(self):
        return f"Task {self.id}"


@dataclass(frozen=True, repr=False)
class ScheduledTask(Task):
    """A task annotated by the scheduling engine.

    Only the earliest start and the latest finish are stored, everything else is derived from them so the
    relations between the values hold by construction.
    Two scheduled tasks are equal only if they carry the same id, duration and timing.
    """

    duration: int = field(compare=True)
    earliest_start: int = field(default=0, compare=True)
    latest_finish: int = field(default=0, compare=True)

    @property
    def earliest_finish(self) -> int:
        """The earliest moment at which the task can be finished."""
        return self.earliest_start + self.duration

    @property
    def latest_start(self) -> int:
        """The latest moment at which the task may start without delaying the project."""
        return self.latest_finish - self.duration

    @property
    def slack(self) -> int:
        """The amount of time the task can be delayed without delaying the end of the project."""
        return self.latest_start - self.earliest_start

    @property
    def is_critical(self) -> bool:
        """Returns true if the task is on the critical path"""
        return self.slack == 0

    @property
    def start(self) -> int:
        return self.earliest_start

    @property
    def end(self) -> int:
        return self.earliest_finish

    @classmethod
    def from_task(cls, task: Task, earliest_start: int, latest_finish: int) -> ScheduledTask:
        return cls(
            id=task.id,
            name=task.name,
            duration=task.duration,
            predecessors=task.predecessors,
            earliest_start=earliest_start,
            latest_finish=latest_finish,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "duration": self.duration,
            "predecessors": list(self.predecessors),
            "earliest_start": self.earliest_start,
            "earliest_finish": self.earliest_finish,
            "latest_start": self.latest_start,
            "latest_finish": self.latest_finish,
            "slack": self.slack,
            "is_critical": self.is_critical,
            "start": self.start,
            "end": self.end,
        }


def candidate_ids() -> Iterable[str]:
    """Yields task ids in the order in which they are handed out.

    Example:
        >>> from itertools import islice
        >>> list(islice(candidate_ids(), 27))[-2:]
        ['Z', 'AA']
    """
    yield from ascii_uppercase
    for first, second in product(ascii_uppercase, repeat=2):
        yield first + second
    counter = 1
    while True:
        yield f"T{counter}"
        counter += 1


def generate_task_id(existing_ids: Iterable[str]) -> str:
    """Returns the first free id for a new task.

    Arguments:
        existing_ids (Iterable[str]): ids which are already taken

    Returns:
        str: ``A`` to ``Z`` first, then ``AA`` to ``ZZ`` and finally ``T1``, ``T2``, ...

    Example:
        >>> generate_task_id(["A", "B", "D"])
        'C'
    """
    taken = set(existing_ids)
    return next(candidate for candidate in candidate_ids() if candidate not in taken)
