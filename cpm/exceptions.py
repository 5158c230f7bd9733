from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional


class CpmException(Exception):
    """Base class exception for CPM."""


class ErrorKind(Enum):
    EMPTY = "empty"
    SHAPE = "shape"
    REFERENCE = "reference"
    CYCLE = "cycle"


@dataclass(frozen=True)
class Problem:
    """A single finding of the validator.

    Args:
        kind: the category of the finding
        task_id: the id of the offending task, if it has a usable one
        message: the human readable description
    """

    kind: ErrorKind
    message: str
    task_id: Optional[str] = None

    def __str__(self):
        return self.message


class ValidationError(CpmException):
    """The task set can't be scheduled.

    Carries every problem that was found so the caller can fix the input in one go.
    """

    def __init__(self, problems: Iterable[Problem]):
        self.problems: List[Problem] = list(problems)
        if not self.problems:
            raise ValueError("A validation error requires at least one problem")
        super().__init__("\n".join(self.messages))

    @property
    def kind(self) -> ErrorKind:
        """The first kind of problem, in the order the checks are run."""
        kinds = {problem.kind for problem in self.problems}
        return next(kind for kind in ErrorKind if kind in kinds)

    @property
    def messages(self) -> List[str]:
        return [str(problem) for problem in self.problems]


class CycleError(ValidationError):
    """Exception for dependency cycles"""


class ScheduleError(CpmException):
    """Exception for inconsistent computation results"""


class ProjectFileError(CpmException):
    """Exception for project files which can't be read"""
