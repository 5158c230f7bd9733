from cpm.engine import DiagramType, ProjectResult, calculate_gantt_data, calculate_pert_data, compute_schedule
from cpm.exceptions import CpmException, CycleError, ErrorKind, Problem, ScheduleError, ValidationError
from cpm.task import ScheduledTask, Task, generate_task_id

__all__ = [
    "CpmException",
    "CycleError",
    "DiagramType",
    "ErrorKind",
    "Problem",
    "ProjectResult",
    "ScheduleError",
    "ScheduledTask",
    "Task",
    "ValidationError",
    "calculate_gantt_data",
    "calculate_pert_data",
    "compute_schedule",
    "generate_task_id",
]
