"""Reads project files into tasks.

A project file is YAML, either a mapping with a ``Tasks`` list or the list itself::

    Tasks:
      - Id: A
        Name: Requirements
        Duration: 5
      - Id: B
        Name: Design
        Duration: 7
        Predecessors: [A]

YAML reads unquoted numbers as integers, so numeric ids are turned into strings. All other values are taken over as
they are, whether they make a schedulable project is up to the validator.
"""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from cpm.exceptions import ProjectFileError
from cpm.task import Task, generate_task_id

YamlTask = Dict[str, Any]
YamlTasks = List[YamlTask]

logger = logging.getLogger(__name__)


class KeyMapping(Enum):
    ID = "Id"
    NAME = "Name"
    DURATION = "Duration"
    PREDECESSORS = "Predecessors"
    TASKS = "Tasks"


ID = KeyMapping.ID.value
NAME = KeyMapping.NAME.value
DURATION = KeyMapping.DURATION.value
PREDECESSORS = KeyMapping.PREDECESSORS.value
TASKS = KeyMapping.TASKS.value


def parse(file: Path) -> Union[Dict[str, Any], YamlTasks]:
    try:
        with open(file, "r") as f:
            project = yaml.safe_load(f)
    except OSError as e:
        raise ProjectFileError(f"Can't read {file}: {e}") from e
    except yaml.YAMLError as e:
        raise ProjectFileError(f"{file} is not valid YAML: {e}") from e
    return project


def get_yaml_tasks(project: Any) -> YamlTasks:
    yaml_tasks = project.get(TASKS) if isinstance(project, dict) else project
    if not isinstance(yaml_tasks, list):
        raise ProjectFileError(f"A project must be a list of tasks or contain a '{TASKS}' list")
    for index, yaml_task in enumerate(yaml_tasks, start=1):
        if not isinstance(yaml_task, dict):
            raise ProjectFileError(f"Task #{index} is not a mapping")
    return yaml_tasks


def as_id(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def as_predecessors(value: Any) -> Any:
    if isinstance(value, list):
        return [as_id(predecessor) for predecessor in value]
    return value


def get_tasks(project: Any, assign_missing_ids: bool = False) -> List[Task]:
    """Converts a parsed project into tasks.

    Arguments:
        project: the parsed project file
        assign_missing_ids (bool): hand out a fresh id to tasks which have none

    Returns:
        List[Task]: the tasks in file order
    """
    yaml_tasks = get_yaml_tasks(project)
    taken = {task_id for task_id in (as_id(yaml_task.get(ID)) for yaml_task in yaml_tasks) if isinstance(task_id, str)}

    tasks = []
    for yaml_task in yaml_tasks:
        task_id = as_id(yaml_task.get(ID))
        if task_id is None and assign_missing_ids:
            task_id = generate_task_id(taken)
            taken.add(task_id)
            logger.info(f"assigned id {task_id} to task {yaml_task.get(NAME)!r}")
        tasks.append(
            Task(
                id=task_id,
                name=yaml_task.get(NAME),
                duration=yaml_task.get(DURATION),
                predecessors=as_predecessors(yaml_task.get(PREDECESSORS)),
            )
        )
    return tasks


def load(file: Path, assign_missing_ids: bool = False) -> List[Task]:
    return get_tasks(parse(file), assign_missing_ids)
