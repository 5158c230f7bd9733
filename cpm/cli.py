#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import timeit
from pathlib import Path
from typing import List, Optional

from cpm.analysis import parallel_groups, project_stats
from cpm.critical_path import critical_chain
from cpm.engine import DiagramType, ProjectResult, compute_schedule
from cpm.exceptions import ProjectFileError, ValidationError
from cpm.graph import TaskGraph
from cpm.loader import load

FORMAT = "[%(filename)s:%(lineno)s - %(funcName)20s() ] %(message)s"
LOG_LEVEL_VARIABLE = "CPM_LOG_LEVEL"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

EXIT_INVALID = 1
EXIT_UNREADABLE = 2

logger = logging.getLogger(__name__)


class Runnable:
    """Loads a project file and schedules it, optionally reporting how long each step took."""

    def __init__(
        self,
        file: Path,
        diagram_type: DiagramType = DiagramType.BOTH,
        assign_missing_ids: bool = False,
        timings: bool = False,
    ):
        self.file = file
        self.diagram_type = diagram_type
        self.assign_missing_ids = assign_missing_ids
        self.timings = timings

    def __call__(self) -> ProjectResult:
        load_time = timeit.Timer(self.load).timeit(1)
        schedule_time = timeit.Timer(self.schedule).timeit(1)

        logger.debug(f"load_time {load_time} schedule_time {schedule_time}")
        if self.timings:
            print("load_time " + str(load_time), file=sys.stderr)
            print("schedule_time " + str(schedule_time), file=sys.stderr)
        return self.result

    def load(self):
        self.tasks = load(self.file, self.assign_missing_ids)

    def schedule(self):
        self.result = compute_schedule(self.tasks, self.diagram_type)


def format_report(result: ProjectResult, diagram_type: DiagramType) -> str:
    lines = []
    if diagram_type in (DiagramType.GANTT, DiagramType.BOTH):
        lines.append(f"{'Id':<8}{'Start':>7}{'End':>7}  Name")
        for task in result.tasks:
            lines.append(f"{task.id:<8}{task.start:>7}{task.end:>7}  {task.name}")
        lines.append("")

    if diagram_type in (DiagramType.PERT, DiagramType.BOTH):
        lines.append(f"{'Id':<8}{'D':>5}{'ES':>6}{'EF':>6}{'LS':>6}{'LF':>6}{'Slack':>7}  Critical")
        for task in result.tasks:
            lines.append(
                f"{task.id:<8}{task.duration:>5}{task.earliest_start:>6}{task.earliest_finish:>6}"
                f"{task.latest_start:>6}{task.latest_finish:>6}{task.slack:>7}  {'yes' if task.is_critical else 'no'}"
            )
        lines.append("")

    stats = project_stats(result)
    lines.append(f"Project duration: {result.project_duration}")
    lines.append(f"Critical path: {' -> '.join(result.critical_path)}")
    lines.append(
        f"Critical tasks: {stats.critical_tasks} of {stats.total_tasks} ({stats.critical_path_percentage}%), "
        f"average duration {stats.avg_task_duration}"
    )
    for group in parallel_groups(result):
        lines.append(f"Parallel at {group[0].start}: {', '.join(task.id for task in group)}")
    return "\n".join(lines)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="cpm", description="Critical path scheduling of a project file")
    parser.add_argument("file", type=Path, help="YAML project file")
    parser.add_argument(
        "--view", choices=[t.value for t in DiagramType], default=DiagramType.BOTH.value, help="columns to report"
    )
    parser.add_argument("--json", action="store_true", help="print the result as JSON")
    parser.add_argument("--assign-ids", action="store_true", help="give tasks without an id a generated one")
    parser.add_argument("--chain", action="store_true", help="also print one start to end chain of critical tasks")
    parser.add_argument("--timings", action="store_true", help="print how long loading and scheduling took")
    parser.add_argument(
        "--log-level", type=str.upper, choices=LOG_LEVELS, default=os.environ.get(LOG_LEVEL_VARIABLE, "WARNING")
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(format=FORMAT)
    logging.getLogger("cpm").setLevel(args.log_level)

    diagram_type = DiagramType(args.view)
    runnable = Runnable(args.file, diagram_type, args.assign_ids, args.timings)
    try:
        result = runnable()
    except ProjectFileError as e:
        print(e, file=sys.stderr)
        return EXIT_UNREADABLE
    except ValidationError as e:
        for message in e.messages:
            print(message, file=sys.stderr)
        return EXIT_INVALID

    chain = None
    if args.chain:
        chain = critical_chain(TaskGraph(runnable.tasks), {task.id: task for task in result.tasks})

    if args.json:
        data = result.to_dict()
        if chain is not None:
            data["critical_chain"] = chain
        print(json.dumps(data, indent=2))
    else:
        print(format_report(result, diagram_type))
        if chain is not None:
            print(f"Critical chain: {' -> '.join(chain)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
