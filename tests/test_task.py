from itertools import islice

from cpm.task import ScheduledTask, Task, candidate_ids, generate_task_id


class TestTask:
    def test_missing_predecessors_become_empty(self) -> None:
        assert Task(id="A", name="A", duration=1, predecessors=None).predecessors == ()
        assert Task(id="A", name="A", duration=1).predecessors == ()

    def test_duplicated_predecessors_collapse(self) -> None:
        task = Task(id="C", name="C", duration=1, predecessors=["A", "B", "A"])
        assert task.predecessors == ("A", "B")

    def test_sets_are_accepted(self) -> None:
        task = Task(id="C", name="C", duration=1, predecessors={"A"})
        assert task.predecessors == ("A",)

    def test_invalid_predecessors_are_kept(self) -> None:
        """A bare string is no list of ids, the validator has to see it."""
        task = Task(id="C", name="C", duration=1, predecessors="A")
        assert task.predecessors == "A"

    def test_equality_by_id(self) -> None:
        assert Task(id="A", name="one", duration=1) == Task(id="A", name="two", duration=2)
        assert len({Task(id="A", name="one", duration=1), Task(id="A", name="two", duration=2)}) == 1


class TestScheduledTask:
    def test_derived_values(self) -> None:
        task = ScheduledTask(id="B", name="B", duration=7, predecessors=["A"], earliest_start=5, latest_finish=17)
        assert task.earliest_finish == 12
        assert task.latest_start == 10
        assert task.slack == 5
        assert task.slack == task.latest_finish - task.earliest_finish
        assert not task.is_critical
        assert (task.start, task.end) == (5, 12)

    def test_from_task(self) -> None:
        task = Task(id="B", name="Design", duration=3, predecessors=["A"])
        scheduled = ScheduledTask.from_task(task, earliest_start=5, latest_finish=8)
        assert scheduled.id == "B"
        assert scheduled.name == "Design"
        assert scheduled.predecessors == ("A",)
        assert scheduled.is_critical

    def test_to_dict(self) -> None:
        scheduled = ScheduledTask(id="M", name="Milestone", duration=0, earliest_start=5, latest_finish=5)
        assert scheduled.to_dict() == {
            "id": "M",
            "name": "Milestone",
            "duration": 0,
            "predecessors": [],
            "earliest_start": 5,
            "earliest_finish": 5,
            "latest_start": 5,
            "latest_finish": 5,
            "slack": 0,
            "is_critical": True,
            "start": 5,
            "end": 5,
        }

    def test_equality_includes_timing(self) -> None:
        task = ScheduledTask(id="B", name="B", duration=7, earliest_start=5, latest_finish=17)
        assert task == ScheduledTask(id="B", name="Other", duration=7, earliest_start=5, latest_finish=17)
        assert task != ScheduledTask(id="B", name="B", duration=7, earliest_start=6, latest_finish=17)
        assert task != ScheduledTask(id="B", name="B", duration=7, earliest_start=5, latest_finish=18)
        assert task != ScheduledTask(id="B", name="B", duration=6, earliest_start=5, latest_finish=17)


class TestGenerateTaskId:
    def test_first_free_letter(self) -> None:
        assert generate_task_id([]) == "A"
        assert generate_task_id(["A", "B", "D"]) == "C"

    def test_two_letters_after_the_alphabet(self) -> None:
        assert generate_task_id([chr(c) for c in range(ord("A"), ord("Z") + 1)]) == "AA"

    def test_numbered_after_all_letters(self) -> None:
        taken = list(islice(candidate_ids(), 26 + 26 * 26))
        assert generate_task_id(taken) == "T1"
        assert generate_task_id(taken + ["T1"]) == "T2"
