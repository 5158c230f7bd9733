import json
from pathlib import Path

import pytest

from cpm.cli import EXIT_INVALID, EXIT_UNREADABLE, LOG_LEVEL_VARIABLE, main, parse_args

SOFTWARE = str(Path(__file__).parent.parent / "testsets" / "software.yaml")


class TestCli:
    def test_report(self, capsys) -> None:
        assert main([SOFTWARE]) == 0
        out = capsys.readouterr().out
        assert "Project duration: 41" in out
        assert "Critical path: A -> B -> D -> E -> F -> G" in out
        assert "Parallel at 12: C, D" in out

    def test_gantt_view(self, capsys) -> None:
        assert main([SOFTWARE, "--view", "gantt"]) == 0
        out = capsys.readouterr().out
        assert "Start" in out
        assert "Slack" not in out

    def test_json(self, capsys) -> None:
        assert main([SOFTWARE, "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["project_duration"] == 41
        assert data["critical_path"] == ["A", "B", "D", "E", "F", "G"]

    def test_chain(self, capsys) -> None:
        assert main([SOFTWARE, "--chain"]) == 0
        assert "Critical chain: A -> B -> D -> E -> F -> G" in capsys.readouterr().out

    def test_invalid_project(self, tmp_path, capsys) -> None:
        file = tmp_path / "cycle.yaml"
        file.write_text(
            "- {Id: A, Name: Alpha, Duration: 1, Predecessors: [B]}\n"
            "- {Id: B, Name: Beta, Duration: 1, Predecessors: [A]}\n"
        )
        assert main([str(file)]) == EXIT_INVALID
        assert "Cycle detected in task dependencies: A -> B -> A" in capsys.readouterr().err

    def test_unreadable_project(self, tmp_path, capsys) -> None:
        assert main([str(tmp_path / "missing.yaml")]) == EXIT_UNREADABLE
        assert "missing.yaml" in capsys.readouterr().err

    def test_chain_in_json(self, capsys) -> None:
        assert main([SOFTWARE, "--json", "--chain"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["critical_chain"] == ["A", "B", "D", "E", "F", "G"]

    def test_json_without_chain(self, capsys) -> None:
        assert main([SOFTWARE, "--json"]) == 0
        assert "critical_chain" not in json.loads(capsys.readouterr().out)

    def test_timings(self, capsys) -> None:
        assert main([SOFTWARE, "--timings"]) == 0
        err = capsys.readouterr().err
        assert "load_time " in err
        assert "schedule_time " in err

    def test_no_timings_by_default(self, capsys) -> None:
        assert main([SOFTWARE]) == 0
        assert "load_time" not in capsys.readouterr().err


class TestLogLevel:
    def test_lowercase_level(self) -> None:
        assert parse_args([SOFTWARE, "--log-level", "debug"]).log_level == "DEBUG"

    def test_unknown_level_is_rejected(self, capsys) -> None:
        with pytest.raises(SystemExit) as e:
            parse_args([SOFTWARE, "--log-level", "chatty"])
        assert e.value.code == 2
        assert "--log-level" in capsys.readouterr().err

    def test_level_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv(LOG_LEVEL_VARIABLE, "info")
        assert parse_args([SOFTWARE]).log_level == "INFO"
