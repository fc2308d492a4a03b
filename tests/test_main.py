"""Tests for the command line interface."""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import database
import main
from config import settings
from database import DatabaseManager


@pytest.fixture(autouse=True)
def isolated(monkeypatch):
    monkeypatch.setattr(settings, "log_file", "")
    manager = DatabaseManager("sqlite:///:memory:")
    monkeypatch.setattr(database, "db_manager", manager)
    yield
    manager.close()


def run(argv):
    with pytest.raises(SystemExit) as exc_info:
        main.main(argv)
    return exc_info.value.code


class TestCommands:
    """Test CLI subcommands."""

    def test_next(self, capsys):
        code = run(["next", "*/5 * * * *", "--from", "2024-06-15T12:02:00", "--count", "2"])
        assert code == 0
        assert capsys.readouterr().out.split() == ["2024-06-15T12:05:00", "2024-06-15T12:10:00"]

    def test_next_never_due(self, capsys):
        assert run(["next", "0 0 31 2 *", "--from", "2024-01-01T00:00:00"]) == 1

    def test_match(self, capsys):
        assert run(["match", "30 9 * * *", "--at", "2024-06-15T09:30:00"]) == 0
        assert capsys.readouterr().out.strip() == "yes"
        assert run(["match", "30 9 * * *", "--at", "2024-06-15T09:31:00"]) == 1
        assert capsys.readouterr().out.strip() == "no"

    def test_describe(self, capsys):
        assert run(["describe", "*/15 * * * *"]) == 0
        assert capsys.readouterr().out.strip() == "Runs every 15 minutes"

    def test_invalid_expression(self, capsys):
        assert run(["describe", "99 * * * *"]) == 2
        assert "Invalid minute value" in capsys.readouterr().err

    def test_add_and_list(self, capsys):
        assert run(["add", "0 9 * * mon", "--action", '{"command": "report"}']) == 0
        assert run(["add", "0 0 * * *", "--action", "cleanup"]) == 0
        capsys.readouterr()

        assert run(["list"]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("1\t0 9 * * 0\t")
        assert lines[0].endswith('{"command": "report"}')
        assert lines[1].endswith('"cleanup"')
