"""Tests for the run_bridge CLI entry point."""

import json
import os
from unittest.mock import patch

import pytest

import run_bridge
from rtm_bridge.tasks import FormattedTask, TaskRef

ENV = {
    "RTM_API_KEY": "key123",
    "RTM_SHARED_SECRET": "secret456",
    "RTM_AUTH_TOKEN": "token789",
}


@pytest.fixture
def settings_path(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({}))
    return path


def _run(argv, env=ENV):
    with patch.dict(os.environ, env, clear=True), patch("sys.argv", ["run_bridge.py", *argv]), \
            patch.object(run_bridge, "load_dotenv"), patch.object(run_bridge, "configure_logging"):
        return run_bridge.main()


class TestPromptSelector:
    def test_answers_map_to_flags(self):
        tasks = [
            FormattedTask(name="A", rtm_id=TaskRef("1", "1", "1"), list_name="Inbox"),
            FormattedTask(name="B", rtm_id=TaskRef("1", "2", "2"), due=" 📅 2024-05-01"),
            FormattedTask(name="C", rtm_id=TaskRef("1", "3", "3")),
        ]
        with patch("builtins.input", side_effect=["", "n", "yes"]):
            assert run_bridge.PromptSelector().select(tasks) == [True, False, True]


class TestMain:
    def test_complete_untracked_line(self, tmp_path, settings_path, capsys):
        note = tmp_path / "note.md"
        note.write_text("- [ ] Buy milk\n", encoding="utf-8")

        code = _run(["--settings", str(settings_path), "complete", str(note), "1"])

        assert code == 1
        assert "Error: No RTM Link found." in capsys.readouterr().out
        assert note.read_text(encoding="utf-8") == "- [ ] Buy milk\n"

    def test_add_requires_authentication(self, tmp_path, settings_path, capsys):
        note = tmp_path / "note.md"
        note.write_text("- Buy milk\n", encoding="utf-8")

        code = _run(
            ["--settings", str(settings_path), "add", str(note), "1"],
            env={"RTM_API_KEY": "key123", "RTM_SHARED_SECRET": "secret456"},
        )

        assert code == 1
        assert "Please authenticate with RTM from settings." in capsys.readouterr().out

    def test_line_out_of_range(self, tmp_path, settings_path, capsys):
        note = tmp_path / "note.md"
        note.write_text("- Buy milk\n", encoding="utf-8")

        code = _run(["--settings", str(settings_path), "complete", str(note), "5"])

        assert code == 1
        assert "out of range" in capsys.readouterr().err

    def test_unreadable_settings(self, tmp_path, capsys):
        broken = tmp_path / "broken.json"
        broken.write_text("{", encoding="utf-8")

        code = _run(["--settings", str(broken), "import", str(tmp_path / "note.md")])

        assert code == 1
        assert "Cannot read settings" in capsys.readouterr().err
