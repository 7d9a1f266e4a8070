"""CLI tests.

Runs the varion entry point in-process against scripts in a temporary
directory.
"""

import json

import pytest

from varion import ErrorKind
from varion.cli import main


@pytest.fixture
def in_tmp(tmp_path, monkeypatch):
    """Run from an empty temporary directory so no config file is found."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestCLIHelp:
    """Test --help and bare invocation."""

    def test_main_help(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0
        assert "varion" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_version(self, capsys):
        assert main(["version"]) == 0
        assert capsys.readouterr().out.startswith("varion ")

    def test_check_help_lists_error_kinds(self, capsys):
        with pytest.raises(SystemExit):
            main(["check", "--help"])
        out = capsys.readouterr().out
        for kind in ErrorKind:
            assert kind.value in out


class TestCheckCommand:
    """Test check command end to end."""

    def test_check_valid_script(self, in_tmp, two_node_script, capsys):
        (in_tmp / "intro.va").write_text(two_node_script, encoding="utf-8")

        assert main(["check"]) == 0
        assert "1/1 scripts valid" in capsys.readouterr().out

    def test_check_reports_every_error(self, in_tmp, capsys):
        (in_tmp / "broken.va").write_text(
            ":: a\n@next b\n* Go => c\n:: a\n", encoding="utf-8"
        )

        assert main(["check", "broken.va"]) == 1
        out = capsys.readouterr().out
        assert "[ConflictingNextAndChoices]" in out
        assert "[DanglingReference]" in out
        assert "[DuplicateNodeId]" in out

    def test_check_json(self, script_dir, capsys):
        assert main(["check", "-j", str(script_dir)]) == 1

        report = json.loads(capsys.readouterr().out)
        assert report["valid"] is False
        by_name = {s["source"].rsplit("/", 1)[-1]: s for s in report["scripts"]}
        assert by_name["good.va"]["valid"] is True
        assert by_name["good.va"]["nodes"] == 2
        assert by_name["bad.vion"]["errors"][0]["kind"] == "DanglingReference"

    def test_check_no_scripts(self, in_tmp, capsys):
        assert main(["check"]) == 1
        assert "No scripts found" in capsys.readouterr().err

    def test_check_uses_config_paths(self, in_tmp, two_node_script, capsys):
        story = in_tmp / "story"
        story.mkdir()
        (story / "a.va").write_text(two_node_script, encoding="utf-8")
        (in_tmp / "ignored.va").write_text("not a node", encoding="utf-8")
        (in_tmp / ".varion.toml").write_text('[scripts]\npaths = ["story"]\n', encoding="utf-8")

        assert main(["check"]) == 0

    def test_check_bad_config(self, in_tmp, capsys):
        (in_tmp / ".varion.toml").write_text("[scripts\n", encoding="utf-8")
        (in_tmp / "a.va").write_text(":: a\n", encoding="utf-8")

        assert main(["check"]) == 1
        assert "Error loading config" in capsys.readouterr().err

    def test_quiet_suppresses_summary(self, in_tmp, two_node_script, capsys):
        (in_tmp / "a.va").write_text(two_node_script, encoding="utf-8")

        assert main(["-q", "check"]) == 0
        assert capsys.readouterr().out == ""


class TestShowCommand:
    """Test show command output."""

    def test_show_json(self, in_tmp, branching_script, capsys):
        (in_tmp / "hub.va").write_text(branching_script, encoding="utf-8")

        assert main(["show", "hub.va", "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["entry"] == "hub"
        assert [c["target"] for c in data["nodes"][0]["choices"]] == ["north", "south", "hub"]

    def test_show_uses_config_format(self, in_tmp, branching_script, capsys):
        (in_tmp / "hub.va").write_text(branching_script, encoding="utf-8")
        (in_tmp / ".varion.toml").write_text('[output]\nformat = "json"\n', encoding="utf-8")

        assert main(["show", "hub.va"]) == 0
        assert json.loads(capsys.readouterr().out)["entry"] == "hub"

    def test_show_format_flag_overrides_config(self, in_tmp, branching_script, capsys):
        (in_tmp / "hub.va").write_text(branching_script, encoding="utf-8")
        (in_tmp / ".varion.toml").write_text('[output]\nformat = "json"\n', encoding="utf-8")

        assert main(["show", "hub.va", "--format", "text"]) == 0
        assert capsys.readouterr().out.startswith("entry: hub")

    def test_show_single_node(self, in_tmp, branching_script, capsys):
        (in_tmp / "hub.va").write_text(branching_script, encoding="utf-8")

        assert main(["show", "hub.va", "--node", "north"]) == 0
        assert capsys.readouterr().out.startswith(":: north")

    def test_show_unknown_node(self, in_tmp, branching_script, capsys):
        (in_tmp / "hub.va").write_text(branching_script, encoding="utf-8")

        assert main(["show", "hub.va", "--node", "west"]) == 1
        assert "no node 'west'" in capsys.readouterr().err

    def test_show_invalid_script(self, in_tmp, capsys):
        (in_tmp / "bad.va").write_text(":: a\n@next b\n", encoding="utf-8")

        assert main(["show", "bad.va"]) == 1
        assert "[DanglingReference]" in capsys.readouterr().err

    def test_show_missing_file(self, in_tmp, capsys):
        assert main(["show", "nope.va"]) == 1


class TestConfigCommand:
    """Test config command."""

    def test_config_path_without_file(self, in_tmp, capsys):
        assert main(["config", "path"]) == 1

    def test_config_path(self, in_tmp, capsys):
        (in_tmp / ".varion.toml").write_text("", encoding="utf-8")
        assert main(["config", "path"]) == 0
        assert ".varion.toml" in capsys.readouterr().out

    def test_config_show(self, in_tmp, capsys):
        assert main(["config", "show"]) == 0
        out = capsys.readouterr().out
        assert "[scripts]" in out
        assert 'format = "text"' in out
