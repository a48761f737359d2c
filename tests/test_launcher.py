"""Tests for external process hand-off and listing output."""

import os
import sys
from pathlib import Path

import pytest

from veisku.errors import LaunchError
from veisku.launcher import build_command, child_env, find_script, spawn_foreground
from veisku.render import fit_to_width, tag_style
from rich.style import Style


class TestBuildCommand:
    def test_appends_path(self):
        assert build_command(["less", "-R"], Path("/d/a.md")) == ["less", "-R", str(Path("/d/a.md"))]

    def test_replaces_placeholders(self):
        path = str(Path("/d/a.md"))
        assert build_command(["cp", "{}", "{}.bak"], Path("/d/a.md")) == ["cp", path, "{}.bak"]
        assert build_command(["diff", "{}", "{}"], Path("/d/a.md")) == ["diff", path, path]


class TestSpawnForeground:
    def test_returns_exit_status(self, tmp_path):
        status = spawn_foreground([sys.executable, "-c", "import sys; sys.exit(3)"], cwd=tmp_path)
        assert status == 3

    def test_runs_in_directory(self, tmp_path):
        code = "import os, sys; sys.exit(0 if os.path.exists('marker') else 1)"
        (tmp_path / "marker").write_text("")
        assert spawn_foreground([sys.executable, "-c", code], cwd=tmp_path) == 0

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
    def test_killed_by_signal(self, tmp_path):
        code = "import os, signal; os.kill(os.getpid(), signal.SIGTERM)"
        assert spawn_foreground([sys.executable, "-c", code], cwd=tmp_path) == 128 + 15

    def test_missing_command(self):
        with pytest.raises(LaunchError):
            spawn_foreground(["definitely-not-a-real-command-xyz"])

    def test_empty_command(self):
        with pytest.raises(LaunchError):
            spawn_foreground([])

    def test_child_env_exports_program(self):
        env = child_env()
        assert env["V"] == sys.argv[0]
        assert env.get("PATH") == os.environ.get("PATH")


class TestFindScript:
    def test_script_in_marker_directory(self, tmp_path):
        bin_dir = tmp_path / ".veisku" / "bin"
        bin_dir.mkdir(parents=True)
        (bin_dir / "stats").write_text("#!/bin/sh\n")
        assert find_script(tmp_path, "stats") == [str(bin_dir / "stats")]

    @pytest.mark.skipif(sys.platform == "win32", reason="relies on the executable bit")
    def test_prefixed_program_on_path(self, tmp_path, monkeypatch):
        program = tmp_path / "v-hello"
        program.write_text("#!/bin/sh\n")
        program.chmod(0o755)
        monkeypatch.setenv("PATH", str(tmp_path))
        assert find_script(tmp_path / "root", "hello") == [str(program)]

    def test_not_found(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PATH", str(tmp_path))
        assert find_script(tmp_path, "nothing") is None
        assert find_script(tmp_path, "a/b") is None


class TestRender:
    def test_pads_short_ids(self):
        assert fit_to_width("d90ee0b", 10).plain == "d90ee0b   "

    def test_truncates_long_ids(self):
        assert fit_to_width("0123456789abcdef", 10).plain == "012345678…"

    def test_tag_style_from_theme(self):
        theme = {"tags": {"blocked": "bold red"}, "tag_default": "green"}
        assert tag_style(theme, "blocked") == Style.parse("bold red")
        assert tag_style(theme, "personal") == Style.parse("green")

    def test_invalid_tag_style_falls_back(self):
        theme = {"tags": {"blocked": "not-a-colour"}, "tag_default": "green"}
        assert tag_style(theme, "blocked") == Style.parse("green")
