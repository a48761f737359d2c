"""Tests for configuration loading."""

import pytest

from veisku.config import DEFAULT_CONFIG, command_for, default_config, load_config


def test_no_config_path():
    assert load_config(None) == default_config()


def test_missing_file(tmp_path):
    assert load_config(tmp_path / "config.yaml") == default_config()


def test_defaults_are_not_shared():
    cfg = default_config()
    cfg["filters"]["mine"] = "tags:x"
    cfg["extensions"].append(".txt")
    assert DEFAULT_CONFIG["filters"] == {}
    assert ".txt" not in default_config()["extensions"]


def test_overrides_merge(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "root: docs\n"
        "editor: nvim -p\n"
        "filters:\n  default: '!status:archived'\n"
        "theme:\n  tags:\n    blocked: bold red\n"
    )
    cfg = load_config(path)
    assert cfg["root"] == "docs"
    assert cfg["editor"] == "nvim -p"
    assert cfg["filters"] == {"default": "!status:archived"}
    assert cfg["theme"]["tags"] == {"blocked": "bold red"}
    assert cfg["theme"]["tag_default"] == "green on grey23"


def test_empty_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path) == default_config()


def test_invalid_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("root: [unclosed\n")
    assert load_config(path) == default_config()


def test_non_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n")
    assert load_config(path) == default_config()


def test_wrong_types_are_ignored(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("root: 3\nextensions: md\npager: less\nunknown: 1\n")
    cfg = load_config(path)
    assert cfg["root"] == ""
    assert cfg["extensions"] == DEFAULT_CONFIG["extensions"]
    assert cfg["pager"] == "less"
    assert "unknown" not in cfg


def test_extensions_are_normalized(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("extensions: [md, .txt]\n")
    assert load_config(path)["extensions"] == [".md", ".txt"]


class TestCommandFor:
    def test_configured_command(self):
        cfg = default_config()
        cfg["editor"] = "code --wait"
        assert command_for(cfg, "editor") == ["code", "--wait"]

    def test_editor_from_environment(self, monkeypatch):
        monkeypatch.setenv("EDITOR", "nano")
        assert command_for(default_config(), "editor") == ["nano"]

    def test_editor_fallback(self, monkeypatch):
        monkeypatch.delenv("EDITOR", raising=False)
        assert command_for(default_config(), "editor") == ["vi"]

    def test_pager_fallback(self, monkeypatch):
        monkeypatch.delenv("PAGER", raising=False)
        assert command_for(default_config(), "pager") == ["less", "-R"]

    def test_run_uses_shell(self, monkeypatch):
        monkeypatch.setenv("SHELL", "/bin/zsh")
        assert command_for(default_config(), "run") == ["/bin/zsh"]

    @pytest.mark.parametrize("platform,expected", [("darwin", ["open"]), ("linux", ["xdg-open"])])
    def test_opener_per_platform(self, monkeypatch, platform, expected):
        monkeypatch.setattr("veisku.config.sys.platform", platform)
        assert command_for(default_config(), "opener") == expected

    def test_unknown_command(self):
        with pytest.raises(ValueError):
            command_for(default_config(), "browser")
