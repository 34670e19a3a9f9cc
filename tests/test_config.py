"""Tests for Config loading."""

import os

from bed.config import Config


def _write_yaml(directory, text: str, name: str = ".bed.yaml") -> str:
    path = os.path.join(str(directory), name)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path


class TestDefaults:
    def test_defaults_without_file_or_env(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        cfg = Config.load()

        assert cfg.EDITOR == ""
        assert cfg.PROGRESS is True
        assert cfg.CONFIRM is False
        assert cfg.LOG_FILE == ""
        assert cfg.ENCODING == "utf-8"


class TestYaml:
    def test_values_from_cwd_file(self, tmp_path, monkeypatch):
        _write_yaml(tmp_path, "editor: nano\nprogress: false\nconfirm: true\n")
        monkeypatch.chdir(tmp_path)

        cfg = Config.load()

        assert cfg.EDITOR == "nano"
        assert cfg.PROGRESS is False
        assert cfg.CONFIRM is True

    def test_explicit_path(self, tmp_path):
        path = _write_yaml(tmp_path, "editor: 'code --wait'\n", name="custom.yml")
        assert Config.load(path).EDITOR == "code --wait"

    def test_missing_explicit_path_uses_defaults(self, tmp_path):
        cfg = Config.load(str(tmp_path / "nope.yaml"))
        assert cfg.EDITOR == ""

    def test_invalid_yaml_is_ignored(self, tmp_path):
        path = _write_yaml(tmp_path, "editor: [unclosed\n")
        assert Config.load(path).EDITOR == ""

    def test_non_mapping_yaml_is_ignored(self, tmp_path):
        path = _write_yaml(tmp_path, "- just\n- a list\n")
        assert Config.load(path).PROGRESS is True


class TestEnv:
    def test_bed_editor_wins_over_editor(self, monkeypatch):
        monkeypatch.setenv("EDITOR", "vi")
        monkeypatch.setenv("BED_EDITOR", "emacs")
        assert Config({"editor": "nano"}).EDITOR == "emacs"

    def test_editor_env_over_yaml(self, monkeypatch):
        monkeypatch.setenv("EDITOR", "vi")
        assert Config({"editor": "nano"}).EDITOR == "vi"

    def test_empty_bed_editor_falls_through(self, monkeypatch):
        monkeypatch.setenv("BED_EDITOR", "")
        monkeypatch.setenv("EDITOR", "vi")
        assert Config().EDITOR == "vi"

    def test_bool_env_override(self, monkeypatch):
        monkeypatch.setenv("BED_PROGRESS", "false")
        monkeypatch.setenv("BED_CONFIRM", "TRUE")
        cfg = Config({"progress": True, "confirm": False})

        assert cfg.PROGRESS is False
        assert cfg.CONFIRM is True


class TestStringSettings:
    def test_yaml_values(self):
        cfg = Config({"log_file": "bed.log", "encoding": "latin-1"})

        assert cfg.LOG_FILE == "bed.log"
        assert cfg.ENCODING == "latin-1"

    def test_env_over_yaml(self, monkeypatch):
        monkeypatch.setenv("BED_ENCODING", "utf-16")
        monkeypatch.setenv("BED_LOG_FILE", "/tmp/x.log")
        cfg = Config({"log_file": "bed.log", "encoding": "latin-1"})

        assert cfg.ENCODING == "utf-16"
        assert cfg.LOG_FILE == "/tmp/x.log"

    def test_non_string_yaml_value_becomes_string(self):
        assert Config({"log_file": 42}).LOG_FILE == "42"
