"""Tests for the shared CLI helpers in coreopts.cli."""

import json
import logging

import pytest
import typer

from coreopts.cli import configure_logging, error_exit, get_config, json_print

# ---------------------------------------------------------------------------
# error_exit()
# ---------------------------------------------------------------------------


class TestErrorExit:
    def test_plain_stderr_and_exit(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            error_exit("something broke")
        assert exc_info.value.exit_code == 1
        captured = capsys.readouterr()
        assert "something broke" in captured.err
        assert captured.out == ""

    def test_custom_exit_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            error_exit("fatal", code=2)
        assert exc_info.value.exit_code == 2

    def test_json_mode_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(typer.Exit):
            error_exit("bad input", json_mode=True)
        captured = capsys.readouterr()
        assert json.loads(captured.out) == {"error": "bad input"}
        assert captured.err == ""


# ---------------------------------------------------------------------------
# json_print()
# ---------------------------------------------------------------------------


class TestJsonPrint:
    def test_dict_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        json_print({"key": "gfx_api", "value": "gl"})
        assert json.loads(capsys.readouterr().out) == {"key": "gfx_api", "value": "gl"}

    def test_list_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        json_print([{"index": 0}, {"index": 1}])
        data = json.loads(capsys.readouterr().out)
        assert [d["index"] for d in data] == [0, 1]


# ---------------------------------------------------------------------------
# get_config()
# ---------------------------------------------------------------------------


class TestGetConfig:
    def test_missing_project_exits(self, tmp_path, monkeypatch, capsys) -> None:
        monkeypatch.chdir(tmp_path)
        with pytest.raises(typer.Exit) as exc_info:
            get_config()
        assert exc_info.value.exit_code == 1

    def test_unknown_core_exits_json(self, tmp_path, monkeypatch, capsys) -> None:
        (tmp_path / "coreopts.toml").write_text("[cores.a.variables]\n")
        monkeypatch.chdir(tmp_path)
        with pytest.raises(typer.Exit):
            get_config("b", json_mode=True)
        assert "not found" in json.loads(capsys.readouterr().out)["error"]


# ---------------------------------------------------------------------------
# configure_logging()
# ---------------------------------------------------------------------------


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_default_level(self, monkeypatch) -> None:
        monkeypatch.delenv("COREOPTS_LOG_LEVEL", raising=False)
        configure_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_verbose(self, monkeypatch) -> None:
        monkeypatch.delenv("COREOPTS_LOG_LEVEL", raising=False)
        configure_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("COREOPTS_LOG_LEVEL", "info")
        configure_logging(verbose=True)
        assert logging.getLogger().level == logging.INFO

    def test_bad_env_value(self, monkeypatch) -> None:
        monkeypatch.setenv("COREOPTS_LOG_LEVEL", "loud")
        configure_logging()
        assert logging.getLogger().level == logging.WARNING
