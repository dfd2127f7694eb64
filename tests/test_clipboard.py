import subprocess

import pytest

from snippetboard import clipboard


@pytest.fixture
def xclip_available(monkeypatch):
    monkeypatch.setattr(clipboard, "_candidate_commands", lambda: [["xclip", "-selection", "clipboard"]])
    monkeypatch.setattr(clipboard.shutil, "which", lambda name: f"/usr/bin/{name}")


def test_no_clipboard_tool_reports_failure(monkeypatch):
    monkeypatch.setattr(clipboard.shutil, "which", lambda _name: None)

    assert clipboard.find_copy_command() is None
    assert clipboard.copy_text("x") is False


def test_copy_pipes_text_to_tool(monkeypatch, xclip_available):
    runs = []

    def fake_run(cmd, **kwargs):
        runs.append((cmd, kwargs["input"]))
        return subprocess.CompletedProcess(cmd, 0, b"", b"")

    monkeypatch.setattr(clipboard.subprocess, "run", fake_run)

    assert clipboard.copy_text("print('a')\n") is True
    assert runs == [(["xclip", "-selection", "clipboard"], b"print('a')\n")]


def test_tool_failure_reports_failure(monkeypatch, xclip_available):
    monkeypatch.setattr(
        clipboard.subprocess,
        "run",
        lambda cmd, **_kwargs: subprocess.CompletedProcess(cmd, 1, b"", b"Can't open display"),
    )

    assert clipboard.copy_text("x") is False


def test_tool_timeout_reports_failure(monkeypatch, xclip_available):
    def fake_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(clipboard.subprocess, "run", fake_run)

    assert clipboard.copy_text("x") is False
