"""Tests for log configuration and console formatting."""

import logging

from dotstrap.logging_utils import SUCCESS, ConsoleFormatter, configure_logging, success


def record(level, msg):
    return logging.LogRecord("dotstrap.test", level, __file__, 1, msg, (), None)


def test_console_formatter_prefixes_without_color():
    fmt = ConsoleFormatter(use_color=False)
    assert fmt.format(record(logging.INFO, "Linking a to b")) == "Processing: Linking a to b"
    assert fmt.format(record(SUCCESS, "done")) == "✓ Success: done"
    assert fmt.format(record(logging.WARNING, "missing")) == "⚠ Warning: missing"


def test_console_formatter_colors_prefix():
    out = ConsoleFormatter(use_color=True).format(record(logging.WARNING, "missing"))
    assert out.startswith("\033[33m⚠ Warning:\033[0m")


def test_configure_logging_writes_file_once(tmp_path):
    log = tmp_path / "Logs" / "dotfiles_setup.log"

    actual = configure_logging(log_path=str(log), also_console=False)
    again = configure_logging(log_path=str(tmp_path / "other.log"), also_console=False)
    success(logging.getLogger("dotstrap.test"), "Repository downloaded")

    assert actual == again == str(log)
    assert "[SUCCESS] Repository downloaded" in log.read_text()
    assert not (tmp_path / "other.log").exists()


def test_configure_logging_falls_back_to_cwd(tmp_path, monkeypatch):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    monkeypatch.chdir(tmp_path)

    actual = configure_logging(log_path=str(blocker / "setup.log"), also_console=False)

    assert actual == str(tmp_path / "dotfiles_setup.log")
