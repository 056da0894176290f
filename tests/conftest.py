"""Shared pytest fixtures."""

import logging

import pytest

from dotstrap.config import BootstrapConfig
from dotstrap.lib.command import CmdResult
from dotstrap.logging_utils import ConsoleFormatter


@pytest.fixture(autouse=True)
def reset_logging():
    """configure_logging() is once-per-process; undo it between tests."""
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        ours = isinstance(h, logging.FileHandler) or isinstance(h.formatter, ConsoleFormatter)
        if ours and h not in before:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    for attr in ("_dotstrap_configured", "_dotstrap_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)


@pytest.fixture
def home(tmp_path):
    h = tmp_path / "home"
    h.mkdir()
    return h


@pytest.fixture
def cfg(home):
    return BootstrapConfig(raw={"paths": {"home": str(home), "download": str(home.parent / "dl")}})


@pytest.fixture
def dotfiles(cfg):
    """An extracted dotfiles checkout with a link file."""
    root = cfg.dotfiles_dir
    (root / "configs").mkdir(parents=True)
    (root / "opt").mkdir()
    (root / "configs" / ".zshrc").write_text("export EDITOR=vim\n")
    (root / "configs" / ".vimrc").write_text("set number\n")
    (root / "opt" / "files").write_text("configs/.zshrc->.zshrc\nconfigs/.vimrc->.vim/.vimrc\n")
    return root


class FakeRunner:
    """Records argv lists; answers from a table keyed by argv prefix."""

    def __init__(self, responses=None):
        self.calls = []
        self.kwargs = []
        self.responses = responses or {}

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append(argv)
        self.kwargs.append(kwargs)
        for prefix, (rc, out) in self.responses.items():
            if tuple(argv[: len(prefix)]) == prefix:
                return CmdResult(argv=argv, returncode=rc, stdout=out, stderr="")
        return CmdResult(argv=argv, returncode=0, stdout="", stderr="")


@pytest.fixture
def fake_runner():
    return FakeRunner


