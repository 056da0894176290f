from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Dict

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)

HOMEBREW_PREFIX_BIN = "/opt/homebrew/bin"
INSTALL_SCRIPT_URL = "https://raw.githubusercontent.com/Homebrew/install/master/install.sh"


def brew_env() -> Dict[str, str]:
    """PATH with the Apple Silicon prefix first, so a fresh install is usable."""
    path = os.environ.get("PATH", "")
    parts = path.split(os.pathsep) if path else []
    if HOMEBREW_PREFIX_BIN not in parts:
        parts.insert(0, HOMEBREW_PREFIX_BIN)
    return {"PATH": os.pathsep.join(parts)}


def brew_available() -> bool:
    return shutil.which("brew", path=brew_env()["PATH"]) is not None


def install_homebrew(*, dry_run: bool = False) -> None:
    script = run_cmd(["curl", "-fsSL", INSTALL_SCRIPT_URL], dry_run=dry_run).stdout
    # The installer asks for sudo and confirmation on the terminal.
    run_cmd(["/bin/bash", "-c", script], env=brew_env(), capture=False, dry_run=dry_run)


def brew_doctor(*, dry_run: bool = False) -> CmdResult:
    return run_cmd(["brew", "doctor"], check=False, env=brew_env(), dry_run=dry_run)


def brew_bundle(brewfile: str | Path, *, dry_run: bool = False) -> CmdResult:
    return run_cmd(
        ["brew", "bundle", "--file", str(brewfile)],
        check=False,
        env=brew_env(),
        capture=False,
        dry_run=dry_run,
    )
