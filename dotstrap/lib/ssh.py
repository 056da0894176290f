from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Dict

from .command import run_cmd

logger = logging.getLogger(__name__)

_AGENT_VAR = re.compile(r"^(SSH_AUTH_SOCK|SSH_AGENT_PID)=([^;]+);", re.MULTILINE)


def _pub(path: Path) -> Path:
    return path.with_name(path.name + ".pub")


def generate_key(path: str | Path, comment: str, *, dry_run: bool = False) -> None:
    """Create an ed25519 key pair at path, replacing any existing pair.

    The pair is generated under a temporary name and only renamed over the
    old one once ssh-keygen succeeds.
    """
    p = Path(path)
    argv = ["ssh-keygen", "-t", "ed25519", "-C", comment, "-N", ""]
    if dry_run:
        run_cmd([*argv, "-f", str(p)], dry_run=True)
        return

    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_name(f".{p.name}.dotstrap-{os.getpid()}")
    for leftover in (tmp, _pub(tmp)):
        if leftover.exists():
            leftover.unlink()

    try:
        run_cmd([*argv, "-f", str(tmp)])
        os.replace(str(tmp), str(p))
        os.replace(str(_pub(tmp)), str(_pub(p)))
    finally:
        for leftover in (tmp, _pub(tmp)):
            if leftover.exists():
                leftover.unlink()


def parse_agent_env(output: str) -> Dict[str, str]:
    """Pick SSH_AUTH_SOCK/SSH_AGENT_PID out of `ssh-agent -s` output."""
    return {m.group(1): m.group(2) for m in _AGENT_VAR.finditer(output)}


def start_agent(*, dry_run: bool = False) -> Dict[str, str]:
    r = run_cmd(["ssh-agent", "-s"], dry_run=dry_run)
    env = parse_agent_env(r.stdout)
    if env.get("SSH_AGENT_PID"):
        logger.info("Agent pid %s", env["SSH_AGENT_PID"])
    return env


def render_agent_config(key_path: str | Path) -> str:
    return (
        "Host *\n"
        "  AddKeysToAgent yes\n"
        "  UseKeychain yes\n"
        f"  IdentityFile {key_path}\n"
    )


def write_agent_config(path: str | Path, key_path: str | Path, *, dry_run: bool = False) -> None:
    p = Path(path)
    if dry_run:
        logger.info("Would write %s", p)
        return
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(render_agent_config(key_path), encoding="utf-8")


def add_to_agent(key_path: str | Path, env: Dict[str, str], *, dry_run: bool = False) -> None:
    run_cmd(["ssh-add", "--apple-use-keychain", str(key_path)], env=env, dry_run=dry_run)


def copy_to_clipboard(text: str, *, dry_run: bool = False) -> None:
    run_cmd(["pbcopy"], input_text=text, dry_run=dry_run)
