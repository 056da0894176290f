from __future__ import annotations

import logging
from typing import Dict

from .command import run_cmd

logger = logging.getLogger(__name__)


def get_global(key: str) -> str:
    # `git config <key>` exits 1 when the key is unset.
    r = run_cmd(["git", "config", "--global", key], check=False)
    return r.stdout.strip() if r.ok else ""


def set_global(key: str, value: str, *, dry_run: bool = False) -> None:
    run_cmd(["git", "config", "--global", key, value], dry_run=dry_run)


def ensure_identity(name: str, email: str, *, dry_run: bool = False) -> Dict[str, str]:
    """Set user.name/user.email only where git has no value yet.

    Returns a mapping of key -> "set" | "kept" | "missing", where "missing"
    means git has no value and none was configured to apply.
    """

    decisions: Dict[str, str] = {}
    for key, wanted in (("user.name", name), ("user.email", email)):
        current = get_global(key)
        if current:
            logger.info("Git %s is already set to '%s'. No changes made.", key, current)
            decisions[key] = "kept"
        elif wanted:
            set_global(key, wanted, dry_run=dry_run)
            logger.info("Git %s set to '%s'", key, wanted)
            decisions[key] = "set"
        else:
            logger.warning("Git %s not set and no value is configured. Please set it manually.", key)
            decisions[key] = "missing"
    return decisions
