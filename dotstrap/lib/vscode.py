from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .command import run_cmd

logger = logging.getLogger(__name__)


def read_extension_list(path: str | Path) -> list[str]:
    text = Path(path).read_text(encoding="utf-8")
    return [line.strip() for line in text.splitlines() if line.strip()]


def install_extensions(ids: Iterable[str], *, dry_run: bool = False) -> tuple[list[str], list[str]]:
    installed: list[str] = []
    failed: list[str] = []
    for ext in ids:
        r = run_cmd(["code", "--install-extension", ext], check=False, dry_run=dry_run)
        if r.ok:
            installed.append(ext)
        else:
            logger.warning("Failed to install extension %s (exit %s)", ext, r.returncode)
            failed.append(ext)
    return installed, failed
