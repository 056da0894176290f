from __future__ import annotations

import logging
from pathlib import Path

from .command import run_cmd

logger = logging.getLogger(__name__)


def tarball_url(user: str, repo: str, ref: str = "main") -> str:
    return f"https://github.com/{user}/{repo}/tarball/{ref}"


def download_tarball(url: str, dest: str | Path, *, dry_run: bool = False) -> Path:
    out = Path(dest)
    if not dry_run:
        out.parent.mkdir(parents=True, exist_ok=True)
    # curl draws its own progress bar, so leave the terminal attached.
    run_cmd(["curl", "-#fLo", str(out), url], capture=False, dry_run=dry_run)
    return out


def extract_tarball(
    archive: str | Path,
    dest: str | Path,
    *,
    strip_components: int = 1,
    dry_run: bool = False,
) -> None:
    d = Path(dest)
    if not dry_run:
        d.mkdir(parents=True, exist_ok=True)
    run_cmd(
        ["tar", "-zxf", str(archive), "--strip-components", str(strip_components), "-C", str(d)],
        dry_run=dry_run,
    )
