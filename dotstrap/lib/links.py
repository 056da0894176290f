"""Dotfile link table: parse ``source->target`` lines and realize them as symlinks.

The mapping file lives in the dotfiles repository (``opt/files``). Each
non-blank line names a path relative to the dotfiles root and a path
relative to the home directory, separated by the first ``->``::

    configs/.zshrc->.zshrc
    configs/.vimrc->.vim/.vimrc

Installing a table is best effort: one bad entry is reported and the rest
are still linked.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

DELIMITER = "->"


class MalformedMappingLine(ValueError):
    def __init__(self, lineno: int, line: str, reason: str) -> None:
        super().__init__(f"line {lineno}: {reason}: {line!r}")
        self.lineno = lineno
        self.line = line
        self.reason = reason


class MissingMappingFile(FileNotFoundError):
    pass


class LinkCreationFailure(OSError):
    pass


@dataclass(frozen=True)
class LinkSpec:
    source: str
    target: str


@dataclass(frozen=True)
class LinkTable:
    entries: tuple[LinkSpec, ...] = ()
    rejected: tuple[MalformedMappingLine, ...] = ()

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def parse_link_line(line: str, lineno: int = 0) -> LinkSpec:
    source, sep, target = line.partition(DELIMITER)
    if not sep:
        raise MalformedMappingLine(lineno, line, "missing '->' delimiter")
    source = source.strip()
    target = target.strip()
    if not source:
        raise MalformedMappingLine(lineno, line, "empty source")
    if not target:
        raise MalformedMappingLine(lineno, line, "empty target")
    return LinkSpec(source=source, target=target)


def _parse_lines(lines: Iterable[str | bytes]) -> LinkTable:
    entries: list[LinkSpec] = []
    rejected: list[MalformedMappingLine] = []
    for lineno, line in enumerate(lines, start=1):
        if isinstance(line, bytes):
            try:
                line = line.decode("utf-8")
            except UnicodeDecodeError:
                rejected.append(
                    MalformedMappingLine(lineno, line.decode("utf-8", errors="replace"), "not valid UTF-8")
                )
                continue
        if not line.strip():
            continue
        try:
            entries.append(parse_link_line(line, lineno))
        except MalformedMappingLine as e:
            rejected.append(e)
    return LinkTable(entries=tuple(entries), rejected=tuple(rejected))


def parse_link_table(text: str) -> LinkTable:
    # splitlines() keeps a final line that has no trailing newline.
    return _parse_lines(text.splitlines())


def read_link_table(path: str | Path) -> LinkTable:
    """Read a UTF-8 mapping file; lines that do not decode are rejected, not fatal."""
    p = Path(path)
    if not p.is_file():
        raise MissingMappingFile(f"{p} not found")
    return _parse_lines(p.read_bytes().splitlines())


@dataclass(frozen=True)
class LinkResult:
    spec: LinkSpec
    source_path: Path
    target_path: Path
    status: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != "failed"


def resolve_link(spec: LinkSpec, dotfiles_root: str | Path, home_root: str | Path) -> tuple[Path, Path]:
    # Both sides are relative to their root, even if written with a leading slash.
    source = Path(dotfiles_root) / spec.source.lstrip("/")
    target = Path(home_root) / spec.target.lstrip("/")
    return source, target


def _replace_with_symlink(source: Path, target: Path) -> None:
    tmp = target.with_name(f".{target.name}.dotstrap-{os.getpid()}")
    if tmp.is_symlink() or tmp.exists():
        tmp.unlink()
    os.symlink(str(source), str(tmp))
    try:
        # rename(2) swaps the link in place, so target is never left missing.
        os.replace(str(tmp), str(target))
    except OSError:
        tmp.unlink()
        raise


def install_link(
    spec: LinkSpec,
    *,
    dotfiles_root: str | Path,
    home_root: str | Path,
    dry_run: bool = False,
) -> LinkResult:
    source, target = resolve_link(spec, dotfiles_root, home_root)

    if target.is_symlink() and os.readlink(str(target)) == str(source):
        logger.debug("Already linked %s -> %s", target, source)
        return LinkResult(spec=spec, source_path=source, target_path=target, status="unchanged")

    if dry_run:
        logger.info("Would link %s to %s", source, target)
        return LinkResult(spec=spec, source_path=source, target_path=target, status="planned")

    logger.info("Linking %s to %s", source, target)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        _replace_with_symlink(source, target)
    except (OSError, ValueError) as e:
        # ValueError: paths the OS cannot represent, e.g. an embedded NUL.
        reason = getattr(e, "strerror", None) or e
        raise LinkCreationFailure(f"cannot link {target} -> {source}: {reason}") from e

    return LinkResult(spec=spec, source_path=source, target_path=target, status="linked")


def install_links(
    table: Iterable[LinkSpec],
    *,
    dotfiles_root: str | Path,
    home_root: str | Path,
    dry_run: bool = False,
) -> list[LinkResult]:
    """Link every entry in order; later entries win when targets collide."""

    results: list[LinkResult] = []
    for spec in table:
        try:
            results.append(install_link(spec, dotfiles_root=dotfiles_root, home_root=home_root, dry_run=dry_run))
        except LinkCreationFailure as e:
            logger.warning("%s", e)
            source, target = resolve_link(spec, dotfiles_root, home_root)
            results.append(
                LinkResult(spec=spec, source_path=source, target_path=target, status="failed", error=str(e))
            )
    return results
