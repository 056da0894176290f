from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandError(RuntimeError):
    def __init__(self, result: CmdResult) -> None:
        super().__init__(
            f"Command failed ({result.returncode}): {fmt_argv(result.argv)}\n{result.stderr}".rstrip()
        )
        self.result = result


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    capture: bool = True,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command (to the log file).
    - Captures stdout/stderr unless capture=False, in which case the
      command talks to the terminal directly (progress bars, prompts).
    - dry_run logs but does not execute.
    """

    argv_list = list(argv)
    logger.debug("CMD %s", fmt_argv(argv_list))

    if dry_run:
        logger.info("Would run %s", fmt_argv(argv_list))
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    try:
        p = subprocess.run(
            argv_list,
            input=input_text,
            text=True,
            stdout=subprocess.PIPE if capture else None,
            stderr=subprocess.PIPE if capture else None,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
        )
    except FileNotFoundError:
        # Missing executable behaves like the shell: exit status 127.
        result = CmdResult(argv=argv_list, returncode=127, stdout="", stderr=f"{argv_list[0]}: command not found")
        if check:
            raise CommandError(result)
        logger.debug("STDERR %s", result.stderr)
        return result

    stdout = p.stdout or ""
    stderr = p.stderr or ""
    if stdout:
        logger.debug("STDOUT %s", stdout.strip())
    if stderr:
        logger.debug("STDERR %s", stderr.strip())

    result = CmdResult(argv=argv_list, returncode=p.returncode, stdout=stdout, stderr=stderr)
    if check and p.returncode != 0:
        raise CommandError(result)
    return result
