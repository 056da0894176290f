from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional

from .config import load_bootstrap_config
from .logging_utils import DEFAULT_LOG_PATH, configure_logging, success
from .pipeline import RunCtx, RunReport, never_confirm, run_pipeline
from .report_store import save_report
from .steps import (
    DownloadDotfilesStep,
    GitIdentityStep,
    InstallHomebrewStep,
    LinkDotfilesStep,
    SSHKeyStep,
    VSCodeExtensionsStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        DownloadDotfilesStep(),
        InstallHomebrewStep(),
        LinkDotfilesStep(),
        GitIdentityStep(),
        SSHKeyStep(),
        VSCodeExtensionsStep(),
    ]


def ask_yes_no(question: str) -> bool:
    try:
        answer = input(question)
    except EOFError:
        return False
    return answer.strip() in {"y", "Y"}


def run(
    *,
    config_path: Optional[str] = None,
    log_path: str = DEFAULT_LOG_PATH,
    report_path: Optional[str] = None,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    dry_run: bool = False,
    confirm: Optional[Callable[[str], bool]] = None,
    verbose: bool = False,
) -> RunReport:
    """Run the bootstrap pipeline and return its report."""

    configure_logging(log_path=log_path, level=logging.DEBUG if verbose else logging.INFO)
    logger.debug("Starting installation process")

    cfg = load_bootstrap_config(config_path)
    ctx = RunCtx(cfg=cfg, dry_run=dry_run, confirm=confirm or never_confirm)

    report = run_pipeline(ctx=ctx, steps=build_steps(), start_at=start_at, stop_after=stop_after)

    if report_path:
        save_report(report_path, report)

    if report.failures:
        logger.error(
            "Installation finished with failed steps: %s",
            ", ".join(o.step_id for o in report.failures),
        )
    elif report.warnings:
        success(logger, "Installation process completed with %d warning(s).", len(report.warnings))
    else:
        success(logger, "Installation process completed successfully.")
    return report


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="dotstrap", description="Bootstrap a macOS machine from a dotfiles repository")
    p.add_argument("--config", default=None, help="Path to bootstrap config (yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the setup log")
    p.add_argument("--report", default=None, help="Write the run report here (json|yaml)")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 30_link_dotfiles)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument("--dry-run", action="store_true", help="Log commands and changes without doing them")
    p.add_argument("--no-input", action="store_true", help="Never prompt; keep an existing SSH key")
    p.add_argument("--verbose", action="store_true", help="Show command output on the console")

    args = p.parse_args(argv)

    confirm = None if args.no_input or not sys.stdin.isatty() else ask_yes_no

    try:
        report = run(
            config_path=args.config,
            log_path=args.log,
            report_path=args.report,
            start_at=args.start_at,
            stop_after=args.stop_after,
            dry_run=bool(args.dry_run),
            confirm=confirm,
            verbose=bool(args.verbose),
        )
    except (FileNotFoundError, ValueError) as e:
        p.error(str(e))
    return 0 if report.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
