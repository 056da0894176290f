from __future__ import annotations

import logging

from ..lib.brew import brew_available, brew_bundle, brew_doctor, install_homebrew
from ..pipeline import RunCtx, StepOutcome

logger = logging.getLogger(__name__)


class InstallHomebrewStep:
    step_id = "20_install_homebrew"

    def run(self, ctx: RunCtx) -> StepOutcome:
        brewfile = ctx.cfg.brewfile
        problems: list[str] = []

        if brew_available():
            logger.info("Homebrew already installed")
        else:
            logger.info("Installing Homebrew")
            install_homebrew(dry_run=ctx.dry_run)

        logger.info("Running brew doctor")
        if not brew_doctor(dry_run=ctx.dry_run).ok:
            # doctor is advisory; bundle may still succeed.
            logger.warning("brew doctor reported problems")
            problems.append("brew doctor reported problems")

        if not brewfile.is_file() and not ctx.dry_run:
            problems.append(f"{brewfile} not found")
            return StepOutcome.warning(self.step_id, "; ".join(problems), brewfile=str(brewfile))

        logger.info("Running brew bundle")
        if not brew_bundle(brewfile, dry_run=ctx.dry_run).ok:
            problems.append("Brew bundle encountered issues.")

        if problems:
            return StepOutcome.warning(self.step_id, "; ".join(problems), brewfile=str(brewfile))
        return StepOutcome.ok(self.step_id, "Brew bundle completed successfully", brewfile=str(brewfile))
