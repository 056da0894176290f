from __future__ import annotations

import logging

from ..lib.links import MissingMappingFile, install_links, read_link_table
from ..pipeline import RunCtx, StepOutcome

logger = logging.getLogger(__name__)


class LinkDotfilesStep:
    step_id = "30_link_dotfiles"

    def run(self, ctx: RunCtx) -> StepOutcome:
        cfg = ctx.cfg
        link_file = cfg.link_file

        try:
            table = read_link_table(link_file)
        except MissingMappingFile:
            return StepOutcome.warning(self.step_id, f"{link_file} not found.", link_file=str(link_file))

        logger.info("Symlinking dotfiles from %s", link_file)
        for bad in table.rejected:
            logger.warning("Skipping malformed mapping %s", bad)

        results = install_links(
            table,
            dotfiles_root=cfg.dotfiles_dir,
            home_root=cfg.home_dir,
            dry_run=ctx.dry_run,
        )

        counts: dict[str, int] = {}
        for r in results:
            counts[r.status] = counts.get(r.status, 0) + 1
        failed = [str(r.target_path) for r in results if not r.ok]
        details = {
            "link_file": str(link_file),
            "counts": counts,
            "failed": failed,
            "malformed": [e.lineno for e in table.rejected],
        }

        if failed or table.rejected:
            return StepOutcome.warning(
                self.step_id,
                f"Linked dotfiles with {len(failed)} failure(s) and {len(table.rejected)} malformed line(s)",
                **details,
            )
        return StepOutcome.ok(self.step_id, "Dotfiles linked successfully.", **details)
