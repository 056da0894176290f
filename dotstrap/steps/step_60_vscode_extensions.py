from __future__ import annotations

import logging

from ..lib.vscode import install_extensions, read_extension_list
from ..pipeline import RunCtx, StepOutcome

logger = logging.getLogger(__name__)


class VSCodeExtensionsStep:
    step_id = "60_vscode_extensions"

    def run(self, ctx: RunCtx) -> StepOutcome:
        ext_file = ctx.cfg.extensions_file

        logger.info("Searching for extensions list for vscode")
        if not ext_file.is_file():
            return StepOutcome.warning(self.step_id, f"{ext_file} not found", extensions_file=str(ext_file))

        logger.info("Installing vscode extensions from %s", ext_file)
        installed, failed = install_extensions(read_extension_list(ext_file), dry_run=ctx.dry_run)

        if failed:
            return StepOutcome.warning(
                self.step_id,
                f"{len(failed)} vscode extension(s) failed to install",
                installed=installed,
                failed=failed,
            )
        return StepOutcome.ok(self.step_id, "Vscode extensions installed successfully.", installed=installed)
