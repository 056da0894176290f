from __future__ import annotations

import logging

from ..lib.archive import download_tarball, extract_tarball
from ..lib.command import CommandError
from ..pipeline import RunCtx, StepOutcome

logger = logging.getLogger(__name__)


class DownloadDotfilesStep:
    step_id = "10_download_dotfiles"

    def run(self, ctx: RunCtx) -> StepOutcome:
        cfg = ctx.cfg
        dest = cfg.dotfiles_dir
        archive = cfg.download_dir / f"{cfg.github_repo}.tar.gz"

        logger.info("Creating directory at %s", dest)
        if not ctx.dry_run:
            dest.mkdir(parents=True, exist_ok=True)

        try:
            logger.info("Downloading repository to %s", cfg.download_dir)
            download_tarball(cfg.tarball_url, archive, dry_run=ctx.dry_run)

            logger.info("Extracting files to %s", dest)
            extract_tarball(archive, dest, strip_components=1, dry_run=ctx.dry_run)
        except CommandError as e:
            return StepOutcome.warning(
                self.step_id,
                "Failed to download or extract repository.",
                error=str(e),
            )
        finally:
            if not ctx.dry_run and archive.exists():
                logger.info("Removing tarball from %s", cfg.download_dir)
                archive.unlink()

        return StepOutcome.ok(
            self.step_id,
            f"Repository downloaded and extracted to {dest}",
            url=cfg.tarball_url,
            dotfiles_dir=str(dest),
        )
