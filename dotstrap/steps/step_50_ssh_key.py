from __future__ import annotations

import logging

from ..lib.ssh import add_to_agent, copy_to_clipboard, generate_key, start_agent, write_agent_config
from ..pipeline import RunCtx, StepOutcome

logger = logging.getLogger(__name__)


class SSHKeyStep:
    step_id = "50_ssh_key"

    def run(self, ctx: RunCtx) -> StepOutcome:
        cfg = ctx.cfg
        key_path = cfg.ssh_key_path
        pub_path = key_path.with_name(key_path.name + ".pub")

        logger.info("Setting up ssh")
        generated = False
        if key_path.exists():
            logger.info("SSH key already exists at %s.", key_path)
            if ctx.confirm("Do you want to overwrite it? [y/N]: "):
                generate_key(key_path, cfg.user_email, dry_run=ctx.dry_run)
                generated = True
            else:
                logger.info("Using existing SSH key.")
        else:
            generate_key(key_path, cfg.user_email, dry_run=ctx.dry_run)
            generated = True

        agent_env = start_agent(dry_run=ctx.dry_run)
        write_agent_config(cfg.ssh_config_path, key_path, dry_run=ctx.dry_run)
        add_to_agent(key_path, agent_env, dry_run=ctx.dry_run)

        if ctx.dry_run:
            return StepOutcome.ok(self.step_id, "SSH setup planned.", generated=generated)

        copy_to_clipboard(pub_path.read_text(encoding="utf-8"))
        return StepOutcome.ok(
            self.step_id,
            "SSH public key copied to clipboard.",
            generated=generated,
            key_path=str(key_path),
        )
