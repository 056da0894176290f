from __future__ import annotations

from ..lib.git import ensure_identity
from ..pipeline import RunCtx, StepOutcome


class GitIdentityStep:
    step_id = "40_git_identity"

    def run(self, ctx: RunCtx) -> StepOutcome:
        decisions = ensure_identity(ctx.cfg.user_name, ctx.cfg.user_email, dry_run=ctx.dry_run)

        missing = [k for k, v in decisions.items() if v == "missing"]
        if missing:
            return StepOutcome.warning(
                self.step_id,
                f"Git {', '.join(missing)} left unset; please set manually",
                decisions=decisions,
            )
        if "set" in decisions.values():
            return StepOutcome.ok(self.step_id, "Git configuration updated successfully.", decisions=decisions)
        return StepOutcome.ok(self.step_id, "No changes have been made to git config", decisions=decisions)
