from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from .config import BootstrapConfig
from .logging_utils import success

logger = logging.getLogger(__name__)

OK = "ok"
WARNING = "warning"
FAILED = "failed"
SKIPPED = "skipped"


def never_confirm(question: str) -> bool:
    return False


@dataclass(frozen=True)
class RunCtx:
    cfg: BootstrapConfig
    dry_run: bool = False
    # Yes/no question asked on the terminal; the default never overwrites.
    confirm: Callable[[str], bool] = never_confirm


@dataclass(frozen=True)
class StepOutcome:
    step_id: str
    status: str
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, step_id: str, message: str = "", **details: Any) -> "StepOutcome":
        return cls(step_id=step_id, status=OK, message=message, details=details)

    @classmethod
    def warning(cls, step_id: str, message: str, **details: Any) -> "StepOutcome":
        return cls(step_id=step_id, status=WARNING, message=message, details=details)

    @classmethod
    def failed(cls, step_id: str, message: str, **details: Any) -> "StepOutcome":
        return cls(step_id=step_id, status=FAILED, message=message, details=details)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.step_id,
            "status": self.status,
            "message": self.message,
            "details": self.details,
        }


class Step(Protocol):
    """A single best-effort bootstrap step."""

    step_id: str

    def run(self, ctx: RunCtx) -> StepOutcome:
        ...


@dataclass
class RunReport:
    outcomes: List[StepOutcome] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def warnings(self) -> List[StepOutcome]:
        return [o for o in self.outcomes if o.status == WARNING]

    @property
    def failures(self) -> List[StepOutcome]:
        return [o for o in self.outcomes if o.status == FAILED]

    @property
    def ran_steps(self) -> List[str]:
        return [o.step_id for o in self.outcomes if o.status != SKIPPED]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "steps": [o.to_dict() for o in self.outcomes],
        }


def _select(steps: Sequence[Step], start_at: Optional[str], stop_after: Optional[str]) -> List[Step]:
    ids = [s.step_id for s in steps]
    for wanted in (start_at, stop_after):
        if wanted is not None and wanted not in ids:
            raise ValueError(f"Unknown step id {wanted!r} (known: {', '.join(ids)})")

    begin = ids.index(start_at) if start_at is not None else 0
    end = ids.index(stop_after) + 1 if stop_after is not None else len(ids)
    return list(steps[begin:end])


def run_pipeline(
    *,
    ctx: RunCtx,
    steps: Sequence[Step],
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
) -> RunReport:
    """Run steps in order; a failing step is recorded and the run goes on."""

    selected = _select(steps, start_at, stop_after)
    report = RunReport()

    for step in selected:
        logger.debug("Running step %s", step.step_id)
        try:
            outcome = step.run(ctx)
        except Exception as e:
            logger.exception("Step %s failed", step.step_id)
            outcome = StepOutcome.failed(step.step_id, str(e) or type(e).__name__)

        if outcome.status == OK:
            success(logger, "%s", outcome.message or step.step_id)
        elif outcome.status == WARNING:
            logger.warning("%s", outcome.message)
        elif outcome.status == SKIPPED:
            logger.info("Skipped %s: %s", step.step_id, outcome.message)
        report.outcomes.append(outcome)

    return report
