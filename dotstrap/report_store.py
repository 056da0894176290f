from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .pipeline import RunReport

logger = logging.getLogger(__name__)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def save_report(path: str, report: RunReport) -> None:
    p = Path(path).expanduser()
    p.parent.mkdir(parents=True, exist_ok=True)

    data = report.to_dict()
    if _detect_format(p) in {"yaml", "yml"}:
        import yaml

        p.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8")
    else:
        p.write_text(json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.debug("Run report written to %s", p)


def load_report(path: str) -> Dict[str, Any]:
    p = Path(path).expanduser()
    if not p.exists():
        return {}

    if _detect_format(p) in {"yaml", "yml"}:
        import yaml

        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    else:
        data = json.loads(p.read_text(encoding="utf-8"))

    if not isinstance(data, dict):
        raise ValueError(f"Report file must be an object/dict, got {type(data)}")
    return data
