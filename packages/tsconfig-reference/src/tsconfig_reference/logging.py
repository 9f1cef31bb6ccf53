"""Structured event logging for build runs."""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import BuildContext


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def log_event(ctx: BuildContext, level: str, component: str, action: str, **fields: object) -> None:
    if level == "debug" and not ctx.verbose:
        return
    if level in {"debug", "info"} and ctx.quiet:
        return
    payload = {
        "ts": utc_now_iso(),
        "level": level,
        "run_id": ctx.run_id,
        "component": component,
        "action": action,
        **fields,
    }
    if ctx.log_json:
        sys.stderr.write(json.dumps(payload, sort_keys=True) + "\n")
        return
    core = f"ts={payload['ts']} level={level} run_id={ctx.run_id} component={component} action={action}"
    extras = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
    sys.stderr.write((core if not extras else f"{core} {extras}") + "\n")
