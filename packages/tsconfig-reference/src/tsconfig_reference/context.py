from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

LogFormat = Literal["text", "json"]

DEFAULT_FALLBACK_LANGUAGE = "en"


@dataclass(frozen=True)
class BuildContext:
    run_id: str
    root: Path
    out_dir: Path
    fallback_language: str
    log_json: bool
    verbose: bool
    quiet: bool
    check: bool

    @property
    def data_dir(self) -> Path:
        return self.root / "data"

    @property
    def copy_dir(self) -> Path:
        return self.root / "copy"

    @classmethod
    def from_args(
        cls,
        root: str | None = None,
        out_dir: str | None = None,
        fallback_language: str | None = None,
        run_id: str | None = None,
        log_format: LogFormat | None = None,
        verbose: bool = False,
        quiet: bool = False,
        check: bool = False,
    ) -> "BuildContext":
        resolved_root = Path(root or os.environ.get("TSCONFIG_REF_ROOT", ".")).resolve()
        out_raw = out_dir or os.environ.get("TSCONFIG_REF_OUT")
        if out_raw:
            out_path = Path(out_raw)
            resolved_out = out_path.resolve() if out_path.is_absolute() else (resolved_root / out_path).resolve()
        else:
            resolved_out = resolved_root / "output"
        default_run = f"tsconfig-ref-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}"
        resolved_format = log_format or os.environ.get("TSCONFIG_REF_LOG_FORMAT", "text")
        return cls(
            run_id=run_id or os.environ.get("RUN_ID", default_run),
            root=resolved_root,
            out_dir=resolved_out,
            fallback_language=fallback_language
            or os.environ.get("TSCONFIG_REF_FALLBACK", DEFAULT_FALLBACK_LANGUAGE),
            log_json=resolved_format == "json",
            verbose=verbose,
            quiet=quiet,
            check=check,
        )
