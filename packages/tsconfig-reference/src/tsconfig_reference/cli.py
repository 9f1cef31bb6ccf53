from __future__ import annotations

import argparse
import json
import sys

from . import __version__
from .build import run_build
from .context import BuildContext
from .errors import BuildError
from .exit_codes import ERR_INTERNAL, OK
from .logging import log_event


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tsconfig-reference",
        description="generate the localized TSConfig reference pages and JSON summaries",
    )
    p.add_argument("--version", action="version", version=f"tsconfig-reference {__version__}")
    p.add_argument("--root", help="project root holding data/ and copy/ (default: cwd)")
    p.add_argument("--out-dir", help="output directory (default: <root>/output)")
    p.add_argument("--fallback", help="fallback language code (default: en)")
    p.add_argument("--run-id", help="run identifier used in log events")
    p.add_argument("--log-format", choices=["text", "json"], default=None, help="log event format")
    p.add_argument("--check", action="store_true", help="fail if generated outputs are out of date; write nothing")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="log per-file debug events")
    vg.add_argument("--quiet", action="store_true", help="only emit warnings and errors")
    return p


def _emit_error(ctx: BuildContext | None, error: BuildError) -> None:
    if ctx is not None and ctx.log_json:
        print(
            json.dumps(
                {
                    "schema_version": 1,
                    "tool": "tsconfig-reference",
                    "status": "fail",
                    "error": error.to_json(),
                },
                sort_keys=True,
            ),
            file=sys.stderr,
        )
    else:
        print(error.message, file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    ns = build_parser().parse_args(argv)
    ctx: BuildContext | None = None
    try:
        ctx = BuildContext.from_args(
            root=ns.root,
            out_dir=ns.out_dir,
            fallback_language=ns.fallback,
            run_id=ns.run_id,
            log_format=ns.log_format,
            verbose=ns.verbose,
            quiet=ns.quiet,
            check=ns.check,
        )
        log_event(ctx, "info", "cli", "start", root=str(ctx.root), out_dir=str(ctx.out_dir), check=ctx.check)
        languages = run_build(ctx)
        verb = "Checked" if ctx.check else "Wrote"
        print(f"{verb} TSConfig files for: {', '.join(languages)}")
        return OK
    except BuildError as exc:
        _emit_error(ctx, exc)
        return exc.code
    except Exception as exc:  # pragma: no cover
        _emit_error(ctx, BuildError(f"internal error: {exc}", ERR_INTERNAL, kind="internal"))
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
