from __future__ import annotations

import re
from pathlib import Path

from .assembler import AssembledDocument
from .context import BuildContext
from .errors import BuildError
from .exit_codes import ERR_DRIFT
from .io.fs import render_json, write_text
from .logging import log_event

_FENCE_OPEN = re.compile(r"^(`{3,}|~{3,})")
_HARD_BREAK = "  "

LANGUAGES_FILE = "languages.json"


def _closes_fence(line: str, fence: str) -> bool:
    stripped = line.strip()
    return stripped.startswith(fence) and set(stripped) == {fence[0]}


def format_markdown(text: str) -> str:
    """Normalise whitespace outside code fences and `<pre>` blocks.

    Trailing whitespace is stripped except for markdown hard breaks (two or
    more trailing spaces, kept as exactly two) and runs of blank lines collapse
    to one. Lines inside fenced code or `<pre>` are kept verbatim.
    """
    out: list[str] = []
    fence: str | None = None
    in_pre = False
    for raw in text.splitlines():
        if fence is not None:
            out.append(raw)
            if _closes_fence(raw, fence):
                fence = None
            continue
        if in_pre:
            out.append(raw)
            if "</pre>" in raw:
                in_pre = False
            continue

        line = raw.rstrip()
        if line and raw.endswith(_HARD_BREAK):
            line += _HARD_BREAK
        if line == "" and (not out or out[-1] == ""):
            continue
        out.append(line)

        opening = _FENCE_OPEN.match(line.lstrip())
        if opening:
            fence = opening.group(1)
        elif "<pre" in line and "</pre>" not in line[line.rfind("<pre") :]:
            in_pre = True
    while out and out[-1] == "":
        out.pop()
    return "\n".join(out) + "\n"


def render_language(language: str, document: AssembledDocument) -> dict[str, str]:
    """Rendered outputs for one language, keyed by file name under the output directory."""
    return {
        f"{language}.md": format_markdown("\n".join(document.fragments)),
        f"{language}.json": render_json({"categories": [c.to_json() for c in document.categories]}),
        f"{language}-summary.json": render_json({"options": [o.to_json() for o in document.options]}),
    }


def render_languages_index(languages: list[str]) -> dict[str, str]:
    return {LANGUAGES_FILE: render_json({"languages": languages})}


def _stale(path: Path, content: str) -> bool:
    if not path.is_file():
        return True
    return path.read_text(encoding="utf-8") != content


def emit(ctx: BuildContext, outputs: dict[str, str]) -> list[str]:
    """Write `outputs` under the output directory, or in check mode report stale files.

    Returns the names of the files written (or found stale in check mode).
    """
    touched: list[str] = []
    for name, content in outputs.items():
        path = ctx.out_dir / name
        if ctx.check:
            if _stale(path, content):
                touched.append(name)
                log_event(ctx, "warning", "emitter", "drift", path=name)
            continue
        write_text(path, content)
        touched.append(name)
        log_event(ctx, "debug", "emitter", "write", path=name)
    return touched


def raise_on_drift(stale: list[str]) -> None:
    if stale:
        listing = "\n".join(f"- {name}" for name in stale)
        raise BuildError(
            f"generated reference is out of date; rebuild to refresh:\n{listing}",
            ERR_DRIFT,
            kind="drift",
        )
