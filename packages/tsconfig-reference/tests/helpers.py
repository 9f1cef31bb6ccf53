from __future__ import annotations

import json
from pathlib import Path

from tsconfig_reference.catalog import ORDERED_CATEGORIES, category_code_of
from tsconfig_reference.context import BuildContext
from tsconfig_reference.rules import MembershipRules

STRICT_TARGET_OPTIONS: list[dict[str, object]] = [
    {"name": "strict", "categoryCode": 6173, "recommended": True, "defaultValue": "false"},
    {"name": "target", "categoryCode": 6172, "defaultValue": "ES3", "allowedValues": ["ES3", "ES5"]},
]

TEST_RULES = MembershipRules(root=("target",), watch=(), type_acquisition=(), build=())

SECTION_NAMES = ("Top Level", "compilerOptions", "watchOptions", "typeAcquisition")


def categories_payload(ordered: tuple[str, ...] = ORDERED_CATEGORIES) -> dict[str, dict[str, object]]:
    return {category_code_of(key): {"code": int(category_code_of(key)), "key": key} for key in ordered}


def md(display: str | None, oneline: str | None = None, body: str = "") -> str:
    lines = ["---"]
    if display is not None:
        lines.append(f'display: "{display}"')
    if oneline is not None:
        lines.append(f'oneline: "{oneline}"')
    lines.append("---")
    return "\n".join(lines) + "\n" + body


def write_files(base: Path, files: dict[str, str]) -> None:
    base.mkdir(parents=True, exist_ok=True)
    for rel, text in files.items():
        path = base / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")


def default_copy(options: list[dict[str, object]]) -> dict[str, str]:
    files = {f"sections/{name}.md": md(None, body=f"Intro to {name}.\n") for name in SECTION_NAMES}
    for key in ORDERED_CATEGORIES:
        files[f"categories/{key}.md"] = md(key.rsplit("_", 1)[0].replace("_", " "), body=f"About {key}.\n")
    for option in options:
        name = str(option["name"])
        files[f"options/{name}.md"] = md(name.title(), f"Sets {name}", f"The `{name}` option.\n")
    return files


def write_project(
    root: Path,
    options: list[dict[str, object]],
    rules: MembershipRules = TEST_RULES,
    languages: dict[str, dict[str, str]] | None = None,
) -> Path:
    data = root / "data"
    data.mkdir(parents=True, exist_ok=True)
    (data / "tsconfigOpts.json").write_text(json.dumps({"options": options}), encoding="utf-8")
    (data / "tsconfigCategories.json").write_text(json.dumps(categories_payload()), encoding="utf-8")
    copy = {"en": default_copy(options)} if languages is None else languages
    for language, files in copy.items():
        write_files(root / "copy" / language, files)
    return root


def make_ctx(root: Path, check: bool = False) -> BuildContext:
    return BuildContext.from_args(root=str(root), run_id="pytest-run", quiet=True, check=check)
