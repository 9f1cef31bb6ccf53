"""Option catalog loading.

The catalog is two JSON files under the project's ``data/`` directory:

- ``tsconfigOpts.json``: ``{"options": [...]}``, one descriptor per option.
- ``tsconfigCategories.json``: ``{"<code>": {"code": ..., "key": ...}}``.

Both are validated against their schema, and the category codes must match
the codes suffixed to ``ORDERED_CATEGORIES`` exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .core.schema import validate
from .errors import BuildError
from .exit_codes import ERR_CATALOG
from .io.fs import read_json

OPTIONS_FILE = "tsconfigOpts.json"
CATEGORIES_FILE = "tsconfigCategories.json"

ORDERED_CATEGORIES: tuple[str, ...] = (
    "Project_Files_0",
    "Basic_Options_6172",
    "Strict_Type_Checking_Options_6173",
    "Module_Resolution_Options_6174",
    "Source_Map_Options_6175",
    "Additional_Checks_6176",
    "Experimental_Options_6177",
    "Advanced_Options_6178",
    "Command_line_Options_6171",
    "Watch_Options_999",
)

# Categories whose options live outside `compilerOptions`.
NON_COMPILER_CATEGORIES: tuple[str, ...] = ("Project_Files_0", "Watch_Options_999")


@dataclass(frozen=True)
class OptionDescriptor:
    name: str
    category_code: str | None = None
    default_value: str | None = None
    allowed_values: tuple[str, ...] | None = None
    related: tuple[str, ...] | None = None
    deprecated: bool = False
    recommended: bool = False
    internal: bool = False
    release_version: str | None = None
    description: str | None = None

    @classmethod
    def from_json(cls, row: dict[str, Any]) -> "OptionDescriptor":
        code = row.get("categoryCode")
        allowed = row.get("allowedValues")
        related = row.get("related")
        description = row.get("description") or {}
        return cls(
            name=str(row["name"]),
            category_code=None if code is None else str(code),
            default_value=row.get("defaultValue"),
            allowed_values=None if allowed is None else tuple(allowed),
            related=None if related is None else tuple(related),
            deprecated=bool(row.get("deprecated", False)),
            recommended=bool(row.get("recommended", False)),
            internal=bool(row.get("internal", False)),
            release_version=row.get("releaseVersion"),
            description=description.get("message"),
        )


@dataclass(frozen=True)
class Category:
    key: str
    code: str


@dataclass(frozen=True)
class Catalog:
    options: tuple[OptionDescriptor, ...]
    categories: tuple[Category, ...]

    def option(self, name: str) -> OptionDescriptor:
        for option in self.options:
            if option.name == name:
                return option
        raise BuildError(f"unknown option referenced by section list: {name}", ERR_CATALOG, kind="catalog_mismatch")

    def category(self, key: str) -> Category | None:
        for category in self.categories:
            if category.key == key:
                return category
        return None


def category_code_of(key: str) -> str:
    return key.rsplit("_", 1)[-1]


def validate_category_set(codes: list[str], ordered: tuple[str, ...] = ORDERED_CATEGORIES) -> None:
    expected = sorted(category_code_of(key) for key in ordered)
    found = sorted(codes)
    if found != expected:
        missing = sorted(set(expected) - set(found))
        unexpected = sorted(set(found) - set(expected))
        raise BuildError(
            f"category set mismatch: missing={missing} unexpected={unexpected}",
            ERR_CATALOG,
            kind="catalog_mismatch",
        )


def parse_catalog(options_payload: Any, categories_payload: Any, ordered: tuple[str, ...] = ORDERED_CATEGORIES) -> Catalog:
    validate("options", options_payload, OPTIONS_FILE)
    validate("categories", categories_payload, CATEGORIES_FILE)
    validate_category_set([str(code) for code in categories_payload], ordered)

    options = tuple(OptionDescriptor.from_json(row) for row in options_payload["options"])
    seen: set[str] = set()
    duplicates: list[str] = []
    for option in options:
        if option.name in seen:
            duplicates.append(option.name)
        seen.add(option.name)
    if duplicates:
        raise BuildError(f"duplicate option names in catalog: {sorted(set(duplicates))}", ERR_CATALOG, kind="catalog_mismatch")

    categories = tuple(
        Category(key=str(row["key"]), code=str(row["code"])) for row in categories_payload.values()
    )
    return Catalog(options=options, categories=categories)


def load_catalog(data_dir: Path, ordered: tuple[str, ...] = ORDERED_CATEGORIES) -> Catalog:
    options_path = data_dir / OPTIONS_FILE
    categories_path = data_dir / CATEGORIES_FILE
    for path in (options_path, categories_path):
        if not path.is_file():
            raise BuildError(f"catalog file not found: {path}", ERR_CATALOG, kind="catalog_mismatch", path=str(path))
    return parse_catalog(read_json(options_path), read_json(categories_path), ordered)
