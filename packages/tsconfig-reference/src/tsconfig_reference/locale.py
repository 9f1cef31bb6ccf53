from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import BuildError
from .exit_codes import ERR_CONTENT, ERR_METADATA

_FENCE = "---"
_BOOL_TAG = "tag:yaml.org,2002:bool"


class _FrontMatterLoader(yaml.SafeLoader):
    """Safe loader that only reads `true`/`false` as booleans, so `no`, `on` and `off` stay strings."""


_FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_FrontMatterLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


@dataclass(frozen=True)
class ContentFile:
    front_matter: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    path: Path | None = None


def parse_markdown(text: str, source: str = "<string>") -> ContentFile:
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != _FENCE:
        return ContentFile(body=text)
    for index in range(1, len(lines)):
        if lines[index].rstrip() == _FENCE:
            raw = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            break
    else:
        return ContentFile(body=text)
    try:
        data = yaml.load(raw, Loader=_FrontMatterLoader) if raw.strip() else {}
    except yaml.YAMLError as exc:
        raise BuildError(
            f"invalid front-matter in {source}: {exc}", ERR_METADATA, kind="missing_front_matter", path=source
        ) from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise BuildError(
            f"front-matter in {source} must be a mapping", ERR_METADATA, kind="missing_front_matter", path=source
        )
    return ContentFile(front_matter=data, body=body)


def read_markdown_file(path: Path) -> ContentFile:
    parsed = parse_markdown(path.read_text(encoding="utf-8"), source=str(path))
    return ContentFile(front_matter=parsed.front_matter, body=parsed.body, path=path)


class LocaleResolver:
    """Two-tier lookup of content paths: the language first, then the fallback language."""

    def __init__(self, language: str, locale_root: Path, fallback_language: str, fallback_root: Path) -> None:
        self.language = language
        self.locale_root = locale_root
        self.fallback_language = fallback_language
        self.fallback_root = fallback_root

    @classmethod
    def for_language(cls, copy_dir: Path, language: str, fallback_language: str) -> "LocaleResolver":
        return cls(language, copy_dir / language, fallback_language, copy_dir / fallback_language)

    def _searched(self) -> str:
        if self.language == self.fallback_language:
            return self.language
        return f"either {self.language} or {self.fallback_language}"

    def _find(self, relative_path: str) -> Path | None:
        for root in (self.locale_root, self.fallback_root):
            candidate = root / relative_path
            if candidate.is_file():
                return candidate
        return None

    def _missing(self, relative_path: str, hint: str = "") -> BuildError:
        message = f"Could not find a path for {relative_path} in {self._searched()}"
        if hint:
            message = f"{message}\n{hint}"
        return BuildError(
            message,
            ERR_CONTENT,
            kind="missing_content",
            language=self.language,
            path=str(self.locale_root / relative_path),
        )

    def resolve(self, relative_path: str, optional: bool = False, hint: str = "") -> Path | None:
        path = self._find(relative_path)
        if path is None and not optional:
            raise self._missing(relative_path, hint)
        return path

    def load(self, relative_path: str) -> ContentFile:
        path = self._find(relative_path)
        if path is None:
            raise self._missing(relative_path)
        return read_markdown_file(path)
