from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BuildError(Exception):
    """A failed reference build.

    `language` and `path` name the locale and content file involved, when there is one.
    """

    message: str
    code: int
    kind: str = "generic_error"
    language: str | None = None
    path: str | None = None

    def __str__(self) -> str:
        return self.message

    def to_json(self) -> dict[str, object]:
        payload: dict[str, object] = {"message": self.message, "code": self.code, "kind": self.kind}
        if self.language is not None:
            payload["language"] = self.language
        if self.path is not None:
            payload["path"] = self.path
        return payload
