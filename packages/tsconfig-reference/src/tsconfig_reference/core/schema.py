from __future__ import annotations

from typing import Any

import jsonschema

from ..errors import BuildError
from ..exit_codes import ERR_CATALOG

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

SCHEMAS: dict[str, dict[str, Any]] = {
    "options": {
        "type": "object",
        "required": ["options"],
        "properties": {
            "options": {
                "type": "array",
                "items": {
                    "type": "object",
                    "required": ["name"],
                    "properties": {
                        "name": {"type": "string", "minLength": 1},
                        "categoryCode": {"type": ["integer", "string"]},
                        "defaultValue": {"type": "string"},
                        "allowedValues": _STRING_LIST,
                        "related": _STRING_LIST,
                        "deprecated": {"type": "boolean"},
                        "recommended": {"type": "boolean"},
                        "internal": {"type": "boolean"},
                        "releaseVersion": {"type": "string"},
                        "description": {
                            "type": "object",
                            "properties": {"message": {"type": "string"}},
                        },
                    },
                },
            }
        },
    },
    "categories": {
        "type": "object",
        "additionalProperties": {
            "type": "object",
            "required": ["code", "key"],
            "properties": {
                "code": {"type": ["integer", "string"]},
                "key": {"type": "string", "minLength": 1},
            },
        },
    },
}


def validate(schema_name: str, payload: Any, source: str) -> None:
    schema = SCHEMAS[schema_name]
    try:
        jsonschema.validate(payload, schema)
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise BuildError(
            f"schema validation failed for {source} at {loc}: {exc.message}",
            ERR_CATALOG,
            kind="schema_validation",
            path=source,
        ) from exc
