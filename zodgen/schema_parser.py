"""Inspect OpenAPI schema nodes.

Handles:
- Classifying a node into one shape kind ($ref beats composition beats type)
- $ref name extraction (JSON pointer last segment)
- Component reference discovery for operation imports
- JSON body extraction from requestBody/response content
- Best-effort type labels for JSDoc @property lines
"""

from __future__ import annotations

from typing import Any, Literal

COMPONENT_REF_PREFIX = "#/components/schemas/"

# Media types read for request and response bodies, first match wins
JSON_CONTENT_TYPES = ("application/json", "text/json")

SchemaKind = Literal[
    "absent",
    "reference",
    "all_of",
    "one_of",
    "any_of",
    "string",
    "number",
    "integer",
    "boolean",
    "null",
    "array",
    "object",
    "unknown",
]

_COMPOSITIONS: tuple[tuple[str, SchemaKind], ...] = (
    ("allOf", "all_of"),
    ("oneOf", "one_of"),
    ("anyOf", "any_of"),
)

_TYPES: frozenset[str] = frozenset({
    "string", "number", "integer", "boolean", "null", "array", "object",
})


def schema_kind(schema: Any) -> SchemaKind:
    """Classify a schema node into the shape the converter dispatches on."""
    if not isinstance(schema, dict):
        return "absent"
    if "$ref" in schema:
        return "reference" if isinstance(schema["$ref"], str) else "unknown"
    for key, kind in _COMPOSITIONS:
        if key in schema:
            return kind if isinstance(schema[key], list) else "unknown"
    schema_type = schema.get("type")
    if isinstance(schema_type, str) and schema_type in _TYPES:
        return schema_type  # type: ignore[return-value]
    return "unknown"


def ref_name(ref: str) -> str:
    """Return the schema name a $ref points at."""
    name = ref.rsplit("/", 1)[-1]
    return name.replace("~1", "/").replace("~0", "~")


def is_component_ref(schema: Any) -> bool:
    """Check if a schema is a reference into components/schemas."""
    if not isinstance(schema, dict):
        return False
    ref = schema.get("$ref")
    return isinstance(ref, str) and ref.startswith(COMPONENT_REF_PREFIX)


def find_component_references(schema: Any, references: dict[str, None]) -> None:
    """Collect component names referenced by a schema into an ordered set.

    Does not descend into a referenced component, only through
    composition, properties and array items.
    """
    if not isinstance(schema, dict):
        return

    if is_component_ref(schema):
        references.setdefault(ref_name(schema["$ref"]), None)
        return

    for key, _ in _COMPOSITIONS:
        subs = schema.get(key)
        if isinstance(subs, list):
            for sub in subs:
                find_component_references(sub, references)

    properties = schema.get("properties")
    if isinstance(properties, dict):
        for prop in properties.values():
            find_component_references(prop, references)

    find_component_references(schema.get("items"), references)


def json_body_schema(body: Any) -> dict[str, Any] | None:
    """Extract the JSON schema of a requestBody or response object."""
    if not isinstance(body, dict):
        return None
    content = body.get("content")
    if not isinstance(content, dict):
        return None
    for ct in JSON_CONTENT_TYPES:
        media = content.get(ct)
        if isinstance(media, dict) and media.get("schema") is not None:
            return media["schema"]
    return None


def property_type_label(schema: Any) -> str:
    """Label a property schema for documentation."""
    kind = schema_kind(schema)
    if kind == "reference":
        return ref_name(schema["$ref"])
    if kind in ("string", "boolean", "object"):
        return kind
    if kind in ("number", "integer"):
        return "number"
    if kind == "array":
        items = schema.get("items")
        item_type = property_type_label(items) if items else "any"
        return f"{item_type}[]"
    return "any"
