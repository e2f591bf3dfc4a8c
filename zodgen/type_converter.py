"""Convert OpenAPI schema nodes to Zod validator expressions.

A TypeConverter turns one schema node into the TypeScript source of a Zod
expression. References are emitted as the component's exported name,
expanded in place (inline mode), or wrapped in `z.lazy` when the target is
already being expanded further up the path. Every reference made on behalf
of a named component is recorded in the dependency graph the converter
was given, so the caller can emit imports.
"""

from __future__ import annotations

import json
from typing import Any

from .naming import component_identifier, property_key
from .schema_parser import ref_name, schema_kind

UNKNOWN = "z.unknown()"

# String formats with a matching Zod check; anything else is ignored
_STRING_FORMATS: dict[str, str] = {
    "date-time": ".datetime()",
    "date": ".date()",
    "email": ".email()",
    "uuid": ".uuid()",
    "uri": ".url()",
    "url": ".url()",
}

# Characters that would end a regex literal, as escape-sequence letters
_LINE_TERMINATORS: dict[str, str] = {
    "\n": "n",
    "\r": "r",
    "\u2028": "u2028",
    "\u2029": "u2029",
}


def _regex_literal(pattern: str) -> str:
    """Render a pattern as the body of a /.../ regex literal."""
    out = []
    escaped = False
    for ch in pattern:
        if ch in _LINE_TERMINATORS:
            out.append(("" if escaped else "\\") + _LINE_TERMINATORS[ch])
            escaped = False
        elif escaped:
            out.append(ch)
            escaped = False
        elif ch == "\\":
            out.append(ch)
            escaped = True
        elif ch == "/":
            out.append("\\/")
        else:
            out.append(ch)
    if escaped:
        out.append("\\")
    return "".join(out)


def _literal(value: Any) -> str:
    """Render a JSON value as a TypeScript literal."""
    return json.dumps(value)


def _has_bound(schema: dict[str, Any], key: str) -> bool:
    value = schema.get(key)
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _bounds(schema: dict[str, Any], min_key: str, max_key: str) -> str:
    """Render `.min(n)` / `.max(n)` suffixes for the bounds present."""
    suffix = ""
    if _has_bound(schema, min_key):
        suffix += f".min({_literal(schema[min_key])})"
    if _has_bound(schema, max_key):
        suffix += f".max({_literal(schema[max_key])})"
    return suffix


def _indent(expression: str) -> str:
    return expression.replace("\n", "\n  ")


def object_expression(fields: list[tuple[str, str, bool]]) -> str:
    """Join (name, expression, required) triples into a `z.object(...)`."""
    lines = []
    for name, expression, required in fields:
        optional = "" if required else ".optional()"
        lines.append(f"  {property_key(name)}: {_indent(expression)}{optional}")
    return "z.object({\n" + ",\n".join(lines) + "\n})"


def required_names(schema: dict[str, Any]) -> set[str]:
    """Return the required property names of an object schema."""
    required = schema.get("required")
    if not isinstance(required, list):
        return set()
    return {name for name in required if isinstance(name, str)}


class TypeConverter:
    """Schema-to-Zod converter over one component table.

    ``dependencies`` maps a component name to the names it references
    directly, in the order they were first seen. Pass a shared dict to
    read it back after conversion; a fresh one is created otherwise.

    ``lazy_references`` collects every name wrapped in `z.lazy`, in any
    mode, so callers expanding inline can import those names.
    """

    def __init__(
        self,
        schemas: dict[str, Any],
        dependencies: dict[str, list[str]] | None = None,
    ) -> None:
        self.schemas = schemas
        self.dependencies = dependencies if dependencies is not None else {}
        self.lazy_references: dict[str, None] = {}

    def get_dependencies(self, name: str) -> list[str]:
        """Return the names a component referenced directly."""
        return list(self.dependencies.get(name, []))

    def _add_dependency(self, owner: str, target: str) -> None:
        deps = self.dependencies.setdefault(owner, [])
        if target not in deps:
            deps.append(target)

    def convert(
        self,
        schema: Any,
        path: tuple[str, ...] = (),
        owner: str = "",
        inline: bool = False,
    ) -> str:
        """Convert a schema node to a Zod expression.

        ``path`` holds the component names currently being expanded,
        ``owner`` the component that dependencies are recorded against.
        In inline mode referenced components are expanded in place and no
        dependencies are recorded.
        """
        kind = schema_kind(schema)

        if kind == "absent":
            return UNKNOWN
        if kind == "reference":
            return self._convert_reference(schema["$ref"], path, owner, inline)
        if kind == "all_of":
            parts = self._convert_all(schema["allOf"], path, owner, inline)
            if not parts:
                return UNKNOWN
            # z.intersection is binary, fold left for longer lists
            expression = parts[0]
            for part in parts[1:]:
                expression = f"z.intersection({expression}, {part})"
            return expression
        if kind in ("one_of", "any_of"):
            key = "oneOf" if kind == "one_of" else "anyOf"
            parts = self._convert_all(schema[key], path, owner, inline)
            if len(parts) > 1:
                return f"z.union([{', '.join(parts)}])"
            return parts[0] if parts else UNKNOWN
        if kind == "string":
            return self._convert_string(schema)
        if kind in ("number", "integer"):
            return self._convert_number(schema, kind)
        if kind == "boolean":
            return "z.boolean()"
        if kind == "null":
            return "z.null()"
        if kind == "array":
            return self._convert_array(schema, path, owner, inline)
        if kind == "object":
            return self._convert_object(schema, path, owner, inline)
        return UNKNOWN

    def _convert_all(
        self,
        schemas: list[Any],
        path: tuple[str, ...],
        owner: str,
        inline: bool,
    ) -> list[str]:
        return [self.convert(s, path, owner, inline) for s in schemas]

    def _convert_reference(
        self,
        ref: str,
        path: tuple[str, ...],
        owner: str,
        inline: bool,
    ) -> str:
        target = ref_name(ref)
        if owner and target and not inline:
            self._add_dependency(owner, target)

        if target in path:
            self.lazy_references.setdefault(target, None)
            return f"z.lazy(() => {component_identifier(target)})"

        if inline and target in self.schemas:
            return self.convert(self.schemas[target], (*path, target), target, True)

        return component_identifier(target)

    def _convert_string(self, schema: dict[str, Any]) -> str:
        enum = schema.get("enum")
        if isinstance(enum, list) and enum:
            values = ", ".join(
                _literal(v if isinstance(v, str) else json.dumps(v)) for v in enum
            )
            return f"z.enum([{values}])"

        expression = "z.string()"
        fmt = schema.get("format")
        if isinstance(fmt, str):
            expression += _STRING_FORMATS.get(fmt, "")
        pattern = schema.get("pattern")
        if isinstance(pattern, str) and pattern:
            expression += f".regex(/{_regex_literal(pattern)}/)"
        return expression + _bounds(schema, "minLength", "maxLength")

    def _convert_number(self, schema: dict[str, Any], kind: str) -> str:
        expression = "z.number().int()" if kind == "integer" else "z.number()"
        return expression + _bounds(schema, "minimum", "maximum")

    def _convert_array(
        self,
        schema: dict[str, Any],
        path: tuple[str, ...],
        owner: str,
        inline: bool,
    ) -> str:
        items = self.convert(schema.get("items"), path, owner, inline)
        return f"z.array({items})" + _bounds(schema, "minItems", "maxItems")

    def _convert_object(
        self,
        schema: dict[str, Any],
        path: tuple[str, ...],
        owner: str,
        inline: bool,
    ) -> str:
        properties = schema.get("properties")
        if not isinstance(properties, dict):
            return "z.record(z.unknown())"

        required = required_names(schema)
        fields = [
            (name, self.convert(prop, path, owner, inline), name in required)
            for name, prop in properties.items()
        ]
        return object_expression(fields) + self.additional_properties(
            schema, path, owner, inline
        )

    def additional_properties(
        self,
        schema: dict[str, Any],
        path: tuple[str, ...] = (),
        owner: str = "",
        inline: bool = False,
    ) -> str:
        """Render the modifier for an object's additionalProperties policy."""
        additional = schema.get("additionalProperties")
        if additional is False:
            return ".strict()"
        if additional is True:
            return ".catchall(z.unknown())"
        if isinstance(additional, dict):
            return f".catchall({self.convert(additional, path, owner, inline)})"
        return ""
