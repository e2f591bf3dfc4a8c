"""Generate one Zod schema file per component schema.

Each component is converted once. Its direct references become imports,
and the referenced components are generated before the file is assembled,
so a component that is requested again while still being expanded is a
cycle between named schemas: it is logged and that request is skipped.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .codegen import COMPONENTS_DIR, render_component
from .models import Artifact
from .naming import component_identifier, generate_description
from .schema_parser import property_type_label
from .type_converter import TypeConverter, required_names

logger = logging.getLogger(__name__)


class ComponentGenerator:
    """Emit artifacts for every entry of components/schemas."""

    def __init__(self, schemas: dict[str, Any]) -> None:
        self.schemas = schemas
        self.dependencies: dict[str, list[str]] = {}
        self.type_converter = TypeConverter(schemas, self.dependencies)
        self.cycles: list[tuple[str, ...]] = []
        self.collisions: list[tuple[str, str]] = []
        self._generated: dict[str, Artifact] = {}
        self._in_progress: list[str] = []

    def generate_all(self) -> list[Artifact]:
        """Generate every component, in document order."""
        seen: dict[str, str] = {}
        for name in self.schemas:
            identifier = component_identifier(name)
            if identifier in seen:
                self.collisions.append((seen[identifier], name))
                logger.warning(
                    "Schemas %s and %s both generate %s.ts, the later file replaces the earlier",
                    seen[identifier], name, identifier,
                )
            else:
                seen[identifier] = name

        for name in self.schemas:
            self.generate(name)
        return [self._generated[name] for name in self.schemas if name in self._generated]

    def generate(self, name: str) -> Optional[Artifact]:
        """Generate the artifact for one component, reusing earlier results."""
        if name in self._generated:
            return self._generated[name]

        if name in self._in_progress:
            cycle = (*self._in_progress[self._in_progress.index(name):], name)
            self.cycles.append(cycle)
            logger.warning("Detected circular reference for schema %s: %s", name, " -> ".join(cycle))
            return None

        schema = self.schemas.get(name)
        if schema is None:
            return None

        self._in_progress.append(name)
        try:
            expression = self.type_converter.convert(
                schema, tuple(self._in_progress), name
            )
            imports = [
                dep for dep in self.type_converter.get_dependencies(name)
                if dep in self.schemas and dep != name
            ]
            for dep in imports:
                self.generate(dep)
            artifact = self._build_artifact(name, schema, expression, imports)
        finally:
            self._in_progress.pop()

        self._generated[name] = artifact
        logger.debug("Generated component %s (%d imports)", name, len(imports))
        return artifact

    def _build_artifact(
        self,
        name: str,
        schema: Any,
        expression: str,
        imports: list[str],
    ) -> Artifact:
        identifier = component_identifier(name)
        context = {
            "name": identifier,
            "expression": expression,
            "imports": [component_identifier(dep) for dep in imports],
            "description": _description(schema, name),
            "properties": _describe_properties(schema),
        }
        return Artifact(
            file_name=f"{identifier}.ts",
            content=render_component(context),
            dir_name=COMPONENTS_DIR,
        )


def _description(schema: Any, name: str) -> str:
    if isinstance(schema, dict) and isinstance(schema.get("description"), str):
        if schema["description"].strip():
            return schema["description"]
    return generate_description(name)


def _describe_properties(schema: Any) -> list[dict[str, Any]]:
    """Build the @property lines for a component's declared properties."""
    if not isinstance(schema, dict) or not isinstance(schema.get("properties"), dict):
        return []
    required = required_names(schema)
    described = []
    for prop_name, prop_schema in schema["properties"].items():
        description = prop_schema.get("description") if isinstance(prop_schema, dict) else None
        described.append({
            "name": prop_name,
            "type": property_type_label(prop_schema),
            "required": prop_name in required,
            "description": description or prop_name,
        })
    return described
