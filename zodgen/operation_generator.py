"""Generate one Zod schema file per API operation.

Walks the path table, groups request and response bodies by operationId,
and renders a schema.ts per operation with a `Request` validator and one
`Response<status>` validator per documented JSON response.
"""

from __future__ import annotations

import logging
from typing import Any

from .codegen import OPERATION_FILE_NAME, render_operation
from .loader import get_paths, get_schemas
from .models import Artifact, OperationRecord, ResponseRecord
from .naming import component_identifier, generate_description, response_name
from .schema_parser import (
    find_component_references,
    is_component_ref,
    json_body_schema,
    ref_name,
)
from .type_converter import TypeConverter, object_expression, required_names

logger = logging.getLogger(__name__)

# Operation keys of a path item, everything else (parameters, summary, ...) is skipped
_HTTP_METHODS = {"get", "put", "post", "delete", "options", "head", "patch", "trace"}


class OperationGenerator:
    """Emit artifacts for every operationId in the document's paths."""

    def __init__(self, document: dict[str, Any]) -> None:
        self.schemas = get_schemas(document)
        self.paths = get_paths(document)
        self.type_converter = TypeConverter(self.schemas)

    def collect_operations(self) -> dict[str, OperationRecord]:
        """Group request/response bodies by operationId, in document order."""
        operations: dict[str, OperationRecord] = {}

        for path, path_item in self.paths.items():
            if not isinstance(path_item, dict):
                continue

            for method, operation in path_item.items():
                if method.lower() not in _HTTP_METHODS or not isinstance(operation, dict):
                    continue
                operation_id = operation.get("operationId")
                if not operation_id or not isinstance(operation_id, str):
                    continue

                record = operations.get(operation_id)
                if record is None:
                    record = OperationRecord(
                        operation_id=operation_id,
                        summary=operation.get("summary") or generate_description(operation_id),
                        method=method.upper(),
                        path=path,
                    )
                    operations[operation_id] = record
                else:
                    logger.debug("Merging %s %s into operation %s", method.upper(), path, operation_id)

                request_schema = json_body_schema(operation.get("requestBody"))
                if request_schema is not None:
                    record.request = request_schema

                responses = operation.get("responses")
                if not isinstance(responses, dict):
                    continue
                for status_code, response in responses.items():
                    response_schema = json_body_schema(response)
                    if response_schema is None:
                        continue
                    status = str(status_code)
                    record.responses[status] = ResponseRecord(
                        description=response.get("description") or f"Response {status}",
                        schema=response_schema,
                    )

        return operations

    def generate_all(self) -> list[Artifact]:
        """Generate one schema.ts per operation."""
        return [
            self.generate(record)
            for record in self.collect_operations().values()
        ]

    def generate(self, record: OperationRecord) -> Artifact:
        """Generate the artifact for one collected operation."""
        component_refs: dict[str, None] = {}
        self.type_converter.lazy_references.clear()

        if is_component_ref(record.request):
            component_refs.setdefault(ref_name(record.request["$ref"]), None)
        for response in record.responses.values():
            find_component_references(response.schema, component_refs)

        request = None
        if record.request is not None:
            request = self.convert_request_schema(record.request)

        responses = [
            {
                "status": status,
                "name": response_name(status),
                "description": response.description,
                "expression": self.convert_response_schema(response.schema, component_refs),
            }
            for status, response in record.responses.items()
        ]

        # Inline expansion can close a cycle with z.lazy on any component it passed through
        for name in self.type_converter.lazy_references:
            component_refs.setdefault(name, None)

        context = {
            "imports": [
                component_identifier(name) for name in component_refs if name in self.schemas
            ],
            "summary": record.summary,
            "operation_id": record.operation_id,
            "method": record.method,
            "path": record.path,
            "request": request,
            "responses": responses,
        }
        logger.debug("Generated operation %s (%d responses)", record.operation_id, len(responses))
        return Artifact(
            file_name=OPERATION_FILE_NAME,
            content=render_operation(context),
            dir_name=record.operation_id,
        )

    def convert_request_schema(self, schema: dict[str, Any]) -> str:
        """Alias a component request body, inline anything else."""
        if is_component_ref(schema):
            return component_identifier(ref_name(schema["$ref"]))
        return self.type_converter.convert(schema, (), "Request", True)

    def convert_response_schema(self, schema: Any, component_refs: dict[str, None]) -> str:
        """Convert a response body, keeping top-level property references named."""
        if is_component_ref(schema):
            return component_identifier(ref_name(schema["$ref"]))

        if (
            isinstance(schema, dict)
            and schema.get("type") == "object"
            and isinstance(schema.get("properties"), dict)
        ):
            required = required_names(schema)
            fields = []
            for name, value in schema["properties"].items():
                if is_component_ref(value):
                    target = ref_name(value["$ref"])
                    component_refs.setdefault(target, None)
                    expression = component_identifier(target)
                else:
                    expression = self.type_converter.convert(value, (), "", True)
                fields.append((name, expression, name in required))
            return object_expression(fields) + self.type_converter.additional_properties(
                schema, (), "", True
            )

        return self.type_converter.convert(schema, (), "", True)
