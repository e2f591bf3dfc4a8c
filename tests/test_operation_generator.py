"""Tests for the operation_generator module."""

from zodgen.operation_generator import OperationGenerator


def _ref(name: str) -> dict:
    return {"$ref": f"#/components/schemas/{name}"}


def _json(schema: dict) -> dict:
    return {"content": {"application/json": {"schema": schema}}}


_USER: dict = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "email": {"type": "string", "format": "email"},
    },
    "required": ["id"],
}

_DOC: dict = {
    "components": {"schemas": {"User": _USER}},
    "paths": {
        "/users": {
            "post": {
                "operationId": "user.create",
                "summary": "Create a user",
                "requestBody": _json(_ref("User")),
                "responses": {
                    "201": {
                        "description": "Created",
                        **_json({"type": "object", "properties": {"data": _ref("User")}}),
                    },
                },
            },
        },
    },
}


def _generate(paths: dict, schemas: dict | None = None) -> list:
    document = {"components": {"schemas": schemas or {"User": _USER}}, "paths": paths}
    return OperationGenerator(document).generate_all()


class TestCollectOperations:
    """Test grouping of path entries into operation records."""

    def test_single_operation(self):
        records = OperationGenerator(_DOC).collect_operations()
        assert list(records) == ["user.create"]
        record = records["user.create"]
        assert record.method == "POST"
        assert record.path == "/users"
        assert record.summary == "Create a user"
        assert record.request == _ref("User")
        assert list(record.responses) == ["201"]
        assert record.responses["201"].description == "Created"

    def test_entries_without_operation_id_skipped(self):
        paths = {
            "/health": {"get": {"responses": {"200": _json({"type": "string"})}}},
            "/users/{id}": {
                "parameters": [{"name": "id", "in": "path"}],
                "summary": "User by id",
                "get": {"operationId": "getUser", "responses": {}},
            },
        }
        records = OperationGenerator({"paths": paths}).collect_operations()
        assert list(records) == ["getUser"]

    def test_summary_defaults_to_operation_id_label(self):
        paths = {"/users": {"get": {"operationId": "listUsers"}}}
        record = OperationGenerator({"paths": paths}).collect_operations()["listUsers"]
        assert record.summary == "List users"

    def test_shared_operation_id_merged(self):
        paths = {
            "/a": {"get": {"operationId": "shared", "responses": {"200": _json({"type": "string"})}}},
            "/b": {
                "post": {
                    "operationId": "shared",
                    "requestBody": _json({"type": "integer"}),
                    "responses": {"404": {"description": "Missing", **_json({"type": "null"})}},
                },
            },
        }
        record = OperationGenerator({"paths": paths}).collect_operations()["shared"]
        assert record.method == "GET"
        assert record.path == "/a"
        assert record.request == {"type": "integer"}
        assert list(record.responses) == ["200", "404"]

    def test_responses_without_json_body_omitted(self):
        paths = {
            "/users": {
                "delete": {
                    "operationId": "clearUsers",
                    "responses": {
                        "204": {"description": "No content"},
                        "500": {"content": {"text/plain": {"schema": {"type": "string"}}}},
                    },
                },
            },
        }
        record = OperationGenerator({"paths": paths}).collect_operations()["clearUsers"]
        assert record.responses == {}

    def test_default_response_description(self):
        paths = {"/x": {"get": {"operationId": "x", "responses": {"200": _json({"type": "string"})}}}}
        record = OperationGenerator({"paths": paths}).collect_operations()["x"]
        assert record.responses["200"].description == "Response 200"


class TestOperationArtifact:
    """Test the rendered schema.ts per operation."""

    def test_create_user_file(self):
        artifacts = OperationGenerator(_DOC).generate_all()
        assert len(artifacts) == 1
        artifact = artifacts[0]
        assert artifact.key == ("user.create", "schema.ts")
        assert artifact.content == (
            "import { z } from 'zod';\n"
            "import { User } from '../_components/User.js';\n"
            "\n"
            "/**\n"
            " * Create a user\n"
            " *\n"
            " * @operationId user.create\n"
            " * @method POST\n"
            " * @path /users\n"
            " */\n"
            "\n"
            "/**\n"
            " * Request schema\n"
            " */\n"
            "export const Request = User;\n"
            "export type RequestType = z.infer<typeof Request>;\n"
            "\n"
            "/**\n"
            " * Response 201: Created\n"
            " */\n"
            "export const Response201 = z.object({\n"
            "  data: User.optional()\n"
            "});\n"
            "export type Response201Type = z.infer<typeof Response201>;\n"
        )

    def test_no_request_body(self):
        paths = {"/users": {"get": {"operationId": "listUsers", "responses": {"200": _json({"type": "array", "items": {"type": "string"}})}}}}
        content = _generate(paths)[0].content
        assert "export const Request" not in content
        assert "export const Response200 = z.array(z.string());" in content

    def test_inline_request(self):
        request = {"type": "object", "properties": {"name": {"type": "string"}}, "required": ["name"]}
        paths = {"/users": {"post": {"operationId": "create", "requestBody": _json(request)}}}
        content = _generate(paths)[0].content
        assert "export const Request = z.object({\n  name: z.string()\n});" in content

    def test_nested_request_reference_expanded_inline(self):
        request = {"type": "array", "items": _ref("User")}
        paths = {"/users": {"post": {"operationId": "bulkCreate", "requestBody": _json(request)}}}
        content = _generate(paths)[0].content
        assert "export const Request = z.array(z.object({\n  id: z.string(),\n" in content
        assert "import { User }" not in content

    def test_direct_response_reference(self):
        paths = {"/me": {"get": {"operationId": "me", "responses": {"200": _json(_ref("User"))}}}}
        content = _generate(paths)[0].content
        assert "import { User } from '../_components/User.js';" in content
        assert "export const Response200 = User;" in content

    def test_response_object_keeps_required_and_policy(self):
        body = {
            "type": "object",
            "properties": {"data": _ref("User"), "total": {"type": "integer"}},
            "required": ["data"],
            "additionalProperties": False,
        }
        paths = {"/users": {"get": {"operationId": "listUsers", "responses": {"200": _json(body)}}}}
        content = _generate(paths)[0].content
        assert (
            "export const Response200 = z.object({\n"
            "  data: User,\n"
            "  total: z.number().int().optional()\n"
            "}).strict();"
        ) in content

    def test_response_nested_reference_imported_and_inlined(self):
        body = {"type": "array", "items": _ref("User")}
        paths = {"/users": {"get": {"operationId": "listUsers", "responses": {"200": _json(body)}}}}
        content = _generate(paths)[0].content
        assert "import { User } from '../_components/User.js';" in content
        assert "export const Response200 = z.array(z.object({" in content

    def test_imports_deduplicated(self):
        paths = {
            "/users": {
                "put": {
                    "operationId": "replaceUser",
                    "requestBody": _json(_ref("User")),
                    "responses": {
                        "200": _json(_ref("User")),
                        "202": _json({"type": "object", "properties": {"user": _ref("User")}}),
                    },
                },
            },
        }
        content = _generate(paths)[0].content
        assert content.count("import { User }") == 1

    def test_missing_component_not_imported(self):
        body = {"type": "object", "properties": {"ghost": _ref("Ghost")}}
        paths = {"/x": {"get": {"operationId": "x", "responses": {"200": _json(body)}}}}
        content = _generate(paths)[0].content
        assert "import { Ghost }" not in content
        assert "  ghost: Ghost.optional()" in content

    def test_one_response_per_status(self):
        paths = {
            "/users": {
                "get": {
                    "operationId": "listUsers",
                    "responses": {
                        "200": _json({"type": "array", "items": {"type": "string"}}),
                        "default": {"description": "Unexpected error", **_json({"type": "object"})},
                    },
                },
            },
        }
        content = _generate(paths)[0].content
        assert "export type Response200Type = z.infer<typeof Response200>;" in content
        assert " * Response default: Unexpected error\n" in content
        assert "export const Responsedefault = z.record(z.unknown());" in content

    def test_operation_order_follows_document(self):
        paths = {
            "/b": {"get": {"operationId": "second"}},
            "/a": {"get": {"operationId": "first"}, "post": {"operationId": "third"}},
        }
        assert [a.dir_name for a in _generate(paths)] == ["second", "first", "third"]


_RECURSIVE_SCHEMAS: dict = {
    "Node": {"type": "object", "properties": {"next": _ref("Node")}},
    "Wrap": {"type": "object", "properties": {"node": _ref("Node")}},
}


class TestInlineCycles:
    """Components closed with z.lazy during inline expansion are imported."""

    def test_lazy_targets_imported(self):
        paths = {
            "/nodes": {
                "post": {
                    "operationId": "createNode",
                    "requestBody": _json({"type": "object", "properties": {"root": _ref("Node")}}),
                    "responses": {"200": _json({"type": "array", "items": _ref("Wrap")})},
                },
            },
        }
        content = _generate(paths, _RECURSIVE_SCHEMAS)[0].content
        request, response = content.split("export const Response200")
        assert "next: z.lazy(() => Node).optional()" in request
        assert "next: z.lazy(() => Node).optional()" in response
        assert "import { Wrap } from '../_components/Wrap.js';\n" in content
        assert "import { Node } from '../_components/Node.js';\n" in content

    def test_request_only_lazy_target_imported(self):
        request = {"type": "array", "items": _ref("Node")}
        paths = {"/nodes": {"put": {"operationId": "replaceNodes", "requestBody": _json(request)}}}
        content = _generate(paths, _RECURSIVE_SCHEMAS)[0].content
        assert "import { Node } from '../_components/Node.js';\n" in content

    def test_lazy_targets_not_shared_between_operations(self):
        paths = {
            "/nodes": {
                "post": {"operationId": "createNode", "requestBody": _json({"type": "array", "items": _ref("Node")})},
                "get": {"operationId": "countNodes", "responses": {"200": _json({"type": "integer"})}},
            },
        }
        first, second = _generate(paths, _RECURSIVE_SCHEMAS)
        assert "import { Node }" in first.content
        assert "import {" not in second.content.replace("import { z }", "")


class TestEmptyBodies:

    def test_empty_schema_accepts_anything(self):
        empty = {"content": {"application/json": {"schema": {}}}}
        paths = {
            "/blob": {
                "post": {
                    "operationId": "storeBlob",
                    "requestBody": empty,
                    "responses": {"200": {"description": "Stored", **empty}},
                },
            },
        }
        content = _generate(paths)[0].content
        assert "export const Request = z.unknown();" in content
        assert "export const Response200 = z.unknown();" in content
