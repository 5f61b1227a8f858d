from endpoint_openapi.converter.responses import build_responses
from endpoint_openapi.models import EndpointDefinition
from endpoint_openapi.schema.node import schema


def _make_endpoint(errors: list[dict], status: int = 200) -> EndpointDefinition:
    return EndpointDefinition(
        method="get",
        path="/users",
        alias="getUsers",
        response=schema(list[str]),
        errors=errors,
        status=status,
    )


class TestBuildResponses:
    def test_success_only(self):
        assert build_responses(_make_endpoint([])) == {
            "200": {
                "description": "Success",
                "content": {"application/json": {"schema": {"type": "array", "items": {"type": "string"}}}},
            }
        }

    def test_custom_success_status(self):
        responses = build_responses(_make_endpoint([], status=204))
        assert list(responses) == ["204"]

    def test_errors_in_declaration_order(self):
        responses = build_responses(_make_endpoint([
            {"status": 404, "description": "Not found", "schema": schema(str)},
            {"status": "default", "schema": schema(str)},
        ]))
        assert list(responses) == ["200", "404", "default"]
        assert responses["404"]["description"] == "Not found"
        assert responses["default"]["description"] == "Error"

    def test_error_description_from_schema(self):
        responses = build_responses(_make_endpoint([
            {"status": 400, "schema": schema(str).describe("Bad request")},
        ]))
        assert responses["400"]["description"] == "Bad request"
        assert responses["400"]["content"]["application/json"]["schema"] == {
            "type": "string",
            "description": "Bad request",
        }

    def test_last_error_wins_over_success(self):
        responses = build_responses(_make_endpoint([
            {"status": 200, "description": "First", "schema": schema(int)},
            {"status": 200, "description": "Second", "schema": schema(bool)},
        ]))
        assert list(responses) == ["200"]
        assert responses["200"] == {
            "description": "Second",
            "content": {"application/json": {"schema": {"type": "boolean"}}},
        }
