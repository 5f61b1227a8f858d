from endpoint_openapi import security


class TestSecuritySchemes:
    def test_bearer(self):
        assert security.bearer() == {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}

    def test_bearer_with_description(self):
        assert security.bearer("JWT token")["description"] == "JWT token"

    def test_basic(self):
        assert security.basic() == {"type": "http", "scheme": "basic"}

    def test_api_key(self):
        assert security.api_key("X-API-Key", "header") == {
            "type": "apiKey",
            "name": "X-API-Key",
            "in": "header",
        }

    def test_oauth2(self):
        flows = {
            "implicit": {
                "authorizationUrl": "https://example.com/oauth2/authorize",
                "scopes": {"read": "Read access", "write": "Write access"},
            }
        }
        assert security.oauth2(flows) == {"type": "oauth2", "flows": flows}

    def test_fresh_object_each_call(self):
        assert security.bearer() is not security.bearer()
