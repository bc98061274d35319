"""Application handler tests."""

import json
import sys

import pytest
from hookrouter_core.app import handlers, lambda_handler
from hookrouter_core.app.routes import setup_routes
from hookrouter_core.http.request import Request
from hookrouter_core.security.webhook import AuthVerdict, WebhookService
from hookrouter_core.utils.config import Config


def get(path, query=None):
    return Request(method="GET", path=path, query=query or {})


def post(path, body):
    return Request(method="POST", path=path, body=body)


class TestRoutes:
    """Test the application route table."""

    def test_registered_routes(self):
        """Test table contents and freeze."""
        router = setup_routes(Config())

        assert ("GET", "/api/users/:id") in router.get_routes()
        assert ("POST", "/webhook/:provider/:secret") in router.get_routes()
        assert router.table.frozen

    def test_home_lists_endpoints(self):
        """Test overview endpoint."""
        router = setup_routes(Config(app_version="2.3.4"))
        body = router.route(get("/")).json_body()

        assert body["version"] == "2.3.4"
        assert {"method": "GET", "path": "/health", "description": "Health check"} in body[
            "endpoints"
        ]


class TestHello:
    """Test greetings."""

    def test_default(self):
        """Test English default."""
        body = handlers.hello(get("/hello")).json_body()
        assert body["message"] == "Hello, World!"
        assert body["language"] == "en"

    def test_japanese(self):
        """Test localized greeting."""
        body = handlers.hello(get("/hello", {"name": "Developer", "lang": "ja"})).json_body()
        assert body["message"] == "こんにちは、Developerさん！"

    def test_unknown_language(self):
        """Unknown languages fall back to English."""
        body = handlers.hello(get("/hello", {"name": "X", "lang": "xx"})).json_body()
        assert body["message"] == "Hello, X!"


class TestHealth:
    """Test health endpoint."""

    def test_healthy(self):
        """Test status and checks."""
        body = handlers.health(get("/health")).json_body()
        assert body["status"] == "healthy"
        assert body["responseTime"].endswith("ms")
        assert "uptime" in body["checks"]

    def test_without_resource_module(self, monkeypatch):
        """Platforms without ``resource`` still report healthy."""
        monkeypatch.setitem(sys.modules, "resource", None)

        body = handlers.health(get("/health")).json_body()
        assert body["status"] == "healthy"
        assert body["checks"]["maxRssKb"] is None


class TestUsers:
    """Test user endpoints."""

    def test_list_defaults(self):
        """Test default pagination."""
        body = handlers.list_users(get("/api/users")).json_body()
        assert len(body["users"]) == 5
        assert body["pagination"] == {"total": 5, "limit": 10, "offset": 0, "hasMore": False}

    def test_list_paginated(self):
        """Test limit and offset."""
        body = handlers.list_users(get("/api/users", {"limit": "2", "offset": "1"})).json_body()
        assert [u["id"] for u in body["users"]] == [2, 3]
        assert body["pagination"]["hasMore"] is True

    def test_list_role_filter(self):
        """Test role filter."""
        body = handlers.list_users(get("/api/users", {"role": "admin"})).json_body()
        assert [u["name"] for u in body["users"]] == ["Alice Johnson"]

    def test_get_user(self):
        """Test lookup by id through the router."""
        response = setup_routes().route(get("/api/users/4"))
        assert response.json_body()["user"]["name"] == "Diana Prince"

    def test_get_user_missing(self):
        """Test unknown id."""
        response = setup_routes().route(get("/api/users/99"))
        assert response.status == 404
        assert response.json_body()["message"] == "User with ID 99 not found"

    def test_get_user_invalid(self):
        """Test non-numeric id."""
        assert setup_routes().route(get("/api/users/abc")).status == 400

    def test_create_user(self):
        """Test created user echo."""
        response = handlers.create_user(
            post("/api/users", json.dumps({"name": "Frank", "email": "frank@example.com"}))
        )
        body = response.json_body()

        assert response.status == 201
        assert body["user"] == {
            "id": 6,
            "name": "Frank",
            "email": "frank@example.com",
            "role": "user",
        }

    @pytest.mark.parametrize(
        "body",
        ['{"name": "Frank"}', "not json", "[1, 2]", '{"name": 1, "email": "a@b.c"}'],
    )
    def test_create_user_invalid(self, body):
        """Test validation failures."""
        assert handlers.create_user(post("/api/users", body)).status == 400


class TestSendWebhook:
    """Test simulated outbound webhooks."""

    def test_disabled(self):
        """Test feature flag."""
        response = handlers.send_webhook(post("/api/webhook/send", '{"message": "hi"}'), Config())
        assert response.status == 400
        assert response.json_body()["error"] == "WebHook functionality is disabled"

    def test_message_required(self):
        """Test empty message."""
        config = Config(enable_webhooks=True, generic_webhook_url="https://example.com/hook")
        response = handlers.send_webhook(post("/api/webhook/send", "{}"), config)
        assert response.json_body()["error"] == "Message is required"

    def test_sends_masked(self):
        """Test successful send with masked URL."""
        config = Config(
            enable_webhooks=True,
            slack_webhook_url="https://hooks.slack.com/services/T000/B000/XXXX",
        )
        response = handlers.send_webhook(
            post("/api/webhook/send", '{"message": "deployed", "type": "slack"}'), config
        )
        result = response.json_body()["result"]

        assert response.status == 200
        assert result["status"] == "success"
        assert result["type"] == "slack"
        assert result["url"] == "https://hooks.slack.***"
        assert result["payload"]["text"] == "deployed"
        assert "XXXX" not in response.body

    def test_unknown_type_uses_generic(self):
        """Test fallback URL."""
        config = Config(enable_webhooks=True, generic_webhook_url="https://example.com/hook")
        response = handlers.send_webhook(
            post("/api/webhook/send", '{"message": "m", "type": "pager"}'), config
        )
        assert response.status == 200
        assert response.json_body()["result"]["type"] == "pager"

    def test_unconfigured_type(self):
        """Test missing URL lists configured types."""
        config = Config(enable_webhooks=True, discord_webhook_url="https://discord.example.com/x")
        response = handlers.send_webhook(
            post("/api/webhook/send", '{"message": "m", "type": "teams"}'), config
        )
        body = response.json_body()

        assert response.status == 400
        assert body["error"] == "WebHook URL for type 'teams' is not configured"
        assert body["availableTypes"] == ["discord"]


class TestReceiveWebhook:
    """Test inbound acknowledgement."""

    def test_uses_verdict(self):
        """Test service taken from the verdict."""
        request = Request(method="POST", path="/webhook/github")
        request.context["webhook"] = AuthVerdict(is_valid=True, service=WebhookService.GITHUB)
        request.path_params["provider"] = "github"

        body = handlers.receive_webhook(request).json_body()
        assert body == {
            "received": True,
            "service": "github",
            "provider": "github",
            "timestamp": body["timestamp"],
            "requestId": request.request_id,
        }


class TestLambdaHandler:
    """Test the Lambda entry point."""

    @pytest.fixture(autouse=True)
    def fresh_gateway(self, monkeypatch):
        monkeypatch.setattr(lambda_handler, "_gateway", None)
        monkeypatch.setattr(lambda_handler, "configure_logging", lambda *args: None)
        monkeypatch.delenv("HOOKROUTER_CONFIG_FILE", raising=False)

    def test_handler(self, monkeypatch):
        """Test event in, proxy result out."""
        monkeypatch.setenv("HOOKROUTER_APP_VERSION", "9.9.9")

        result = lambda_handler.handler(
            {"httpMethod": "GET", "path": "/", "headers": None, "body": None}, None
        )

        assert result["statusCode"] == 200
        assert json.loads(result["body"])["version"] == "9.9.9"

    def test_gateway_cached(self):
        """Test gateway is built once."""
        assert lambda_handler.get_gateway() is lambda_handler.get_gateway()

    def test_path_secret_from_env(self, monkeypatch):
        """Test secrets are read from the environment."""
        monkeypatch.setenv("HOOKROUTER_WEBHOOK_PATH_SECRET", "12345")

        ok = lambda_handler.handler({"httpMethod": "POST", "path": "/webhook/github/12345"})
        bad = lambda_handler.handler({"httpMethod": "POST", "path": "/webhook/github/54321"})

        assert ok["statusCode"] == 200
        assert bad["statusCode"] == 401
