"""Tests for the Telegram and identity HTTP clients against a mock transport."""
import asyncio
import json

import httpx
import pytest

from hydromon.errors import BotApiError, IdentityServiceError
from hydromon.services.identity import IdentityClient
from hydromon.services.telegram import TelegramBot


class Recorder:
    def __init__(self, responder):
        self.requests = []
        self.responder = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)


class TestTelegramBot:
    def test_send_message(self):
        rec = Recorder(lambda r: httpx.Response(200, json={"ok": True, "result": {"message_id": 3}}))
        bot = TelegramBot("TOKEN", transport=httpx.MockTransport(rec))

        result = asyncio.run(bot.send_message("99", "hi"))

        assert result == {"message_id": 3}
        request = rec.requests[0]
        assert request.url.path == "/botTOKEN/sendMessage"
        assert json.loads(request.content) == {"chat_id": "99", "text": "hi"}

    def test_api_error(self):
        rec = Recorder(lambda r: httpx.Response(400, json={"ok": False, "description": "chat not found"}))
        bot = TelegramBot("TOKEN", transport=httpx.MockTransport(rec))

        with pytest.raises(BotApiError, match="chat not found") as info:
            asyncio.run(bot.send_message("1", "x"))
        assert info.value.status_code == 400

    def test_replace_webhook_deletes_then_sets(self):
        rec = Recorder(lambda r: httpx.Response(200, json={"ok": True, "result": True}))
        bot = TelegramBot("T", transport=httpx.MockTransport(rec))

        asyncio.run(bot.replace_webhook("https://example.com/webhook"))

        assert [r.url.path for r in rec.requests] == ["/botT/deleteWebhook", "/botT/setWebhook"]
        assert json.loads(rec.requests[1].content) == {"url": "https://example.com/webhook"}

    def test_transport_failure(self):
        def fail(request):
            raise httpx.ConnectError("no route", request=request)

        bot = TelegramBot("T", transport=httpx.MockTransport(fail))

        with pytest.raises(BotApiError):
            asyncio.run(bot.get_me())


class TestIdentityClient:
    def test_create_user_sends_service_key(self):
        rec = Recorder(lambda r: httpx.Response(200, json={"id": "u-1", "email": "a@example.com"}))
        client = IdentityClient("https://db.example.com/", "svc-key", transport=httpx.MockTransport(rec))

        body = asyncio.run(client.create_user("a@example.com", "secret123"))

        assert body["id"] == "u-1"
        request = rec.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://db.example.com/auth/v1/admin/users"
        assert request.headers["apikey"] == "svc-key"
        assert request.headers["Authorization"] == "Bearer svc-key"

    def test_update_without_password(self):
        rec = Recorder(lambda r: httpx.Response(200, json={"id": "u-1"}))
        client = IdentityClient("https://db.example.com", "k", transport=httpx.MockTransport(rec))

        asyncio.run(client.update_user("u-1", "b@example.com"))

        request = rec.requests[0]
        assert request.method == "PUT"
        assert request.url.path == "/auth/v1/admin/users/u-1"
        assert json.loads(request.content) == {"email": "b@example.com"}

    def test_delete_with_empty_body(self):
        rec = Recorder(lambda r: httpx.Response(200))
        client = IdentityClient("https://db.example.com", "k", transport=httpx.MockTransport(rec))

        assert asyncio.run(client.delete_user("u-1")) is None
        assert rec.requests[0].method == "DELETE"

    def test_client_error(self):
        rec = Recorder(lambda r: httpx.Response(422, json={"msg": "Email already registered"}))
        client = IdentityClient("https://db.example.com", "k", transport=httpx.MockTransport(rec))

        with pytest.raises(IdentityServiceError, match="Email already registered") as info:
            asyncio.run(client.create_user("a@example.com", "secret123"))
        assert info.value.is_client_error
