import logging
import uuid


class TestCorrelationIdMiddleware:
    def test_returns_provided_request_id(self, client):
        custom_id = "my-custom-request-id-123"
        response = client.get("/api/v1/cars/", HTTP_X_REQUEST_ID=custom_id)
        assert response["X-Request-ID"] == custom_id

    def test_generates_uuid7_when_no_request_id(self, client):
        response = client.get("/health")
        request_id = response["X-Request-ID"]
        parsed = uuid.UUID(request_id)
        assert str(parsed) == request_id
        assert parsed.version == 7

    def test_correlation_id_in_logs(self, client, caplog):
        custom_id = "log-test-correlation-456"
        with caplog.at_level(logging.INFO):
            client.get("/api/v1/cars/", HTTP_X_REQUEST_ID=custom_id)
        found = any(custom_id in record.getMessage() for record in caplog.records)
        assert found, (
            f"correlation_id '{custom_id}' not found in log records: "
            f"{[r.getMessage() for r in caplog.records]}"
        )

    def test_health_probe_not_access_logged(self, client, caplog):
        with caplog.at_level(logging.INFO):
            client.get("/health")
        assert not any("request.started" in record.getMessage() for record in caplog.records)


class TestSensitiveDataMasking:
    def test_password_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]

    def test_telegram_bot_url_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {
            "event": "notification.delivery_failed",
            "error": "telegram: 401 for url https://api.telegram.org/bot123456:AAE-xyz/sendMessage",
        }
        result = mask_sensitive_data(None, None, event_dict)
        assert "AAE-xyz" not in result["error"]
        assert "api.telegram.org" in result["error"]

    def test_non_sensitive_data_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "order.created", "order_id": "0191A2B3"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["order_id"] == "0191A2B3"
        assert result["event"] == "order.created"
