import logging

import pytest


class TestRequestLogging:
    def test_request_lifecycle_logged(self, client, caplog):
        with caplog.at_level(logging.INFO):
            client.get("/health", HTTP_X_REQUEST_ID="lifecycle-1")
        messages = [record.getMessage() for record in caplog.records]
        assert any("request.started" in m for m in messages)
        assert any("request.finished" in m and "200" in m for m in messages)

    def test_correlation_id_not_leaked_between_requests(self, client, caplog):
        client.get("/health", HTTP_X_REQUEST_ID="first-request")
        caplog.clear()
        with caplog.at_level(logging.INFO):
            client.get("/health", HTTP_X_REQUEST_ID="second-request")
        messages = [record.getMessage() for record in caplog.records]
        assert any("second-request" in m for m in messages)
        assert not any("first-request" in m for m in messages)


@pytest.mark.integration
class TestDomainLogging:
    def test_blocked_deletion_is_logged(self, auth_client, warehouse, item_status, caplog):
        with caplog.at_level(logging.INFO):
            response = auth_client.delete(f"/api/v1/references/status/{item_status.id}/")
        assert response.status_code == 409
        assert any("guard.blocked" in record.getMessage() for record in caplog.records)

    def test_user_email_masked_in_logs(self, caplog):
        import structlog

        with caplog.at_level(logging.INFO):
            structlog.get_logger("test").info("user.lookup", email="ana.souza@example.com")
        messages = " ".join(record.getMessage() for record in caplog.records)
        assert "ana.souza@example.com" not in messages
