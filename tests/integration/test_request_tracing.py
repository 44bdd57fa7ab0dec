import logging

from fastapi import status


def test_request_id_echoed_when_supplied(client):
    response = client.get("/inventory", headers={"X-Request-ID": "trace-123"})

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["X-Request-ID"] == "trace-123"


def test_request_id_generated_when_missing(client):
    response = client.get("/inventory")

    assert len(response.headers["X-Request-ID"]) == 32


def test_access_log_records_method_and_status(client, caplog):
    with caplog.at_level(logging.INFO, logger="fridgeraider.access"):
        client.get("/planner")

    messages = [record.getMessage() for record in caplog.records if record.name == "fridgeraider.access"]
    assert any("HTTP GET /planner status=200" in message for message in messages)
