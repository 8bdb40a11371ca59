"""Integration tests for template, preference and operational endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from redis import RedisError

from notifyhub.domain.entities import DeliveryJob
from notifyhub.infrastructure.queues import JobRecordStore
from notifyhub.interfaces.api.routes import deliveries as deliveries_routes


@pytest.fixture()
def client():
    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_template_crud_and_preview(client, make_recipient, auth_headers) -> None:
    admin_headers = auth_headers(make_recipient(is_admin=True))
    reader_headers = auth_headers(make_recipient())

    response = client.post(
        "/templates/",
        json={
            "name": "welcome",
            "channel": "EMAIL",
            "subject": "Welcome {{name}}",
            "body": "<p>Hi {{name}}, meet {{product}}</p>",
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    template = response.json()
    assert template["variables"] == ["name", "product"]

    listing = client.get("/templates/?channel=EMAIL", headers=reader_headers)
    assert [item["id"] for item in listing.json()] == [template["id"]]

    preview = client.post(
        f"/templates/{template['id']}/preview",
        json={"variables": {"name": "Ada"}},
        headers=reader_headers,
    )
    assert preview.status_code == 200
    assert preview.json()["rendered_subject"] == "Welcome Ada"
    assert preview.json()["rendered_body"] == "<p>Hi Ada, meet {{product}}</p>"

    updated = client.put(
        f"/templates/{template['id']}",
        json={"body": "<p>Bye {{name}}</p>"},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["variables"] == ["name", "product"]
    assert updated.json()["subject"] == "Welcome {{name}}"

    assert client.delete(f"/templates/{template['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"/templates/{template['id']}", headers=reader_headers).status_code == 404


def test_template_management_requires_admin(client, make_recipient, auth_headers) -> None:
    headers = auth_headers(make_recipient())

    response = client.post(
        "/templates/", json={"name": "x", "channel": "SMS", "body": "y"}, headers=headers
    )

    assert response.status_code == 403
    assert response.json()["detail"] == "Not authorized"


def test_duplicate_template_names_are_rejected(client, make_recipient, auth_headers) -> None:
    headers = auth_headers(make_recipient(is_admin=True))
    payload = {"name": "otp", "channel": "SMS", "body": "Code {{code}}"}

    assert client.post("/templates/", json=payload, headers=headers).status_code == 201
    duplicate = client.post("/templates/", json=payload, headers=headers)

    assert duplicate.status_code == 400
    assert duplicate.json()["detail"] == "Template with this name already exists"


def test_preferences_round_trip(client, make_recipient, auth_headers) -> None:
    headers = auth_headers(make_recipient())

    defaults = client.get("/preferences/", headers=headers).json()
    assert defaults["email_enabled"] is True
    assert defaults["sms_enabled"] is False
    assert defaults["quiet_hours_start"] is None

    response = client.put(
        "/preferences/",
        json={"sms_enabled": True, "quiet_hours_start": "22:00", "quiet_hours_end": "07:00"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["sms_enabled"] is True
    assert response.json()["email_enabled"] is True

    cleared = client.put("/preferences/", json={"quiet_hours_start": None}, headers=headers)
    assert cleared.json()["quiet_hours_start"] is None
    assert cleared.json()["quiet_hours_end"] == "07:00"


@pytest.mark.parametrize(
    "payload",
    [
        {"quiet_hours_start": "24:00"},
        {"quiet_hours_end": "7pm"},
        {"email_frequency": "hourly"},
        {"unknown": True},
    ],
)
def test_invalid_preferences_are_rejected(client, make_recipient, auth_headers, payload) -> None:
    headers = auth_headers(make_recipient())

    assert client.put("/preferences/", json=payload, headers=headers).status_code == 422


def test_failed_jobs_are_listed_for_admins(
    client, make_recipient, auth_headers, fake_redis, monkeypatch
) -> None:
    store = JobRecordStore(fake_redis)
    store.record_failed(
        DeliveryJob(channel="SMS", notification_id=1, to="+15550004444", body="hi"),
        attempts=3,
        error="carrier down",
    )
    monkeypatch.setattr(JobRecordStore, "from_settings", classmethod(lambda cls: store))

    admin_headers = auth_headers(make_recipient(is_admin=True))
    response = client.get("/deliveries/failed?channel=sms", headers=admin_headers)

    assert response.status_code == 200
    [record] = response.json()
    assert record["attempts"] == 3
    assert record["error"] == "carrier down"
    assert record["job"]["to"] == "+15550004444"

    assert (
        client.get("/deliveries/failed?channel=sms", headers=auth_headers(make_recipient()))
        .status_code
        == 403
    )
    assert client.get("/deliveries/failed?channel=fax", headers=admin_headers).status_code == 400


def test_failed_jobs_report_an_unavailable_store(
    client, make_recipient, auth_headers, monkeypatch
) -> None:
    def _unavailable(**_kwargs):
        raise RedisError("connection refused")

    monkeypatch.setattr(deliveries_routes, "list_failed_jobs_uc", _unavailable)

    response = client.get(
        "/deliveries/failed?channel=EMAIL", headers=auth_headers(make_recipient(is_admin=True))
    )

    assert response.status_code == 503
