"""Tests for the notification settings endpoints."""

from sqlalchemy.orm.exc import StaleDataError

from notification_center.infrastructure.repositories import NotificationSettingsRepository


def test_get_settings_creates_defaults(client, auth_headers) -> None:
    response = client.get("/settings", headers=auth_headers("member-1"))

    assert response.status_code == 200
    settings = response.json()["data"]["settings"]
    assert settings["userId"] == "member-1"
    assert settings["email"]["enabled"] is True
    assert settings["sms"]["enabled"] is False
    assert settings["inApp"]["enabled"] is True
    assert settings["quietHours"] == {
        "enabled": True,
        "startTime": "22:00",
        "endTime": "08:00",
        "timezone": "UTC",
    }
    assert settings["adminSettings"]["securityAlerts"] is True


def test_settings_require_authentication(client) -> None:
    assert client.get("/settings").status_code == 401
    assert client.put("/settings", json={"email": {"enabled": False}}).status_code == 401


def test_partial_update_merges_leaves(client, auth_headers) -> None:
    headers = auth_headers("member-1")

    response = client.put("/settings", json={"email": {"enabled": False}}, headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Notification settings updated successfully"
    email = body["data"]["settings"]["email"]
    assert email["enabled"] is False
    assert email["projectUpdates"] is True
    assert email["weeklyDigest"] is True

    persisted = client.get("/settings", headers=headers).json()["data"]["settings"]
    assert persisted["email"] == email


def test_invalid_update_returns_field_errors(client, auth_headers) -> None:
    headers = auth_headers("member-1")

    response = client.put(
        "/settings",
        json={"quietHours": {"startTime": "7pm"}, "push": {"enabled": "yes"}},
        headers=headers,
    )

    assert response.status_code == 400
    fields = response.json()["error"]["details"]["fields"]
    assert set(fields) == {"quietHours.startTime", "push.enabled"}
    settings = client.get("/settings", headers=headers).json()["data"]["settings"]
    assert settings["quietHours"]["startTime"] == "22:00"
    assert settings["push"]["enabled"] is True


def test_eligibility_endpoint(client, auth_headers) -> None:
    headers = auth_headers("member-1")

    late = client.get(
        "/settings/eligibility",
        params={"type": "project_update", "at": "2024-01-20T23:30:00+00:00"},
        headers=headers,
    )
    noon = client.get(
        "/settings/eligibility",
        params={"type": "project_update", "at": "2024-01-20T12:00:00+00:00"},
        headers=headers,
    )

    assert late.status_code == 200
    assert late.json()["data"]["channels"] == {
        "email": False,
        "push": False,
        "sms": False,
        "inApp": True,
    }
    assert noon.json()["data"]["channels"] == {
        "email": True,
        "push": True,
        "sms": False,
        "inApp": True,
    }


def test_eligibility_honours_critical_priority(client, auth_headers) -> None:
    headers = auth_headers("admin-1", role="admin")
    client.put("/settings", json={"adminSettings": {"criticalAlerts": False}}, headers=headers)

    response = client.get(
        "/settings/eligibility",
        params={"type": "system_alert", "priority": "critical", "at": "2024-01-20T12:00:00+00:00"},
        headers=headers,
    )

    assert response.json()["data"]["channels"] == {
        "email": False,
        "push": False,
        "sms": False,
        "inApp": True,
    }


def test_update_conflict_returns_409(client, auth_headers, monkeypatch) -> None:
    """Losing every optimistic-lock retry is reported as a conflict."""

    def always_stale(self, settings, preferences):
        raise StaleDataError("concurrent update")

    monkeypatch.setattr(NotificationSettingsRepository, "update_preferences", always_stale)

    response = client.put("/settings", json={"email": {"enabled": False}}, headers=auth_headers("member-1"))

    assert response.status_code == 409
    body = response.json()
    assert body["success"] is False
    assert body["error"]["details"]["statusCode"] == 409
