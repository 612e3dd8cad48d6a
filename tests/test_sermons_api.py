"""Sermon ownership and search."""

from tests.helpers import bearer


def _create(client, headers, **overrides):
    payload = {
        "title": "The Good Shepherd",
        "description": "John 10 and the voice of the shepherd.",
        "pastor_name": "Rev. Samuel Eto",
        "sermon_date": "2026-03-01T10:00:00",
        "series": "Gospel of John",
        "tags": "faith, shepherd",
    }
    payload.update(overrides)
    return client.post("/api/sermons", json=payload, headers=headers)


def test_create_is_owned_by_caller(client, user_headers):
    response = _create(client, user_headers)

    assert response.status_code == 201
    sermon = response.json()["data"]
    assert sermon["created_by"] == "user@church.org"
    assert sermon["tags"] == ["faith", "shepherd"]


def test_sermons_require_authentication(client):
    assert client.get("/api/sermons").status_code == 401
    assert client.get("/api/sermons", headers=bearer(expires_in=-60)).status_code == 401
    assert client.get("/api/sermons", headers=bearer(secret="not-the-key")).status_code == 401


def test_non_owner_update_is_refused_and_nothing_changes(client, user_headers, other_headers):
    sermon = _create(client, user_headers).json()["data"]
    url = f"/api/sermons/{sermon['id']}"

    response = client.put(url, json={"title": "Rewritten"}, headers=other_headers)

    assert response.status_code == 403
    assert response.json()["success"] is False
    assert client.get(url, headers=user_headers).json()["data"]["title"] == "The Good Shepherd"


def test_admin_may_update_any_sermon(client, user_headers, admin_headers):
    sermon = _create(client, user_headers).json()["data"]

    response = client.put(
        f"/api/sermons/{sermon['id']}", json={"series": "Lent 2026"}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["data"]["series"] == "Lent 2026"
    assert response.json()["data"]["created_by"] == "user@church.org"


def test_list_orders_by_sermon_date(client, user_headers):
    _create(client, user_headers, title="Older", sermon_date="2025-12-25T09:00:00")
    _create(client, user_headers, title="Newer", sermon_date="2026-04-05T09:00:00")

    body = client.get("/api/sermons", headers=user_headers).json()

    assert [s["title"] for s in body["data"]] == ["Newer", "Older"]
    assert body["pagination"]["total"] == 2


def test_search_by_text_pastor_and_tags(client, user_headers):
    _create(client, user_headers)
    _create(
        client,
        user_headers,
        title="Walking in Love",
        description="1 Corinthians 13",
        pastor_name="Pastor Marie",
        series="Love",
        tags=["love"],
    )

    by_text = client.get("/api/sermons/search", params={"query": "shepherd"}, headers=user_headers).json()
    assert [s["title"] for s in by_text["data"]] == ["The Good Shepherd"]

    by_pastor = client.get("/api/sermons/search", params={"pastor": "marie"}, headers=user_headers).json()
    assert [s["title"] for s in by_pastor["data"]] == ["Walking in Love"]

    by_tags = client.get("/api/sermons/search", params={"tags": "love,hope"}, headers=user_headers).json()
    assert [s["title"] for s in by_tags["data"]] == ["Walking in Love"]


def test_search_by_date_range(client, user_headers):
    _create(client, user_headers, title="Older", sermon_date="2025-12-25T09:00:00")
    _create(client, user_headers, title="Newer", sermon_date="2026-04-05T09:00:00")

    response = client.get(
        "/api/sermons/search",
        params={"start_date": "2026-01-01T00:00:00", "end_date": "2026-12-31T00:00:00"},
        headers=user_headers,
    )

    assert [s["title"] for s in response.json()["data"]] == ["Newer"]


def test_invalid_media_url_is_rejected(client, user_headers):
    response = _create(client, user_headers, video_url="not a url")

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "video_url"


def test_malformed_and_unknown_ids(client, user_headers):
    assert client.get("/api/sermons/123", headers=user_headers).status_code == 400
    missing = client.get("/api/sermons/00000000-0000-0000-0000-000000000000", headers=user_headers)
    assert missing.status_code == 404


def test_search_by_accented_tag(client, user_headers):
    _create(client, user_headers, title="Guérison divine", tags="guérison, foi")
    _create(client, user_headers, title="Sans accent", tags="guerison")

    response = client.get("/api/sermons/search", params={"tags": "guérison"}, headers=user_headers)

    assert [s["title"] for s in response.json()["data"]] == ["Guérison divine"]


def test_text_search_treats_wildcards_literally(client, user_headers):
    _create(client, user_headers, title="Giving 100% to God")
    _create(client, user_headers, title="Giving 100 hours")

    response = client.get("/api/sermons/search", params={"query": "100%"}, headers=user_headers)

    assert [s["title"] for s in response.json()["data"]] == ["Giving 100% to God"]


def test_token_without_email_claim_is_rejected(client):
    response = _create(client, bearer(email=None))

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token payload"
    assert client.get("/api/sermons", headers=bearer(email="")).status_code == 401
