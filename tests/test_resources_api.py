"""Resource library: publication, FAQ listing and download counts."""

from concurrent.futures import ThreadPoolExecutor

from app.models.resource import Resource

from tests.helpers import as_naive_utc, utc_now_naive


def _create(client, headers, **overrides):
    payload = {
        "title": "Hymns of Praise",
        "description": "Sunday hymn book",
        "category": "book",
        "file_type": "pdf",
        "file_url": "https://cdn.church.org/hymns.pdf",
        "pages": 120,
        "tags": "hymns, worship",
        "is_published": True,
    }
    payload.update(overrides)
    return client.post("/api/resources/admin", json=payload, headers=headers)


def test_published_faq_is_listed_with_question_and_answer_only(client, admin_headers):
    before = utc_now_naive()
    response = client.post(
        "/api/resources/admin",
        json={
            "title": "What time is Sunday service?",
            "description": "Every Sunday at 9am and 11am.",
            "category": "faq",
            "file_type": "none",
            "is_published": True,
        },
        headers=admin_headers,
    )
    after = utc_now_naive()

    assert response.status_code == 201
    resource = response.json()["data"]
    assert resource["is_published"] is True
    assert before <= as_naive_utc(resource["published_at"]) <= after

    faqs = client.get("/api/resources/public/faqs")
    assert faqs.status_code == 200
    assert faqs.json()["data"] == [
        {"title": "What time is Sunday service?", "description": "Every Sunday at 9am and 11am."}
    ]


def test_unpublished_resources_stay_private(client, admin_headers):
    draft = _create(client, admin_headers, title="Draft brochure", is_published=False).json()["data"]
    assert draft["published_at"] is None

    public = client.get("/api/resources/public").json()
    assert public["data"] == []
    assert client.get(f"/api/resources/public/{draft['id']}").status_code == 404

    admin = client.get("/api/resources/admin", params={"published": False}, headers=admin_headers).json()
    assert [r["id"] for r in admin["data"]] == [draft["id"]]


def test_publishing_later_stamps_once(client, admin_headers):
    draft = _create(client, admin_headers, is_published=False).json()["data"]
    url = f"/api/resources/admin/{draft['id']}"

    published = client.put(url, json={"is_published": True}, headers=admin_headers).json()["data"]
    stamp = published["published_at"]
    assert stamp is not None

    client.put(url, json={"is_published": False}, headers=admin_headers)
    again = client.put(url, json={"is_published": True}, headers=admin_headers).json()["data"]
    assert again["published_at"] == stamp


def test_download_counter_only_for_published(client, admin_headers):
    published = _create(client, admin_headers).json()["data"]
    draft = _create(client, admin_headers, title="Hidden", is_published=False).json()["data"]

    for expected in (1, 2):
        response = client.put(f"/api/resources/public/{published['id']}/download")
        assert response.status_code == 200
        assert response.json()["data"]["download_count"] == expected

    assert client.put(f"/api/resources/public/{draft['id']}/download").status_code == 404
    hidden = client.get("/api/resources/admin", params={"published": False}, headers=admin_headers).json()["data"][0]
    assert hidden["download_count"] == 0


def test_public_listing_orders_and_filters(client, admin_headers):
    _create(client, admin_headers, title="Second", order=2)
    _create(client, admin_headers, title="First", order=1)
    _create(client, admin_headers, title="Amazing Grace", category="song", file_type="audio", duration="4:05")

    ordered = client.get("/api/resources/public", params={"category": "book"}).json()["data"]
    assert [r["title"] for r in ordered] == ["First", "Second"]

    songs = client.get("/api/resources/public", params={"search": "grace", "category": "all"}).json()["data"]
    assert [r["title"] for r in songs] == ["Amazing Grace"]


def test_admin_routes_are_restricted(client, user_headers):
    assert _create(client, user_headers).status_code == 403
    assert client.get("/api/resources/admin/stats").status_code == 401


def test_stats_by_category(client, admin_headers):
    book = _create(client, admin_headers).json()["data"]
    _create(client, admin_headers, title="Draft", is_published=False)
    _create(client, admin_headers, title="Hymn", category="song", file_type="audio")
    client.put(f"/api/resources/public/{book['id']}/download")

    stats = client.get("/api/resources/admin/stats", headers=admin_headers).json()["data"]

    by_category = {row["category"]: row for row in stats["by_category"]}
    assert by_category["book"] == {"category": "book", "count": 2, "published": 1, "downloads": 1}
    assert by_category["song"]["count"] == 1
    assert stats["total"] == 3
    assert stats["total_downloads"] == 1


def test_delete_resource(client, admin_headers):
    resource = _create(client, admin_headers).json()["data"]
    url = f"/api/resources/admin/{resource['id']}"

    assert client.delete(url, headers=admin_headers).status_code == 200
    assert client.put(url, json={"title": "Gone"}, headers=admin_headers).status_code == 404


def test_search_finds_accented_tags(client, admin_headers):
    _create(client, admin_headers, title="Chants du dimanche", tags="cantiques, prière")
    _create(client, admin_headers, title="Hymns of Praise")

    found = client.get("/api/resources/public", params={"search": "prière"}).json()["data"]

    assert [r["title"] for r in found] == ["Chants du dimanche"]


def test_simultaneous_downloads_are_all_counted(threaded_client, file_session_factory, admin_headers):
    resource = _create(threaded_client, admin_headers).json()["data"]
    url = f"/api/resources/public/{resource['id']}/download"
    total = 20

    with ThreadPoolExecutor(max_workers=8) as pool:
        statuses = list(pool.map(lambda _: threaded_client.put(url).status_code, range(total)))

    assert statuses == [200] * total
    with file_session_factory() as session:
        assert session.query(Resource).one().download_count == total
