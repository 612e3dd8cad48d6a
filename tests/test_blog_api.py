"""Blog posts: slug uniqueness, reading time and publication stamping."""

import math

from app.models.blog_post import BlogPost

from tests.helpers import as_naive_utc, utc_now_naive

CONTENT = " ".join(["word"] * 250)


def _create(client, headers, **overrides):
    payload = {"title": "Welcome", "slug": "welcome", "content": CONTENT, "tags": "news, church"}
    payload.update(overrides)
    return client.post("/api/blog/posts", json=payload, headers=headers)


def test_create_derives_reading_time_and_author(client, user_headers):
    response = _create(client, user_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    post = body["data"]
    assert post["reading_time"] == math.ceil(250 / 200)
    assert post["author"] == "user@church.org"
    assert post["tags"] == ["news", "church"]
    assert post["status"] == "draft"
    assert post["published_at"] is None


def test_duplicate_slug_is_a_conflict(client, user_headers, db_session):
    assert _create(client, user_headers).status_code == 201

    response = _create(client, user_headers, title="Another")

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert db_session.query(BlogPost).filter(BlogPost.slug == "welcome").count() == 1


def test_short_content_is_rejected(client, user_headers, db_session):
    response = _create(client, user_headers, content="too short")

    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["content"]
    assert db_session.query(BlogPost).count() == 0


def test_requires_authentication(client):
    assert _create(client, {}).status_code == 401


def test_content_update_recomputes_reading_time_only(client, user_headers):
    post = _create(client, user_headers).json()["data"]

    longer = " ".join(["word"] * 601)
    response = client.put(f"/api/blog/posts/{post['id']}", json={"content": longer}, headers=user_headers)

    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["reading_time"] == 4
    assert updated["status"] == "draft"
    assert updated["published_at"] is None


def test_published_at_is_stamped_once(client, user_headers):
    post = _create(client, user_headers).json()["data"]
    url = f"/api/blog/posts/{post['id']}"

    before = utc_now_naive()
    published = client.put(url, json={"status": "published"}, headers=user_headers).json()["data"]
    after = utc_now_naive()
    first_stamp = published["published_at"]
    assert first_stamp is not None
    assert before <= as_naive_utc(first_stamp) <= after

    # content change keeps the stamp
    edited = client.put(url, json={"content": CONTENT + " amen"}, headers=user_headers).json()["data"]
    assert edited["published_at"] == first_stamp

    # back to draft then published again keeps the first stamp
    client.put(url, json={"status": "draft"}, headers=user_headers)
    republished = client.put(url, json={"status": "published"}, headers=user_headers).json()["data"]
    assert republished["published_at"] == first_stamp


def test_slug_change_to_taken_slug_is_refused(client, user_headers):
    _create(client, user_headers)
    second = _create(client, user_headers, slug="second-post").json()["data"]

    response = client.put(f"/api/blog/posts/{second['id']}", json={"slug": "welcome"}, headers=user_headers)

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "slug"


def test_only_author_or_admin_can_update(client, user_headers, other_headers, admin_headers):
    post = _create(client, user_headers).json()["data"]
    url = f"/api/blog/posts/{post['id']}"

    assert client.put(url, json={"title": "Hijacked"}, headers=other_headers).status_code == 403
    assert client.put(url, json={"title": "Edited by admin"}, headers=admin_headers).status_code == 200


def test_reads_count_views(client, user_headers):
    post = _create(client, user_headers, status="published").json()["data"]

    client.get(f"/api/blog/posts/{post['id']}", headers=user_headers)
    response = client.get("/api/blog/posts/slug/welcome")

    assert response.status_code == 200
    assert response.json()["data"]["views"] == 2


def test_published_listing_is_public_and_filters_by_tag(client, user_headers):
    _create(client, user_headers, status="published")
    _create(client, user_headers, slug="draft-post")
    _create(client, user_headers, slug="other-tag", status="published", tags=["youth"])

    response = client.get("/api/blog/posts/published", params={"tag": "news"})

    assert response.status_code == 200
    body = response.json()
    assert [p["slug"] for p in body["data"]] == ["welcome"]
    assert body["pagination"] == {"current": 1, "pages": 1, "total": 1}


def test_unknown_slug_is_not_found(client):
    assert client.get("/api/blog/posts/slug/missing").status_code == 404


def test_tag_filter_matches_accented_tags(client, user_headers):
    _create(client, user_headers, status="published", tags=["prière", "louange"])
    _create(client, user_headers, slug="other-post", status="published", tags=["priere"])

    response = client.get("/api/blog/posts/published", params={"tag": "prière"})

    body = response.json()
    assert [p["slug"] for p in body["data"]] == ["welcome"]
    assert body["pagination"]["total"] == 1
    assert body["data"][0]["tags"] == ["prière", "louange"]


def test_tag_filter_treats_wildcards_literally(client, user_headers):
    _create(client, user_headers, status="published", tags=["youth_camp"])
    _create(client, user_headers, slug="lookalike", status="published", tags=["youthXcamp"])
    _create(client, user_headers, slug="percent", status="published", tags=["100%"])

    def slugs(tag):
        return [p["slug"] for p in client.get("/api/blog/posts/published", params={"tag": tag}).json()["data"]]

    assert slugs("youth_camp") == ["welcome"]
    assert slugs("youth_") == []
    assert slugs("100%") == ["percent"]
    assert slugs("%") == []
