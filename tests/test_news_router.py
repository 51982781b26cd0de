import pytest


ADMIN = {"user-id": "1"}


@pytest.fixture
def admin_and_member(register_user):
    """첫 번째 가입자는 관리자"""
    return register_user("admin"), register_user("member")


def create_article(client, title, is_published, **extra):
    response = client.post(
        "/api/news",
        json={
            "title": title,
            "content": f"{title} body",
            "is_published": is_published,
            **extra,
        },
        headers=ADMIN,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["article"]


class TestNewsRoutes:
    def test_only_published_articles_are_listed(self, client, admin_and_member):
        published = create_article(client, "Launch", True, tags=["launch"])
        create_article(client, "Draft", False)

        response = client.get("/api/news")

        assert response.status_code == 200
        articles = response.json()["data"]["articles"]
        assert [a["id"] for a in articles] == [published["id"]]
        assert articles[0]["tags"] == ["launch"]

    def test_list_newest_first_with_limit(self, client, admin_and_member):
        create_article(client, "Old", True, publish_date="2024-01-01T00:00:00")
        newest = create_article(client, "New", True, publish_date="2024-06-01T00:00:00")

        response = client.get("/api/news?limit=1")

        assert [a["id"] for a in response.json()["data"]["articles"]] == [newest["id"]]

    def test_unpublished_article_visible_to_admin_only(self, client, admin_and_member):
        _, member = admin_and_member
        draft = create_article(client, "Draft", False)
        url = f"/api/news/{draft['id']}"

        anonymous = client.get(url)
        as_member = client.get(url, headers={"user-id": str(member["id"])})
        as_admin = client.get(url, headers=ADMIN)

        assert anonymous.status_code == 404
        assert as_member.status_code == 404
        assert as_admin.status_code == 200
        assert as_admin.json()["data"]["article"]["title"] == "Draft"

    def test_missing_article(self, client):
        response = client.get("/api/news/999")

        assert response.status_code == 404
        assert response.json()["error"]["details"]["code"] == "NEWS_001"

    def test_create_requires_admin(self, client, admin_and_member):
        _, member = admin_and_member
        payload = {"title": "Hack", "content": "nope"}

        as_member = client.post(
            "/api/news", json=payload, headers={"user-id": str(member["id"])}
        )
        anonymous = client.post("/api/news", json=payload)

        assert as_member.status_code == 403
        assert anonymous.status_code == 401

    def test_admin_publishes_draft(self, client, admin_and_member):
        draft = create_article(client, "Draft", False)

        patched = client.patch(
            f"/api/admin/news/{draft['id']}",
            json={"is_published": True},
            headers=ADMIN,
        )
        listed = client.get("/api/news")

        assert patched.status_code == 200
        assert patched.json()["data"]["article"]["is_published"] is True
        assert [a["id"] for a in listed.json()["data"]["articles"]] == [draft["id"]]

    def test_admin_lists_drafts(self, client, admin_and_member):
        create_article(client, "Draft", False)
        create_article(client, "Live", True)

        response = client.get("/api/admin/news", headers=ADMIN)

        assert len(response.json()["data"]["articles"]) == 2

    def test_admin_patch_ignores_null_fields(self, client, admin_and_member):
        draft = create_article(client, "Draft", False)

        response = client.patch(
            f"/api/admin/news/{draft['id']}",
            json={"title": None, "is_published": None, "summary": "short"},
            headers=ADMIN,
        )

        assert response.status_code == 200
        article = response.json()["data"]["article"]
        assert article["title"] == "Draft"
        assert article["is_published"] is False
        assert article["summary"] == "short"
