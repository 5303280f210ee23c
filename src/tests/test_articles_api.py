"""Article API tests: CRUD, envelope, pagination and error mapping."""

from __future__ import annotations

from unittest import mock

from rest_framework.test import APIClient

from core.repository import RepositoryUnavailable, new_record_id
from tests.utils import ContentTestCase, article_payload


class ArticleAPITests(ContentTestCase):
    """Exercise /api/articles/ against the in-memory repository."""

    def setUp(self):
        super().setUp()
        self.client = APIClient()

    def _create(self, **overrides):
        response = self.client.post("/api/articles/", article_payload(**overrides), format="json")
        self.assertEqual(response.status_code, 201, response.data)
        return response.data["data"]

    def _list(self, **params):
        response = self.client.get("/api/articles/", params)
        self.assertEqual(response.status_code, 200, response.data)
        return response.data["data"]

    def test_create_then_fetch_returns_supplied_fields(self):
        payload = article_payload(slug="local-elections")
        created = self.client.post("/api/articles/", payload, format="json")
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.data["errors"], [])

        article_id = created.data["data"]["id"]
        fetched = self.client.get(f"/api/articles/{article_id}/")
        self.assertEqual(fetched.status_code, 200)
        data = fetched.data["data"]

        for field in ("title", "slug", "summary", "category", "author_id", "tags", "cover_image", "status"):
            self.assertEqual(data[field], payload[field], field)
        self.assertEqual(data["content_blocks"], payload["content_blocks"])
        self.assertTrue(data["id"])
        self.assertIsNotNone(data["created_at"])
        self.assertEqual(data["created_at"], data["updated_at"])

    def test_create_derives_slug_from_title_and_defaults(self):
        payload = article_payload(title="Budget Day: What Changed?")
        for optional in ("tags", "content_blocks", "status", "cover_image"):
            del payload[optional]

        response = self.client.post("/api/articles/", payload, format="json")

        self.assertEqual(response.status_code, 201)
        data = response.data["data"]

        self.assertEqual(data["slug"], "budget-day-what-changed")
        self.assertEqual(data["tags"], [])
        self.assertEqual(data["content_blocks"], [])
        self.assertEqual(data["status"], "draft")

    def test_create_missing_required_fields_returns_400(self):
        response = self.client.post("/api/articles/", {"title": "Only a title"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertIsNone(response.data["data"])
        errors = response.data["errors"][0]
        for field in ("summary", "category", "author_id"):
            self.assertIn(field, errors)

    def test_create_rejects_unknown_status_and_block_type(self):
        response = self.client.post("/api/articles/", article_payload(status="deleted"), format="json")
        self.assertEqual(response.status_code, 400)

        response = self.client.post(
            "/api/articles/",
            article_payload(content_blocks=[{"type": "audio", "data": "x"}]),
            format="json",
        )
        self.assertEqual(response.status_code, 400)

    def test_media_block_requires_url(self):
        response = self.client.post(
            "/api/articles/",
            article_payload(content_blocks=[{"type": "image", "data": {"caption": "no url"}}]),
            format="json",
        )
        self.assertEqual(response.status_code, 400)

    def test_duplicate_slug_returns_409_and_keeps_one_record(self):
        self._create(slug="same-slug")

        response = self.client.post("/api/articles/", article_payload(slug="same-slug", title="Other"), format="json")

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data["errors"], ["Article with this slug already exists"])
        listing = self._list()
        self.assertEqual(listing["pagination"]["total"], 1)
        self.assertEqual(listing["articles"][0]["title"], "Local Elections Explained")

    def test_partial_update_changes_only_supplied_fields(self):
        original = self._create(slug="partial")

        response = self.client.patch(f"/api/articles/{original['id']}/", {"title": "New title"}, format="json")

        self.assertEqual(response.status_code, 200)
        updated = response.data["data"]
        self.assertEqual(updated["title"], "New title")
        for field in ("slug", "summary", "category", "author_id", "tags", "cover_image", "content_blocks", "status"):
            self.assertEqual(updated[field], original[field], field)
        self.assertEqual(updated["created_at"], original["created_at"])
        self.assertGreaterEqual(updated["updated_at"], original["updated_at"])

    def test_put_merges_like_patch(self):
        original = self._create(slug="put-merge")

        response = self.client.put(f"/api/articles/{original['id']}/", {"status": "archived"}, format="json")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["data"]["status"], "archived")
        self.assertEqual(response.data["data"]["title"], original["title"])

    def test_update_can_clear_optional_fields(self):
        original = self._create(slug="clearable")

        response = self.client.patch(
            f"/api/articles/{original['id']}/",
            {"tags": [], "cover_image": "", "content_blocks": []},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        data = response.data["data"]
        self.assertEqual(data["tags"], [])
        self.assertEqual(data["cover_image"], "")
        self.assertEqual(data["content_blocks"], [])

    def test_update_rejects_blank_required_fields(self):
        original = self._create(slug="strict")

        for payload in ({"title": ""}, {"summary": ""}, {"slug": ""}):
            response = self.client.patch(f"/api/articles/{original['id']}/", payload, format="json")
            self.assertEqual(response.status_code, 400, payload)

        fetched = self.client.get(f"/api/articles/{original['id']}/").data["data"]
        self.assertEqual(fetched["title"], original["title"])
        self.assertEqual(fetched["slug"], "strict")

    def test_update_to_taken_slug_returns_409(self):
        self._create(slug="taken")
        other = self._create(slug="free")

        response = self.client.patch(f"/api/articles/{other['id']}/", {"slug": "taken"}, format="json")

        self.assertEqual(response.status_code, 409)

    def test_update_keeping_own_slug_is_allowed(self):
        article = self._create(slug="mine")

        response = self.client.patch(f"/api/articles/{article['id']}/", {"slug": "mine", "title": "T"}, format="json")

        self.assertEqual(response.status_code, 200)

    def test_update_missing_article_returns_404(self):
        response = self.client.patch(f"/api/articles/{new_record_id()}/", {"title": "x"}, format="json")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["errors"], ["Article not found"])

    def test_delete_removes_article(self):
        article = self._create()

        response = self.client.delete(f"/api/articles/{article['id']}/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["data"], {"message": "Article deleted successfully"})
        self.assertEqual(self.client.get(f"/api/articles/{article['id']}/").status_code, 404)

    def test_delete_missing_article_returns_404_and_leaves_store(self):
        self._create()

        response = self.client.delete(f"/api/articles/{new_record_id()}/")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(self._list()["pagination"]["total"], 1)

    def test_routes_answer_without_trailing_slash(self):
        created = self.client.post("/api/articles", article_payload(slug="no-slash"), format="json")
        self.assertEqual(created.status_code, 201)
        article_id = created.data["data"]["id"]

        listed = self.client.get("/api/articles", {"status": "published"})
        self.assertEqual(listed.status_code, 200)
        self.assertEqual([a["slug"] for a in listed.data["data"]["articles"]], ["no-slash"])

        fetched = self.client.get(f"/api/articles/{article_id}")
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.data["data"]["slug"], "no-slash")

        updated = self.client.put(f"/api/articles/{article_id}", {"title": "No Slash"}, format="json")
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.data["data"]["title"], "No Slash")

        patched = self.client.patch(f"/api/articles/{article_id}", {"category": "Local"}, format="json")
        self.assertEqual(patched.status_code, 200)

        deleted = self.client.delete(f"/api/articles/{article_id}")
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(self.client.get(f"/api/articles/{article_id}").status_code, 404)

    def test_malformed_id_is_not_found(self):
        response = self.client.get("/api/articles/not-an-id/")

        self.assertEqual(response.status_code, 404)

    def test_pagination_returns_second_article_in_sort_order(self):
        self._create(slug="first", title="First")
        self._create(slug="second", title="Second")
        self._create(slug="third", title="Third")

        data = self._list(page=2, limit=1)

        self.assertEqual([a["slug"] for a in data["articles"]], ["second"])
        self.assertEqual(data["pagination"], {"page": 2, "limit": 1, "total": 3, "pages": 3})

    def test_list_is_newest_first_with_default_limit(self):
        for i in range(12):
            self._create(slug=f"article-{i}", title=f"Article {i}")

        data = self._list()

        self.assertEqual(len(data["articles"]), 10)
        self.assertEqual(data["articles"][0]["slug"], "article-11")
        self.assertEqual(data["pagination"]["pages"], 2)

    def test_list_filters_by_category_status_and_search(self):
        self._create(slug="pol", category="Politics", status="published", title="Council vote")
        self._create(slug="tech", category="Technology", status="draft", title="Chip shortage")
        self._create(slug="tech-2", category="Technology", status="published", title="Quantum leap")

        self.assertEqual([a["slug"] for a in self._list(category="Technology")["articles"]], ["tech-2", "tech"])
        self.assertEqual([a["slug"] for a in self._list(status="draft")["articles"]], ["tech"])
        self.assertEqual([a["slug"] for a in self._list(search="quantum")["articles"]], ["tech-2"])
        self.assertEqual(self._list(category="Sports")["articles"], [])

    def test_list_rejects_invalid_query(self):
        self.assertEqual(self.client.get("/api/articles/", {"limit": 0}).status_code, 400)
        self.assertEqual(self.client.get("/api/articles/", {"page": "abc"}).status_code, 400)
        self.assertEqual(self.client.get("/api/articles/", {"status": "gone"}).status_code, 400)

    def test_store_failure_returns_enveloped_500(self):
        with mock.patch("articles.services.list_articles", side_effect=RepositoryUnavailable("timed out")):
            response = self.client.get("/api/articles/")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data, {"data": None, "errors": ["Internal server error"]})

    def test_unexpected_error_returns_enveloped_500(self):
        with mock.patch("articles.services.get_article", side_effect=RuntimeError("boom")):
            response = self.client.get(f"/api/articles/{new_record_id()}/")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["errors"], ["Internal server error"])

    def test_malformed_json_returns_400(self):
        response = self.client.post("/api/articles/", "{not json", content_type="application/json")

        self.assertEqual(response.status_code, 400)
        self.assertIsNone(response.data["data"])
