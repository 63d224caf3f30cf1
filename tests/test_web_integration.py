"""
Integration tests for the Flask application.

The app is built with the bundled catalog, a deterministic engine and a
scripted LLM provider, then exercised through the test client.
"""

import json

import pytest
from langchain_core.messages import AIMessage

from app.main import create_app
from catalog_service.catalog import CatalogProvider
from catalog_service.recommendations import RecommendationEngine

QUIZ_JSON = json.dumps({
    "question": "Which factor is something you have?",
    "options": ["Password", "Phone", "Fingerprint"],
    "correct_answer_index": 1,
})


@pytest.fixture
def client(catalog, assistant):
    app = create_app(
        catalog=catalog,
        assistant=assistant,
        recommendation_engine=RecommendationEngine(),
    )
    app.config['TESTING'] = True
    return app.test_client()


def _ids(items, key="id"):
    return [item[key] for item in items]


class TestHubRoutes:
    """Role, topic, series and archive hubs plus the roadmap."""

    def test_role_hub(self, client):
        resp = client.get("/hub/role/student")
        assert resp.status_code == 200
        data = resp.get_json()

        assert data["title"] == "Student Hub"
        assert _ids(data["articles"]) == ["7", "5", "1"]
        assert _ids(data["featured"]) == ["7", "5"]
        assert _ids(data["recommendations"], "article_id") == ["1", "5", "7"]
        assert data["learning_order"] == []

    def test_topic_hub_has_learning_order(self, client):
        data = client.get("/hub/topic/Basics").get_json()

        assert _ids(data["articles"]) == ["7", "6", "1"]
        assert data["learning_order"] == ["1", "7", "6"]
        [rec] = data["recommendations"]
        assert rec["article_id"] == "7"
        assert rec["score"] == 95.0

    def test_series_and_archive_hubs(self, client):
        series = client.get("/hub/series/Business%20Resilience").get_json()
        archive = client.get("/hub/archive/2023").get_json()

        assert sorted(_ids(series["articles"])) == ["2", "6"]
        assert series["recommendations"] == []
        assert _ids(archive["articles"]) == ["2", "1", "3"]

    def test_read_time_filter_and_pagination(self, client):
        short = client.get("/hub/role/student?read_time=short").get_json()
        paged = client.get("/hub/archive/2023?per_page=2&page=2").get_json()

        assert _ids(short["articles"]) == ["5"]
        assert _ids(paged["articles"]) == ["3"]
        assert paged["total_pages"] == 2
        assert paged["total_items"] == 3

    def test_hub_errors(self, client):
        assert client.get("/hub/planet/mars").status_code == 404
        assert client.get("/hub/role/robots").status_code == 404
        assert client.get("/hub/role/student?read_time=epic").status_code == 400

    def test_roadmap(self, client):
        paths = client.get("/roadmap").get_json()["paths"]
        student = client.get("/roadmap/student").get_json()

        assert len(paths) == 5
        assert student["role"] == "student"
        assert _ids(student["steps"]) == ["5", "1", "7"]
        assert client.get("/roadmap/robots").status_code == 404

    def test_topics_and_series(self, client):
        topics = client.get("/topics").get_json()["topics"]
        series = client.get("/series").get_json()["series"]

        assert topics[0] == {"name": "Basics", "count": 3}
        assert series == ["Account Security Essentials", "Business Resilience"]


class TestRecommendationApi:
    """JSON and query-string profile endpoints."""

    def test_post_profile(self, client):
        resp = client.post("/api/recommendations", json={
            "role": "student",
            "completed_article_ids": ["1"],
        })
        assert resp.status_code == 200
        data = resp.get_json()

        assert _ids(data["recommendations"], "article_id") == ["5", "7"]
        assert data["trace"]["filtered_ids"] == ["1"]
        assert data["trace"]["audience_filtered_ids"] == ["2", "3", "4", "6"]
        assert set(data["trace"]["scores"]) == {"5", "7"}

    def test_get_profile_from_query(self, client):
        data = client.get("/api/recommendations?role=business&topic=Ransomware").get_json()
        recs = data["recommendations"]

        assert _ids(recs, "article_id") == ["2", "6", "7"]
        assert recs[0]["reason"] == "Perfect for businesss"
        assert recs[0]["score"] == 80.0
        assert recs[0]["next_step"] == "Learn about Ransomware"

    def test_comma_separated_query_values(self, client):
        data = client.get("/api/recommendations?role=student&completed=1,5").get_json()

        assert _ids(data["recommendations"], "article_id") == ["7"]
        assert sorted(data["trace"]["filtered_ids"]) == ["1", "5"]

    def test_invalid_profile_is_rejected(self, client):
        resp = client.post("/api/recommendations", json={"role": "robot"})
        assert resp.status_code == 400
        data = resp.get_json()
        assert data["error"] == "Invalid profile"
        assert any(message.startswith("role") for message in data["messages"])

        assert client.post("/api/recommendations", json=["student"]).status_code == 400
        assert client.get("/api/recommendations?language=klingon").status_code == 400

    def test_empty_body_means_wildcard_visitor(self, client):
        data = client.post("/api/recommendations", json={}).get_json()

        assert _ids(data["recommendations"], "article_id") == ["7"]


class TestArticleDetail:
    """Article pages, reading levels and quizzes."""

    def test_default_level(self, client):
        data = client.get("/article/1").get_json()

        assert data["content_source"] == "original"
        assert data["available_levels"] == ["default", "beginner", "advanced"]
        assert "<h2" in data["html_content"]
        assert _ids(data["related"]) == ["7", "5", "6"]

    def test_prewritten_level(self, client, fake_llm):
        data = client.get("/article/1?level=beginner").get_json()

        assert data["content_source"] == "prewritten"
        fake_llm.complete.assert_not_called()

    def test_adapted_level(self, client, fake_llm):
        fake_llm.complete.return_value = "## Simple Version\n\nBack up your files."

        data = client.get("/article/2?level=beginner").get_json()

        assert data["content_source"] == "adapted"
        assert "Simple Version" in data["html_content"]

    def test_adaptation_failure_serves_original(self, client, fake_llm):
        fake_llm.complete.side_effect = RuntimeError("down")

        data = client.get("/article/2?level=advanced").get_json()

        assert data["content_source"] == "original"

    def test_detail_errors(self, client):
        assert client.get("/article/1?level=expert").status_code == 400
        assert client.get("/article/99").status_code == 404
        assert client.get("/article/99/quiz").status_code == 404

    def test_quiz(self, client, fake_llm):
        fake_llm.complete.return_value = QUIZ_JSON

        data = client.get("/article/7/quiz").get_json()

        assert data["article_id"] == "7"
        assert data["quiz"]["correct_answer_index"] == 1

    def test_quiz_unavailable(self, client, fake_llm):
        fake_llm.complete.side_effect = RuntimeError("down")

        assert client.get("/article/7/quiz").status_code == 503


class TestSearchAndAssistant:
    """Search endpoints and assistant chat."""

    def test_search(self, client, fake_llm):
        fake_llm.complete.return_value = '{"relevant_article_ids": ["5", "1"]}'

        data = client.get("/search/?q=email scams").get_json()

        assert data["total"] == 2
        assert _ids(data["results"]) == ["5", "1"]
        assert [r["rank"] for r in data["results"]] == [1, 2]

    def test_empty_search(self, client, fake_llm):
        data = client.get("/search/?q=").get_json()

        assert data["results"] == []
        fake_llm.complete.assert_not_called()

    def test_suggest(self, client):
        data = client.get("/search/suggest?q=ph").get_json()

        assert data["suggestions"] == ["Phishing", "Phishing 101: Don't"]

    def test_chat(self, client, fake_llm):
        fake_llm.invoke.return_value = AIMessage(content="Enable MFA first.\nRECOMMENDED: [7]")

        resp = client.post("/assistant/chat", json={"message": "Where do I start?", "role": "parent"})

        assert resp.status_code == 200
        assert resp.get_json() == {"text": "Enable MFA first.", "recommended_article_ids": ["7"]}

    def test_chat_validation(self, client):
        assert client.post("/assistant/chat", json={"message": "  "}).status_code == 400
        assert client.post("/assistant/chat", json={"message": "hi", "role": "pirate"}).status_code == 400

    def test_greeting(self, client):
        assert "assistant" in client.get("/assistant/greeting").get_json()["text"]


class TestAppRoutes:
    """Catalog listing, sitemap, health and error handling."""

    def test_articles_listing(self, client):
        data = client.get("/api/articles").get_json()

        assert data["total"] == 7
        assert _ids(data["articles"]) == ["1", "2", "3", "4", "7", "5", "6"]

    def test_sitemap(self, client):
        resp = client.get("/sitemap.xml")

        assert resp.status_code == 200
        assert resp.headers["Content-Type"].startswith("application/xml")
        assert b"/article/5" in resp.data

    def test_health(self, client):
        assert client.get("/actuator/health").get_json()["status"] == "UP"

    def test_missing_catalog_returns_503(self, tmp_path, assistant):
        app = create_app(
            catalog=CatalogProvider(tmp_path / "missing.json"),
            assistant=assistant,
            recommendation_engine=RecommendationEngine(),
        )
        client = app.test_client()

        resp = client.get("/api/articles")

        assert resp.status_code == 503
        assert resp.get_json()["error"] == "Catalog unavailable"
        assert client.get("/api/recommendations").status_code == 503

    def test_undecodable_catalog_returns_503(self, tmp_path, assistant):
        path = tmp_path / "catalog.json"
        path.write_bytes(b'\xff\xfe{}')
        app = create_app(
            catalog=CatalogProvider(path),
            assistant=assistant,
            recommendation_engine=RecommendationEngine(),
        )
        client = app.test_client()

        resp = client.get("/api/articles")

        assert resp.status_code == 503
        assert resp.get_json()["error"] == "Catalog unavailable"
        assert client.get("/hub/role/student").status_code == 503
