"""
EcoRoute API Tests - Search suggestions endpoints
1. GET /api/search-suggestions - gazetteer + trip history + AI (JSON prompt)
2. GET /api/search - gazetteer + AI (free-text prompt)
3. Rate limiting falls back to gazetteer results with rateLimited flag
4. Failures never surface as HTTP errors
"""
from core.dependencies import get_completion_provider, get_trip_store
from providers import InMemoryTripStore, MockCompletionProvider, ProviderError


class TestHealthCheck:
    """Basic health check"""

    def test_api_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "EcoRoute API"


class TestSearchSuggestionsEndpoint:
    """Test GET /api/search-suggestions"""

    def test_empty_query(self, client):
        response = client.get("/api/search-suggestions")
        assert response.status_code == 200
        assert response.json() == {"suggestions": []}

    def test_single_character_query(self, client, trip_store, provider):
        response = client.get("/api/search-suggestions", params={"q": "d"})
        assert response.status_code == 200
        suggestions = response.json()["suggestions"]
        assert suggestions
        assert all(s["id"].startswith("static-") for s in suggestions)
        assert trip_store.calls == 0
        assert provider.prompts == []

    def test_calif_returns_static_california_first(self, client):
        response = client.get("/api/search-suggestions", params={"q": "calif"})
        assert response.status_code == 200
        data = response.json()
        assert "rateLimited" not in data

        first = data["suggestions"][0]
        assert first == {
            "id": "static-state-4",
            "label": "California",
            "destination": "California",
            "type": "state"
        }
        assert [s["label"] for s in data["suggestions"]].count("California") == 1

    def test_response_shape(self, client):
        response = client.get("/api/search-suggestions", params={"q": "boston"})
        assert response.status_code == 200
        suggestions = response.json()["suggestions"]
        assert 0 < len(suggestions) <= 10

        for suggestion in suggestions:
            assert set(suggestion) <= {"id", "label", "origin", "destination", "type", "description"}
            assert suggestion["label"]
            assert suggestion["type"] in {"state", "city", "route", "destination"}
            if suggestion["type"] == "route":
                assert suggestion["origin"].lower() != suggestion["destination"].lower()

        history = [s for s in suggestions if s["id"].startswith("db:")]
        assert {s["label"] for s in history} == {
            "Seattle → Boston", "Boston → Chicago", "Boston → New York"
        }

    def test_descriptions_from_ai(self, client):
        response = client.get("/api/search-suggestions", params={"q": "yosemite"})
        suggestions = response.json()["suggestions"]
        park = next(s for s in suggestions if s["label"] == "Yosemite National Park")
        assert park["type"] == "destination"
        assert park["description"].startswith("Iconic park")

    def test_rate_limit_falls_back_to_gazetteer(self, client):
        headers = {"X-Forwarded-For": "203.0.113.9"}
        for _ in range(10):
            response = client.get("/api/search-suggestions", params={"q": "boston"}, headers=headers)
            assert "rateLimited" not in response.json()

        response = client.get("/api/search-suggestions", params={"q": "boston"}, headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["rateLimited"] is True
        assert [s["label"] for s in data["suggestions"]] == ["Boston"]

        # another client is unaffected
        other = client.get("/api/search-suggestions", params={"q": "boston"},
                           headers={"X-Forwarded-For": "198.51.100.1"})
        assert "rateLimited" not in other.json()

    def test_all_sources_failing_is_still_200(self, app, client):
        app.dependency_overrides[get_trip_store] = lambda: InMemoryTripStore(fail_with=RuntimeError("down"))
        app.dependency_overrides[get_completion_provider] = lambda: MockCompletionProvider(
            fail_with=ProviderError("OpenAI rate limit exceeded", status_code=429)
        )

        response = client.get("/api/search-suggestions", params={"q": "xyz123notreal"})
        assert response.status_code == 200
        assert response.json() == {"suggestions": []}

    def test_overlong_query_is_still_200(self, client):
        response = client.get("/api/search-suggestions", params={"q": "a" * 201})
        assert response.status_code == 200
        assert isinstance(response.json()["suggestions"], list)

        response = client.get("/api/search", params={"q": "boston" + "x" * 500})
        assert response.status_code == 200
        assert isinstance(response.json()["suggestions"], list)

    def test_fallback_mode_without_credentials(self, app, client):
        app.dependency_overrides[get_completion_provider] = lambda: None

        response = client.get("/api/search-suggestions", params={"q": "Denver"})
        labels = [s["label"] for s in response.json()["suggestions"]]
        assert "Denver → Boston (train)" in labels
        assert "Denver → New York (bus)" in labels


class TestSearchEndpoint:
    """Test GET /api/search"""

    def test_short_query_returns_empty(self, client):
        response = client.get("/api/search", params={"q": "s"})
        assert response.status_code == 200
        assert response.json() == {"suggestions": []}

    def test_free_text_suggestions(self, client, trip_store):
        response = client.get("/api/search", params={"q": "seattle"})
        assert response.status_code == 200
        labels = [s["label"] for s in response.json()["suggestions"]]
        assert labels[0] == "Seattle"
        assert "Seattle → Portland (train)" in labels
        assert "Lake Tahoe" in labels
        # history is not consulted by quick search
        assert trip_store.calls == 0

    def test_gazetteer_limit(self, app, client):
        app.dependency_overrides[get_completion_provider] = lambda: MockCompletionProvider(
            fail_with=ProviderError("down")
        )
        response = client.get("/api/search", params={"q": "an"})
        assert len(response.json()["suggestions"]) == 5

    def test_separate_quota(self, client):
        headers = {"X-Forwarded-For": "192.0.2.44"}
        for _ in range(10):
            client.get("/api/search-suggestions", params={"q": "boston"}, headers=headers)

        # search-suggestions quota is used up, search still has its own
        response = client.get("/api/search", params={"q": "boston"}, headers=headers)
        assert "rateLimited" not in response.json()

        for _ in range(14):
            client.get("/api/search", params={"q": "boston"}, headers=headers)
        response = client.get("/api/search", params={"q": "boston"}, headers=headers)
        assert response.json()["rateLimited"] is True
