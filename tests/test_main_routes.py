"""
tests/test_main_routes.py - Tests for main blueprint routes

Tests for the /go/ shortcut, the landing page, and the health check.
"""

from __future__ import annotations

import pytest


class TestGoRoute:
    """Tests for the /go/ route."""

    def test_go_with_title(self, client):
        response = client.get("/go/?title=front", follow_redirects=False)
        assert response.status_code == 302
        assert response.location.endswith("/view/front")

    def test_go_without_title_uses_front_page(self, client):
        """Test that /go/ with no query redirects to the default page."""
        response = client.get("/go/", follow_redirects=False)
        assert response.status_code == 302
        assert response.location.endswith("/view/front")

    def test_go_with_empty_title_uses_front_page(self, client):
        response = client.get("/go/?title=", follow_redirects=False)
        assert response.location.endswith("/view/front")

    def test_go_with_name(self, client):
        response = client.get("/go/?name=notes", follow_redirects=False)
        assert response.status_code == 302
        assert response.location.endswith("/view/notes")

    def test_go_title_wins_over_name(self, client):
        response = client.get("/go/?title=first&name=second", follow_redirects=False)
        assert response.location.endswith("/view/first")

    def test_go_with_form_post(self, client):
        response = client.post("/go/", data={"title": "posted"}, follow_redirects=False)
        assert response.status_code == 302
        assert response.location.endswith("/view/posted")

    def test_go_to_missing_page_ends_at_edit(self, client):
        response = client.get("/go/?title=brandnew", follow_redirects=True)
        assert response.status_code == 200
        assert response.request.path == "/edit/brandnew"

    def test_go_to_invalid_name_ends_at_404(self, client):
        response = client.get("/go/?title=not-valid", follow_redirects=True)
        assert response.status_code == 404

    def test_go_uses_configured_front_page(self, app, client):
        app.config["WIKI_FRONT_PAGE"] = "home"
        response = client.get("/go/", follow_redirects=False)
        assert response.location.endswith("/view/home")


class TestIndexRoute:
    """Tests for the / route."""

    def test_index_redirects_to_front_page(self, client):
        response = client.get("/", follow_redirects=False)
        assert response.status_code == 302
        assert response.location.endswith("/view/front")


class TestHealthRoute:
    """Tests for the /health endpoint."""

    def test_health_returns_json(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.content_type == "application/json"

    def test_health_fields(self, app, client):
        data = client.get("/health").get_json()
        assert data["status"] == "healthy"
        assert data["service"] == "markwiki"
        assert isinstance(data["version"], str)
        assert data["storage"] == app.config["WIKI_STORAGE"]


class TestStaticFiles:
    """Tests for static asset serving."""

    def test_stylesheet_served(self, client):
        response = client.get("/static/style.css")
        assert response.status_code == 200
        assert b"font-family" in response.data
        response.close()

    def test_missing_asset_404(self, client):
        assert client.get("/static/nope.css").status_code == 404

    @pytest.mark.parametrize("path", ["/static/../config.py", "/static/%2e%2e/config.py"])
    def test_no_traversal(self, client, path):
        assert client.get(path).status_code == 404
