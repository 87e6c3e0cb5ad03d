"""
main/routes.py - Main Blueprint Routes

Routes for navigation shortcuts and service health.
"""

from __future__ import annotations

from flask import (
    Response,
    current_app,
    jsonify,
    redirect,
    request,
    url_for,
)
from werkzeug.wrappers import Response as WerkzeugResponse

from main_app.main import bp
from pageops import __version__

# Type alias for route return values
RouteResponse = str | Response | WerkzeugResponse


def _front_page() -> str:
    return current_app.config.get("WIKI_FRONT_PAGE", "front")


@bp.route("/go/", methods=["GET", "POST"])
def go() -> RouteResponse:
    """
    Redirect to the page named by the ``title`` (or ``name``) parameter.

    Without a name, redirects to the configured front page. The name is not
    validated here; the view route rejects invalid identifiers with a 404.
    """
    target = request.values.get("title") or request.values.get("name")
    if not target:
        target = _front_page()
    return redirect(url_for("pages.view_page", page=target))


@bp.route("/")
def index() -> RouteResponse:
    """Send visitors to the front page."""
    return redirect(url_for("pages.view_page", page=_front_page()))


@bp.route("/health")
def health() -> Response:
    """
    Health check endpoint returning service status and metadata.

    Returns:
        Response: JSON object with keys:
            - "status": service health string (e.g., "healthy").
            - "service": service name.
            - "version": service version.
            - "storage": configured storage backend.
    """
    return jsonify({
        "status": "healthy",
        "service": "markwiki",
        "version": __version__,
        "storage": current_app.config.get("WIKI_STORAGE", "file"),
    })
