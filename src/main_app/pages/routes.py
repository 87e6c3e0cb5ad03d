"""
pages/routes.py - Pages Blueprint Routes

Routes for viewing, editing and saving wiki pages. Every route accepts both
GET and POST.
"""

from __future__ import annotations

from flask import (
    Response,
    abort,
    current_app,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_wtf.csrf import CSRFError, validate_csrf
from jinja2 import TemplateError
from werkzeug.wrappers import Response as WerkzeugResponse
from wtforms import ValidationError

from main_app.pages import bp
from extensions import get_repository
from pageops.errors import RenderError
from pageops.models import Page
from pageops.validation import match_page_path

# Type alias for route return values
RouteResponse = str | Response | WerkzeugResponse

METHODS = ["GET", "POST"]


def _get_identifier() -> str:
    """
    Extract the page identifier from the current request path.

    Aborts with a 404 response when the path does not match
    ``/(edit|save|view)/<id>`` with a 1 to 20 word character identifier, so
    callers never see an invalid identifier.

    Returns:
        str: The validated identifier.
    """
    check = match_page_path(request.path)
    if not check.ok:
        current_app.logger.debug("Rejected request path: %s", check.reason)
        abort(404)
    return check.identifier


def _require_csrf_token() -> None:
    """
    Validate the CSRF token for a request that changes a page.

    CSRFProtect only checks POST, but saves are also accepted over GET, so
    the token is checked here for every method. Disabled together with
    WTF_CSRF_ENABLED.

    Raises:
        CSRFError: if the token is missing or invalid (answered with 400).
    """
    if not current_app.config.get("WTF_CSRF_ENABLED", True):
        return

    field = current_app.config.get("WTF_CSRF_FIELD_NAME", "csrf_token")
    token = request.values.get(field) or request.headers.get("X-CSRFToken")
    try:
        validate_csrf(token)
    except ValidationError as e:
        raise CSRFError(e.args[0]) from e


def _render_page(template: str, page: Page) -> str:
    """
    Render a page template.

    Raises:
        RenderError: if the template cannot be loaded or rendered.
    """
    try:
        return render_template(template, page=page)
    except TemplateError as e:
        raise RenderError(f"cannot render template {template}: {e}") from e


@bp.route("/view/<path:page>", methods=METHODS)
def view_page(page: str) -> RouteResponse:
    """
    Render a page, or redirect to its edit form if it does not exist yet.

    Parameters:
        page (str): Raw path segment; the identifier is taken from the validated request path.
    """
    identifier = _get_identifier()

    found = get_repository().load(identifier)
    if found is None:
        return redirect(url_for("pages.edit_page", page=identifier))

    return _render_page("view.html", found)


@bp.route("/edit/<path:page>", methods=METHODS)
def edit_page(page: str) -> RouteResponse:
    """Render the edit form, pre-filled for an existing page or blank for a new one."""
    identifier = _get_identifier()

    found = get_repository().load(identifier)
    if found is None:
        found = Page(identifier=identifier)

    return _render_page("edit.html", found)


@bp.route("/save/<path:page>", methods=METHODS)
def save_page(page: str) -> RouteResponse:
    """
    Persist the submitted title and body, then redirect to the page view.

    A ``submit`` value of "Cancel" redirects without saving and needs no
    CSRF token; any other save does, whatever the method. Storage
    failures propagate to the StorageError handler, which answers 500 with
    the error text.
    """
    identifier = _get_identifier()

    if request.values.get("submit") == "Cancel":
        return redirect(url_for("pages.view_page", page=identifier))

    _require_csrf_token()

    updated = Page(
        identifier=identifier,
        title=request.values.get("title", "").strip(),
        body=request.values.get("body", ""),
    )
    get_repository().save(updated)
    current_app.logger.info("Saved page %s", identifier)

    return redirect(url_for("pages.view_page", page=identifier))
