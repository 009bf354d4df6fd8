"""
web/routes.py -- Jinja2 template routes for the AuthGate web UI.

These routes serve server-rendered HTML. The login form itself posts JSON to
POST /api/login from the browser; these routes only render pages and manage
the cookie on logout.

Routes:
  GET /        -- authenticated status page with links to the linked apps
  GET /login   -- login form (optional ?returnTo= forwarded to /api/login)
  GET /logout  -- clear the session cookie, redirect /login

GET / also accepts ?token= so an app on another domain can hand the user back
with the token in the URL. The app links on the status page carry the token
the same way.
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from auth.dependencies import extract_token, try_get_claims
from auth.tokens import clear_session_cookie
from core.config import get_settings

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
router = APIRouter()


def _app_links(token: str) -> list[dict]:
    """Return the linked apps as label/href pairs with the token appended."""
    links = []
    for label, url in get_settings().linked_apps.items():
        sep = "&" if "?" in url else "?"
        links.append({"label": label, "href": f"{url}{sep}token={token}"})
    return links


@router.get("/", response_class=HTMLResponse)
def status_page(request: Request) -> HTMLResponse:
    claims = try_get_claims(request, allow_query=True)
    if claims is None:
        return RedirectResponse("/login", status_code=302)

    return templates.TemplateResponse(
        request,
        "status.html",
        {
            "name": claims.get("name") or get_settings().owner_name,
            "apps": _app_links(extract_token(request, allow_query=True)),
        },
    )


@router.get("/login", response_class=HTMLResponse)
def login_form(request: Request) -> HTMLResponse:
    """Render the password form. returnTo is escaped by Jinja2 autoescaping."""
    return templates.TemplateResponse(
        request,
        "login.html",
        {"return_to": request.query_params.get("returnTo", "")},
    )


@router.get("/logout")
def logout(request: Request) -> RedirectResponse:
    """Clear the shared session cookie and redirect to the login page."""
    resp = RedirectResponse("/login", status_code=302)
    clear_session_cookie(resp)
    return resp
