"""
OAuth callback route.

Every path is routed here so that a single handler decides between the
callback pages and the informational 404 page.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from callback_server.config import Settings, get_settings
from callback_server.services.callback_page_service import handle_callback

router = APIRouter(tags=["oauth-callback"])

_HANDLED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _raw_path(request: Request) -> str:
    """
    Path as sent on the request line, still percent-encoded.

    Starlette's request.url.path is decoded, which would let /auth%2Fcallback
    match the callback route.
    """
    raw_path = request.scope.get("raw_path")
    if raw_path is None:
        return request.scope["path"]
    # Some servers include the query string in raw_path
    return raw_path.split(b"?", 1)[0].decode("latin-1")


def _first_query_values(request: Request) -> dict[str, str]:
    """Collapse repeated query keys to their first value."""
    params = request.query_params
    return {key: params.getlist(key)[0] for key in params.keys()}


@router.api_route("/{full_path:path}", methods=_HANDLED_METHODS, response_class=HTMLResponse)
async def oauth_callback(
    request: Request, settings: Settings = Depends(get_settings)
) -> HTMLResponse:
    """
    Render the page for an OAuth redirect (or any other request).

    Returns:
        200: authorization code received
        400: provider returned an error, or no code at all
        404: request was not for the callback route
    """
    page = handle_callback(
        _raw_path(request),
        _first_query_values(request),
        settings=settings,
    )
    return HTMLResponse(content=page.html, status_code=page.status_code)
