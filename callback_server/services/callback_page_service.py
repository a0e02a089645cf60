"""
Callback page service - turns an OAuth redirect into the page shown to the operator.

The provider redirects the browser to the callback route with either
``?code=...`` or ``?error=...``. Nothing is exchanged or stored here: the code
is displayed so it can be pasted into the downstream completion tool.
"""

from collections.abc import Callable, Mapping

from fastapi import status

from callback_server.config import Settings
from callback_server.infrastructure.observability.logging import get_logger
from callback_server.models.domain.callback_domain import (
    CallbackOutcome,
    CallbackPage,
    CallbackRequest,
)
from callback_server.utils.html import escape_html

logger = get_logger(__name__)

_CODE_BLOCK_STYLE = (
    "background: #f0f0f0; padding: 10px; border-radius: 5px; "
    "font-family: monospace; font-size: 14px; word-break: break-all; margin: 10px 0;"
)

# Fixed script: selects the code block so the operator can copy it straight away
AUTO_SELECT_SCRIPT = """<script>
      document.addEventListener('DOMContentLoaded', function() {
        const codeDiv = document.getElementById('auth-code');
        if (codeDiv) {
          const range = document.createRange();
          range.selectNode(codeDiv);
          window.getSelection().removeAllRanges();
          window.getSelection().addRange(range);
        }
      });
    </script>"""


def _document(title: str, body: str) -> str:
    return (
        "<!doctype html>\n"
        "<html>\n"
        f"  <head><meta charset=\"utf-8\"><title>{title}</title></head>\n"
        "  <body>\n"
        f"    {body}\n"
        "  </body>\n"
        "</html>\n"
    )


def _render_not_found(request: CallbackRequest, settings: Settings) -> CallbackPage:
    title = "Not Found"
    body = (
        "<h1>404 - Not Found</h1>\n"
        f"    <p>This is the OAuth callback server for {escape_html(settings.SERVICE_NAME)}.</p>\n"
        "    <p>The correct callback URL is: "
        f"<code>{escape_html(settings.callback_url())}</code></p>"
    )
    return CallbackPage(
        outcome=CallbackOutcome.NOT_FOUND,
        status_code=status.HTTP_404_NOT_FOUND,
        title=title,
        html=_document(title, body),
    )


def _render_upstream_error(request: CallbackRequest, settings: Settings) -> CallbackPage:
    title = "Authentication Error"
    body = (
        "<h1>Authentication Error</h1>\n"
        f"    <p>Error: {escape_html(request.error)}</p>\n"
        "    <p>You can close this window and try again.</p>"
    )
    return CallbackPage(
        outcome=CallbackOutcome.UPSTREAM_ERROR,
        status_code=status.HTTP_400_BAD_REQUEST,
        title=title,
        html=_document(title, body),
    )


def _render_code_received(request: CallbackRequest, settings: Settings) -> CallbackPage:
    title = "Authentication Success"
    body = (
        "<h1>Authentication Successful!</h1>\n"
        "    <p>Copy this authorization code:</p>\n"
        f"    <div id=\"auth-code\" style=\"{_CODE_BLOCK_STYLE}\">{escape_html(request.code)}</div>\n"
        f"    <p>Use this code with the <code>{escape_html(settings.COMPLETION_TOOL)}</code> "
        f"tool in your {escape_html(settings.SERVICE_NAME)}.</p>\n"
        "    <p>You can close this window now.</p>\n"
        f"    {AUTO_SELECT_SCRIPT}"
    )
    return CallbackPage(
        outcome=CallbackOutcome.CODE_RECEIVED,
        status_code=status.HTTP_200_OK,
        title=title,
        html=_document(title, body),
    )


def _render_no_code(request: CallbackRequest, settings: Settings) -> CallbackPage:
    title = "Authentication Error"
    body = (
        "<h1>Authentication Error</h1>\n"
        "    <p>No authorization code received.</p>\n"
        "    <p>You can close this window and try again.</p>"
    )
    return CallbackPage(
        outcome=CallbackOutcome.NO_CODE_RECEIVED,
        status_code=status.HTTP_400_BAD_REQUEST,
        title=title,
        html=_document(title, body),
    )


_RENDERERS: dict[CallbackOutcome, Callable[[CallbackRequest, Settings], CallbackPage]] = {
    CallbackOutcome.NOT_FOUND: _render_not_found,
    CallbackOutcome.UPSTREAM_ERROR: _render_upstream_error,
    CallbackOutcome.CODE_RECEIVED: _render_code_received,
    CallbackOutcome.NO_CODE_RECEIVED: _render_no_code,
}


def render_callback_page(request: CallbackRequest, settings: Settings) -> CallbackPage:
    """Render the page for an already-parsed callback request."""
    outcome = request.classify(settings.CALLBACK_PATH)
    page = _RENDERERS[outcome](request, settings)

    # Never log the code itself, only that one arrived
    if outcome is CallbackOutcome.CODE_RECEIVED:
        logger.info("Authorization code received", code_length=len(request.code))
    elif outcome is CallbackOutcome.UPSTREAM_ERROR:
        logger.warning("OAuth provider returned an error", oauth_error=request.error)
    elif outcome is CallbackOutcome.NO_CODE_RECEIVED:
        logger.warning("Callback reached without code or error")
    else:
        logger.info("Request outside callback route", path=request.path)

    return page


def handle_callback(
    path: str, query: Mapping[str, str], *, settings: Settings
) -> CallbackPage:
    """
    Produce the status code and HTML page for one request.

    Args:
        path: Request URL path, percent-encoded as received
        query: Query-string keys mapped to (single) values
        settings: Server settings (callback path, port, page copy)

    Returns:
        CallbackPage: outcome, HTTP status and HTML document
    """
    return render_callback_page(CallbackRequest.from_query(path, query), settings)
