"""HTML escaping for values interpolated into callback pages."""

# Order matters: "&" must be replaced first or the other entities get double-escaped.
_HTML_ESCAPES: tuple[tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)


def escape_html(value: object = "") -> str:
    """
    Escape a value for safe insertion into HTML text or attribute content.

    Args:
        value: Any value; non-strings are converted with str(), None becomes ""

    Returns:
        The escaped string
    """
    if value is None:
        return ""

    escaped = str(value)
    for char, entity in _HTML_ESCAPES:
        escaped = escaped.replace(char, entity)
    return escaped
