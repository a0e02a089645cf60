"""Local OAuth 2.0 redirect listener that displays the authorization code."""

__version__ = "0.1.0"
