# models/domain/callback_domain.py
"""
Domain model for a single OAuth redirect hitting the callback server.
"""

from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, field_validator


class CallbackOutcome(str, Enum):
    """The four mutually exclusive ways a request can be answered."""

    NOT_FOUND = "not_found"
    UPSTREAM_ERROR = "upstream_error"
    CODE_RECEIVED = "code_received"
    NO_CODE_RECEIVED = "no_code_received"


class CallbackRequest(BaseModel):
    """Transient view of one inbound request."""

    path: str
    code: str | None = None
    error: str | None = None

    @field_validator("code", "error", mode="before")
    @classmethod
    def empty_is_absent(cls, value):
        # An empty query value counts the same as a missing one
        if value is None or value == "":
            return None
        return str(value)

    @classmethod
    def from_query(cls, path: str, query: Mapping[str, str]) -> "CallbackRequest":
        """Build from a request path and a mapping of query keys to values."""
        return cls(path=path, code=query.get("code"), error=query.get("error"))

    def classify(self, callback_path: str) -> CallbackOutcome:
        """Pick the outcome for this request, in priority order."""
        if self.path != callback_path:
            return CallbackOutcome.NOT_FOUND
        if self.error:
            return CallbackOutcome.UPSTREAM_ERROR
        if self.code:
            return CallbackOutcome.CODE_RECEIVED
        return CallbackOutcome.NO_CODE_RECEIVED


class CallbackPage(BaseModel):
    """Rendered response for a callback request."""

    outcome: CallbackOutcome
    status_code: int
    title: str
    html: str
