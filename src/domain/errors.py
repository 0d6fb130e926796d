"""
Error taxonomy for the page CMS.

Every error carries a list of human readable messages and knows how the API
renders it: the HTTP status code and the JSON key the messages go under.
"""

from __future__ import annotations

from collections.abc import Iterable


class CmsError(Exception):
    status_code = 500
    response_key = "error"

    def __init__(self, messages: str | Iterable[str]):
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


class ValidationError(CmsError):
    """Malformed or missing input."""

    status_code = 400
    response_key = "errors"


class AuthenticationError(CmsError):
    """Bad or missing credentials."""

    status_code = 401
    response_key = "errors"


class AuthorizationError(CmsError):
    """Authenticated, but the action is forbidden for this user."""

    status_code = 401


class NotFoundError(CmsError):
    status_code = 404


class StoreError(CmsError):
    """Underlying persistence failure. The message keeps the originating cause."""

    status_code = 503
