"""Custom exceptions for Gmail Metadata Archiver."""

from __future__ import annotations

import json


class ArchiverError(Exception):
    """Base exception for all Gmail Metadata Archiver errors."""


class ConfigurationError(ArchiverError):
    """Exception raised for malformed or incomplete configuration or credentials."""


class AuthorizationError(ArchiverError):
    """Exception raised when Gmail rejects the client as ``unauthorized_client``."""


class GmailAPIError(ArchiverError):
    """Exception raised for Gmail API related errors."""


class MessageFetchError(GmailAPIError):
    """Exception raised when a single message's metadata cannot be fetched."""

    def __init__(self, message_id: str, reason: str) -> None:
        super().__init__(f"Failed to fetch message {message_id}: {reason}")
        self.message_id = message_id


UNAUTHORIZED_CLIENT = "unauthorized_client"


def is_unauthorized_client(exc: BaseException) -> bool:
    """Return True if ``exc`` is Google rejecting the OAuth client.

    The rejection shows up in two shapes: as a google-auth ``RefreshError``
    while minting a token (service accounts without domain-wide delegation),
    or as an ``HttpError`` whose JSON body carries ``"error": "unauthorized_client"``.
    """

    from google.auth.exceptions import RefreshError
    from googleapiclient.errors import HttpError

    if isinstance(exc, RefreshError):
        for arg in exc.args:
            if isinstance(arg, dict) and arg.get("error") == UNAUTHORIZED_CLIENT:
                return True
            if isinstance(arg, str) and arg.startswith(UNAUTHORIZED_CLIENT):
                return True
        return False

    if isinstance(exc, HttpError):
        content = exc.content
        if isinstance(content, bytes):
            content = content.decode("utf-8", errors="replace")
        try:
            body = json.loads(content or "{}")
        except ValueError:
            return False
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict):
            # Standard Google API error envelope: {"error": {"status": ..., "errors": [...]}}
            reasons = [e.get("reason") for e in error.get("errors") or [] if isinstance(e, dict)]
            return error.get("status") == UNAUTHORIZED_CLIENT or UNAUTHORIZED_CLIENT in reasons
        return error == UNAUTHORIZED_CLIENT

    return False
