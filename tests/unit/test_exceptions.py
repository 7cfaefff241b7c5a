"""Unit tests for unauthorized_client detection."""

from __future__ import annotations

import json
from types import SimpleNamespace

from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

from gmail_metadata_archiver.exceptions import MessageFetchError, is_unauthorized_client


def _http_error(status: int, body: dict) -> HttpError:
    resp = SimpleNamespace(status=status, reason="Unauthorized")
    return HttpError(resp, json.dumps(body).encode("utf-8"))


def test_refresh_error_from_token_endpoint() -> None:
    exc = RefreshError(
        "unauthorized_client: Client is unauthorized to retrieve access tokens using this method.",
        {"error": "unauthorized_client", "error_description": "Client is unauthorized"},
    )

    assert is_unauthorized_client(exc) is True


def test_refresh_error_other_reason() -> None:
    exc = RefreshError("invalid_grant: Token has been expired or revoked.", {"error": "invalid_grant"})

    assert is_unauthorized_client(exc) is False


def test_http_error_with_oauth_body() -> None:
    exc = _http_error(401, {"error": "unauthorized_client", "error_description": "nope"})

    assert is_unauthorized_client(exc) is True


def test_http_error_with_google_envelope() -> None:
    exc = _http_error(403, {"error": {"code": 403, "message": "Forbidden", "status": "PERMISSION_DENIED"}})

    assert is_unauthorized_client(exc) is False


def test_unrelated_exception() -> None:
    assert is_unauthorized_client(RuntimeError("unauthorized_client")) is False


def test_message_fetch_error_keeps_id() -> None:
    exc = MessageFetchError("b", "boom")

    assert exc.message_id == "b"
    assert "b" in str(exc)
