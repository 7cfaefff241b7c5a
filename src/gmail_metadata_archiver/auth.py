"""Authorization against the Gmail API.

Two branches, chosen once per run from the credential file:

- Service account: a self-signing JWT credential impersonating a mailbox via
  domain-wide delegation. Nothing is cached on disk; google-auth mints
  short-lived tokens on demand.
- OAuth client: reuse the token cached at ``token_path`` if there is one,
  otherwise run a console consent step (print URL, read the code from stdin)
  and cache the resulting token.

A cached token is reused without checking its expiry. google-auth refreshes
an expired token on the first request when it carries a refresh token.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog
from google.oauth2 import service_account
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow

from gmail_metadata_archiver.config import Settings
from gmail_metadata_archiver.credentials import (
    ClientCredentials,
    OAuthClientCredentials,
    ServiceAccountCredentials,
)
from gmail_metadata_archiver.exceptions import ConfigurationError

logger = structlog.get_logger()

Prompt = Callable[[str], str]

CONSENT_PROMPT = "Enter the code from that page here: "


def authorize(
    credentials: ClientCredentials,
    *,
    settings: Settings,
    prompt: Prompt = input,
) -> Any:
    """Turn loaded client credentials into authorized Google credentials.

    Args:
        credentials: Parsed credential file.
        settings: Supplies the scope, the token cache path and the mailbox to
            impersonate.
        prompt: Reads the authorization code during first-time consent.

    Returns:
        A google-auth credentials object usable with the Gmail API client.

    Raises:
        ConfigurationError: If a service account has no mailbox to impersonate
            or an OAuth client has no redirect URI.
    """

    if isinstance(credentials, ServiceAccountCredentials):
        return authorize_service_account(
            credentials,
            subject=settings.impersonate_user,
            scope=settings.gmail_scope,
        )
    if isinstance(credentials, OAuthClientCredentials):
        return authorize_oauth_client(
            credentials,
            token_path=Path(settings.token_path),
            scope=settings.gmail_scope,
            prompt=prompt,
        )
    raise ConfigurationError(f"Unsupported credentials type: {type(credentials).__name__}")


def authorize_service_account(
    credentials: ServiceAccountCredentials,
    *,
    subject: str | None,
    scope: str,
) -> service_account.Credentials:
    """Build delegated service-account credentials acting as ``subject``."""

    if not subject:
        raise ConfigurationError(
            "Service account credentials require impersonation of a user. "
            "Set the GMAIL_IMPERSONATE_USER environment variable to the target Gmail address."
        )

    info = {**credentials.info, "token_uri": credentials.token_uri}
    info.setdefault("client_email", credentials.client_email)
    info.setdefault("private_key", credentials.private_key)

    logger.info(
        "service_account_authorized",
        client_email=credentials.client_email,
        subject=subject,
        scope=scope,
    )
    return service_account.Credentials.from_service_account_info(
        info, scopes=[scope], subject=subject
    )


def authorize_oauth_client(
    credentials: OAuthClientCredentials,
    *,
    token_path: Path,
    scope: str,
    prompt: Prompt = input,
) -> Credentials:
    """Authorize an installed/web OAuth client, from cache or by console consent."""

    if not credentials.redirect_uris:
        raise ConfigurationError(
            f'No redirect_uris found in credentials JSON under "{credentials.section}". '
            'For command-line use, create "Desktop app" (Installed) OAuth2 credentials '
            "(which include redirect_uris), or add an authorized redirect URI to your "
            "Web application client (e.g. http://localhost)."
        )

    cached = load_cached_token(token_path, credentials, scope=scope)
    if cached is not None:
        logger.info("oauth_token_loaded", token_path=str(token_path))
        return cached

    creds = run_console_consent(credentials, scope=scope, prompt=prompt)
    save_token(creds, token_path)
    print(f"Token stored to {token_path}")
    return creds


def run_console_consent(
    credentials: OAuthClientCredentials,
    *,
    scope: str,
    prompt: Prompt = input,
) -> Credentials:
    """Interactive consent: print the URL, block for the code, exchange it."""

    flow = Flow.from_client_config(
        credentials.client_config(),
        scopes=[scope],
        redirect_uri=credentials.redirect_uris[0],
    )
    auth_url, _ = flow.authorization_url(access_type="offline")

    print(f"Authorize this app by visiting this url: {auth_url}")
    code = prompt(CONSENT_PROMPT).strip()

    flow.fetch_token(code=code)
    logger.info("oauth_consent_completed", client_id=credentials.client_id)
    return flow.credentials


def load_cached_token(
    token_path: Path,
    credentials: OAuthClientCredentials,
    *,
    scope: str,
) -> Credentials | None:
    """Load a cached user token, or None if it is absent or unreadable.

    Both google-auth's own layout (``token``/``expiry``) and the
    ``access_token``/``expiry_date`` layout are accepted. Client id and secret
    missing from the file are taken from ``credentials``.
    """

    try:
        info = json.loads(token_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as exc:
        logger.warning("oauth_token_unreadable", token_path=str(token_path), error=str(exc))
        return None

    if not isinstance(info, dict):
        logger.warning("oauth_token_unreadable", token_path=str(token_path), error="not an object")
        return None

    token = info.get("token") or info.get("access_token")
    if not token and not info.get("refresh_token"):
        logger.warning("oauth_token_unreadable", token_path=str(token_path), error="no token")
        return None

    try:
        expiry = _parse_expiry(info)
    except (TypeError, ValueError, OverflowError) as exc:
        logger.warning("oauth_token_unreadable", token_path=str(token_path), error=str(exc))
        return None

    return Credentials(
        token=token,
        refresh_token=info.get("refresh_token"),
        token_uri=info.get("token_uri") or credentials.token_uri,
        client_id=info.get("client_id") or credentials.client_id,
        client_secret=info.get("client_secret") or credentials.client_secret,
        scopes=info.get("scopes") or [scope],
        expiry=expiry,
    )


def save_token(creds: Credentials, token_path: Path) -> None:
    """Persist ``creds`` to ``token_path`` as pretty-printed JSON."""

    token_path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.loads(creds.to_json())
    token_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.debug("oauth_token_saved", token_path=str(token_path))


def _parse_expiry(info: dict[str, Any]) -> datetime | None:
    # google-auth compares expiry against naive UTC datetimes.
    expiry = info.get("expiry")
    if expiry:
        return datetime.strptime(str(expiry).rstrip("Z").split(".")[0], "%Y-%m-%dT%H:%M:%S")

    expiry_ms = info.get("expiry_date")
    if expiry_ms:
        return datetime.fromtimestamp(int(expiry_ms) / 1000, tz=timezone.utc).replace(tzinfo=None)

    return None


def build_gmail_service(creds: Any) -> Any:
    """Build a Gmail v1 API resource for ``creds``."""

    from googleapiclient.discovery import build

    # cache_discovery=False prevents writing discovery docs to disk.
    return build("gmail", "v1", credentials=creds, cache_discovery=False)
