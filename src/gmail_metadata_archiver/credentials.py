"""Loading of Google client credential files.

A credential file is either an OAuth client downloaded from the Google Cloud
console (``{"installed": {...}}`` or ``{"web": {...}}``) or a service-account
key (``{"type": "service_account", ...}``). Both are parsed into a tagged
``ClientCredentials`` variant so the authenticator can branch exhaustively on
``kind`` instead of sniffing dictionaries.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gmail_metadata_archiver.exceptions import ConfigurationError

logger = structlog.get_logger()

OAuthSection = Literal["installed", "web"]


class OAuthClientCredentials(BaseModel):
    """An OAuth 2.0 client ID (desktop/"installed" or web application)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["oauth_client"] = "oauth_client"
    section: OAuthSection = Field(description="Top-level key the client was found under")
    client_id: str
    client_secret: str
    redirect_uris: list[str] = Field(default_factory=list)
    auth_uri: str = "https://accounts.google.com/o/oauth2/auth"
    token_uri: str = "https://oauth2.googleapis.com/token"

    def client_config(self) -> dict[str, Any]:
        """Return the client in the layout google-auth-oauthlib expects."""

        return {
            self.section: {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "redirect_uris": list(self.redirect_uris),
                "auth_uri": self.auth_uri,
                "token_uri": self.token_uri,
            }
        }


class ServiceAccountCredentials(BaseModel):
    """A service-account key, usable with domain-wide delegation."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["service_account"] = "service_account"
    client_email: str
    private_key: str
    token_uri: str = "https://oauth2.googleapis.com/token"
    info: dict[str, Any] = Field(
        default_factory=dict,
        repr=False,
        description="The raw key file, handed unchanged to google-auth",
    )


ClientCredentials = Union[OAuthClientCredentials, ServiceAccountCredentials]

_OAUTH_CLIENT_KEYS = ("client_id", "client_secret", "redirect_uris", "auth_uri", "token_uri")


def parse_credentials(data: Any) -> ClientCredentials:
    """Parse an already-decoded credential file.

    Raises:
        ConfigurationError: If ``data`` is neither a service account nor an
            OAuth client.
    """

    if not isinstance(data, dict):
        raise ConfigurationError("Credentials JSON must be an object.")

    try:
        if data.get("type") == "service_account":
            return ServiceAccountCredentials(
                client_email=data.get("client_email"),
                private_key=data.get("private_key"),
                token_uri=data.get("token_uri") or "https://oauth2.googleapis.com/token",
                info=data,
            )

        for section in ("installed", "web"):
            client = data.get(section)
            if isinstance(client, dict):
                return OAuthClientCredentials(
                    section=section,
                    **{
                        k: v
                        for k, v in client.items()
                        if k in _OAUTH_CLIENT_KEYS and v is not None
                    },
                )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid credentials JSON: {exc}") from exc

    raise ConfigurationError(
        'OAuth2 credentials JSON must contain an "installed" or "web" property '
        '(or be a service account key with "type": "service_account").'
    )


def load_credentials(path: Path) -> ClientCredentials:
    """Read and parse the credential file at ``path``.

    Args:
        path: Location of the JSON credential file.

    Returns:
        The parsed credentials variant.

    Raises:
        ConfigurationError: If the file is missing, is not valid JSON or has
            neither a service-account nor an OAuth-client shape.
    """

    try:
        content = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Credentials file not found: {path}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Unable to read credentials file {path}: {exc}") from exc

    try:
        data = json.loads(content)
    except ValueError as exc:
        raise ConfigurationError(f"Credentials file {path} is not valid JSON: {exc}") from exc

    credentials = parse_credentials(data)
    logger.debug("credentials_loaded", path=str(path), kind=credentials.kind)
    return credentials
