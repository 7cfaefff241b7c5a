"""Command-line interface for Gmail Metadata Archiver.

This module provides the main entry point: authorize, list every message id,
then archive the metadata of each message not saved yet.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import structlog

from gmail_metadata_archiver import __version__
from gmail_metadata_archiver.archive import MessageStore, archive_messages
from gmail_metadata_archiver.auth import authorize, build_gmail_service
from gmail_metadata_archiver.config import DEFAULT_CREDENTIALS_PATH, Settings, get_settings
from gmail_metadata_archiver.credentials import ServiceAccountCredentials, load_credentials
from gmail_metadata_archiver.exceptions import (
    AuthorizationError,
    ConfigurationError,
    is_unauthorized_client,
)
from gmail_metadata_archiver.gmail.client import GmailClient
from gmail_metadata_archiver.utils import configure_logging

logger = structlog.get_logger()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gmail-metadata-archiver",
        description="Archive Gmail message metadata to one JSON file per message",
    )
    parser.add_argument(
        "credentials",
        nargs="?",
        type=Path,
        default=None,
        help=(
            "Path to the OAuth client or service-account JSON "
            "(CREDENTIALS_PATH takes precedence; default: credentials.json)"
        ),
    )
    parser.add_argument(
        "--token-path",
        type=Path,
        default=None,
        help="Where the OAuth user token is cached (default: settings token_path)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory receiving the message JSON files (default: settings data_dir)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: settings log_level)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_credentials_path(settings: Settings, cli_path: Path | None) -> Path:
    """Environment first, then the command-line argument, then credentials.json."""

    return Path(settings.credentials_path or cli_path or DEFAULT_CREDENTIALS_PATH)


def _list_message_ids(client: GmailClient, settings: Settings) -> list[str]:
    try:
        return client.list_message_ids(page_size=settings.gmail_page_size)
    except Exception as exc:
        if is_unauthorized_client(exc):
            raise AuthorizationError("Gmail API authorization error: unauthorized_client") from exc
        raise


def _report_unauthorized_client(exc: AuthorizationError, scope: str, service_account: bool) -> None:
    logger.error("gmail_unauthorized_client", scope=scope, service_account=service_account)
    err = sys.stderr
    print(str(exc), file=err)
    print(
        "  - If using a service account, ensure you have enabled domain-wide delegation",
        file=err,
    )
    print(
        f"    in your Google Workspace Admin console and granted access to the scope(s): {scope}",
        file=err,
    )
    print(
        "  - For personal Gmail accounts, service accounts cannot be used; "
        "use OAuth2 user credentials instead.",
        file=err,
    )


def run(settings: Settings, credentials_path: Path) -> int:
    """Authorize, enumerate and archive.

    Returns:
        Exit code (0 for success, 1 for configuration or authorization errors).
    """

    print(f"Using credentials file: {credentials_path}")

    try:
        credentials = load_credentials(credentials_path)
        creds = authorize(credentials, settings=settings)
    except ConfigurationError as exc:
        logger.error("configuration_error", error=str(exc))
        print(str(exc), file=sys.stderr)
        return 1

    client = GmailClient(build_gmail_service(creds), user_id=settings.gmail_user_id)

    try:
        message_ids = _list_message_ids(client, settings)
    except AuthorizationError as exc:
        _report_unauthorized_client(
            exc,
            scope=settings.gmail_scope,
            service_account=isinstance(credentials, ServiceAccountCredentials),
        )
        return 1

    print(f"Found {len(message_ids)} messages.")

    archive_messages(
        client,
        message_ids,
        MessageStore(settings.data_dir),
        metadata_headers=settings.metadata_headers,
    )
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the Gmail Metadata Archiver CLI.

    Args:
        args: Command-line arguments. If None, uses sys.argv.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    if args is None:
        args = sys.argv[1:]

    parsed = _build_parser().parse_args(args)

    settings = get_settings()
    overrides = {
        key: value
        for key, value in (
            ("token_path", parsed.token_path),
            ("data_dir", parsed.data_dir),
            ("log_level", parsed.log_level),
        )
        if value is not None
    }
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(settings.log_level)
    logger.info("gmail_metadata_archiver_started", version=__version__)

    return run(settings, resolve_credentials_path(settings, parsed.credentials))


if __name__ == "__main__":
    sys.exit(main())
