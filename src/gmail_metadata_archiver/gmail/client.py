"""Gmail API client implementation.

This module wraps a ``googleapiclient`` Gmail resource with the two calls the
archiver needs: listing every message id and fetching one message's metadata.
Calls are synchronous and made one at a time.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

from gmail_metadata_archiver.exceptions import MessageFetchError

logger = structlog.get_logger()


class GmailClient:
    """Gmail API client for message enumeration and metadata retrieval."""

    def __init__(self, service: Any, *, user_id: str = "me") -> None:
        """Initialize Gmail client.

        Args:
            service: An authorized Gmail v1 resource (``build("gmail", "v1", ...)``).
            user_id: Mailbox the calls are made for; ``me`` is the authorized user.
        """

        self._service = service
        self.user_id = user_id

    def list_message_ids(self, *, page_size: int = 100) -> list[str]:
        """List the id of every message in the mailbox.

        Follows ``nextPageToken`` until a page arrives without one. Request
        failures propagate unchanged so the caller can inspect them.

        Args:
            page_size: Number of ids requested per page.

        Returns:
            Message ids in the order Gmail listed them.
        """

        message_ids: list[str] = []
        page_token: str | None = None
        pages = 0

        while True:
            request = (
                self._service.users()
                .messages()
                .list(userId=self.user_id, maxResults=page_size, pageToken=page_token)
            )
            response = request.execute()
            pages += 1

            for msg in response.get("messages", []) or []:
                msg_id = msg.get("id")
                if msg_id:
                    message_ids.append(msg_id)

            logger.debug("gmail_list_page_fetched", page=pages, total=len(message_ids))

            page_token = response.get("nextPageToken")
            if not page_token:
                break

        logger.info("gmail_list_messages_completed", pages=pages, message_count=len(message_ids))
        return message_ids

    def get_message(
        self,
        message_id: str,
        *,
        format: str = "metadata",
        metadata_headers: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """Get a specific message by ID.

        Args:
            message_id: The Gmail message ID.
            format: Gmail response format; ``metadata`` omits the body.
            metadata_headers: Header allow-list for ``metadata`` format.

        Returns:
            Message data dictionary.

        Raises:
            MessageFetchError: If the API request fails.
        """

        logger.debug("getting_message", message_id=message_id, format=format)

        request = (
            self._service.users()
            .messages()
            .get(
                userId=self.user_id,
                id=message_id,
                format=format,
                metadataHeaders=list(metadata_headers) if metadata_headers else None,
            )
        )
        try:
            return request.execute()
        except Exception as exc:  # noqa: BLE001
            raise MessageFetchError(message_id, str(exc)) from exc
