"""Helpers for parsing Gmail message metadata into internal models."""

from __future__ import annotations

from typing import Any

from gmail_metadata_archiver.models import MessageHeader, MessageRecord


def _headers(message: dict[str, Any]) -> list[MessageHeader]:
    payload = message.get("payload") or {}
    headers = payload.get("headers") or []
    result: list[MessageHeader] = []
    for h in headers:
        name = h.get("name")
        value = h.get("value")
        if isinstance(name, str):
            # Duplicates are kept; order matters for Received-style headers.
            result.append(MessageHeader(name=name, value=value if isinstance(value, str) else ""))
    return result


def message_to_record(message: dict[str, Any], *, message_id: str | None = None) -> MessageRecord:
    """Convert a Gmail API message (format=metadata) to a MessageRecord.

    Args:
        message: Gmail API message dict.
            message_id: Id the message was requested by; used when the response has none.

    Returns:
        MessageRecord: Envelope fields plus the headers Gmail returned.
    """

    label_ids = message.get("labelIds") or []
    if not isinstance(label_ids, list):
        label_ids = []

    return MessageRecord(
        id=str(message.get("id") or message_id or ""),
        thread_id=message.get("threadId") or None,
        label_ids=[x for x in label_ids if isinstance(x, str)],
        snippet=message.get("snippet") or "",
        headers=_headers(message),
    )
