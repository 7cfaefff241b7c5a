"""Fetch-and-save loop for message metadata."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

import structlog

from gmail_metadata_archiver.archive.store import MessageStore
from gmail_metadata_archiver.gmail.parsing import message_to_record

logger = structlog.get_logger()

DEFAULT_METADATA_HEADERS: tuple[str, ...] = ("From", "To", "Subject", "Date")


class MessageSource(Protocol):
    def get_message(
        self,
        message_id: str,
        *,
        format: str = "metadata",
        metadata_headers: Sequence[str] | None = None,
    ) -> dict[str, Any]: ...


@dataclass(frozen=True)
class ArchiveSummary:
    """Outcome counts of one archiving pass."""

    saved: int
    skipped: int
    failed: int

    @property
    def total(self) -> int:
        return self.saved + self.skipped + self.failed


def archive_messages(
    client: MessageSource,
    message_ids: Iterable[str],
    store: MessageStore,
    *,
    metadata_headers: Sequence[str] = DEFAULT_METADATA_HEADERS,
) -> ArchiveSummary:
    """Save the metadata of every message not yet in ``store``.

    Ids are processed in order, one at a time. Existing files are skipped
    without a fetch. A failure on one message is logged and the loop moves on
    to the next id.

    Args:
        client: Source of Gmail messages (normally a GmailClient).
        message_ids: Ids to archive.
        store: Destination store.
        metadata_headers: Header allow-list requested from Gmail.

    Returns:
        ArchiveSummary: How many messages were saved, skipped and failed.
    """

    store.initialize()

    saved = skipped = failed = 0
    for message_id in message_ids:
        try:
            if store.contains(message_id):
                logger.info("message_skipped", message_id=message_id, reason="already saved")
                skipped += 1
                continue

            raw = client.get_message(
                message_id, format="metadata", metadata_headers=list(metadata_headers)
            )
            path = store.save(message_id, message_to_record(raw, message_id=message_id))
        except Exception as exc:  # noqa: BLE001
            logger.error("message_fetch_failed", message_id=message_id, error=str(exc))
            failed += 1
            continue

        logger.info("message_saved", message_id=message_id, path=str(path))
        saved += 1

    summary = ArchiveSummary(saved=saved, skipped=skipped, failed=failed)
    logger.info(
        "archive_completed",
        saved=summary.saved,
        skipped=summary.skipped,
        failed=summary.failed,
    )
    return summary
