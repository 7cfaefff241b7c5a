"""File-backed storage for archived message records."""

from __future__ import annotations

from pathlib import Path

import structlog

from gmail_metadata_archiver.models import MessageRecord

logger = structlog.get_logger()


class MessageStore:
    """Stores one pretty-printed JSON file per message, keyed by message id."""

    def __init__(self, data_dir: Path) -> None:
        """Create a store.

        Args:
            data_dir: Directory holding the ``<id>.json`` files.
        """

        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def initialize(self) -> None:
        """Create the data directory if it does not exist yet."""

        self._data_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, message_id: str) -> Path:
        if not message_id or "/" in message_id or "\\" in message_id or message_id in {".", ".."}:
            raise ValueError(f"Invalid message id for storage: {message_id!r}")
        return self._data_dir / f"{message_id}.json"

    def contains(self, message_id: str) -> bool:
        """Return True if a record for ``message_id`` is already on disk."""

        return self.path_for(message_id).exists()

    def save(self, message_id: str, record: MessageRecord) -> Path:
        """Write ``record`` to the file for ``message_id`` and return the path."""

        path = self.path_for(message_id)
        path.write_text(record.to_json(), encoding="utf-8")
        logger.debug("message_record_written", message_id=message_id, path=str(path))
        return path
