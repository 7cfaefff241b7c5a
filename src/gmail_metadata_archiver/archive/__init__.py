"""Local, resumable archive of message metadata.

Each message is stored as ``<data_dir>/<id>.json``. A file's presence means the
message was archived by an earlier run; it is never rewritten.
"""

from .archiver import ArchiveSummary, archive_messages
from .store import MessageStore

__all__ = ["ArchiveSummary", "MessageStore", "archive_messages"]
