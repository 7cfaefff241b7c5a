"""Gmail Metadata Archiver - resumable local archive of Gmail message metadata.

This package authorizes against the Gmail API (OAuth client or service
account), lists every message in a mailbox and writes the header metadata of
each one to its own JSON file, skipping messages saved by earlier runs.
"""

__version__ = "0.1.0"

from gmail_metadata_archiver.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
