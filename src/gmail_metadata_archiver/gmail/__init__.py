"""Gmail API access: message enumeration, metadata fetch and parsing."""

from gmail_metadata_archiver.gmail.client import GmailClient
from gmail_metadata_archiver.gmail.parsing import message_to_record

__all__ = ["GmailClient", "message_to_record"]
